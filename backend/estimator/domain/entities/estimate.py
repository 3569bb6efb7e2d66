"""Domain entities for the estimate document — pure Python, no framework dependencies."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaxOption(str, Enum):
    """How line-item prices relate to VAT."""

    INCLUDING = "including"
    EXCLUDING = "excluding"


def _as_str(value: Any) -> str:
    return "" if value is None else str(value)


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class LineItem:
    """A single estimate line. Identity is its position in the item list."""

    name: str = ""
    quantity: int = 1
    price: int = 0
    spec: str = "EA"
    note: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "price": self.price,
            "spec": self.spec,
            "note": self.note,
        }

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "LineItem":
        return cls(
            name=_as_str(data.get("name")),
            quantity=_as_int(data.get("quantity"), 1),
            price=_as_int(data.get("price"), 0),
            spec=_as_str(data.get("spec")) or "EA",
            note=_as_str(data.get("note")),
        )


@dataclass(frozen=True)
class Supplier:
    """Issuing company. ``company_name`` is the natural key in saved collections."""

    name: str = ""
    company_name: str = ""
    address: str = ""
    business_type: str = ""
    business_item: str = ""
    phone: str = ""
    fax: str = ""
    business_number: str = ""
    company_email: str = ""
    account_number: str = ""
    homepage: str = ""
    logo: str | None = None
    business_fields: str = ""
    footer_notes: str = ""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "companyName": self.company_name,
            "address": self.address,
            "businessType": self.business_type,
            "businessItem": self.business_item,
            "phone": self.phone,
            "fax": self.fax,
            "businessNumber": self.business_number,
            "companyEmail": self.company_email,
            "accountNumber": self.account_number,
            "homepage": self.homepage,
            "businessFields": self.business_fields,
            "footerNotes": self.footer_notes,
        }
        if self.logo is not None:
            payload["logo"] = self.logo
        return payload

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Supplier":
        logo = data.get("logo")
        return cls(
            name=_as_str(data.get("name")),
            company_name=_as_str(data.get("companyName")),
            address=_as_str(data.get("address")),
            business_type=_as_str(data.get("businessType")),
            business_item=_as_str(data.get("businessItem")),
            phone=_as_str(data.get("phone")),
            fax=_as_str(data.get("fax")),
            business_number=_as_str(data.get("businessNumber")),
            company_email=_as_str(data.get("companyEmail")),
            account_number=_as_str(data.get("accountNumber")),
            homepage=_as_str(data.get("homepage")),
            logo=str(logo) if logo else None,
            business_fields=_as_str(data.get("businessFields")),
            footer_notes=_as_str(data.get("footerNotes")),
        )


@dataclass(frozen=True)
class Client:
    """Estimate recipient. ``name`` is the natural key in saved collections."""

    name: str = ""
    phone: str = ""
    email: str = ""
    address: str = ""

    def is_empty(self) -> bool:
        return not (self.name or self.phone or self.email or self.address)

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
        }

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "Client":
        return cls(
            name=_as_str(data.get("name")),
            phone=_as_str(data.get("phone")),
            email=_as_str(data.get("email")),
            address=_as_str(data.get("address")),
        )


DEFAULT_SUPPLIER = Supplier(
    name="테스트",
    company_name="오빠두엑셀",
    address="서울 강남구 테헤란로 141-2",
    business_type="전자상거래",
    business_item="온라인제품",
    phone="02) 123-4848",
    fax="",
    business_number="123-01-01249",
    company_email="info@oppadu.com",
    account_number="",
    homepage="www.oppadu.com",
    business_fields="온라인 강의 • 오프라인 특강 • 기업 컨설팅 • 프로그램 보안/제작",
    footer_notes=(
        "● 오빠두엑셀 (www.oppadu.com) 홈페이지에서 온라인으로 구매 확정해주세요.\n"
        "● 사업자등록증은 팩스 또는 이메일(info@oppadu.com)으로 전달 부탁드립니다.\n"
        "● 프로그램 라이선 필요시 제작기간 약 3~15일 소요 / 추가비용 부과됩니다.\n"
        "● 도시/산간지역의 경우 추가 배송비가 부과됩니다."
    ),
)


@dataclass(frozen=True)
class EstimateDocument:
    """Aggregate root of the editor: one commercial estimate.

    ``client`` is the single source of truth for the recipient. The flat
    ``client_name``/``client_phone``/``client_email`` values older records
    carry are exposed as read-only properties and written out by the
    compatibility view in ``estimator.domain.compat``.
    """

    estimate_number: str = ""
    estimate_date: str = ""
    construction_start_date: str = ""
    construction_end_date: str = ""
    construction_date: str = ""
    client: Client = field(default_factory=Client)
    supplier: Supplier = field(default_factory=lambda: DEFAULT_SUPPLIER)
    items: tuple[LineItem, ...] = ()
    tax_option: TaxOption = TaxOption.EXCLUDING
    business_fields: str = DEFAULT_SUPPLIER.business_fields
    footer_notes: str = DEFAULT_SUPPLIER.footer_notes

    @property
    def client_name(self) -> str:
        return self.client.name

    @property
    def client_phone(self) -> str:
        return self.client.phone

    @property
    def client_email(self) -> str:
        return self.client.email

    def has_meaningful_data(self) -> bool:
        """True when discarding this document would lose user input."""
        if self.items:
            return True
        if not self.client.is_empty():
            return True
        if self.construction_start_date or self.construction_end_date or self.construction_date:
            return True
        if self.business_fields != DEFAULT_SUPPLIER.business_fields:
            return True
        if self.footer_notes != DEFAULT_SUPPLIER.footer_notes:
            return True
        return False
