"""Korean-language formatting of amounts and dates for estimate documents."""

from datetime import date

ZERO_PHRASE = "영원정"
CURRENCY_SUFFIX = "원정"

# Groups of four digits: 1, 10^4, 10^8, 10^12, 10^16
_GROUP_UNITS = ("", "만", "억", "조", "경")
_DIGITS = ("", "일", "이", "삼", "사", "오", "육", "칠", "팔", "구")
_PLACE_UNITS = ((1000, "천"), (100, "백"), (10, "십"))

MAX_AMOUNT = 10 ** (4 * len(_GROUP_UNITS)) - 1


def _group_words(group: int) -> str:
    """Spell out 1..9999. A 1 in front of 천/백/십 is dropped."""
    words = ""
    for place, unit in _PLACE_UNITS:
        digit = group // place % 10
        if digit:
            words += ("" if digit == 1 else _DIGITS[digit]) + unit
    return words + _DIGITS[group % 10]


def format_korean_currency_words(amount: int) -> str:
    """Render ``amount`` won as words, e.g. ``12500 -> 일만이천오백원정``."""
    if amount < 0 or amount > MAX_AMOUNT:
        raise ValueError(f"amount out of range: {amount}")
    if amount == 0:
        return ZERO_PHRASE

    result = ""
    for unit in _GROUP_UNITS:
        if amount == 0:
            break
        group = amount % 10000
        if group:
            result = _group_words(group) + unit + result
        amount //= 10000
    return result + CURRENCY_SUFFIX


def format_korean_date(value: str) -> str:
    """``2024-03-05 -> 2024년 3월 5일``; anything unparseable comes back unchanged."""
    if not value:
        return ""
    try:
        parsed = date.fromisoformat(value[:10])
    except ValueError:
        return value
    return f"{parsed.year}년 {parsed.month}월 {parsed.day}일"


def format_construction_period(start: str, end: str, legacy: str = "") -> str:
    """Construction period line; falls back to the single legacy date."""
    start_text = format_korean_date(start)
    end_text = format_korean_date(end)
    if start_text and end_text:
        return f"{start_text} ~ {end_text}"
    if start_text:
        return f"{start_text} ~"
    if end_text:
        return f"~ {end_text}"
    return format_korean_date(legacy)
