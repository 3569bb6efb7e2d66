"""Concrete key-value store backed by SQLAlchemy."""

import copy
import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from estimator.application.interfaces import KeyValueStore
from estimator.domain.exceptions import RecordStoreError
from estimator.infrastructure.database.models import KeyValueEntryModel

logger = logging.getLogger(__name__)


class SQLAlchemyKeyValueStore(KeyValueStore):
    """Implements the KeyValueStore port using SQLAlchemy async sessions.

    Values handed out are deep copies, so callers can change them freely
    without touching what the session tracks.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, key: str) -> Any | None:
        try:
            model = await self._session.get(KeyValueEntryModel, key)
        except SQLAlchemyError as e:
            logger.exception("Key-value read failed for '%s'", key)
            raise RecordStoreError("get", key) from e
        return copy.deepcopy(model.value) if model else None

    async def set(self, key: str, value: Any) -> None:
        try:
            model = await self._session.get(KeyValueEntryModel, key)
            if model is None:
                self._session.add(KeyValueEntryModel(key=key, value=copy.deepcopy(value)))
            else:
                model.value = copy.deepcopy(value)
            await self._session.flush()
        except SQLAlchemyError as e:
            logger.exception("Key-value write failed for '%s'", key)
            raise RecordStoreError("set", key) from e
