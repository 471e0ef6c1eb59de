"""SQLAlchemy implementation of SyncHistoryRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from banksync.domain.integration.entities import SyncHistoryEntry
from banksync.domain.integration.repositories import SyncHistoryRepository
from banksync.domain.shared.time import ensure_tz_aware
from banksync.infrastructure.persistence.sqlalchemy.models.integration import (
    SyncHistoryModel,
)
from banksync.infrastructure.persistence.sqlalchemy.repositories._utils import (
    ensure_uuid,
)

if TYPE_CHECKING:
    from banksync.application.ports.identity import CurrentUser


class SyncHistoryRepositorySQLAlchemy(SyncHistoryRepository):
    """SQLAlchemy implementation of SyncHistoryRepository."""

    def __init__(self, session: AsyncSession, current_user: CurrentUser):
        self._session = session
        self._user_id = ensure_uuid(current_user.user_id)

    async def save(self, entry: SyncHistoryEntry) -> None:
        stmt = select(SyncHistoryModel).where(
            SyncHistoryModel.id == entry.id,
            SyncHistoryModel.user_id == self._user_id,
        )
        result = await self._session.execute(stmt)
        existing = result.scalar_one_or_none()

        if existing:
            # Only the completion fields ever change
            existing.status = entry.status
            existing.transactions_fetched = entry.transactions_fetched
            existing.transactions_new = entry.transactions_new
            existing.error_message = entry.error_message
            existing.completed_at = entry.completed_at
        else:
            model = SyncHistoryModel(
                id=entry.id,
                user_id=entry.user_id,
                account_id=entry.account_id,
                sync_type=entry.sync_type,
                status=entry.status,
                transactions_fetched=entry.transactions_fetched,
                transactions_new=entry.transactions_new,
                error_message=entry.error_message,
                started_at=entry.started_at,
                completed_at=entry.completed_at,
            )
            self._session.add(model)

        await self._session.flush()

    async def find_by_id(self, entry_id: UUID) -> Optional[SyncHistoryEntry]:
        stmt = select(SyncHistoryModel).where(
            SyncHistoryModel.user_id == self._user_id,
            SyncHistoryModel.id == entry_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def find_recent(self, limit: int = 5) -> list[SyncHistoryEntry]:
        stmt = (
            select(SyncHistoryModel)
            .where(SyncHistoryModel.user_id == self._user_id)
            .order_by(SyncHistoryModel.started_at.desc())
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return [self._model_to_domain(m) for m in result.scalars().all()]

    async def find_by_account(self, account_id: int) -> list[SyncHistoryEntry]:
        stmt = (
            select(SyncHistoryModel)
            .where(
                SyncHistoryModel.user_id == self._user_id,
                SyncHistoryModel.account_id == account_id,
            )
            .order_by(SyncHistoryModel.started_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._model_to_domain(m) for m in result.scalars().all()]

    @staticmethod
    def _model_to_domain(model: SyncHistoryModel) -> SyncHistoryEntry:
        return SyncHistoryEntry.reconstitute(
            id=model.id,
            user_id=model.user_id,
            account_id=model.account_id,
            sync_type=model.sync_type,
            status=model.status,
            transactions_fetched=model.transactions_fetched,
            transactions_new=model.transactions_new,
            error_message=model.error_message,
            started_at=ensure_tz_aware(model.started_at),  # type: ignore[arg-type]
            completed_at=ensure_tz_aware(model.completed_at),
        )
