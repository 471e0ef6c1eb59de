"""SQLAlchemy implementation of BankAccountRepository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from banksync.domain.banking.entities import BankAccount
from banksync.domain.banking.repositories import BankAccountRepository
from banksync.domain.shared.time import ensure_tz_aware
from banksync.infrastructure.persistence.sqlalchemy.models import BankAccountModel
from banksync.infrastructure.persistence.sqlalchemy.repositories._utils import (
    ensure_uuid,
)

if TYPE_CHECKING:
    from banksync.application.ports.identity import CurrentUser

logger = logging.getLogger(__name__)


class BankAccountRepositorySQLAlchemy(BankAccountRepository):
    """SQLAlchemy implementation of bank account repository."""

    def __init__(self, session: AsyncSession, current_user: CurrentUser):
        self._session = session
        self._user_id = ensure_uuid(current_user.user_id)

    async def save(self, account: BankAccount) -> BankAccount:
        model = None
        if account.id is not None:
            model = await self._find_model_by_id(account.id)

        if model:
            logger.debug("Updating bank account %s", account.external_id)
            self._update_model_from_domain(model, account)
            await self._session.flush()
        else:
            logger.debug("Creating bank account %s", account.external_id)
            model = self._create_model_from_domain(account)
            self._session.add(model)
            await self._session.flush()
            account.assign_id(model.id)
            logger.info("Bank account created: %s", account.external_id)

        return account

    async def find_all(self) -> list[BankAccount]:
        stmt = (
            select(BankAccountModel)
            .where(BankAccountModel.user_id == self._user_id)
            .order_by(BankAccountModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def find_by_id(self, account_id: int) -> Optional[BankAccount]:
        model = await self._find_model_by_id(account_id)
        return self._map_to_domain(model) if model else None

    async def find_by_external_id(self, external_id: str) -> Optional[BankAccount]:
        stmt = select(BankAccountModel).where(
            BankAccountModel.external_account_id == external_id,
            BankAccountModel.user_id == self._user_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def _find_model_by_id(self, account_id: int) -> Optional[BankAccountModel]:
        stmt = select(BankAccountModel).where(
            BankAccountModel.id == account_id,
            BankAccountModel.user_id == self._user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _create_model_from_domain(self, account: BankAccount) -> BankAccountModel:
        model = BankAccountModel(
            user_id=self._user_id,
            external_account_id=account.external_id,
        )
        self._update_model_from_domain(model, account)
        return model

    @staticmethod
    def _update_model_from_domain(
        model: BankAccountModel,
        account: BankAccount,
    ) -> None:
        # external_account_id and user_id never change after creation
        model.name = account.name
        model.iban = account.iban
        model.currency = account.currency
        model.balance = account.balance
        model.balance_type = account.balance_type
        model.sync_status = account.sync_status
        model.last_sync_at = account.last_sync_at
        model.last_success_at = account.last_success_at
        model.sync_error_message = account.sync_error_message
        model.requisition_id = account.requisition_id
        model.institution_id = account.institution_id

    @staticmethod
    def _map_to_domain(model: BankAccountModel) -> BankAccount:
        return BankAccount.reconstitute(
            id=model.id,
            user_id=model.user_id,
            external_id=model.external_account_id,
            name=model.name,
            currency=model.currency,
            iban=model.iban,
            balance=model.balance,
            balance_type=model.balance_type,
            sync_status=model.sync_status,
            last_sync_at=ensure_tz_aware(model.last_sync_at),
            last_success_at=ensure_tz_aware(model.last_success_at),
            sync_error_message=model.sync_error_message,
            requisition_id=model.requisition_id,
            institution_id=model.institution_id,
        )
