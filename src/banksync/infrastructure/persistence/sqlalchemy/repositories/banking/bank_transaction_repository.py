"""SQLAlchemy implementation of BankTransactionRepository."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from banksync.domain.banking.exceptions import BankAccountNotFoundError
from banksync.domain.banking.repositories import (
    BankTransactionRepository,
    StoredBankTransaction,
)
from banksync.domain.banking.value_objects import BankTransaction
from banksync.infrastructure.persistence.sqlalchemy.models import (
    BankAccountModel,
    BankTransactionModel,
)
from banksync.infrastructure.persistence.sqlalchemy.repositories._utils import (
    ensure_uuid,
)

if TYPE_CHECKING:
    from banksync.application.ports.identity import CurrentUser

logger = logging.getLogger(__name__)


class BankTransactionRepositorySQLAlchemy(BankTransactionRepository):
    """SQLAlchemy implementation of bank transaction repository.

    Deduplicates on the aggregator's transaction id. The existence check is
    global (the column is unique across users); reads are user-scoped.
    """

    def __init__(self, session: AsyncSession, current_user: CurrentUser):
        self._session = session
        self._user_id = ensure_uuid(current_user.user_id)

    async def save_batch_ignore_duplicates(
        self,
        transactions: list[BankTransaction],
    ) -> list[StoredBankTransaction]:
        if not transactions:
            return []

        for account_id in {tx.account_id for tx in transactions}:
            await self._ensure_account_owned(account_id)

        # Step 1: Which external ids are already stored (for any account)
        existing_ids = await self._get_existing_ids(
            list({tx.external_id for tx in transactions}),
        )

        # Step 2: Insert the rest, once per external id
        results: list[StoredBankTransaction] = []
        new_models: list[BankTransactionModel] = []
        seen_in_batch: dict[str, UUID] = {}

        for tx in transactions:
            if tx.external_id in existing_ids:
                results.append(
                    StoredBankTransaction(
                        id=existing_ids[tx.external_id],
                        transaction=tx,
                        is_new=False,
                    ),
                )
            elif tx.external_id in seen_in_batch:
                results.append(
                    StoredBankTransaction(
                        id=seen_in_batch[tx.external_id],
                        transaction=tx,
                        is_new=False,
                    ),
                )
            else:
                model = self._create_model_from_domain(tx)
                new_models.append(model)
                seen_in_batch[tx.external_id] = model.id
                results.append(
                    StoredBankTransaction(id=model.id, transaction=tx, is_new=True),
                )

        # Step 3: Save new models
        if new_models:
            self._session.add_all(new_models)
            await self._session.flush()
            logger.info("Saved %d new bank transaction(s)", len(new_models))

        skipped = len(transactions) - len(new_models)
        if skipped > 0:
            logger.debug("Skipped %d already stored bank transaction(s)", skipped)

        return results

    async def find_by_external_id(
        self,
        external_id: str,
    ) -> Optional[BankTransaction]:
        stmt = (
            select(BankTransactionModel)
            .join(BankAccountModel)
            .where(
                BankTransactionModel.external_id == external_id,
                BankAccountModel.user_id == self._user_id,
            )
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._map_to_domain(model) if model else None

    async def find_by_account(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[BankTransaction]:
        stmt = (
            select(BankTransactionModel)
            .join(BankAccountModel)
            .where(
                BankTransactionModel.account_id == account_id,
                BankAccountModel.user_id == self._user_id,
            )
        )
        if start_date:
            stmt = stmt.where(BankTransactionModel.transaction_date >= start_date)
        if end_date:
            stmt = stmt.where(BankTransactionModel.transaction_date <= end_date)
        stmt = stmt.order_by(
            BankTransactionModel.transaction_date,
            BankTransactionModel.external_id,
        )

        result = await self._session.execute(stmt)
        return [self._map_to_domain(m) for m in result.scalars().all()]

    async def count_by_account(self, account_id: int) -> int:
        stmt = (
            select(func.count(BankTransactionModel.id))
            .join(BankAccountModel)
            .where(
                BankTransactionModel.account_id == account_id,
                BankAccountModel.user_id == self._user_id,
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _ensure_account_owned(self, account_id: int) -> None:
        stmt = select(BankAccountModel.id).where(
            BankAccountModel.id == account_id,
            BankAccountModel.user_id == self._user_id,
        )
        result = await self._session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise BankAccountNotFoundError(account_id)

    async def _get_existing_ids(self, external_ids: list[str]) -> dict[str, UUID]:
        stmt = select(BankTransactionModel.external_id, BankTransactionModel.id).where(
            BankTransactionModel.external_id.in_(external_ids),
        )
        result = await self._session.execute(stmt)
        return {row.external_id: row.id for row in result}

    @staticmethod
    def _create_model_from_domain(tx: BankTransaction) -> BankTransactionModel:
        return BankTransactionModel(
            id=uuid4(),
            account_id=tx.account_id,
            external_id=tx.external_id,
            transaction_date=tx.transaction_date,
            amount=tx.amount,
            currency=tx.currency,
            description=tx.description,
            counterparty_name=tx.counterparty_name,
            creditor_name=tx.creditor_name,
            debtor_name=tx.debtor_name,
            merchant_category_code=tx.merchant_category_code,
            bank_transaction_code=tx.bank_transaction_code,
        )

    @staticmethod
    def _map_to_domain(model: BankTransactionModel) -> BankTransaction:
        return BankTransaction(
            external_id=model.external_id,
            account_id=model.account_id,
            transaction_date=model.transaction_date,
            amount=model.amount,
            currency=model.currency,
            description=model.description,
            counterparty_name=model.counterparty_name,
            creditor_name=model.creditor_name,
            debtor_name=model.debtor_name,
            merchant_category_code=model.merchant_category_code,
            bank_transaction_code=model.bank_transaction_code,
        )
