"""Map raw aggregator records to canonical transactions and store them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

from pydantic import ValidationError as PydanticValidationError

from banksync.domain.banking.value_objects import (
    AggregatorTransaction,
    BankTransaction,
)

if TYPE_CHECKING:
    from banksync.domain.banking.repositories import BankTransactionRepository

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "Transaction"


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Counts for one reconciled batch."""

    fetched: int
    mapped: int
    new: int

    @property
    def skipped(self) -> int:
        return self.fetched - self.mapped

    @property
    def existing(self) -> int:
        return self.mapped - self.new


class TransactionReconciler:
    """Idempotent merge of aggregator transactions keyed by external id.

    The new-transaction count is what storage actually inserted, not the
    size of the fetched batch.
    """

    def __init__(self, transaction_repository: BankTransactionRepository):
        self._transaction_repo = transaction_repository

    def map_record(
        self,
        account_id: int,
        record: dict[str, Any],
    ) -> Optional[BankTransaction]:
        """Map one raw record; ``None`` when it has no usable id, date or amount."""
        try:
            raw = AggregatorTransaction.model_validate(record)
        except PydanticValidationError as e:
            logger.warning(
                "Skipping malformed transaction for account %s: %s",
                account_id,
                e.errors()[0].get("msg") if e.errors() else e,
            )
            return None

        external_id = raw.external_id
        transaction_date = raw.effective_date
        if not external_id or transaction_date is None:
            logger.warning(
                "Skipping transaction without id or date for account %s",
                account_id,
            )
            return None

        amount = raw.transaction_amount.amount
        try:
            return BankTransaction(
                external_id=external_id,
                account_id=account_id,
                transaction_date=transaction_date,
                amount=amount,
                currency=raw.transaction_amount.currency,
                description=self._describe(raw),
                counterparty_name=self._counterparty(raw, is_debit=amount < 0),
                creditor_name=raw.creditor_name,
                debtor_name=raw.debtor_name,
                merchant_category_code=raw.merchant_category_code,
                bank_transaction_code=raw.proprietary_bank_transaction_code,
            )
        except PydanticValidationError as e:
            logger.warning(
                "Skipping transaction %s for account %s: %s",
                external_id,
                account_id,
                e.errors()[0].get("msg") if e.errors() else e,
            )
            return None

    def map_records(
        self,
        account_id: int,
        records: list[dict[str, Any]],
    ) -> list[BankTransaction]:
        mapped = (self.map_record(account_id, record) for record in records)
        return [t for t in mapped if t is not None]

    async def reconcile(
        self,
        account_id: int,
        records: list[dict[str, Any]],
    ) -> ReconciliationOutcome:
        transactions = self.map_records(account_id, records)
        if not transactions:
            return ReconciliationOutcome(fetched=len(records), mapped=0, new=0)

        stored = await self._transaction_repo.save_batch_ignore_duplicates(
            transactions,
        )
        outcome = ReconciliationOutcome(
            fetched=len(records),
            mapped=len(transactions),
            new=sum(1 for s in stored if s.is_new),
        )

        logger.info(
            "Account %s: %d fetched, %d new, %d already stored, %d skipped",
            account_id,
            outcome.fetched,
            outcome.new,
            outcome.existing,
            outcome.skipped,
        )
        return outcome

    @staticmethod
    def _describe(raw: AggregatorTransaction) -> str:
        for candidate in (
            raw.remittance_information_unstructured,
            raw.creditor_name,
            raw.debtor_name,
        ):
            if candidate and candidate.strip():
                return candidate.strip()
        return FALLBACK_DESCRIPTION

    @staticmethod
    def _counterparty(raw: AggregatorTransaction, is_debit: bool) -> Optional[str]:
        # Money out goes to the creditor, money in comes from the debtor
        if is_debit:
            return raw.creditor_name or raw.debtor_name
        return raw.debtor_name or raw.creditor_name
