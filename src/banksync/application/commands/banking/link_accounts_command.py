"""Create accounts for an authorized requisition and run their first sync."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional
from uuid import UUID

from banksync.application.commands.integration import AccountSyncCommand
from banksync.application.dtos.banking import LinkAccountsResult
from banksync.application.dtos.integration import AccountSyncResult
from banksync.domain.banking.entities import BankAccount
from banksync.domain.banking.exceptions import (
    RequisitionNotFoundError,
    RequisitionNotLinkedError,
)
from banksync.domain.integration.value_objects import SyncType
from banksync.domain.shared.exceptions import (
    DomainException,
    ErrorCode,
    ValidationError,
)
from banksync.domain.shared.time import utc_now

if TYPE_CHECKING:
    from banksync.application.factories import RepositoryFactory
    from banksync.application.services import SyncPacer
    from banksync.domain.banking.ports import AggregatorPort
    from banksync.domain.banking.repositories import BankAccountRepository
    from banksync.domain.banking.value_objects import Requisition

logger = logging.getLogger(__name__)


class LinkAccountsCommand:
    """Turn the accounts of a linked requisition into synced bank accounts.

    Each account is created (when unknown) and then synced as ``initial``,
    with the same pacing and per-account isolation as a batch sync.
    """

    def __init__(  # noqa: PLR0913
        self,
        aggregator: AggregatorPort,
        account_repository: BankAccountRepository,
        sync_command: AccountSyncCommand,
        session: Any,
        user_id: Optional[UUID],
        reference_prefix: str = "banksync",
        default_currency: str = "DKK",
    ):
        self._aggregator = aggregator
        self._account_repo = account_repository
        self._sync_command = sync_command
        self._session = session
        self._user_id = user_id
        self._reference_prefix = reference_prefix
        self._default_currency = default_currency

    @classmethod
    def from_factory(  # noqa: PLR0913
        cls,
        factory: RepositoryFactory,
        aggregator: AggregatorPort,
        pacer: Optional[SyncPacer] = None,
        reference_prefix: str = "banksync",
        default_currency: str = "DKK",
        **window_options: int,
    ) -> LinkAccountsCommand:
        return cls(
            aggregator=aggregator,
            account_repository=factory.bank_account_repository(),
            sync_command=AccountSyncCommand.from_factory(
                factory,
                aggregator,
                pacer=pacer,
                **window_options,
            ),
            session=factory.session,
            user_id=factory.current_user.user_id,
            reference_prefix=reference_prefix,
            default_currency=default_currency,
        )

    async def execute(self, requisition_ref: str) -> LinkAccountsResult:
        if self._user_id is None:
            msg = "A user id is required to link accounts"
            raise ValidationError(msg)
        if not requisition_ref or not requisition_ref.strip():
            msg = "Requisition id or reference is required"
            raise ValidationError(msg)

        requisition = await self._resolve_requisition(requisition_ref.strip())
        if not requisition.is_linked:
            raise RequisitionNotLinkedError(
                requisition.id,
                requisition.raw_status or requisition.status.value,
            )

        result = LinkAccountsResult(requisition_id=requisition.id, linked_at=utc_now())
        pacer = self._sync_command.pacer
        await pacer.after_call()

        for index, external_id in enumerate(requisition.accounts):
            await pacer.before_account(index)
            result.results.append(await self._link_one(requisition, external_id))

        logger.info(
            "Linked %d accounts from requisition %s (%d synced)",
            result.accounts_count,
            requisition.id,
            result.accounts_synced,
        )
        return result

    async def _resolve_requisition(self, requisition_ref: str) -> Requisition:
        if requisition_ref.startswith(f"{self._reference_prefix}-"):
            requisition = await self._aggregator.find_requisition_by_reference(
                requisition_ref,
            )
            if requisition is None:
                raise RequisitionNotFoundError(requisition_ref)
            return requisition
        return await self._aggregator.get_requisition(requisition_ref)

    async def _link_one(
        self,
        requisition: Requisition,
        external_id: str,
    ) -> AccountSyncResult:
        account = await self._account_repo.find_by_external_id(external_id)
        if account is not None:
            return await self._sync_command.execute(account)

        try:
            account = await self._create_account(requisition, external_id)
        except Exception as e:
            logger.warning("Could not create account %s: %s", external_id, e)
            await self._session.rollback()
            return AccountSyncResult.failure(
                external_id=external_id,
                account_name=external_id,
                synced_at=utc_now(),
                sync_type=SyncType.INITIAL,
                error_message=str(e).strip() or e.__class__.__name__,
                error_code=(
                    e.code.value
                    if isinstance(e, DomainException)
                    else ErrorCode.SYNC_FAILED.value
                ),
            )

        return await self._sync_command.execute(account, sync_type=SyncType.INITIAL)

    async def _create_account(
        self,
        requisition: Requisition,
        external_id: str,
    ) -> BankAccount:
        details = await self._aggregator.get_account_details(external_id)
        await self._sync_command.pacer.after_call()

        account = BankAccount(
            user_id=self._user_id,  # type: ignore[arg-type]
            external_id=external_id,
            name=details.display_name(),
            currency=details.currency or self._default_currency,
            iban=details.iban,
            requisition_id=requisition.id,
            institution_id=requisition.institution_id,
        )
        account = await self._account_repo.save(account)
        await self._session.commit()
        logger.info("Created bank account %s (%s)", account.id, account.name)
        return account
