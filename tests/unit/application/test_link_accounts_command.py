"""Tests for the LinkAccountsCommand."""

import pytest

from banksync.application.commands.banking import LinkAccountsCommand
from banksync.domain.banking.exceptions import (
    AggregatorAuthenticationError,
    RequisitionNotFoundError,
    RequisitionNotLinkedError,
)
from banksync.domain.banking.value_objects import Requisition, RequisitionStatus
from banksync.domain.integration.value_objects import SyncStatus, SyncType
from banksync.domain.shared.exceptions import ValidationError
from tests.shared.fixtures.factories import (
    TestUserFactory,
    account_details,
    make_account,
    raw_transactions,
)

REFERENCE = "banksync-1710000000000"


def _requisition(status=RequisitionStatus.LINKED, accounts=("acc-1", "acc-2")):
    return Requisition(
        id="req-1",
        status=status,
        raw_status=status.value,
        institution_id="DANSKEBANK_DABADKKK",
        reference=REFERENCE,
        accounts=accounts,
    )


@pytest.fixture
def command(aggregator, account_repo, sync_command, session):
    return LinkAccountsCommand(
        aggregator=aggregator,
        account_repository=account_repo,
        sync_command=sync_command,
        session=session,
        user_id=TestUserFactory.DEFAULT_ID,
        reference_prefix="banksync",
        default_currency="DKK",
    )


class TestLinkAccountsCommand:
    """Test account creation and first sync after consent."""

    @pytest.mark.asyncio
    async def test_creates_and_syncs_each_account(
        self,
        command,
        aggregator,
        account_repo,
    ):
        # Arrange
        aggregator.get_requisition.return_value = _requisition()
        aggregator.get_account_transactions.return_value = raw_transactions(2)

        # Act
        result = await command.execute("req-1")

        # Assert
        assert result.requisition_id == "req-1"
        assert result.accounts_count == 2
        assert result.accounts_synced == 2
        assert all(r.sync_type == SyncType.INITIAL for r in result.results)

        created = [call.args[0] for call in account_repo.save.await_args_list]
        account = created[0]
        assert account.user_id == TestUserFactory.DEFAULT_ID
        assert account.requisition_id == "req-1"
        assert account.institution_id == "DANSKEBANK_DABADKKK"
        assert account.name == "Lønkonto"
        assert account.sync_status == SyncStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_resolves_by_reference(self, command, aggregator):
        aggregator.find_requisition_by_reference.return_value = _requisition(
            accounts=(),
        )

        result = await command.execute(REFERENCE)

        assert result.accounts_count == 0
        aggregator.find_requisition_by_reference.assert_awaited_once_with(REFERENCE)
        aggregator.get_requisition.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_reference_raises(self, command, aggregator):
        aggregator.find_requisition_by_reference.return_value = None

        with pytest.raises(RequisitionNotFoundError):
            await command.execute(REFERENCE)

    @pytest.mark.asyncio
    async def test_unlinked_requisition_raises(self, command, aggregator):
        aggregator.get_requisition.return_value = _requisition(
            status=RequisitionStatus.GIVING_CONSENT,
        )

        with pytest.raises(RequisitionNotLinkedError) as exc_info:
            await command.execute("req-1")

        assert exc_info.value.status == "GC"

    @pytest.mark.asyncio
    async def test_existing_account_is_resynced(
        self,
        command,
        aggregator,
        account_repo,
    ):
        existing = make_account(id=9, external_id="acc-1")
        aggregator.get_requisition.return_value = _requisition(accounts=("acc-1",))
        account_repo.find_by_external_id.return_value = existing

        result = await command.execute("req-1")

        (sync_result,) = result.results
        assert sync_result.account_id == 9
        assert sync_result.succeeded
        assert existing.sync_status == SyncStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_currency_defaults_when_bank_omits_it(
        self,
        command,
        aggregator,
        account_repo,
    ):
        aggregator.get_requisition.return_value = _requisition(accounts=("acc-1",))
        aggregator.get_account_details.side_effect = lambda account_id: account_details(
            account_id,
            currency=None,
            name=None,
            product="Budgetkonto",
        )

        await command.execute("req-1")

        account = account_repo.save.await_args_list[0].args[0]
        assert account.currency == "DKK"
        assert account.name == "Budgetkonto"

    @pytest.mark.asyncio
    async def test_creation_failure_isolated_per_account(
        self,
        command,
        aggregator,
        session,
    ):
        aggregator.get_requisition.return_value = _requisition()

        async def details(account_id):
            if account_id == "acc-1":
                msg = "Consent expired"
                raise AggregatorAuthenticationError(msg)
            return account_details(account_id)

        aggregator.get_account_details.side_effect = details

        result = await command.execute("req-1")

        first, second = result.results
        assert not first.succeeded
        assert first.error_code == "AGGREGATOR_AUTHENTICATION_FAILED"
        assert second.succeeded
        assert result.accounts_synced == 1
        session.rollback.assert_awaited()

    @pytest.mark.asyncio
    async def test_empty_reference_rejected(self, command):
        with pytest.raises(ValidationError):
            await command.execute(" ")
