"""Helpers that run the use cases the way the CLI does, one session each."""

from banksync.application.commands.banking import LinkAccountsCommand
from banksync.application.commands.integration import BatchSyncCommand
from banksync.application.queries.integration import SyncStatusQuery
from banksync.application.services import SyncPacer
from banksync.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)


async def link(session_maker, current_user, aggregator, reference):
    async with session_maker() as session:
        factory = SQLAlchemyRepositoryFactory(session, current_user)
        command = LinkAccountsCommand.from_factory(
            factory,
            aggregator,
            pacer=SyncPacer.disabled(),
        )
        return await command.execute(reference)


async def sync_all(session_maker, current_user, aggregator):
    async with session_maker() as session:
        factory = SQLAlchemyRepositoryFactory(session, current_user)
        command = BatchSyncCommand.from_factory(
            factory,
            aggregator,
            pacer=SyncPacer.disabled(),
        )
        return await command.execute()


async def status(session_maker, current_user):
    async with session_maker() as session:
        factory = SQLAlchemyRepositoryFactory(session, current_user)
        return await SyncStatusQuery.from_factory(factory).execute()


async def stored_transactions(session_maker, current_user, account_id):
    async with session_maker() as session:
        factory = SQLAlchemyRepositoryFactory(session, current_user)
        return await factory.bank_transaction_repository().find_by_account(account_id)
