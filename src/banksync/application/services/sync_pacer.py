"""Fixed-delay pacing for calls against the rate-limited aggregator."""

import asyncio
import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class SyncPacer:
    """Inter-call and inter-account waits for sequential syncing.

    The aggregator's rate limit is per credential, not per account, so the
    whole batch shares one pace. Waits are awaited in full; nothing runs
    before they elapse.
    """

    def __init__(
        self,
        call_delay: float = 1.0,
        account_delay: float = 2.0,
        sleep: Sleep = asyncio.sleep,
    ):
        if call_delay < 0 or account_delay < 0:
            msg = "Pacing delays cannot be negative"
            raise ValueError(msg)
        self._call_delay = call_delay
        self._account_delay = account_delay
        self._sleep = sleep

    @classmethod
    def disabled(cls) -> "SyncPacer":
        return cls(call_delay=0.0, account_delay=0.0)

    @property
    def call_delay(self) -> float:
        return self._call_delay

    @property
    def account_delay(self) -> float:
        return self._account_delay

    async def after_call(self) -> None:
        """Wait after an external call within one account."""
        if self._call_delay > 0:
            await self._sleep(self._call_delay)

    async def before_account(self, index: int) -> None:
        """Wait before the account at ``index`` (0-based); the first goes at once."""
        if index > 0 and self._account_delay > 0:
            logger.debug("Waiting %.1fs before next account", self._account_delay)
            await self._sleep(self._account_delay)
