"""EntitlementGate implementations."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

logger = logging.getLogger(__name__)


class StaticEntitlementGate:
    """Answers with a fixed value. ``entitled`` may be flipped at runtime."""

    def __init__(self, entitled: bool = False):
        self.entitled = entitled

    async def query_rewind_entitlement(self) -> bool:
        return self.entitled


class CallableEntitlementGate:
    """
    Delegates to an async callable, e.g. a premium-status lookup.

    The engine asks on every rewind, so the callable sees every check
    and can reflect a subscription that changed mid-session.
    """

    def __init__(self, check: Callable[[], Awaitable[bool]]):
        self._check = check

    async def query_rewind_entitlement(self) -> bool:
        entitled = bool(await self._check())
        logger.debug("Rewind entitlement: %s", entitled)
        return entitled
