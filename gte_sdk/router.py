"""Resolution of the Uniswap V2 router address used for quotes and swaps."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .chain import ContractReader
from .constants import GTE_ROUTER_MIN_ABI

logger = logging.getLogger(__name__)


class RouterAddressResolver:
    """
    Resolves the router address once per client.

    An explicit override wins and never touches the chain. Otherwise the
    router-manager contract's ``uniV2Router()`` is read on first use and the
    result is kept for the lifetime of the resolver. A failed read leaves the
    cache empty so the next call retries.
    """

    def __init__(
        self,
        reader: ContractReader,
        router_manager_address: str,
        override: Optional[str] = None,
    ) -> None:
        self._reader = reader
        self._router_manager_address = router_manager_address
        self._override = override
        self._cached: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def cached_address(self) -> Optional[str]:
        return self._override or self._cached

    async def resolve(self) -> str:
        if self._override:
            return self._override
        if self._cached:
            return self._cached

        async with self._lock:
            # Another task may have filled the cache while we waited
            if self._cached:
                return self._cached
            router = await self._reader.read_contract(
                self._router_manager_address,
                GTE_ROUTER_MIN_ABI,
                "uniV2Router",
                [],
            )
            self._cached = str(router)
            logger.debug("Resolved uniV2Router=%s via %s", self._cached, self._router_manager_address)
            return self._cached
