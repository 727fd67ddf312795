"""
Read-only contract access.

The SDK only ever needs view calls (router discovery and amount quotes), so the
collaborator surface is a single ``read_contract`` coroutine.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from eth_utils import to_checksum_address
from web3 import AsyncHTTPProvider, AsyncWeb3

from .constants import Abi
from .errors import ContractReadError

logger = logging.getLogger(__name__)


class ContractReader(Protocol):
    """Anything that can execute a view function and return its decoded result."""

    async def read_contract(
        self,
        address: str,
        abi: Abi,
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        ...


class Web3ContractReader:
    """ContractReader backed by ``web3.AsyncWeb3``."""

    def __init__(self, rpc_url: Optional[str] = None, *, w3: Optional[AsyncWeb3] = None):
        self._owns_provider = w3 is None
        if w3 is None:
            if not rpc_url:
                raise ValueError("rpc_url or w3 is required")
            w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self.w3 = w3

    async def aclose(self) -> None:
        """Release the provider session if this reader created it."""
        if not self._owns_provider:
            return
        disconnect = getattr(self.w3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()

    async def read_contract(
        self,
        address: str,
        abi: Abi,
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        try:
            contract = self.w3.eth.contract(address=to_checksum_address(address), abi=abi)
            call_args = [
                [to_checksum_address(a) for a in arg] if _is_address_list(arg) else arg
                for arg in args
            ]
            logger.debug("eth_call %s.%s%s", address, function_name, tuple(call_args))
            return await contract.functions[function_name](*call_args).call()
        except Exception as exc:
            raise ContractReadError(
                f"Contract read {function_name} on {address} failed: {exc}",
                function_name=function_name,
                address=address,
            ) from exc


def _is_address_list(value: Any) -> bool:
    return (
        isinstance(value, (list, tuple))
        and bool(value)
        and all(isinstance(v, str) and v.startswith("0x") and len(v) == 42 for v in value)
    )
