"""Chain client protocol — blockchain RPC abstraction."""
from typing import Any, Protocol


class ChainClient(Protocol):
    """Abstract interface for blockchain RPC interactions."""

    async def rpc_call(self, method: str, params: list[Any]) -> Any: ...

    async def get_coin_metadata(self, coin_type: str) -> dict[str, Any]: ...
