from __future__ import annotations

from typing import Any, Protocol


class CacheStorePort(Protocol):
    """Key/value area holding JSON-serializable values.

    Implementations must never raise from get/set/remove: read failures return
    the default, write failures are logged and leave prior state unchanged.
    """

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def remove(self, key: str) -> None:
        ...
