from __future__ import annotations

from typing import Protocol


class DataSourcePort(Protocol):
    source_name: str

    def fetch_text(self) -> str:
        """Return the raw CSV document.

        Raises sources.base.FetchFailed on transport errors or non-OK responses.
        """
        ...
