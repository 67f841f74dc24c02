from __future__ import annotations

from typing import Optional


class FetchFailed(Exception):
    """Raised by a data source when the CSV document cannot be retrieved."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CsvSource:
    source_name: str = ""

    def fetch_text(self) -> str:
        raise NotImplementedError
