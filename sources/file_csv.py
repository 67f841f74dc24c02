from __future__ import annotations

from pathlib import Path

from config.settings import Settings
from sources.base import CsvSource, FetchFailed
from sources.registry import register


class FileCsvSource(CsvSource):
    source_name = "file_csv"

    def __init__(self, settings: Settings):
        self.path = Path(settings.data_file)

    def fetch_text(self) -> str:
        try:
            return self.path.read_text(encoding="utf-8-sig")
        except OSError as e:
            raise FetchFailed(f"Cannot read {self.path}: {e}") from e


def _register():
    register(FileCsvSource.source_name, FileCsvSource)


_register()
