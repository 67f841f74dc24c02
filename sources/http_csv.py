"""
Fetch the agency CSV over HTTP from the well-known data path.
"""
from __future__ import annotations

import logging
from typing import Optional

import requests

from config.settings import Settings
from sources.base import CsvSource, FetchFailed
from sources.registry import register


logger = logging.getLogger(__name__)


class HttpCsvSource(CsvSource):
    source_name = "http_csv"

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.url = settings.data_url
        self.timeout = settings.request_timeout_seconds
        self.session = session or requests.Session()

    def fetch_text(self) -> str:
        # Single attempt; retrying is left to the user (refresh)
        logger.info(f"Fetching agency data from {self.url}", extra={"source": self.source_name})
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise FetchFailed(f"Request error: {e}") from e

        if not response.ok:
            raise FetchFailed(
                f"HTTP error! status: {response.status_code}",
                status_code=response.status_code,
            )
        # CSV served without charset would otherwise decode as latin-1
        if not response.encoding or response.encoding.lower() == "iso-8859-1":
            response.encoding = "utf-8"
        return response.text


def _register():
    register(HttpCsvSource.source_name, HttpCsvSource)


_register()
