from __future__ import annotations

from dataclasses import replace

import pytest
import requests

import sources  # noqa: F401 ensure registration
from sources.base import FetchFailed
from sources.file_csv import FileCsvSource
from sources.http_csv import HttpCsvSource
from sources.registry import available_sources, get_source


class FakeResponse:
    def __init__(self, status_code=200, text="", encoding=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self.text = text
        self.encoding = encoding


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_builtin_sources_are_registered(settings):
    assert {"http_csv", "file_csv"} <= set(available_sources())
    assert isinstance(get_source("http_csv", settings), HttpCsvSource)
    assert isinstance(get_source("file_csv", settings), FileCsvSource)


def test_unknown_source_name_raises(settings):
    with pytest.raises(KeyError):
        get_source("ftp_csv", settings)


def test_data_url_joins_base_and_path(settings):
    s = replace(settings, data_base_url="https://example.org/", data_path="/data.csv")
    assert s.data_url == "https://example.org/data.csv"


def test_http_source_returns_body(settings):
    s = replace(settings, data_base_url="https://example.org", data_path="/data.csv", request_timeout_seconds=7)
    session = FakeSession(FakeResponse(200, "agency\nA\n"))
    assert HttpCsvSource(s, session=session).fetch_text() == "agency\nA\n"
    assert session.requested == [("https://example.org/data.csv", 7)]


def test_http_source_defaults_to_utf8(settings):
    response = FakeResponse(200, "agency\n", encoding="ISO-8859-1")
    HttpCsvSource(settings, session=FakeSession(response)).fetch_text()
    assert response.encoding == "utf-8"


def test_http_status_failure(settings):
    source = HttpCsvSource(settings, session=FakeSession(FakeResponse(404)))
    with pytest.raises(FetchFailed) as excinfo:
        source.fetch_text()
    assert str(excinfo.value) == "HTTP error! status: 404"
    assert excinfo.value.status_code == 404


def test_http_transport_failure(settings):
    source = HttpCsvSource(settings, session=FakeSession(error=requests.exceptions.ConnectionError("refused")))
    with pytest.raises(FetchFailed) as excinfo:
        source.fetch_text()
    assert excinfo.value.status_code is None


def test_file_source_reads_utf8_with_bom(settings, tmp_path):
    path = tmp_path / "data.csv"
    path.write_bytes("agency\nÄrzte Media\n".encode("utf-8-sig"))
    source = FileCsvSource(replace(settings, data_file=str(path)))
    assert source.fetch_text() == "agency\nÄrzte Media\n"


def test_file_source_missing_file(settings, tmp_path):
    source = FileCsvSource(replace(settings, data_file=str(tmp_path / "missing.csv")))
    with pytest.raises(FetchFailed):
        source.fetch_text()
