from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


SAMPLE_CSV = (
    "agency,url,type,pricing_model,legal_form,location,founding_year,departments,focus,platforms,references,conditions,followers,status,description,notes\n"
    'Agency 10,https://www.agency10.de,exclusive,commission,GmbH,Berlin,2015,"Management, Marketing","Gaming, Tech","YouTube, Twitch","StreamerA, StreamerB",Exklusivvertrag,250000,active,Gaming-Talente,\n'
    'Agency 2,https://agency2.com,mass,base_fee,UG,München,2019,Sales,Lifestyle,"Instagram, TikTok",InfluencerC,,80000,active,Lifestyle und Beauty,Neue Partner\n'
    'Ärzte Media,https://aerzte-media.de,exclusive,commission,gmbh & co kg,Hamburg,,,"Health, Education",YouTube,DocTalk,,abc,inactive,Medizin,\n'
    "\n"
)


def pytest_configure():
    # Ensure project root is on sys.path for absolute imports like 'services.query_engine'
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))
    # Set test environment knobs
    os.environ.setdefault("RUN_ENV", "test")


@pytest.fixture(autouse=True)
def _fresh_settings():
    from config.settings import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


class StubSource:
    source_name = "stub"

    def __init__(self, text: str = SAMPLE_CSV, error=None):
        self.text = text
        self.error = error
        self.calls = 0

    def fetch_text(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def stub_source():
    return StubSource()


@pytest.fixture
def settings():
    from dataclasses import replace

    from config.settings import get_settings
    return replace(
        get_settings(),
        cache_key="creators_cache",
        cache_ttl_seconds=300,
        search_debounce_ms=300,
        strict_enums=True,
    )


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
