from __future__ import annotations

from datetime import date

from utils.number_parsing import parse_followers, parse_founding_year, parse_int_prefix


def test_parse_int_prefix_reads_leading_digits():
    assert parse_int_prefix("10000") == 10000
    assert parse_int_prefix(" 42 followers") == 42
    assert parse_int_prefix("2020-01-01") == 2020
    assert parse_int_prefix("-7") == -7


def test_parse_int_prefix_rejects_non_numeric():
    assert parse_int_prefix("") is None
    assert parse_int_prefix("abc") is None
    assert parse_int_prefix(None) is None
    assert parse_int_prefix("1.2K") == 1


def test_followers_fallback_is_zero():
    assert parse_followers("") == 0
    assert parse_followers("n/a") == 0
    assert parse_followers(None) == 0
    assert parse_followers("-5") == 0
    assert parse_followers("15000") == 15000


def test_founding_year_falls_back_to_current_year():
    today = date(2026, 10, 19)
    assert parse_founding_year("2020", today=today) == 2020
    assert parse_founding_year("", today=today) == 2026
    assert parse_founding_year("unknown", today=today) == 2026
    assert parse_founding_year("0", today=today) == 2026
