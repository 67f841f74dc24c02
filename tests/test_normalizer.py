from __future__ import annotations

from datetime import date

from services.normalizer import MULTI_VALUE_FIELDS, normalize_row, normalize_rows, record_to_row, split_multi_value


def test_split_multi_value_trims_and_drops_empty_pieces():
    assert split_multi_value("Gaming, Tech") == ("Gaming", "Tech")
    assert split_multi_value(" a ,, b , ,a") == ("a", "b", "a")
    assert split_multi_value("") == ()
    assert split_multi_value(None) == ()


def test_normalize_example_row():
    row = {
        "agency": "Test Agency",
        "focus": "Gaming, Tech",
        "followers": "10000",
        "founding_year": "2020",
        "status": "active",
    }
    record = normalize_row(row)
    assert record.agency == "Test Agency"
    assert record.focus == ("Gaming", "Tech")
    assert record.followers == 10000
    assert record.founding_year == 2020


def test_empty_followers_becomes_zero_and_year_defaults():
    record = normalize_row({"agency": "A", "followers": "", "founding_year": "n/a"}, today=date(2026, 1, 2))
    assert record.followers == 0
    assert record.founding_year == 2026


def test_missing_multi_value_fields_are_empty_sequences():
    record = normalize_row({"agency": "Bare"})
    for field in MULTI_VALUE_FIELDS:
        assert getattr(record, field) == ()
    assert record.description is None
    assert record.notes is None
    assert record.status == ""


def test_normalize_rows_skips_empty_rows():
    rows = [{}, None, {"agency": "Keep"}, {"agency": "Also", "platforms": "YouTube"}]
    records = normalize_rows(rows)
    assert [r.agency for r in records] == ["Keep", "Also"]


def test_normalization_is_repeatable_from_exported_row():
    row = {
        "agency": "Loop",
        "url": "https://loop.de",
        "type": "mass",
        "platforms": "YouTube , TikTok",
        "references": "X,Y",
        "followers": "500",
        "founding_year": "2001",
        "status": "inactive",
        "notes": "n",
    }
    first = normalize_row(row)
    second = normalize_row(record_to_row(first))
    assert second == first


def test_unknown_enum_values_are_preserved():
    record = normalize_row({"agency": "Odd", "status": "paused", "type": "hybrid"})
    assert record.status == "paused"
    assert record.type == "hybrid"
