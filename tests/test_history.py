from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace

from invoicegen.history import most_used_template, suggested_tax_rates


START = datetime(2024, 1, 1, 9, 0)


def _entry(template_id: str, tax_rate: float, minutes: int) -> SimpleNamespace:
    return SimpleNamespace(template_id=template_id, tax_rate=tax_rate, created_at=START + timedelta(minutes=minutes))


def test_most_used_template() -> None:
    entries = [
        _entry("standard", 10, 0),
        _entry("restaurant", 8.5, 1),
        _entry("standard", 10, 2),
    ]
    assert most_used_template(entries) == "standard"


def test_most_used_template_tie_goes_to_latest() -> None:
    entries = [
        _entry("restaurant", 8.5, 0),
        _entry("standard", 10, 1),
        _entry("restaurant", 8.5, 2),
        _entry("legal", 0, 3),
        _entry("standard", 10, 4),
    ]
    assert most_used_template(entries) == "standard"


def test_empty_history() -> None:
    assert most_used_template([]) is None
    assert suggested_tax_rates([]) == [8, 10, 15, 20, 25]


def test_suggested_tax_rates_prefer_past_rates() -> None:
    entries = [_entry("standard", 8.5, 0), _entry("standard", 8.5, 1), _entry("standard", 10, 2)]
    assert suggested_tax_rates(entries) == [8.5, 10, 8, 15, 20]
    assert suggested_tax_rates(entries, limit=1) == [8.5]
