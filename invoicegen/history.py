"""
Suggestions drawn from past renders.

The functions here take any sequence of RenderLog-like entries (objects with
``template_id``, ``tax_rate`` and ``created_at``) so they can be fed from the
database or from plain test data. The rendering engine never calls them.
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence

from sqlmodel import select

from . import config
from .models import RenderLog, RenderStatus, get_session, init_db


def most_used_template(entries: Sequence[Any]) -> Optional[str]:
    """Template used most often; ties go to the one used most recently."""
    if not entries:
        return None
    counts: Counter = Counter()
    last_used: Dict[str, Any] = {}
    for entry in entries:
        counts[entry.template_id] += 1
        previous = last_used.get(entry.template_id)
        if previous is None or entry.created_at > previous:
            last_used[entry.template_id] = entry.created_at
    return max(counts, key=lambda key: (counts[key], last_used[key]))


def _rate_key(rate: float) -> float:
    return round(float(rate), 2)


def suggested_tax_rates(entries: Sequence[Any], limit: int = 5) -> List[float]:
    """Most frequent past tax rates first, padded with the common rates."""
    counts = Counter(_rate_key(entry.tax_rate) for entry in entries)
    rates = [rate for rate, _ in sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))]
    for rate in config.COMMON_TAX_RATES:
        if len(rates) >= limit:
            break
        if _rate_key(rate) not in rates:
            rates.append(_rate_key(rate))
    return rates[:limit]


def load_history() -> List[RenderLog]:
    init_db()
    with get_session() as session:
        statement = (
            select(RenderLog)
            .where(RenderLog.status == RenderStatus.READY)
            .order_by(RenderLog.created_at)
        )
        return list(session.exec(statement))
