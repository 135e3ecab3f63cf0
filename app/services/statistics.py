"""
Statistics Engine: aggregate metrics over a window of impulse logs.

Pure functions, no DB access. Callers pass the logs already restricted to
[start, end]; anything with `.datetime`, `.feeling` and `.acted` works.

Metrics
-------
  total_impulses     number of logs
  acted_impulses     logs with acted == "yes"
  resisted_impulses  total - acted
  resistance_rate    resisted / total * 100, rounded half-up to an int
  peak_hour          busiest hour of day (0-23); ties go to the lowest hour
  top_emotion_words  up to 3 most frequent lower-cased whitespace tokens

Word counting is raw token frequency on purpose: no stemming, no stop
words. Changing it would change report content.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence

from app.core.errors import InsufficientDataError

TOP_WORDS_LIMIT = 3
HOURS_PER_DAY = 24


@dataclass
class StatSummary:
    window_start: Optional[datetime]
    window_end: Optional[datetime]
    total_impulses: int
    acted_impulses: int
    resisted_impulses: int
    resistance_rate: int
    peak_hour: int
    top_emotion_words: list[str] = field(default_factory=list)


def enum_value(v) -> str:
    """Return bare string value from a str-enum or plain str."""
    return v.value if hasattr(v, "value") else str(v)


def count_acted(logs: Iterable) -> int:
    return sum(1 for log in logs if enum_value(log.acted) == "yes")


def resistance_rate(resisted: int, total: int) -> int:
    """Percentage of resisted impulses, ROUND_HALF_UP (0.5 -> 1, not banker's)."""
    if total <= 0:
        raise InsufficientDataError()
    pct = Decimal(resisted) * Decimal(100) / Decimal(total)
    return int(pct.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def hourly_histogram(logs: Iterable) -> list[int]:
    buckets = [0] * HOURS_PER_DAY
    for log in logs:
        buckets[log.datetime.hour] += 1
    return buckets


def peak_hour(logs: Iterable) -> int:
    """Hour with the most logs. list.index returns the first maximum, i.e. the lowest hour."""
    buckets = hourly_histogram(logs)
    return buckets.index(max(buckets))


def top_emotion_words(logs: Iterable, limit: int = TOP_WORDS_LIMIT) -> list[str]:
    counts: Counter[str] = Counter()
    for log in logs:
        # str.split() with no argument already drops empty fragments
        counts.update(log.feeling.lower().split())
    # most_common keeps first-seen order among equal counts
    return [word for word, _ in counts.most_common(limit)]


def summarize(
    logs: Sequence,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> StatSummary:
    """Compute the StatSummary for a non-empty window. Raises InsufficientDataError when empty."""
    total = len(logs)
    if total == 0:
        raise InsufficientDataError(start, end)

    acted = count_acted(logs)
    resisted = total - acted
    return StatSummary(
        window_start=start,
        window_end=end,
        total_impulses=total,
        acted_impulses=acted,
        resisted_impulses=resisted,
        resistance_rate=resistance_rate(resisted, total),
        peak_hour=peak_hour(logs),
        top_emotion_words=top_emotion_words(logs),
    )
