# ABOUTME: Condenses the 3-hour forecast feed into one summary per UTC calendar day.
# ABOUTME: Pure functions: grouping by date, min/max temperature, description merge, day-variant icon.

import logging
from collections.abc import Iterable

from weather_lookup.models import DailyForecastSummary, ForecastSample

logger = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 5
FALLBACK_ICON = "01d"


def day_variant(icon: str) -> str:
    """Map a provider icon code to its daytime form, e.g. "10n" -> "10d".

    Codes too short to carry a condition number fall back to clear sky.
    """
    if len(icon) < 2:
        return FALLBACK_ICON
    return icon[:2] + "d"


def aggregate(samples: Iterable[ForecastSample], max_days: int = MAX_FORECAST_DAYS) -> list[DailyForecastSummary]:
    """Group forecast samples by UTC date and summarize each day.

    Malformed samples (missing temperature, description or icon) are skipped and
    logged; a day left with no valid samples is omitted. Days keep the order in
    which they first appear, and only the first ``max_days`` are returned.
    """
    days: dict[str, list[ForecastSample]] = {}
    for sample in samples:
        if not sample.is_complete:
            logger.warning("Skipping malformed forecast sample at %s: %r", sample.timestamp, sample)
            continue
        days.setdefault(sample.date_key, []).append(sample)

    return [_summarize(date_key, group) for date_key, group in days.items()][:max_days]


def _summarize(date_key: str, group: list[ForecastSample]) -> DailyForecastSummary:
    temps = [s.temperature for s in group]
    # dict keys keep first-seen order and drop duplicates
    descriptions = dict.fromkeys(s.description for s in group)
    return DailyForecastSummary(
        dt=group[0].timestamp,
        date=date_key,
        temp_min=min(temps),
        temp_max=max(temps),
        description=", ".join(descriptions),
        icon=day_variant(group[0].icon),
    )
