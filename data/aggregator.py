"""
Stat Aggregator
===============
Cumulative totals, rates and lookups over the daily records map

All functions are pure: they read the records mapping and never modify it.
"""

import math
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Optional

import pandas as pd

from data.models import CumulativeStats, DailyRecord, ProductStat

COUNTER_COLUMNS = ['total_orders', 'total_delivered', 'total_confirmed', 'total_cancelled', 'total_no_answer']


def _in_range(date_str: str, start_date: Optional[str], end_date: Optional[str]) -> bool:
    # ISO dates: lexicographic order == chronological order
    if start_date and date_str < start_date:
        return False
    if end_date and date_str > end_date:
        return False
    return True


def _matching_stats(record: DailyRecord, product: Optional[str]):
    for name, stat in record.products.items():
        if product is None or product == name:
            if stat is not None:
                yield stat


def aggregate_stats(
    records: Mapping[str, DailyRecord],
    product: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> CumulativeStats:
    """
    Sum the five counters over the selected records

    Parameters
    ----------
    records : Mapping[str, DailyRecord]
        All daily records keyed by ISO date
    product : Optional[str]
        Product name, or None for all products
    start_date : Optional[str]
        Inclusive lower bound (YYYY-MM-DD), None or '' for unbounded
    end_date : Optional[str]
        Inclusive upper bound (YYYY-MM-DD), None or '' for unbounded

    Returns
    -------
    CumulativeStats
        Totals with derived rates; all zero when nothing matches
    """
    totals = CumulativeStats()

    for date_str, record in records.items():
        if not _in_range(date_str, start_date, end_date):
            continue
        for stat in _matching_stats(record, product):
            totals.add(stat)

    return totals


def daily_breakdown(
    records: Mapping[str, DailyRecord],
    product: Optional[str] = None,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> pd.DataFrame:
    """
    Per-date totals for the trend chart

    Returns
    -------
    pd.DataFrame
        Columns: date, total_orders, total_delivered, total_confirmed,
        total_cancelled, total_no_answer (sorted by date)
    """
    rows = []
    for date_str in sorted(records):
        if not _in_range(date_str, start_date, end_date):
            continue
        day = CumulativeStats()
        for stat in _matching_stats(records[date_str], product):
            day.add(stat)
        rows.append({
            'date': date_str,
            'total_orders': day.total_orders,
            'total_delivered': day.total_delivered,
            'total_confirmed': day.total_confirmed,
            'total_cancelled': day.total_cancelled,
            'total_no_answer': day.total_no_answer,
        })

    if not rows:
        return pd.DataFrame(columns=['date'] + COUNTER_COLUMNS)

    df = pd.DataFrame(rows)
    df['date'] = pd.to_datetime(df['date'])
    return df


def historical_products(records: Mapping[str, DailyRecord]) -> List[str]:
    """Every product name found in any record, sorted.

    May include products already removed from the catalog.
    """
    names = set()
    for record in records.values():
        names.update(record.products.keys())
    return sorted(names)


def previous_date(date_str: str) -> str:
    """Calendar day before ``date_str`` (YYYY-MM-DD)."""
    return (date.fromisoformat(date_str) - timedelta(days=1)).isoformat()


def stat_for_day(records: Mapping[str, DailyRecord], date_str: str, product: Optional[str]) -> ProductStat:
    """Saved stat for (date, product), all zeros if absent."""
    record = records.get(date_str)
    if record is None or product is None:
        return ProductStat()
    return record.products.get(product) or ProductStat()


def previous_day_no_answer(records: Mapping[str, DailyRecord], date_str: str, product: Optional[str]) -> int:
    """Yesterday's no_answer count for the product, 0 if absent."""
    return stat_for_day(records, previous_date(date_str), product).no_answer


def format_number(value) -> str:
    """Thousands separators: 1234 -> '1,234'"""
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "∞" if value > 0 else "-∞"
        if value.is_integer():
            value = int(value)
        else:
            return f"{value:,.3f}".rstrip('0').rstrip('.')
    return f"{value:,}"


def format_percent(value) -> str:
    """Ratio as a percentage with one decimal: 0.8667 -> '86.7%'"""
    if value is None or not math.isfinite(value):
        return '0.0%'
    percent = (Decimal(str(value)) * 100).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)
    return f"{percent:,}%"


def rate_summary(stats: CumulativeStats) -> Dict[str, str]:
    """Formatted rates keyed by rate name."""
    return {
        'success_rate': format_percent(stats.success_rate),
        'confirmation_rate': format_percent(stats.confirmation_rate),
        'delivery_after_confirmation_rate': format_percent(stats.delivery_after_confirmation_rate),
        'no_answer_rate': format_percent(stats.no_answer_rate),
        'cancellation_rate': format_percent(stats.cancellation_rate),
    }
