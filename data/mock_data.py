"""
Mock Data Generator
===================
Demo catalog and daily records for the in-memory store
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

import numpy as np

from data.models import DailyRecord, ProductStat
from data.store import InMemoryStore

# Typical daily volume per demo product
MOCK_BASE_ORDERS = {
    'ساعة ذكية': 40,
    'سماعات لاسلكية': 25,
    'حقيبة ظهر': 12,
}


def generate_product_stat(base_orders: int, rng: np.random.Generator) -> ProductStat:
    """
    One plausible day for a product

    Parameters
    ----------
    base_orders : int
        Mean orders per day
    rng : np.random.Generator
        Random source

    Returns
    -------
    ProductStat
        confirmed <= total, delivered <= confirmed, the rest split between
        cancellations and unanswered calls
    """
    total = int(rng.poisson(base_orders))
    confirmed = int(rng.binomial(total, 0.75))
    delivered = int(rng.binomial(confirmed, 0.85))
    no_answer = int(rng.binomial(total - confirmed, 0.6))
    cancelled = int(rng.binomial(confirmed - delivered, 0.5))

    return ProductStat(
        total_for_day=total,
        delivered=delivered,
        confirmed=confirmed,
        cancelled_company=cancelled,
        no_answer=no_answer,
    )


def get_demo_records(
    products: List[str],
    days: int,
    end_date: Optional[date] = None,
    seed: int = 42
) -> Dict[str, DailyRecord]:
    """
    Daily records for the ``days`` days ending at ``end_date`` (exclusive)

    Parameters
    ----------
    products : List[str]
        Product names
    days : int
        Number of past days to fill
    end_date : Optional[date]
        First day NOT generated, default today (today's entry stays empty)
    seed : int
        Random seed

    Returns
    -------
    Dict[str, DailyRecord]
        Records keyed by ISO date
    """
    rng = np.random.default_rng(seed)
    end_date = end_date or date.today()

    records = {}
    for offset in range(days, 0, -1):
        day = (end_date - timedelta(days=offset)).isoformat()
        records[day] = DailyRecord(
            date=day,
            products={
                name: generate_product_stat(MOCK_BASE_ORDERS.get(name, 20), rng)
                for name in products
            },
        )

    return records


def get_demo_store(products: Optional[List[str]] = None, days: int = 21, seed_records: bool = True) -> InMemoryStore:
    """In-memory store pre-filled with the demo catalog (and history)"""
    products = list(products if products is not None else MOCK_BASE_ORDERS)
    records = get_demo_records(products, days) if seed_records else {}
    return InMemoryStore(products=products, records=records)
