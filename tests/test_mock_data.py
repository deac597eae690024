from datetime import date

import numpy as np

from data.aggregator import aggregate_stats
from data.mock_data import generate_product_stat, get_demo_records, get_demo_store


class TestMockData:

    def test_generated_day_is_consistent(self):
        rng = np.random.default_rng(0)
        for _ in range(50):
            stat = generate_product_stat(30, rng)
            assert 0 <= stat.delivered <= stat.confirmed <= stat.total_for_day
            assert stat.no_answer <= stat.total_for_day - stat.confirmed
            assert stat.cancelled_company <= stat.confirmed - stat.delivered

    def test_demo_records_cover_past_days_only(self):
        records = get_demo_records(["A", "B"], days=7, end_date=date(2024, 3, 8))

        assert sorted(records) == [f"2024-03-0{d}" for d in range(1, 8)]
        assert all(set(r.products) == {"A", "B"} for r in records.values())

    def test_same_seed_same_data(self):
        first = get_demo_records(["A"], days=5, end_date=date(2024, 1, 10), seed=7)
        second = get_demo_records(["A"], days=5, end_date=date(2024, 1, 10), seed=7)
        assert first == second

    def test_demo_store(self):
        store = get_demo_store(products=["A"], days=3)
        assert store.fetch_product_catalog() == ["A"]
        assert len(store.fetch_daily_records()) == 3
        assert aggregate_stats(store.fetch_daily_records()).total_orders >= 0

    def test_demo_store_without_history(self):
        store = get_demo_store(seed_records=False)
        assert store.fetch_daily_records() == {}
        assert len(store.fetch_product_catalog()) == 3
