import pytest

from data.models import DailyRecord, ProductStat
from data.notifications import ToastQueue
from data.session import DashboardSession
from data.store import InMemoryStore


class FakeClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def sample_records():
    """Two days of product A plus one day of product B"""
    return {
        "2024-01-01": DailyRecord(
            date="2024-01-01",
            products={
                "A": ProductStat(total_for_day=10, delivered=8, confirmed=9, cancelled_company=1, no_answer=1),
                "B": ProductStat(total_for_day=4, delivered=2, confirmed=3, cancelled_company=0, no_answer=1),
            },
        ),
        "2024-01-02": DailyRecord(
            date="2024-01-02",
            products={
                "A": ProductStat(total_for_day=5, delivered=5, confirmed=5, cancelled_company=0, no_answer=0),
            },
        ),
    }


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(sample_records):
    return InMemoryStore(products=["A", "B"], records=sample_records)


@pytest.fixture
def session(store, clock):
    session = DashboardSession(store, current_date="2024-01-02", toasts=ToastQueue(duration=3, clock=clock))
    session.open()
    yield session
    session.close()
