"""Dashboard Data Module"""
from data.models import ProductStat, DailyRecord, CumulativeStats
from data.store import DataStore, InMemoryStore, StoreError
from data.session import DashboardSession, ensure_session

__all__ = [
    'ProductStat', 'DailyRecord', 'CumulativeStats',
    'DataStore', 'InMemoryStore', 'StoreError',
    'DashboardSession', 'ensure_session',
]
