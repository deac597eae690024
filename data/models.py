"""
Data Models
===========
Daily order statistics records
"""

from dataclasses import dataclass, field, fields, asdict
from typing import Dict, Optional


@dataclass
class ProductStat:
    """One product's counters for one day.

    Fields are edited independently; nothing enforces that the outcome
    counters add up to ``total_for_day``.
    """
    total_for_day: int = 0
    delivered: int = 0
    confirmed: int = 0
    cancelled_company: int = 0
    no_answer: int = 0

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> 'ProductStat':
        """Build from a remote payload; missing fields count as 0."""
        if not data:
            return cls()
        return cls(**{f.name: data.get(f.name, 0) for f in fields(cls)})

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass
class DailyRecord:
    """All product counters saved for one ISO date (YYYY-MM-DD)."""
    date: str
    products: Dict[str, ProductStat] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, date: str, data: Optional[dict]) -> 'DailyRecord':
        products = (data or {}).get('products') or {}
        return cls(
            date=date,
            products={
                name: ProductStat.from_dict(stat) if stat is not None else None
                for name, stat in products.items()
            },
        )

    def to_dict(self) -> dict:
        return {
            'products': {
                name: stat.to_dict() if stat is not None else None
                for name, stat in self.products.items()
            }
        }


@dataclass
class CumulativeStats:
    """Running sums over a filtered set of daily records."""
    total_orders: int = 0
    total_delivered: int = 0
    total_confirmed: int = 0
    total_cancelled: int = 0
    total_no_answer: int = 0

    def add(self, stat: ProductStat) -> None:
        self.total_orders += stat.total_for_day
        self.total_delivered += stat.delivered
        self.total_confirmed += stat.confirmed
        self.total_cancelled += stat.cancelled_company
        self.total_no_answer += stat.no_answer

    @property
    def success_rate(self) -> float:
        return _ratio(self.total_delivered, self.total_orders)

    @property
    def confirmation_rate(self) -> float:
        return _ratio(self.total_confirmed, self.total_orders)

    @property
    def delivery_after_confirmation_rate(self) -> float:
        return _ratio(self.total_delivered, self.total_confirmed)

    @property
    def no_answer_rate(self) -> float:
        return _ratio(self.total_no_answer, self.total_orders)

    @property
    def cancellation_rate(self) -> float:
        return _ratio(self.total_cancelled, self.total_orders)


def _ratio(numerator, denominator) -> float:
    # 0 whenever the denominator is not positive (also covers NaN)
    if not denominator > 0:
        return 0.0
    return numerator / denominator
