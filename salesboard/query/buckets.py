"""Fixed price buckets for the bar chart.

Every bucket is (lower, upper]: lower bound exclusive, upper inclusive,
which agrees with the integer labels ("101-200" holds 100 < price <= 200).
The first bucket has no lower bound and the last no upper bound, so the
buckets cover every price exactly once.
"""
from dataclasses import dataclass
from typing import Optional

from salesboard.query.filters import Predicate


@dataclass(frozen=True)
class PriceBucket:
    label: str
    lower: Optional[float]
    upper: Optional[float]

    def predicate(self) -> Predicate:
        clauses = []
        params: list[float] = []
        if self.lower is not None:
            clauses.append("price > ?")
            params.append(self.lower)
        if self.upper is not None:
            clauses.append("price <= ?")
            params.append(self.upper)
        return Predicate(" AND ".join(clauses) or "1 = 1", tuple(params))


PRICE_BUCKETS: tuple[PriceBucket, ...] = (
    PriceBucket("0-100", None, 100),
    PriceBucket("101-200", 100, 200),
    PriceBucket("201-300", 200, 300),
    PriceBucket("301-400", 300, 400),
    PriceBucket("401-500", 400, 500),
    PriceBucket("501-600", 500, 600),
    PriceBucket("601-700", 600, 700),
    PriceBucket("701-800", 700, 800),
    PriceBucket("801-900", 800, 900),
    PriceBucket("901-above", 900, None),
)
