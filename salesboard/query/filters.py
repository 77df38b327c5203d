"""Build SQL WHERE predicates for month-scoped queries."""
import math
from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class Predicate:
    """A parameterised SQL WHERE fragment."""

    sql: str
    params: tuple[Any, ...] = field(default_factory=tuple)

    def and_(self, other: "Predicate") -> "Predicate":
        return Predicate(f"({self.sql}) AND ({other.sql})", self.params + other.params)


def month_predicate(month_number: int) -> Predicate:
    """Records sold in the given calendar month of any year."""
    return Predicate("sale_month = ?", (month_number,))


def parse_price_term(search: str) -> Optional[float]:
    """Return the search term as a finite number, or None."""
    term = search.strip()
    if not term:
        return None
    try:
        value = float(term)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def search_predicate(search: str) -> Optional[Predicate]:
    """
    Title or description contains `search` (case-insensitive), or the price
    equals it when it is numeric. Empty search means no filter.

    contains_ci is a SQL function registered by the record store.
    """
    if not search:
        return None

    clauses = ["contains_ci(title, ?)", "contains_ci(description, ?)"]
    params: list[Any] = [search, search]

    price = parse_price_term(search)
    if price is not None:
        clauses.append("price = ?")
        params.append(price)

    return Predicate(" OR ".join(clauses), tuple(params))


def listing_predicate(month_number: int, search: str = "") -> Predicate:
    """Month predicate combined with the optional search clause."""
    predicate = month_predicate(month_number)
    search_clause = search_predicate(search)
    if search_clause is not None:
        predicate = predicate.and_(search_clause)
    return predicate


def sold_predicate(month_number: int, sold: bool) -> Predicate:
    return month_predicate(month_number).and_(Predicate("sold = ?", (1 if sold else 0,)))
