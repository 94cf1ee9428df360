"""Structured catalog filters and sort keys.

Filters form a small expression tree over product fields (snake_case
attribute names of ``Product``). Each node can be evaluated against an
in-memory product and compiled by a catalog adapter into its native query
language.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Union

from search_service.schemas import Product


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match on a text field."""

    field: str
    value: str

    def matches(self, product: Product) -> bool:
        text = getattr(product, self.field) or ""
        return self.value.lower() in text.lower()


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def matches(self, product: Product) -> bool:
        return getattr(product, self.field) == self.value


@dataclass(frozen=True)
class NotEquals:
    field: str
    value: Any

    def matches(self, product: Product) -> bool:
        return getattr(product, self.field) != self.value


@dataclass(frozen=True)
class InSet:
    """Scalar field value is one of ``values``."""

    field: str
    values: tuple[Any, ...]

    def matches(self, product: Product) -> bool:
        return getattr(product, self.field) in self.values


@dataclass(frozen=True)
class Overlaps:
    """Array field shares at least one element with ``values``."""

    field: str
    values: tuple[str, ...]

    def matches(self, product: Product) -> bool:
        return not set(getattr(product, self.field) or ()).isdisjoint(self.values)


@dataclass(frozen=True)
class Between:
    """Inclusive numeric range."""

    field: str
    low: Decimal
    high: Decimal

    def matches(self, product: Product) -> bool:
        value = getattr(product, self.field)
        return self.low <= value <= self.high


@dataclass(frozen=True)
class GreaterThan:
    field: str
    value: Any

    def matches(self, product: Product) -> bool:
        return getattr(product, self.field) > self.value


@dataclass(frozen=True)
class AnyOf:
    """Logical OR of clauses. An empty AnyOf matches nothing."""

    clauses: tuple["Filter", ...]

    def matches(self, product: Product) -> bool:
        return any(clause.matches(product) for clause in self.clauses)


@dataclass(frozen=True)
class AllOf:
    """Logical AND of clauses. An empty AllOf matches everything."""

    clauses: tuple["Filter", ...]

    def matches(self, product: Product) -> bool:
        return all(clause.matches(product) for clause in self.clauses)


Filter = Union[Contains, Equals, NotEquals, InSet, Overlaps, Between, GreaterThan, AnyOf, AllOf]


def all_of(*clauses: Filter) -> AllOf:
    return AllOf(tuple(clauses))


def any_of(clauses: Iterable[Filter]) -> AnyOf:
    return AnyOf(tuple(clauses))


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


def asc(field: str) -> SortKey:
    return SortKey(field, descending=False)


def desc(field: str) -> SortKey:
    return SortKey(field, descending=True)


ACTIVE_ONLY = Equals("is_active", True)
