"""
Recipe filter predicates.

Listing filters are expressed as a flat list of typed predicates and folded
onto a Supabase query in one place. Every predicate narrows the result, so
the list is a conjunction.
"""

from dataclasses import dataclass
from functools import reduce
from typing import Any, Union

from .models import RecipeFilters

TITLE_ONLY = ("title",)
TITLE_OR_DESCRIPTION = ("title", "description")


@dataclass(frozen=True)
class Equals:
    """column = value"""

    column: str
    value: Any

    def apply(self, query: Any) -> Any:
        return query.eq(self.column, self.value)


@dataclass(frozen=True)
class AtMost:
    """column <= value"""

    column: str
    value: int

    def apply(self, query: Any) -> Any:
        return query.lte(self.column, self.value)


@dataclass(frozen=True)
class ContainsAll:
    """Array column contains every one of ``values``."""

    column: str
    values: tuple[str, ...]

    def apply(self, query: Any) -> Any:
        return query.contains(self.column, list(self.values))


@dataclass(frozen=True)
class TextMatch:
    """
    Case-insensitive substring match.

    With several columns, a row matches when any of them contains the term.
    """

    term: str
    columns: tuple[str, ...] = TITLE_ONLY

    @property
    def pattern(self) -> str:
        return f"%{self.term}%"

    def apply(self, query: Any) -> Any:
        if len(self.columns) == 1:
            return query.ilike(self.columns[0], self.pattern)
        return query.or_(",".join(f"{column}.ilike.{self.pattern}" for column in self.columns))


FilterPredicate = Union[Equals, AtMost, ContainsAll, TextMatch]


def build_predicates(
    filters: RecipeFilters,
    search_columns: tuple[str, ...] = TITLE_ONLY,
) -> list[FilterPredicate]:
    """
    Translate recognised filters into predicates.

    Empty strings and empty tag lists are treated as "no filter".

    Args:
        filters: Filter values (RecipeQueryOptions works too).
        search_columns: Columns the ``search`` term is matched against.

    Returns:
        Predicates in a fixed order.
    """
    predicates: list[FilterPredicate] = []

    if filters.search:
        predicates.append(TextMatch(filters.search, search_columns))
    if filters.meal_type is not None:
        predicates.append(Equals("meal_type", filters.meal_type.value))
    if filters.dietary_tags:
        predicates.append(ContainsAll("dietary_tags", tuple(filters.dietary_tags)))
    if filters.difficulty is not None:
        predicates.append(Equals("difficulty_level", filters.difficulty.value))
    if filters.max_cook_time is not None:
        predicates.append(AtMost("cook_time_minutes", filters.max_cook_time))
    if filters.max_prep_time is not None:
        predicates.append(AtMost("prep_time_minutes", filters.max_prep_time))
    if filters.cuisine:
        predicates.append(Equals("cuisine_type", filters.cuisine))
    if filters.servings is not None:
        predicates.append(Equals("servings", filters.servings))

    return predicates


def apply_predicates(query: Any, predicates: list[FilterPredicate]) -> Any:
    """Fold predicates onto a query builder and return the narrowed query."""
    return reduce(lambda q, predicate: predicate.apply(q), predicates, query)
