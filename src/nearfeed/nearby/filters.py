# src/nearfeed/nearby/filters.py
"""
Filter/search predicate (feed-level).

Keeps a ranked entry when BOTH hold:
- category: `all`, or the entry's `kind` is the one the category selects;
- text: the search text is empty, or it is a case-insensitive substring of the
  display name (title/name) or secondary descriptor (location/brand).

Filtering never re-sorts; output order is input order.
"""

from __future__ import annotations

from typing import Iterable

from nearfeed.domain.models import Category, FilterState, RankedItem, parse_category

# Which `kind` each non-`all` category keeps.
_CATEGORY_KINDS = {
    Category.PROPERTIES: "property",
    Category.VEHICLES: "vehicle",
}


def matches_category(item: RankedItem, category: Category | str) -> bool:
    wanted = _CATEGORY_KINDS.get(parse_category(category))
    # `all` (and anything unrecognized) keeps every kind.
    return wanted is None or item.kind == wanted


def matches_search(item: RankedItem, search_text: str) -> bool:
    if not search_text:
        return True
    needle = search_text.lower()
    return needle in item.display_name.lower() or needle in item.secondary_descriptor.lower()


def apply(feed: Iterable[RankedItem], state: FilterState) -> list[RankedItem]:
    """Keep entries matching both the category and the search text."""
    return [
        item
        for item in feed
        if matches_category(item, state.category) and matches_search(item, state.search_text)
    ]
