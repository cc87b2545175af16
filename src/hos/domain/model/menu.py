"""MenuItem aggregate.

Menu items live independently of orders.  A menu *version* (e.g.
``RestoVersion``) is replaced wholesale on upload; individual items are
never edited in place.
"""

from __future__ import annotations

from dataclasses import dataclass

from hos.domain.model.value_objects import Price

DEFAULT_CATEGORY = "Misc"


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry.  ``item_key`` is unique within its version."""

    id: str | None
    version: str
    item_key: str
    name: str
    price: Price
    category: str = DEFAULT_CATEGORY
    description: str = ""
    image: str = ""
