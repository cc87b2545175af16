"""Application service: Upload Menu use case.

Replaces every item of one menu version.  Other versions are untouched,
and orders already placed keep the prices they were created with.
"""

from __future__ import annotations

import logging

from hos.application.dto import MenuItemSpec
from hos.domain.exceptions import ValidationError
from hos.domain.model.menu import DEFAULT_CATEGORY, MenuItem
from hos.domain.model.value_objects import Price
from hos.domain.repository.menu_repository import MenuRepository

logger = logging.getLogger(__name__)


class UploadMenuHandler:

    def __init__(self, menu_repo: MenuRepository) -> None:
        self._menu_repo = menu_repo

    def handle(self, version: str, specs: list[MenuItemSpec]) -> int:
        """Validate the whole upload first, then swap the version in one write."""
        if not version or not version.strip():
            raise ValidationError("Menu version is required")
        version = version.strip()

        items: list[MenuItem] = []
        seen_keys: set[str] = set()
        for spec in specs:
            if not spec.item_key or not spec.item_key.strip():
                raise ValidationError("Menu item key is required")
            if not spec.name or not spec.name.strip():
                raise ValidationError(f"Menu item '{spec.item_key}' needs a name")
            key = spec.item_key.strip()
            if key in seen_keys:
                raise ValidationError(f"Duplicate menu item key '{key}'")
            seen_keys.add(key)

            items.append(
                MenuItem(
                    id=None,
                    version=version,
                    item_key=key,
                    name=spec.name.strip(),
                    price=Price(spec.price),
                    category=spec.category or DEFAULT_CATEGORY,
                    description=spec.description or "",
                    image=spec.image or "",
                )
            )

        count = self._menu_repo.replace_version(version, items)
        logger.info(f"Menu version '{version}' replaced with {count} items")
        return count
