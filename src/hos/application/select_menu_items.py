"""Application service: turn menu picks into priced order items.

The price is read from the menu *now* and copied into the spec, so a
later menu upload never changes what an existing order charges.
"""

from __future__ import annotations

from hos.application.dto import MenuPick, OrderItemSpec
from hos.domain.exceptions import EntityNotFoundError
from hos.domain.model.order import DEFAULT_MENU_VERSION
from hos.domain.repository.menu_repository import MenuRepository


class SelectMenuItemsHandler:

    def __init__(self, menu_repo: MenuRepository) -> None:
        self._menu_repo = menu_repo

    def handle(self, picks: list[MenuPick], version: str | None = None) -> list[OrderItemSpec]:
        version = version or DEFAULT_MENU_VERSION
        menu = {item.item_key: item for item in self._menu_repo.list_version(version)}

        specs: list[OrderItemSpec] = []
        for pick in picks:
            item = menu.get(pick.item_key)
            if item is None:
                raise EntityNotFoundError(
                    f"Menu item '{pick.item_key}' not found in {version}"
                )
            specs.append(
                OrderItemSpec(
                    item_key=item.item_key,
                    name=item.name,
                    qty=pick.qty,
                    price=item.price.amount,
                )
            )
        return specs
