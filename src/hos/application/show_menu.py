"""Application service: Show Menu use case (query)."""

from __future__ import annotations

from hos.application.dto import MenuItemDTO
from hos.application.mapping import menu_item_to_dto
from hos.domain.model.order import DEFAULT_MENU_VERSION
from hos.domain.repository.menu_repository import MenuRepository


class ShowMenuHandler:

    def __init__(self, menu_repo: MenuRepository) -> None:
        self._menu_repo = menu_repo

    def handle(self, version: str | None = None) -> list[MenuItemDTO]:
        items = self._menu_repo.list_version(version or DEFAULT_MENU_VERSION)
        return [menu_item_to_dto(item) for item in items]
