"""SQLAlchemy implementation of MenuRepository."""

from __future__ import annotations

import logging
from uuid import uuid4

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hos.domain.exceptions import PersistenceError
from hos.domain.model.menu import MenuItem
from hos.domain.model.value_objects import Price
from hos.domain.repository.menu_repository import MenuRepository
from hos.infrastructure.persistence.tables import MenuItemRow

logger = logging.getLogger(__name__)


class SqlMenuRepository(MenuRepository):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # --- MenuRepository interface ---------------------------------------------

    def list_version(self, version: str) -> list[MenuItem]:
        stmt = (
            select(MenuItemRow)
            .where(MenuItemRow.version == version)
            .order_by(MenuItemRow.category, MenuItemRow.name)
        )
        with self._session_factory() as session:
            return [self._to_domain(row) for row in session.scalars(stmt)]

    def replace_version(self, version: str, items: list[MenuItem]) -> int:
        try:
            with self._session_factory.begin() as session:
                session.execute(delete(MenuItemRow).where(MenuItemRow.version == version))
                session.add_all(self._to_row(version, item) for item in items)
        except SQLAlchemyError as exc:
            logger.error(f"Menu upload for '{version}' rolled back: {exc}")
            raise PersistenceError(f"Failed to upload menu '{version}'") from exc
        return len(items)

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(MenuItemRow)) or 0

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(version: str, item: MenuItem) -> MenuItemRow:
        return MenuItemRow(
            id=item.id or str(uuid4()),
            version=version,
            item_key=item.item_key,
            name=item.name,
            description=item.description,
            price=item.price.amount,
            category=item.category,
            image=item.image,
        )

    @staticmethod
    def _to_domain(row: MenuItemRow) -> MenuItem:
        return MenuItem(
            id=row.id,
            version=row.version,
            item_key=row.item_key,
            name=row.name,
            price=Price(row.price),
            category=row.category,
            description=row.description or "",
            image=row.image or "",
        )
