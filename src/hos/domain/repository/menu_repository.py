"""Abstract repository for MenuItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from hos.domain.model.menu import MenuItem


class MenuRepository(ABC):

    @abstractmethod
    def list_version(self, version: str) -> list[MenuItem]:
        """Return every item of a menu version, by category then name."""

    @abstractmethod
    def replace_version(self, version: str, items: list[MenuItem]) -> int:
        """Atomically swap the whole version for *items*; return the count."""

    @abstractmethod
    def count(self) -> int:
        """Number of menu items across all versions."""
