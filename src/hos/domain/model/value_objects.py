"""Immutable price and quantity types.

Both validate on construction, so an order line can never hold a
negative price or a zero quantity.
"""

from __future__ import annotations

from dataclasses import dataclass

from hos.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Price:
    """Unit price in whole currency units (rupees, no paise).

    Prices are integers end to end, so totals never need rounding.
    """

    amount: int

    def __post_init__(self) -> None:
        # bool is an int subclass; reject it explicitly
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise ValidationError(
                f"Price must be an integer, got {type(self.amount).__name__}"
            )
        if self.amount < 0:
            raise ValidationError(f"Price cannot be negative, got {self.amount}")

    def __mul__(self, factor: int) -> int:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Price by int, got {type(factor).__name__}")
        return self.amount * factor

    def __str__(self) -> str:
        return f"₹{self.amount}"

    @staticmethod
    def of(amount: str | int) -> Price:
        """Convenient factory that coerces numeric strings safely."""
        try:
            return Price(int(str(amount).strip()))
        except ValueError as exc:
            raise ValidationError(f"Invalid price: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
