"""Starter menu loaded into an empty catalog."""

from __future__ import annotations

from hos.domain.model.menu import MenuItem
from hos.domain.model.order import DEFAULT_MENU_VERSION
from hos.domain.model.value_objects import Price

_SAMPLE = [
    ("paneer_tikka", "Paneer Tikka Masala", 255, "Main", "Cottage cheese in rich gravy"),
    ("garlic_fried_rice", "Garlic Fried Rice", 180, "Rice", "Aromatic rice with garlic"),
    ("veg_biryani", "Veg Biryani", 220, "Rice", "Fragrant rice with vegetables"),
    ("butter_chicken", "Butter Chicken", 285, "Main", "Tender chicken in creamy tomato sauce"),
    ("dal_makhani", "Dal Makhani", 200, "Main", "Creamy black lentil curry"),
    ("naan", "Naan", 60, "Bread", "Traditional Indian flatbread"),
]


def sample_menu() -> list[MenuItem]:
    return [
        MenuItem(
            id=None,
            version=DEFAULT_MENU_VERSION,
            item_key=key,
            name=name,
            price=Price(price),
            category=category,
            description=description,
        )
        for key, name, price, category, description in _SAMPLE
    ]
