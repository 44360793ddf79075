"""
Bar inventory: what the user keeps in stock and whether to stick to it.

The inventory lives outside any generation session. Callers load it from an
InventoryStore, edit it through the ``with_*`` helpers (each returns a new
value), save it back, and hand ``constraint()`` to the orchestrator.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from temporal_mixology.domain.models import InventoryConstraint


class InventoryCategory(str, Enum):
    SPIRIT = "Spirit"
    MIXER = "Mixer"
    FRESH = "Fresh"
    OTHER = "Other"


PRESETS: dict[InventoryCategory, tuple[str, ...]] = {
    InventoryCategory.SPIRIT: (
        "Vodka", "Gin", "Rum (White)", "Rum (Dark)", "Tequila", "Whiskey (Bourbon)",
        "Whiskey (Rye)", "Scotch", "Brandy", "Vermouth (Dry)", "Vermouth (Sweet)",
        "Campari", "Aperol", "Cointreau/Triple Sec",
    ),
    InventoryCategory.MIXER: (
        "Soda Water", "Tonic Water", "Cola", "Ginger Beer", "Ginger Ale",
        "Cranberry Juice", "Orange Juice", "Pineapple Juice", "Grapefruit Juice",
        "Tomato Juice", "Simple Syrup", "Honey Syrup", "Grenadine",
    ),
    InventoryCategory.FRESH: (
        "Lemon", "Lime", "Orange", "Mint", "Basil", "Cucumber", "Egg White",
        "Heavy Cream", "Angostura Bitters", "Orange Bitters",
    ),
}


def category_of(item: str) -> InventoryCategory:
    for category, names in PRESETS.items():
        if item in names:
            return category
    return InventoryCategory.OTHER


class BarInventory(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[str, ...] = ()
    strict: bool = False

    def with_item(self, item: str) -> "BarInventory":
        name = item.strip()
        if not name or name in self.items:
            return self
        return self.model_copy(update={"items": (*self.items, name)})

    def without_item(self, item: str) -> "BarInventory":
        return self.model_copy(update={"items": tuple(i for i in self.items if i != item)})

    def toggle(self, item: str) -> "BarInventory":
        if item in self.items:
            return self.without_item(item)
        return self.with_item(item)

    def with_strict(self, strict: bool) -> "BarInventory":
        return self.model_copy(update={"strict": strict})

    def by_category(self) -> dict[InventoryCategory, list[str]]:
        grouped: dict[InventoryCategory, list[str]] = {c: [] for c in InventoryCategory}
        for item in self.items:
            grouped[category_of(item)].append(item)
        return grouped

    def constraint(self) -> InventoryConstraint:
        return InventoryConstraint(items=self.items, strict=self.strict)
