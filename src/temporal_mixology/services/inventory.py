"""
Inventory persistence.

The orchestrator never touches storage; the CLI loads the inventory once on
start and saves it after every change through an ``InventoryStore``.
"""

import logging
from pathlib import Path
from typing import Protocol

from temporal_mixology.domain.inventory import BarInventory

logger = logging.getLogger(__name__)


class InventoryStore(Protocol):
    def load(self) -> BarInventory: ...

    def save(self, inventory: BarInventory) -> None: ...


class JsonInventoryStore:
    """Keeps the inventory as a small JSON document on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path.expanduser()

    def load(self) -> BarInventory:
        if not self.path.exists():
            return BarInventory()
        return BarInventory.model_validate_json(self.path.read_text(encoding="utf-8"))

    def save(self, inventory: BarInventory) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(inventory.model_dump_json(indent=2), encoding="utf-8")
        logger.info("Saved %d inventory items to %s", len(inventory.items), self.path)
