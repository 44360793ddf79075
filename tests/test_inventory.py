import argparse
from pathlib import Path

from temporal_mixology.bar import build_parser, run
from temporal_mixology.domain.inventory import BarInventory, InventoryCategory, category_of
from temporal_mixology.domain.models import InventoryConstraint
from temporal_mixology.services.inventory import JsonInventoryStore


def test_with_item_trims_and_ignores_duplicates() -> None:
    inventory = BarInventory().with_item(" Gin ").with_item("Gin").with_item("   ")
    assert inventory.items == ("Gin",)


def test_toggle() -> None:
    inventory = BarInventory().toggle("Lime")
    assert inventory.items == ("Lime",)
    assert inventory.toggle("Lime").items == ()


def test_edits_return_new_values() -> None:
    original = BarInventory(items=("Gin",))
    original.with_item("Lime").with_strict(True)
    assert original == BarInventory(items=("Gin",))


def test_constraint() -> None:
    inventory = BarInventory(items=("Gin", "Tonic Water"), strict=True)
    assert inventory.constraint() == InventoryConstraint(items=("Gin", "Tonic Water"), strict=True)


def test_categories() -> None:
    assert category_of("Campari") is InventoryCategory.SPIRIT
    assert category_of("Ginger Beer") is InventoryCategory.MIXER
    assert category_of("Mint") is InventoryCategory.FRESH
    assert category_of("Yuzu") is InventoryCategory.OTHER
    grouped = BarInventory(items=("Gin", "Yuzu", "Lime")).by_category()
    assert grouped[InventoryCategory.SPIRIT] == ["Gin"]
    assert grouped[InventoryCategory.FRESH] == ["Lime"]
    assert grouped[InventoryCategory.OTHER] == ["Yuzu"]


def test_store_round_trip(tmp_path: Path) -> None:
    store = JsonInventoryStore(tmp_path / "nested" / "inventory.json")
    assert store.load() == BarInventory()

    store.save(BarInventory(items=("Gin", "Lime"), strict=True))

    assert store.load() == BarInventory(items=("Gin", "Lime"), strict=True)


def cli(store: JsonInventoryStore, *argv: str) -> str:
    args: argparse.Namespace = build_parser().parse_args(list(argv))
    return run(args, store)


def test_bar_cli(tmp_path: Path) -> None:
    store = JsonInventoryStore(tmp_path / "inventory.json")

    assert "(empty)" in cli(store, "list")
    cli(store, "add", "Gin", "Tonic Water", "Lime")
    cli(store, "remove", "Lime")
    out = cli(store, "strict", "on")

    assert store.load() == BarInventory(items=("Gin", "Tonic Water"), strict=True)
    assert "Strict mode: on" in out
    assert "Spirit: Gin" in out
    assert "Mixer: Tonic Water" in out
    assert "Cointreau/Triple Sec" in cli(store, "presets")


def test_bar_cli_toggle(tmp_path: Path) -> None:
    store = JsonInventoryStore(tmp_path / "inventory.json")
    cli(store, "add", "Gin")

    cli(store, "toggle", "Gin", "Mint")

    assert store.load().items == ("Mint",)
