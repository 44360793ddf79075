"""
CLI for the bar inventory used to constrain generated recipes.

Usage:
    python -m temporal_mixology.bar list
    python -m temporal_mixology.bar add Gin "Tonic Water" Lime
    python -m temporal_mixology.bar remove Lime
    python -m temporal_mixology.bar toggle Mint Gin
    python -m temporal_mixology.bar strict on
    python -m temporal_mixology.bar presets
"""

import argparse

from temporal_mixology.config import configure_logging, get_settings
from temporal_mixology.domain.inventory import PRESETS, BarInventory
from temporal_mixology.services.inventory import InventoryStore, JsonInventoryStore


def render(inventory: BarInventory) -> str:
    lines = [f"Strict mode: {'on' if inventory.strict else 'off'}"]
    for category, items in inventory.by_category().items():
        if items:
            lines.append(f"{category.value}: {', '.join(items)}")
    if not inventory.items:
        lines.append("(empty)")
    return "\n".join(lines)


def run(args: argparse.Namespace, store: InventoryStore) -> str:
    if args.command == "presets":
        return "\n".join(f"{c.value}: {', '.join(items)}" for c, items in PRESETS.items())

    inventory = store.load()
    if args.command == "add":
        for item in args.items:
            inventory = inventory.with_item(item)
    elif args.command == "remove":
        for item in args.items:
            inventory = inventory.without_item(item)
    elif args.command == "toggle":
        for item in args.items:
            inventory = inventory.toggle(item)
    elif args.command == "strict":
        inventory = inventory.with_strict(args.mode == "on")

    if args.command != "list":
        store.save(inventory)
    return render(inventory)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage your bar inventory")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("list", help="Show what is in stock")
    sub.add_parser("presets", help="Show common ingredients by category")
    add = sub.add_parser("add", help="Add ingredients")
    add.add_argument("items", nargs="+")
    remove = sub.add_parser("remove", help="Remove ingredients")
    remove.add_argument("items", nargs="+")
    toggle = sub.add_parser("toggle", help="Add ingredients that are missing, remove those in stock")
    toggle.add_argument("items", nargs="+")
    strict = sub.add_parser("strict", help="Only ever use what is in stock")
    strict.add_argument("mode", choices=["on", "off"])
    return parser


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    print(run(build_parser().parse_args(), JsonInventoryStore(settings.inventory_path)))


if __name__ == "__main__":
    main()
