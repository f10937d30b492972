"""
import_engine.tables - CSV codecs for the recipe and color side tables.

These tables have fixed headers and are exchanged with the same
quote-aware line splitter as the main catalog.
"""

from __future__ import annotations

import time

from import_engine.csv_parser import parse_line, serialize_csv

RECIPE_SLOTS   = ("A", "B", "C", "D", "E")
RECIPE_HEADERS = ["Blank Silo", "Material Type", *RECIPE_SLOTS]
RECIPE_FIELDS  = ["blankSilo", "materialType", *RECIPE_SLOTS]

COLOR_HEADERS  = ["Color Name", "Hex Value"]
DEFAULT_HEX    = "#000000"


def _data_lines(text: str) -> list[list[str]]:
    lines = text.replace("\r\n", "\n").split("\n")[1:]   # skip header
    return [parse_line(line) for line in lines if line.strip()]


def _stamp() -> int:
    return int(time.time() * 1000)


def new_recipe_entry(entry_id: str = "") -> dict:
    entry = {"id": entry_id or str(_stamp()), "blankSilo": "", "materialType": ""}
    entry.update({slot: "" for slot in RECIPE_SLOTS})
    return entry


def recipes_from_csv(text: str) -> list[dict]:
    """Parse a recipe CSV into entries with generated ids."""
    stamp = _stamp()
    entries = []
    for index, values in enumerate(_data_lines(text)):
        entry = new_recipe_entry(f"imported-{stamp}-{index}")
        for i, name in enumerate(RECIPE_FIELDS):
            entry[name] = values[i] if i < len(values) else ""
        entries.append(entry)
    return entries


def recipes_to_csv(entries: list[dict]) -> str:
    rows = [{h: e.get(f, "") for h, f in zip(RECIPE_HEADERS, RECIPE_FIELDS)}
            for e in entries]
    return serialize_csv(rows, RECIPE_HEADERS)


def colors_from_csv(text: str) -> list[dict]:
    """Parse a color CSV; a missing hex falls back to black."""
    stamp = _stamp()
    colors = []
    for index, values in enumerate(_data_lines(text)):
        name = values[0] if values else ""
        hex_value = values[1] if len(values) > 1 else ""
        colors.append({
            "id": f"color-{stamp}-{index}",
            "name": name,
            "hex": hex_value or DEFAULT_HEX,
        })
    return colors


def colors_to_csv(colors: list[dict]) -> str:
    rows = [{"Color Name": c.get("name", ""), "Hex Value": c.get("hex", "")}
            for c in colors]
    return serialize_csv(rows, COLOR_HEADERS)
