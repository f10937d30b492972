"""
services.recipe_service - Recipe slot lookup.

A row's Recipe cell holds the resolved value of a slot (A-E) taken
from the recipe entry whose blankSilo matches the row's Blank Silo.
"""

from __future__ import annotations

from typing import Optional

import config
from import_engine.tables import RECIPE_SLOTS


def find_entry(recipes: list[dict], blank_silo: str) -> Optional[dict]:
    """First recipe entry for `blank_silo`, or None."""
    for entry in recipes:
        if entry.get("blankSilo") == blank_silo:
            return entry
    return None


def resolve(row: dict, recipes: list[dict], slot: str) -> str:
    """
    Value of `slot` for the row's Blank Silo.

    Returns "" when no entry matches, the slot is missing, or the
    slot is empty.  Never raises.
    """
    entry = find_entry(recipes, row.get(config.BLANK_SILO_FIELD))
    if entry is None or slot not in entry:
        return ""
    return entry.get(slot) or ""


def slot_options(row: dict, recipes: list[dict]) -> list[tuple[str, str]]:
    """(letter, value) pairs offered when editing a Recipe cell."""
    entry = find_entry(recipes, row.get(config.BLANK_SILO_FIELD)) or {}
    return [(slot, entry.get(slot) or "") for slot in RECIPE_SLOTS]


def apply_recipe_edit(row: dict, choice: str, recipes: list[dict]) -> str:
    """
    Cell value to store after a Recipe edit.

    With a Blank Silo and a chosen letter the letter is resolved
    through the recipe table; otherwise the raw choice is kept.
    """
    if row.get(config.BLANK_SILO_FIELD) and choice:
        return resolve(row, recipes, choice)
    return choice or ""
