"""
Name resolution strategies for catalog lookups.

Names come from a language model, so they may be abbreviated, use a
community nickname, or not exist at all. Each strategy below is a plain
function returning the matched value or None; ``first_match`` composes them
in order and the first hit wins.

Strategy order is part of the contract. Later strategies are less precise:

    1. exact      case-insensitive display name
    2. substring  query contained in a display name (skipped for alias keys)
    3. alias      community shorthand -> canonical name -> exact
    4. keyword    stat-shard keyword -> fixed icon (runes only)
"""

from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple

from models import RuneTree

# Community shorthand for items -> canonical item name
ITEM_ALIASES = {
    "bork": "Blade of the Ruined King",
    "botrk": "Blade of the Ruined King",
    "ie": "Infinity Edge",
    "ga": "Guardian Angel",
    "dd": "Death's Dance",
}

# Stat shards are not always listed by name in runesReforged.json.
# Checked in order; first keyword contained in the name wins.
STAT_SHARD_ICONS = (
    ("adaptive", "perk-images/StatMods/StatModsAdaptiveForceIcon.png"),
    ("armor", "perk-images/StatMods/StatModsArmorIcon.png"),
    ("health", "perk-images/StatMods/StatModsHealthScalingIcon.png"),
    ("haste", "perk-images/StatMods/StatModsCDRScalingIcon.png"),
    ("attack speed", "perk-images/StatMods/StatModsAttackSpeedIcon.png"),
    ("magic resist", "perk-images/StatMods/StatModsMagicResIcon.png"),
)

Strategy = Callable[[str], Optional[str]]


def normalize_name(name: str) -> str:
    """Lowercase and trim a display name for comparison."""
    if not name:
        return ""
    return str(name).strip().lower()


def id_sort_key(entry_id: str) -> tuple:
    """Numeric ids sort by value, everything else after them by text."""
    text = str(entry_id)
    if text.isdigit():
        return (0, int(text), text)
    return (1, 0, text)


def build_name_index(names_by_id: Mapping[str, str]) -> dict:
    """
    Map normalized display name -> canonical id.

    Ids are visited in ascending order and the first id seen for a name is
    kept, so duplicated display names resolve to the lowest id.
    """
    index = {}
    for entry_id in sorted(names_by_id, key=id_sort_key):
        key = normalize_name(names_by_id[entry_id])
        if key:
            index.setdefault(key, entry_id)
    return index


def exact_match(index: Mapping[str, str], query: str) -> Optional[str]:
    key = normalize_name(query)
    if not key:
        return None
    return index.get(key)


def substring_match(names_by_id: Mapping[str, str], query: str) -> Optional[str]:
    """First id (ascending) whose display name contains the query."""
    key = normalize_name(query)
    if not key:
        return None
    for entry_id in sorted(names_by_id, key=id_sort_key):
        if key in normalize_name(names_by_id[entry_id]):
            return entry_id
    return None


def is_alias(query: str, aliases: Mapping[str, str] = ITEM_ALIASES) -> bool:
    """True when the query is a key of the alias table."""
    return normalize_name(query) in aliases


def alias_match(
    index: Mapping[str, str],
    query: str,
    aliases: Mapping[str, str] = ITEM_ALIASES,
) -> Optional[str]:
    canonical = aliases.get(normalize_name(query))
    if not canonical:
        return None
    return exact_match(index, canonical)


def stat_shard_match(
    query: str,
    rules: Sequence[Tuple[str, str]] = STAT_SHARD_ICONS,
) -> Optional[str]:
    """Icon path of the first stat-shard keyword found in the query."""
    key = normalize_name(query)
    if not key:
        return None
    for keyword, icon in rules:
        if keyword in key:
            return icon
    return None


def rune_icon_match(trees: Iterable[RuneTree], query: str) -> Optional[str]:
    """Walk every tree (name, then key, then its runes) for an exact match."""
    key = normalize_name(query)
    if not key:
        return None
    for tree in trees:
        if key in (normalize_name(tree.name), normalize_name(tree.key)):
            return tree.icon
        for slot in tree.slots:
            for rune in slot.runes:
                if normalize_name(rune.name) == key:
                    return rune.icon
    return None


def first_match(query: str, strategies: Sequence[Strategy]) -> Optional[str]:
    """Run strategies in order and return the first non-empty result."""
    for strategy in strategies:
        result = strategy(query)
        if result:
            return result
    return None
