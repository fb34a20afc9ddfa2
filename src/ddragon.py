"""
Data Dragon catalog store.

Fetches one versioned revision of Riot's static game data (champions, items,
rune trees, summoner spells), builds lookup indices and turns free-text names
into image URLs for display.

Lifecycle: create -> load() -> ready. The snapshot is built completely before
it is published, and is never mutated afterwards. A failed load leaves the
store empty; calling load() again retries.

Every resolve_* method is best effort. Unknown names give a placeholder or an
empty string, never an exception.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from config import (
    DDRAGON_BASE_URL, DDRAGON_LOCALE, DDRAGON_FALLBACK_VERSION,
    HTTP_TIMEOUT_S, HTTP_RETRIES, HTTP_BACKOFF_S, PLACEHOLDER_AVATAR_URL,
)
from http_client import get_json
from models import (
    AbilityDetail, CatalogSnapshot, Champion, Item, Rune, RuneSlot, RuneTree,
    Spell, SummonerSpell,
)
from name_resolution import (
    alias_match, build_name_index, exact_match, first_match, is_alias,
    rune_icon_match, stat_shard_match, substring_match,
)

logger = logging.getLogger(__name__)

# Catalog kind -> file name under /cdn/<version>/data/<locale>/
CATALOG_FILES = {
    "champions": "champion.json",
    "items": "item.json",
    "runes": "runesReforged.json",
    "summoners": "summoner.json",
}

EMPTY_SNAPSHOT = CatalogSnapshot(
    version=DDRAGON_FALLBACK_VERSION,
    champions={},
    items={},
    rune_trees=(),
    summoners={},
)


class CatalogLoadError(RuntimeError):
    """The catalog could not be fetched or parsed."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def parse_version(payload: Any) -> str:
    if not isinstance(payload, list) or not payload or not isinstance(payload[0], str):
        raise ValueError("version index is not a non-empty list of strings")
    return payload[0]


def parse_champions(payload: Dict[str, Any]) -> Dict[str, Champion]:
    champions = {}
    for entry_id, entry in payload["data"].items():
        champ_id = entry.get("id") or entry_id
        champions[champ_id] = Champion(id=champ_id, name=entry["name"])
    return champions


def parse_items(payload: Dict[str, Any]) -> Dict[str, Item]:
    return {
        item_id: Item(id=item_id, name=entry["name"], image=entry["image"]["full"])
        for item_id, entry in payload["data"].items()
    }


def parse_summoners(payload: Dict[str, Any]) -> Dict[str, SummonerSpell]:
    summoners = {}
    for entry_id, entry in payload["data"].items():
        spell_id = entry.get("id") or entry_id
        summoners[spell_id] = SummonerSpell(id=spell_id, name=entry["name"], image=entry["image"]["full"])
    return summoners


def parse_rune_trees(payload: List[Dict[str, Any]]) -> tuple:
    trees = []
    for tree in payload:
        slots = tuple(
            RuneSlot(runes=tuple(
                Rune(name=rune["name"], key=rune.get("key", ""), icon=rune["icon"])
                for rune in slot["runes"]
            ))
            for slot in tree["slots"]
        )
        trees.append(RuneTree(name=tree["name"], key=tree.get("key", ""), icon=tree["icon"], slots=slots))
    return tuple(trees)


def build_snapshot(version: str, payloads: Dict[str, Any]) -> CatalogSnapshot:
    """Parse the four catalog documents and derive the name indices."""
    champions = parse_champions(payloads["champions"])
    items = parse_items(payloads["items"])
    summoners = parse_summoners(payloads["summoners"])
    item_names = {item_id: item.name for item_id, item in items.items()}

    return CatalogSnapshot(
        version=version,
        champions=champions,
        items=items,
        rune_trees=parse_rune_trees(payloads["runes"]),
        summoners=summoners,
        champion_index=build_name_index({c.id: c.name for c in champions.values()}),
        item_index=build_name_index(item_names),
        summoner_index=build_name_index({s.id: s.name for s in summoners.values()}),
        item_names=item_names,
    )


def parse_ability_detail(champion_id: str, payload: Dict[str, Any]) -> AbilityDetail:
    entry = payload["data"][champion_id]
    spells = tuple(
        Spell(id=spell.get("id", ""), name=spell.get("name", ""), image=spell["image"]["full"])
        for spell in entry["spells"]
    )
    passive = None
    if isinstance(entry.get("passive"), dict) and entry["passive"].get("image"):
        raw = entry["passive"]
        passive = Spell(id="", name=raw.get("name", ""), image=raw["image"]["full"])
    return AbilityDetail(champion_id=champion_id, spells=spells, passive=passive)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class DataDragonStore:
    """Loads the catalog once and answers name -> asset URL lookups."""

    def __init__(
        self,
        base_url: str = DDRAGON_BASE_URL,
        locale: str = DDRAGON_LOCALE,
        session: Any = None,
        timeout: float = HTTP_TIMEOUT_S,
        retries: int = HTTP_RETRIES,
        backoff_seconds: float = HTTP_BACKOFF_S,
    ):
        self.base_url = base_url.rstrip("/")
        self.locale = locale
        self.session = session or requests.Session()
        self.timeout = timeout
        self.retries = retries
        self.backoff_seconds = backoff_seconds

        self._lock = threading.Lock()
        self._snapshot: Optional[CatalogSnapshot] = None
        self._inflight: Optional[Future] = None
        self._ability_cache: Dict[str, AbilityDetail] = {}

    # -- state -------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot or EMPTY_SNAPSHOT

    @property
    def version(self) -> str:
        return self.snapshot.version

    # -- loading -----------------------------------------------------------

    def load(self) -> CatalogSnapshot:
        """
        Fetch the current version, then the four catalogs concurrently.

        Returns immediately once loaded. A call made while another load is
        in flight waits for that load and shares its outcome instead of
        issuing its own requests. Raises CatalogLoadError on failure.
        """
        with self._lock:
            if self._snapshot is not None:
                return self._snapshot
            owner = self._inflight is None
            if owner:
                self._inflight = Future()
            inflight = self._inflight

        if not owner:
            return inflight.result()

        try:
            snapshot = self._fetch_snapshot()
        except BaseException as e:
            logger.error("Failed to load Data Dragon data: %s", e)
            with self._lock:
                self._inflight = None
            inflight.set_exception(e)
            raise

        with self._lock:
            self._snapshot = snapshot
            self._inflight = None
        inflight.set_result(snapshot)
        return snapshot

    def _fetch(self, url: str) -> Any:
        try:
            return get_json(
                self.session,
                url,
                timeout=self.timeout,
                retries=self.retries,
                backoff_seconds=self.backoff_seconds,
            )
        except (requests.RequestException, ValueError) as e:
            raise CatalogLoadError(f"GET {url} failed: {e}", url=url) from e

    def _fetch_snapshot(self) -> CatalogSnapshot:
        versions_url = f"{self.base_url}/api/versions.json"
        try:
            version = parse_version(self._fetch(versions_url))
        except ValueError as e:
            raise CatalogLoadError(str(e), url=versions_url) from e
        logger.info("LoL Data Version: %s", version)

        urls = {kind: self._data_url(version, name) for kind, name in CATALOG_FILES.items()}
        with ThreadPoolExecutor(max_workers=len(urls), thread_name_prefix="ddragon") as pool:
            futures = {kind: pool.submit(self._fetch, url) for kind, url in urls.items()}
            payloads = {kind: future.result() for kind, future in futures.items()}

        try:
            return build_snapshot(version, payloads)
        except (KeyError, TypeError, AttributeError, ValueError) as e:
            raise CatalogLoadError(f"Unparsable catalog data for {version}: {e!r}") from e

    def _data_url(self, version: str, file_name: str) -> str:
        return f"{self.base_url}/cdn/{version}/data/{self.locale}/{file_name}"

    # -- champions ---------------------------------------------------------

    def champion_names(self) -> List[str]:
        """Sorted display names of every champion."""
        return sorted(c.name for c in self.snapshot.champions.values())

    def get_champion_id(self, name: str) -> Optional[str]:
        return exact_match(self.snapshot.champion_index, name)

    def resolve_champion_icon(self, name: str) -> str:
        """Square icon URL; a generated avatar for unknown names."""
        champ_id = self.get_champion_id(name)
        if not champ_id:
            return PLACEHOLDER_AVATAR_URL.format(name=quote(str(name or "")))
        return f"{self.base_url}/cdn/{self.version}/img/champion/{champ_id}.png"

    def resolve_champion_splash(self, name: str) -> str:
        """Loading-screen art URL, or "" for unknown names."""
        champ_id = self.get_champion_id(name)
        if not champ_id:
            return ""
        return f"{self.base_url}/cdn/img/champion/loading/{champ_id}_0.jpg"

    # -- items, runes, summoners ---------------------------------------------

    def resolve_item_icon(self, name: str) -> str:
        snapshot = self.snapshot
        item_id = first_match(name, [
            lambda q: exact_match(snapshot.item_index, q),
            # "ie" and "ga" also occur inside unrelated item names
            lambda q: None if is_alias(q) else substring_match(snapshot.item_names, q),
            lambda q: alias_match(snapshot.item_index, q),
        ])
        if not item_id:
            return ""
        return f"{self.base_url}/cdn/{snapshot.version}/img/item/{snapshot.items[item_id].image}"

    def resolve_rune_icon(self, name: str) -> str:
        snapshot = self.snapshot
        icon = first_match(name, [
            lambda q: rune_icon_match(snapshot.rune_trees, q),
            stat_shard_match,
        ])
        if not icon:
            return ""
        return f"{self.base_url}/cdn/img/{icon}"

    def resolve_summoner_icon(self, name: str) -> str:
        snapshot = self.snapshot
        spell_id = exact_match(snapshot.summoner_index, name)
        if not spell_id:
            return ""
        return self.spell_icon_url(snapshot.summoners[spell_id].image)

    def spell_icon_url(self, image_file: str) -> str:
        return f"{self.base_url}/cdn/{self.version}/img/spell/{image_file}"

    def passive_icon_url(self, image_file: str) -> str:
        return f"{self.base_url}/cdn/{self.version}/img/passive/{image_file}"

    # -- abilities ---------------------------------------------------------

    def fetch_ability_detail(self, champion_name: str) -> Optional[AbilityDetail]:
        """
        Per-champion spell data, fetched on demand and cached on success.

        Returns None when the name is unknown or the fetch fails; callers
        should treat that as "no ability icons".
        """
        champ_id = self.get_champion_id(champion_name)
        if not champ_id:
            return None

        with self._lock:
            cached = self._ability_cache.get(champ_id)
        if cached is not None:
            return cached

        url = self._data_url(self.version, f"champion/{champ_id}.json")
        try:
            payload = get_json(
                self.session,
                url,
                timeout=self.timeout,
                retries=self.retries,
                backoff_seconds=self.backoff_seconds,
            )
            detail = parse_ability_detail(champ_id, payload)
        except (requests.RequestException, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Failed to fetch detail for %s: %s", champion_name, e)
            return None

        with self._lock:
            self._ability_cache[champ_id] = detail
        return detail

    def skill_icon(self, champion_name: str, skill: Any) -> str:
        """Icon URL for a Q/W/E/R key (or slot 0-3), or "" when unavailable."""
        detail = self.fetch_ability_detail(champion_name)
        if detail is None:
            return ""
        image = detail.spell_icon_file(skill)
        return self.spell_icon_url(image) if image else ""
