"""
Typed records shared by the catalog store, the response parser and the
front ends.

Catalog records mirror the parts of the Data Dragon documents we use. The
analysis records mirror the JSON object the model is asked to produce; the
``from_dict`` constructors are lenient about inner fields and only the
top-level shape is checked by ``response_parser``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

SKILL_KEYS = ("Q", "W", "E", "R")


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Champion:
    id: str
    name: str


@dataclass(frozen=True)
class Item:
    id: str
    name: str
    image: str


@dataclass(frozen=True)
class SummonerSpell:
    id: str
    name: str
    image: str


@dataclass(frozen=True)
class Rune:
    name: str
    key: str
    icon: str


@dataclass(frozen=True)
class RuneSlot:
    runes: Tuple[Rune, ...]


@dataclass(frozen=True)
class RuneTree:
    name: str
    key: str
    icon: str
    slots: Tuple[RuneSlot, ...]


@dataclass(frozen=True)
class CatalogSnapshot:
    """One fully parsed catalog revision plus its lookup indices."""

    version: str
    champions: Dict[str, Champion]
    items: Dict[str, Item]
    rune_trees: Tuple[RuneTree, ...]
    summoners: Dict[str, SummonerSpell]
    champion_index: Dict[str, str] = field(default_factory=dict)
    item_index: Dict[str, str] = field(default_factory=dict)
    summoner_index: Dict[str, str] = field(default_factory=dict)
    item_names: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Spell:
    id: str
    name: str
    image: str


@dataclass(frozen=True)
class AbilityDetail:
    champion_id: str
    spells: Tuple[Spell, ...]
    passive: Optional[Spell] = None

    def spell_icon_file(self, slot: Any) -> Optional[str]:
        """Image file for a slot index 0-3 or a Q/W/E/R key."""
        if isinstance(slot, str):
            key = slot.strip().upper()
            if key not in SKILL_KEYS:
                return None
            slot = SKILL_KEYS.index(key)
        if not isinstance(slot, int) or not 0 <= slot < len(self.spells):
            return None
        return self.spells[slot].image or None


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_text(v) for v in value if v is not None]


def _number(value: Any) -> float:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip().rstrip("%"))
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class BuildEntry:
    name: str
    reason: str = ""

    @classmethod
    def from_value(cls, value: Any) -> "BuildEntry":
        if isinstance(value, Mapping):
            return cls(name=_text(value.get("name")), reason=_text(value.get("reason")))
        return cls(name=_text(value))

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "reason": self.reason}


def _entries(value: Any) -> List[BuildEntry]:
    if not isinstance(value, list):
        return []
    return [BuildEntry.from_value(v) for v in value if v is not None]


@dataclass(frozen=True)
class RuneSelection:
    keystone: str
    primary_tree: List[str]
    secondary_tree: List[str]
    shards: List[str]
    explanation: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RuneSelection":
        return cls(
            keystone=_text(data.get("keystone")),
            primary_tree=_text_list(data.get("primaryTree")),
            secondary_tree=_text_list(data.get("secondaryTree")),
            shards=_text_list(data.get("shards")),
            explanation=_text(data.get("explanation")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keystone": self.keystone,
            "primaryTree": list(self.primary_tree),
            "secondaryTree": list(self.secondary_tree),
            "shards": list(self.shards),
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class BuildRecommendation:
    starting: List[BuildEntry]
    core: List[BuildEntry]
    situational: List[BuildEntry]
    explanation: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BuildRecommendation":
        return cls(
            starting=_entries(data.get("starting")),
            core=_entries(data.get("core")),
            situational=_entries(data.get("situational")),
            explanation=_text(data.get("explanation")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "starting": [e.to_dict() for e in self.starting],
            "core": [e.to_dict() for e in self.core],
            "situational": [e.to_dict() for e in self.situational],
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class SkillOrder:
    max_order: List[str]
    explanation: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SkillOrder":
        return cls(
            max_order=_text_list(data.get("maxOrder")),
            explanation=_text(data.get("explanation")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"maxOrder": list(self.max_order), "explanation": self.explanation}


@dataclass(frozen=True)
class MathAnalysis:
    trading_pattern: str
    efficiency_stats: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MathAnalysis":
        return cls(
            trading_pattern=_text(data.get("tradingPattern")),
            efficiency_stats=_text(data.get("efficiencyStats")),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"tradingPattern": self.trading_pattern, "efficiencyStats": self.efficiency_stats}


@dataclass(frozen=True)
class PowerCurvePoint:
    time: float
    my_power: float
    enemy_power: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PowerCurvePoint":
        return cls(
            time=_number(data.get("time")),
            my_power=_number(data.get("myPower")),
            enemy_power=_number(data.get("enemyPower")),
        )

    def to_dict(self) -> Dict[str, float]:
        return {"time": self.time, "myPower": self.my_power, "enemyPower": self.enemy_power}


@dataclass(frozen=True)
class MatchupAnalysis:
    champion: str
    opponent: str
    role: str
    patch: str
    win_rate_prediction: str
    runes: RuneSelection
    build: BuildRecommendation
    skills: SkillOrder
    math_analysis: MathAnalysis
    power_curve: List[PowerCurvePoint]

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchupAnalysis":
        """Build a record from an already shape-checked JSON object."""
        return cls(
            champion=_text(data["champion"]),
            opponent=_text(data["opponent"]),
            role=_text(data["role"]),
            patch=_text(data["patch"]),
            win_rate_prediction=_text(data["winRatePrediction"]),
            runes=RuneSelection.from_dict(data["runes"]),
            build=BuildRecommendation.from_dict(data["build"]),
            skills=SkillOrder.from_dict(data["skills"]),
            math_analysis=MathAnalysis.from_dict(data["mathAnalysis"]),
            power_curve=[
                PowerCurvePoint.from_dict(p) for p in data["powerCurve"] if isinstance(p, Mapping)
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "champion": self.champion,
            "opponent": self.opponent,
            "role": self.role,
            "patch": self.patch,
            "winRatePrediction": self.win_rate_prediction,
            "runes": self.runes.to_dict(),
            "build": self.build.to_dict(),
            "skills": self.skills.to_dict(),
            "mathAnalysis": self.math_analysis.to_dict(),
            "powerCurve": [p.to_dict() for p in self.power_curve],
        }


@dataclass(frozen=True)
class CitationEntry:
    title: str
    url: str


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one resolution: a record or None, plus the citations."""

    data: Optional[MatchupAnalysis]
    sources: List[CitationEntry]
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None
