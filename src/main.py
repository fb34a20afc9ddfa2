import textwrap

from openai import OpenAI

from analyst import analyze_matchup
from config import OPENAI_API_KEY
from constants import ROLE_IDS
from ddragon import CatalogLoadError, DataDragonStore
from logging_setup import configure_logging
from models import AnalysisResult, MatchupAnalysis

PANEL_WIDTH = 72


def _rows(text: str = "", indent: str = "", hanging: str = "") -> list:
    """Wrap text into boxed panel rows."""
    body = PANEL_WIDTH - 4
    wrapped = textwrap.wrap(text, width=body, initial_indent=indent, subsequent_indent=indent + hanging) or [""]
    return ["| " + line.ljust(body) + " |" for line in wrapped]


def _rule(title: str = "") -> str:
    if title:
        return "+" + f" {title} ".center(PANEL_WIDTH - 2, "-") + "+"
    return "+" + "-" * (PANEL_WIDTH - 2) + "+"


def format_analysis(data: MatchupAnalysis) -> str:
    """Render an analysis as a boxed text panel."""
    lines = [_rule("MATCHUP")]
    lines += _rows(f"{data.champion} vs {data.opponent} ({data.role}), patch {data.patch}")
    lines += _rows(f"Predicted win rate: {data.win_rate_prediction}")

    lines.append(_rule("RUNES"))
    lines += _rows(f"Keystone: {data.runes.keystone}")
    for label, runes in (
        ("Primary", data.runes.primary_tree),
        ("Secondary", data.runes.secondary_tree),
        ("Shards", data.runes.shards),
    ):
        for rune in runes:
            lines += _rows(f"{label}: {rune}")
    lines += _rows(data.runes.explanation)

    lines.append(_rule("BUILD"))
    for label, entries in (
        ("Starting", data.build.starting),
        ("Core", data.build.core),
        ("Situational", data.build.situational),
    ):
        for entry in entries:
            lines += _rows(f"{label}: {entry.name}")
            if entry.reason:
                lines += _rows(entry.reason, indent="    ")
    lines += _rows(data.build.explanation)

    lines.append(_rule("SKILLS"))
    lines += _rows("Max order: " + " > ".join(data.skills.max_order))
    lines += _rows(data.skills.explanation)

    lines.append(_rule("MATH"))
    lines += _rows(f"Trading: {data.math_analysis.trading_pattern}", hanging="  ")
    lines += _rows(f"Efficiency: {data.math_analysis.efficiency_stats}", hanging="  ")

    lines.append(_rule("POWER CURVE"))
    for point in data.power_curve:
        lines += _rows(f"{int(point.time):>3} min  me {point.my_power:>5.1f}  enemy {point.enemy_power:>5.1f}")

    lines.append(_rule())
    return "\n".join(lines)


def format_assets(store: DataDragonStore, data: MatchupAnalysis) -> str:
    """Resolved image URLs, one per line and never truncated."""
    entries = [
        (data.champion, store.resolve_champion_icon(data.champion)),
        (data.opponent, store.resolve_champion_icon(data.opponent)),
    ]
    runes = [data.runes.keystone] + data.runes.primary_tree + data.runes.secondary_tree + data.runes.shards
    entries += [(rune, store.resolve_rune_icon(rune)) for rune in runes]
    items = data.build.starting + data.build.core + data.build.situational
    entries += [(entry.name, store.resolve_item_icon(entry.name)) for entry in items]
    entries += [(key, store.skill_icon(data.champion, key)) for key in data.skills.max_order]

    lines = ["Assets:"]
    lines += [f"  - {name}: {url}" for name, url in entries if url]
    return "\n".join(lines)


def format_sources(result: AnalysisResult) -> str:
    if not result.sources:
        return ""
    lines = ["Sources:"]
    for source in result.sources:
        lines.append(f"  - {source.title or source.url}: {source.url}")
    return "\n".join(lines)


def main():
    """Main input loop."""
    configure_logging()

    print("=" * 60)
    print("LoL Math Optimizer")
    print("=" * 60)

    if not OPENAI_API_KEY:
        print("Error: OPENAI_API_KEY not set. Please set it in .env file.")
        return

    client = OpenAI(api_key=OPENAI_API_KEY)

    print("\nLoading Data Dragon...")
    store = DataDragonStore()
    try:
        store.load()
    except CatalogLoadError as e:
        print(f"Error loading game data: {e}")
        return

    print(f"Ready! Patch data {store.version}, {len(store.champion_names())} champions.")
    print(f"Roles: {', '.join(ROLE_IDS)}")
    print("Type 'quit' or 'exit' to stop.\n")

    while True:
        try:
            champion = input("Your champion: ").strip()
            if champion.lower() in ["quit", "exit", "q"]:
                print("Goodbye!")
                break
            opponent = input("Enemy champion: ").strip()
            role = input(f"Role [{ROLE_IDS[0]}]: ").strip().lower() or ROLE_IDS[0]
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye!")
            break

        if not champion or not opponent:
            continue
        if role not in ROLE_IDS:
            print(f"Unknown role '{role}'. Choose one of: {', '.join(ROLE_IDS)}")
            continue

        print("\nConsulting the meta database...")
        try:
            result = analyze_matchup(client, champion, opponent, role)
        except Exception as e:
            print(f"Error contacting the model: {e}\n")
            continue

        if result.data is None:
            print("Could not generate valid analysis data. Please try again.\n")
        else:
            print(format_analysis(result.data))
            print(format_assets(store, result.data))

        sources = format_sources(result)
        if sources:
            print(sources)
        print()


if __name__ == "__main__":
    main()
