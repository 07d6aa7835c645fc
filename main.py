"""
Swiss League Points command line

    python main.py score results.json --tier international
    python main.py match results.json roster.json
    python main.py standings rankings.json
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from loguru import logger

from data_pipeline import ScoringPipeline, full_name
from ranking import (
    RankingRow,
    RankingSettings,
    PointsRuleTable,
    StandingsAssembler,
    TournamentInfo,
    format_breakdown,
    get_settings,
)


def setup_logging(settings: RankingSettings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=settings.log_level.upper(),
    )
    if settings.log_dir:
        logger.add(
            str(Path(settings.log_dir) / "slp_{time:YYYY-MM-DD}.log"),
            rotation="1 day",
            retention="30 days",
            level="DEBUG",
        )


def load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json(data: Any, output: Optional[str]) -> None:
    text = json.dumps(data, ensure_ascii=False, indent=2)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"Written: {output}")
    else:
        print(text)


def load_roster(data: Any) -> List[str]:
    """Roster file: ["First Last", ...] or [{"firstName": .., "lastName": ..}, ...]"""
    if isinstance(data, dict):
        data = data.get("members", [])
    roster = []
    for entry in data:
        if isinstance(entry, str):
            roster.append(entry)
        else:
            roster.append(full_name(entry.get("firstName"), entry.get("lastName")))
    return roster


# =====================================================
# Commands
# =====================================================

def cmd_score(args: argparse.Namespace, settings: RankingSettings) -> None:
    rules = PointsRuleTable.from_file(args.rules) if args.rules else None
    pipeline = ScoringPipeline(settings, rules=rules)
    report = pipeline.score(load_json(args.results), tier=args.tier)

    payload = report.model_dump(mode="json", by_alias=True)
    for athlete, dumped in zip(report.athletes, payload["athletes"]):
        dumped["breakdown"] = format_breakdown(athlete)
    write_json(payload, args.output)


def cmd_match(args: argparse.Namespace, settings: RankingSettings) -> None:
    if args.threshold is not None:
        settings = settings.model_copy(update={"match_threshold": args.threshold})
    if args.limit is not None:
        settings = settings.model_copy(update={"max_candidates": args.limit})

    pipeline = ScoringPipeline(settings)
    matches = pipeline.reconcile(load_json(args.results), load_roster(load_json(args.roster)))

    write_json({
        "matches": [m.model_dump(mode="json", by_alias=True) for m in matches],
        "stats": pipeline.summarize(matches).model_dump(by_alias=True),
    }, args.output)


def cmd_standings(args: argparse.Namespace, settings: RankingSettings) -> None:
    data = load_json(args.rankings)
    rows = [RankingRow.model_validate(r) for r in data.get("rankings", [])]
    tournaments = [TournamentInfo.model_validate(t) for t in data.get("tournaments", [])]

    assembler = StandingsAssembler(default_season=settings.season)
    standings = assembler.assemble(rows, tournaments, season=data.get("season"))
    write_json(standings.model_dump(mode="json", by_alias=True), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Swiss League Points calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    score = sub.add_parser("score", help="score a parsed result document")
    score.add_argument("results", help="parsed tournament JSON")
    score.add_argument("--tier", type=str, help="national / international / em / wm")
    score.add_argument("--rules", type=str, help="rule table JSON (default: 2025 table)")
    score.add_argument("--output", type=str, help="output file (default: stdout)")
    score.set_defaults(func=cmd_score)

    match = sub.add_parser("match", help="reconcile athlete names with the member roster")
    match.add_argument("results", help="parsed tournament JSON")
    match.add_argument("roster", help="member roster JSON")
    match.add_argument("--threshold", type=float, help="minimum similarity for potential matches")
    match.add_argument("--limit", type=int, help="candidates kept per athlete")
    match.add_argument("--output", type=str, help="output file (default: stdout)")
    match.set_defaults(func=cmd_match)

    standings = sub.add_parser("standings", help="assemble men/women/club standings")
    standings.add_argument("rankings", help="stored rankings JSON")
    standings.add_argument("--output", type=str, help="output file (default: stdout)")
    standings.set_defaults(func=cmd_standings)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings)
    args.func(args, settings)


if __name__ == "__main__":
    main()
