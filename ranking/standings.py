"""
Standings assembly

Reshapes stored season rankings into men/women lists and derives club
rankings. Athlete ranks are taken as stored, not recomputed.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional, Set

from loguru import logger

from .models import AthleteStanding, ClubStanding, RankingRow, Standings, TournamentInfo

STANDINGS_NOTE = (
    "Best CATEGORY (weight class) per athlete across both arms. "
    "Only points from that single best category count for both arms."
)


def _by_stored_rank(rows: List[RankingRow]) -> List[RankingRow]:
    """Ascending stored rank; rows without a rank keep input order at the end"""
    ranked = sorted((r for r in rows if r.rank is not None), key=lambda r: r.rank)
    unranked = [r for r in rows if r.rank is None]
    for row in unranked:
        logger.warning(f"Ranking row without rank: {row.name} ({row.gender})")
    return ranked + unranked


def gender_standings(rows: Iterable[RankingRow], gender: str) -> List[AthleteStanding]:
    selected = [r for r in rows if r.gender == gender]
    return [
        AthleteStanding(
            rank=r.rank,
            name=r.name,
            club=r.club or "",
            points=r.points,
            breakdown=r.breakdown or "",
        )
        for r in _by_stored_rank(selected)
    ]


def club_standings(rows: Iterable[RankingRow]) -> List[ClubStanding]:
    """
    Club ranking from individual rankings

    Each row adds its points to the athlete's club; athletes are counted
    once per club and the breakdown keeps each athlete's total. Clubs are
    ordered by points, ties keep first-seen order.
    """
    points: Dict[str, int] = {}
    athletes: Dict[str, Set[str]] = {}
    breakdown: Dict[str, Dict[str, Dict[str, int]]] = {}

    for row in rows:
        if not row.club:
            continue
        if row.club not in points:
            points[row.club] = 0
            athletes[row.club] = set()
            breakdown[row.club] = {}
        points[row.club] += row.points
        athletes[row.club].add(row.name)
        breakdown[row.club][row.name] = {"total": row.points}

    ordered = sorted(points, key=lambda club: -points[club])
    return [
        ClubStanding(
            rank=position,
            club=club,
            points=points[club],
            athletes=len(athletes[club]),
            breakdown=breakdown[club],
        )
        for position, club in enumerate(ordered, 1)
    ]


class StandingsAssembler:
    """Builds the public standings document"""

    def __init__(self, default_season: str = "2026"):
        self.default_season = default_season

    def assemble(
        self,
        rows: List[RankingRow],
        tournaments: Optional[Iterable[TournamentInfo]] = None,
        season: Optional[str] = None,
        last_updated: Optional[date] = None,
    ) -> Standings:
        if season is None:
            season = next((r.season for r in rows if r.season), None) or self.default_season

        completed = sorted(
            (t for t in tournaments or [] if t.status == "completed"),
            key=lambda t: t.date,
            reverse=True,
        )

        standings = Standings(
            season=season,
            last_updated=last_updated or date.today(),
            tournaments=completed,
            note=STANDINGS_NOTE,
            men=gender_standings(rows, "men"),
            women=gender_standings(rows, "women"),
            clubs=club_standings(rows),
        )

        logger.info(
            f"Standings {season}: {len(standings.men)} men, "
            f"{len(standings.women)} women, {len(standings.clubs)} clubs"
        )
        return standings
