"""
Pytest configuration and fixtures for the Swiss League Points tests
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from ranking.config import RankingSettings
from ranking.models import RankingRow


@pytest.fixture(scope="function")
def settings():
    """Default settings, independent of the environment"""
    return RankingSettings(
        season="2025/26",
        rules_file=None,
        category_rules="legacy",
        default_tier="national",
        match_threshold=0.6,
        max_candidates=3,
        domestic_countries=["switzerland", "sui", "ch"],
    )


@pytest.fixture(scope="function")
def sample_tournament_data():
    """Parsed result document as delivered by the PDF parser"""
    return {
        "tournamentName": "Zurich Armwrestling Open 2025",
        "categories": [
            {
                "name": "Men 80kg",
                "arm": "Left",
                "gender": "men",
                "type": "senior",
                "weightClass": "80kg",
                "placements": [
                    {"position": 1, "name": "Hans Muster", "country": "Switzerland"},
                    {"position": 2, "name": "Jan Novak", "country": "CZE"},
                    {"position": 3, "name": "Peter Käslin", "country": "SUI"},
                ],
            },
            {
                "name": "Men 80kg",
                "arm": "Right",
                "gender": "men",
                "type": "senior",
                "weightClass": "80kg",
                "placements": [
                    {"position": 1, "name": "Peter Käslin", "country": "Switzerland"},
                    {"position": 2, "name": "Hans Muster", "country": "switzerland"},
                ],
            },
        ],
    }


@pytest.fixture(scope="function")
def sample_roster():
    """Registered members as "First Last" """
    return ["Hans Muster", "Peter Kaeslin", "Anna Meier", "Christian Käslin"]


@pytest.fixture(scope="function")
def sample_ranking_rows():
    """Stored season rankings"""
    return [
        RankingRow(rank=2, name="Bob Frei", gender="men", club="AC Bern", points=13, season="2025/26"),
        RankingRow(rank=1, name="Al Steiner", gender="men", club="AC Bern", points=17, season="2025/26"),
        RankingRow(rank=1, name="Cara Roth", gender="women", club="Zurich Arms", points=20, season="2025/26"),
        RankingRow(rank=None, name="Dan Kunz", gender="men", club=None, points=5, season="2025/26"),
    ]
