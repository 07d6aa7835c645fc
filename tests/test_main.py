"""
Command line tests
"""
import json

import pytest

import main
from ranking.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    monkeypatch.delenv("SLP_RULES_FILE", raising=False)
    monkeypatch.delenv("SLP_CATEGORY_RULES", raising=False)
    monkeypatch.delenv("SLP_LOG_DIR", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return str(path)


def read(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class TestScoreCommand:

    def test_score(self, tmp_path, sample_tournament_data):
        results = write(tmp_path, "results.json", sample_tournament_data)
        output = str(tmp_path / "out.json")

        main.main(["score", results, "--tier", "wm", "--output", output])

        data = read(output)
        assert data["tournamentName"] == "Zurich Armwrestling Open 2025"
        assert data["tier"] == "wm"
        assert data["athletes"][0]["name"] == "Hans Muster"
        assert data["athletes"][0]["totalPoints"] == 26
        assert data["athletes"][0]["bestCategory"] == "Men 80kg Left"
        assert data["athletes"][0]["breakdown"].startswith("Best: Men 80kg Left | L: 1st (15+11)=26")

    def test_score_with_rule_file(self, tmp_path, sample_tournament_data):
        results = write(tmp_path, "results.json", sample_tournament_data)
        rules = write(tmp_path, "rules.json", {
            "placementPoints": {"1": 50},
            "categorySizeBonus": [],
            "tournamentTypeBonus": {},
        })
        output = str(tmp_path / "out.json")

        main.main(["score", results, "--rules", rules, "--output", output])

        assert read(output)["athletes"][0]["totalPoints"] == 50

    def test_score_stdout(self, tmp_path, sample_tournament_data, capsys):
        results = write(tmp_path, "results.json", sample_tournament_data)
        main.main(["score", results])
        assert json.loads(capsys.readouterr().out)["athletes"][1]["name"] == "Peter Käslin"


class TestMatchCommand:

    def test_match(self, tmp_path, sample_tournament_data):
        results = write(tmp_path, "results.json", sample_tournament_data)
        roster = write(tmp_path, "roster.json", [
            {"firstName": "Hans", "lastName": "Muster"},
            {"firstName": "Peter", "lastName": "Kaslin"},
        ])
        output = str(tmp_path / "matches.json")

        main.main(["match", results, roster, "--output", output])

        data = read(output)
        types = {m["athlete"]["name"]: m["match"]["matchType"] for m in data["matches"]}
        assert types["Hans Muster"] == "exact"
        assert types["Peter Käslin"] == "normalized"
        assert data["stats"]["matchRate"] == 100

    def test_match_threshold_override(self, tmp_path, sample_tournament_data):
        results = write(tmp_path, "results.json", sample_tournament_data)
        roster = write(tmp_path, "roster.json", ["Jan Nowak"])
        output = str(tmp_path / "matches.json")

        main.main(["match", results, roster, "--threshold", "0.99", "--output", output])

        types = {m["athlete"]["name"]: m["match"]["matchType"] for m in read(output)["matches"]}
        assert types["Jan Novak"] == "none"

    def test_load_roster_formats(self):
        assert main.load_roster(["A B"]) == ["A B"]
        assert main.load_roster({"members": [{"firstName": "A", "lastName": "B"}]}) == ["A B"]


class TestStandingsCommand:

    def test_standings(self, tmp_path):
        rankings = write(tmp_path, "rankings.json", {
            "season": "2025/26",
            "rankings": [
                {"rank": 2, "name": "Bob Frei", "gender": "men", "club": "AC Bern", "points": 13},
                {"rank": 1, "name": "Al Steiner", "gender": "men", "club": "AC Bern", "points": 17},
                {"rank": 1, "name": "Cara Roth", "gender": "women", "club": "Zurich Arms", "points": 20},
            ],
            "tournaments": [
                {"name": "Zurich Cup", "date": "2025-10-04", "type": "international", "status": "completed"},
            ],
        })
        output = str(tmp_path / "standings.json")

        main.main(["standings", rankings, "--output", output])

        data = read(output)
        assert data["season"] == "2025/26"
        assert [m["name"] for m in data["men"]] == ["Al Steiner", "Bob Frei"]
        assert data["clubs"][0] == {
            "rank": 1,
            "club": "AC Bern",
            "points": 30,
            "athletes": 2,
            "breakdown": {"Al Steiner": {"total": 17}, "Bob Frei": {"total": 13}},
        }
        assert data["tournaments"][0]["date"] == "2025-10-04"
