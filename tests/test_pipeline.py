"""
Scoring pipeline tests

One malformed placement or unmatched name never aborts the batch.
"""
import pytest

from data_pipeline.pipeline import ScoringPipeline
from data_pipeline.schemas import MatchType, MissingFieldError
from ranking.categories import CategoryType
from ranking.models import ParsedTournament, PlacementResult
from ranking.rules import PointsRuleTable, SizeBand


@pytest.fixture
def pipeline(settings):
    return ScoringPipeline(settings)


class TestScore:

    def test_score_raw_document(self, pipeline, sample_tournament_data):
        report = pipeline.score(sample_tournament_data, tier="international")

        assert report.tournament_name == "Zurich Armwrestling Open 2025"
        assert report.tier == "international"
        assert [(a.name, a.total_points) for a in report.athletes] == [
            ("Hans Muster", 16 + 7),
            ("Peter Käslin", 15 + 7),
        ]
        assert report.skipped == 0
        assert report.validation.is_valid

    def test_default_tier_from_settings(self, pipeline, sample_tournament_data):
        assert pipeline.score(sample_tournament_data).tier == "national"

    def test_missing_name_skipped_batch_continues(self, pipeline, sample_tournament_data):
        sample_tournament_data["categories"][1]["placements"].insert(
            0, {"position": 1, "name": None, "country": "Switzerland"}
        )

        report = pipeline.score(sample_tournament_data)

        assert report.skipped == 1
        assert report.validation.errors[0].error_type == "MISSING_FIELD"
        assert {a.name for a in report.athletes} == {"Hans Muster", "Peter Käslin"}
        assert pipeline.stats["placements_skipped"] == 1
        assert pipeline.stats["tournaments"] == 1

    def test_non_record_placement_skipped(self, pipeline, sample_tournament_data):
        sample_tournament_data["categories"][1]["placements"].append(None)

        report = pipeline.score(sample_tournament_data)

        assert report.skipped == 1
        assert report.validation.errors[0].error_type == "INVALID_TYPE"
        assert [(a.name, a.total_points) for a in report.athletes] == [
            ("Hans Muster", 16),
            ("Peter Käslin", 15),
        ]

    def test_non_record_category_skipped(self, pipeline, sample_tournament_data):
        sample_tournament_data["categories"].insert(0, None)

        report = pipeline.score(sample_tournament_data)

        assert report.validation.errors[0].field == "category"
        assert len(report.athletes) == 2

    def test_null_text_fields(self, pipeline, sample_tournament_data):
        sample_tournament_data["tournamentName"] = None
        sample_tournament_data["categories"][1].update(arm=None, gender=None, type=None, weightClass=None)

        report = pipeline.score(sample_tournament_data)

        assert report.tournament_name == "Tournament"
        assert report.skipped == 0
        peter = report.athletes[1]
        assert peter.best_category == "Men 80kg"
        assert peter.total_points == 15

    def test_unique_athletes(self, pipeline, sample_tournament_data):
        parsed, _ = pipeline.prepare(sample_tournament_data)
        assert parsed.unique_athletes == ["Hans Muster", "Jan Novak", "Peter Käslin"]
        assert parsed.total_athletes == 3

    def test_parsed_model_passes_through(self, pipeline, sample_tournament_data):
        parsed = ParsedTournament.model_validate(sample_tournament_data)
        report = pipeline.score(parsed)
        assert len(report.athletes) == 2
        assert report.skipped == 0

    def test_custom_rules(self, settings, sample_tournament_data):
        rules = PointsRuleTable(
            placement_points={1: 100},
            category_size_bonus=[SizeBand(min=0, max=None, bonus=0)],
            tournament_tier_bonus={"national": 0},
        )
        report = ScoringPipeline(settings, rules=rules).score(sample_tournament_data)
        assert report.athletes[0].total_points == 100

    def test_missing_document(self, pipeline):
        with pytest.raises(MissingFieldError):
            pipeline.score(None)


class TestReconcile:

    def test_reconcile(self, pipeline, sample_tournament_data, sample_roster):
        matches = pipeline.reconcile(sample_tournament_data, sample_roster)

        assert len(matches) == 5
        by_name = {m.athlete.name: m.match for m in matches}
        assert by_name["Hans Muster"].match_type == MatchType.EXACT
        assert by_name["Peter Käslin"].match_type == MatchType.POTENTIAL
        assert by_name["Peter Käslin"].candidates[0].name == "Peter Kaeslin"
        assert matches[0].category == "Men 80kg Left"

    def test_statistics(self, pipeline, sample_tournament_data, sample_roster):
        stats = pipeline.summarize(pipeline.reconcile(sample_tournament_data, sample_roster))
        assert stats.total == 5
        assert stats.domestic == 4
        assert stats.other == 1
        assert stats.matched == 2
        assert stats.match_rate == 50

    def test_missing_roster(self, pipeline, sample_tournament_data):
        with pytest.raises(MissingFieldError):
            pipeline.reconcile(sample_tournament_data, None)

    def test_threshold_from_settings(self, settings, sample_tournament_data, sample_roster):
        strict = ScoringPipeline(settings.model_copy(update={"match_threshold": 0.95}))
        by_name = {m.athlete.name: m.match for m in strict.reconcile(sample_tournament_data, sample_roster)}
        assert by_name["Peter Käslin"].match_type == MatchType.NONE


class TestAggregate:

    def test_aggregate_athletes(self, pipeline):
        scores = pipeline.aggregate_athletes([
            PlacementResult(name="A", category="Men 80kg", rank=1, participants=10),
            PlacementResult(name="A", category="Amateur 80kg", rank=2, participants=8),
            PlacementResult(name="B", category="Men 90kg", rank=3, participants=8),
        ])
        assert scores["A"].total_points == 30
        assert scores["B"].total_points == 10

    def test_aggregate_tournament(self, pipeline, sample_tournament_data):
        scores = pipeline.aggregate_tournament(sample_tournament_data)

        # both arms are the same category type; the best rank counts once
        hans = scores["Hans Muster"]
        assert len(hans.results) == 1
        assert hans.results[0].category_type == CategoryType.MEN
        assert hans.results[0].rank == 1
        assert hans.total_points == 16

    def test_corrected_category_rules(self, settings):
        pipeline = ScoringPipeline(settings.model_copy(update={"category_rules": "corrected"}))
        scores = pipeline.aggregate_athletes([
            PlacementResult(name="A", category="Men 80kg", rank=1, participants=10),
            PlacementResult(name="A", category="Women 70kg", rank=1, participants=10),
        ])
        assert scores["A"].total_points == 34
