"""Tests for the analysis result validator."""

from typing import Any

import pytest

from smartdoc.analysis.exceptions import SchemaMismatchError
from smartdoc.analysis.models import AnalysisResult, EntityKind, Priority
from smartdoc.analysis.validator import (
    DEFAULT_ENTITY_KIND,
    DEFAULT_PRIORITY,
    build_stats,
    validate_and_build,
)


def _minimal_payload(**stats: Any) -> dict[str, Any]:
    base = {"wordCount": 500, "sentimentScore": 70, "tone": "neutral"}
    base.update(stats)
    return {"stats": base}


class TestValidPayloads:
    def test_full_payload(self, analysis_payload: dict[str, Any]) -> None:
        result = validate_and_build(analysis_payload)
        assert isinstance(result, AnalysisResult)
        assert result.markdown_content.startswith("# Quarterly Report")
        assert result.suggested_filename == "quarterly_report.docx"
        assert result.keywords == ("revenue", "growth")
        assert result.stats.word_count == 500
        assert result.stats.sentiment_score == 70.0
        assert result.stats.reading_time_minutes == 2.5
        assert result.stats.category == "Finance"

    def test_entities_are_typed(self, analysis_payload: dict[str, Any]) -> None:
        result = validate_and_build(analysis_payload)
        assert result.entities[0].name == "Acme Corp"
        assert result.entities[0].kind is EntityKind.ORGANIZATION
        assert result.entities[0].mention_count == 3

    def test_action_items_are_typed(self, analysis_payload: dict[str, Any]) -> None:
        result = validate_and_build(analysis_payload)
        assert result.action_items[0].task == "Review budget"
        assert result.action_items[0].priority is Priority.HIGH

    def test_minimal_payload_defaults_optional_fields(self) -> None:
        result = validate_and_build(_minimal_payload())
        assert result.markdown_content == ""
        assert result.summary == ""
        assert result.keywords == ()
        assert result.entities == ()
        assert result.action_items == ()
        assert result.key_quotes == ()
        assert result.stats.page_count == 0
        assert result.stats.complexity_score == 0.0
        assert result.stats.language == ""

    def test_scores_at_bounds_are_accepted(self) -> None:
        result = validate_and_build(_minimal_payload(sentimentScore=0, complexityScore=100))
        assert result.stats.sentiment_score == 0.0
        assert result.stats.complexity_score == 100.0

    def test_whole_float_counts_are_accepted(self) -> None:
        result = validate_and_build(_minimal_payload(wordCount=500.0))
        assert result.stats.word_count == 500

    def test_entity_count_defaults_to_zero(self) -> None:
        payload = _minimal_payload()
        payload["entities"] = [{"name": "Paris", "type": "Location"}]
        result = validate_and_build(payload)
        assert result.entities[0].mention_count == 0


class TestRequiredFields:
    def test_missing_stats(self) -> None:
        with pytest.raises(SchemaMismatchError, match="stats"):
            validate_and_build({"markdownContent": "text"})

    @pytest.mark.parametrize("field", ["wordCount", "sentimentScore", "tone"])
    def test_missing_required_stat(self, field: str) -> None:
        payload = _minimal_payload()
        del payload["stats"][field]
        with pytest.raises(SchemaMismatchError, match=f"stats.{field}"):
            validate_and_build(payload)

    def test_null_required_stat(self) -> None:
        with pytest.raises(SchemaMismatchError, match="wordCount"):
            validate_and_build(_minimal_payload(wordCount=None))

    def test_non_object_payload(self) -> None:
        with pytest.raises(SchemaMismatchError, match="object"):
            validate_and_build([])  # type: ignore[arg-type]


class TestScoreRanges:
    def test_sentiment_above_range_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="sentimentScore"):
            validate_and_build(_minimal_payload(sentimentScore=101))

    def test_complexity_below_range_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="complexityScore"):
            validate_and_build(_minimal_payload(complexityScore=-1))

    def test_non_numeric_sentiment_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="sentimentScore"):
            validate_and_build(_minimal_payload(sentimentScore="70"))

    def test_boolean_score_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="sentimentScore"):
            validate_and_build(_minimal_payload(sentimentScore=True))

    def test_nan_score_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError):
            validate_and_build(_minimal_payload(sentimentScore=float("nan")))


class TestTypeChecks:
    def test_negative_word_count(self) -> None:
        with pytest.raises(SchemaMismatchError, match="wordCount"):
            validate_and_build(_minimal_payload(wordCount=-3))

    def test_fractional_word_count(self) -> None:
        with pytest.raises(SchemaMismatchError, match="whole number"):
            validate_and_build(_minimal_payload(wordCount=10.5))

    def test_tone_must_be_string(self) -> None:
        with pytest.raises(SchemaMismatchError, match="tone"):
            validate_and_build(_minimal_payload(tone=5))

    def test_keywords_must_be_strings(self) -> None:
        payload = _minimal_payload()
        payload["keywords"] = ["ok", 3]
        with pytest.raises(SchemaMismatchError, match="keywords"):
            validate_and_build(payload)

    def test_summary_must_be_string(self) -> None:
        payload = _minimal_payload()
        payload["summary"] = ["not", "a", "string"]
        with pytest.raises(SchemaMismatchError, match="summary"):
            validate_and_build(payload)

    def test_unknown_entity_type(self) -> None:
        payload = _minimal_payload()
        payload["entities"] = [{"name": "X", "type": "Animal", "count": 1}]
        with pytest.raises(SchemaMismatchError, match="Entity at index 0"):
            validate_and_build(payload)

    def test_unknown_priority(self) -> None:
        payload = _minimal_payload()
        payload["actionItems"] = [{"task": "Do it", "priority": "Urgent"}]
        with pytest.raises(SchemaMismatchError, match="priority"):
            validate_and_build(payload)

    def test_entity_name_must_be_string(self) -> None:
        payload = _minimal_payload()
        payload["entities"] = [{"name": 7, "type": "Person"}]
        with pytest.raises(SchemaMismatchError, match=r"entities\[0\].name"):
            validate_and_build(payload)

    def test_huge_reading_time_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="readingTimeMin"):
            validate_and_build(_minimal_payload(readingTimeMin=10**400))

    def test_infinite_reading_time_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="finite"):
            validate_and_build(_minimal_payload(readingTimeMin=float("inf")))

    def test_huge_score_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="sentimentScore"):
            validate_and_build(_minimal_payload(sentimentScore=10**400))


class TestBuildStats:
    def test_stats_must_be_object(self) -> None:
        with pytest.raises(SchemaMismatchError, match="'stats' must be an object"):
            build_stats("500 words")


class TestNestedDefaults:
    def test_action_item_without_priority_uses_default(self) -> None:
        payload = _minimal_payload()
        payload["actionItems"] = [{"task": "do it"}]
        result = validate_and_build(payload)
        assert result.action_items[0].task == "do it"
        assert result.action_items[0].priority is DEFAULT_PRIORITY

    def test_action_item_without_task_defaults_to_empty(self) -> None:
        payload = _minimal_payload()
        payload["actionItems"] = [{"priority": "Low"}]
        result = validate_and_build(payload)
        assert result.action_items[0].task == ""
        assert result.action_items[0].priority is Priority.LOW

    def test_entity_without_name_defaults_to_empty(self) -> None:
        payload = _minimal_payload()
        payload["entities"] = [{"type": "Person"}]
        result = validate_and_build(payload)
        assert result.entities[0].name == ""
        assert result.entities[0].kind is EntityKind.PERSON

    def test_entity_without_type_uses_default(self) -> None:
        payload = _minimal_payload()
        payload["entities"] = [{"name": "Paris"}]
        result = validate_and_build(payload)
        assert result.entities[0].kind is DEFAULT_ENTITY_KIND


class TestLargeCounts:
    def test_huge_integer_count_is_kept_exact(self) -> None:
        result = validate_and_build(_minimal_payload(wordCount=10**400))
        assert result.stats.word_count == 10**400

    def test_infinite_count_is_rejected(self) -> None:
        with pytest.raises(SchemaMismatchError, match="whole number"):
            validate_and_build(_minimal_payload(pageCount=float("inf")))


class TestImmutability:
    def test_result_collections_are_tuples(self, analysis_payload: dict[str, Any]) -> None:
        result = validate_and_build(analysis_payload)
        assert isinstance(result.keywords, tuple)
        assert isinstance(result.entities, tuple)
        assert isinstance(result.action_items, tuple)
        assert isinstance(result.key_quotes, tuple)
