"""Validates a parsed provider response against the analysis result contract."""

import math
from typing import Any

from smartdoc.analysis.exceptions import SchemaMismatchError
from smartdoc.analysis.models import (
    ActionItem,
    AnalysisResult,
    DocumentStats,
    Entity,
    EntityKind,
    Priority,
)

_SCORE_MIN = 0.0
_SCORE_MAX = 100.0
_REQUIRED_STATS_FIELDS = ("wordCount", "sentimentScore", "tone")
_ENTITY_KINDS = frozenset(kind.value for kind in EntityKind)
_PRIORITIES = frozenset(priority.value for priority in Priority)

DEFAULT_ENTITY_KIND = EntityKind.CONCEPT
DEFAULT_PRIORITY = Priority.MEDIUM


def validate_and_build(data: dict[str, Any]) -> AnalysisResult:
    """Validate raw parsed JSON and build an AnalysisResult.

    Out-of-range scores are rejected rather than clamped. A missing entity
    type or action-item priority takes the module default; an unknown one
    is rejected.

    Raises:
        SchemaMismatchError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise SchemaMismatchError("Response must be a JSON object")
    if "stats" not in data:
        raise SchemaMismatchError("Missing required field: stats")
    return AnalysisResult(
        markdown_content=_optional_string(data, "markdownContent"),
        stats=build_stats(data["stats"]),
        summary=_optional_string(data, "summary"),
        suggested_filename=_optional_string(data, "suggestedFilename"),
        keywords=_string_list(data.get("keywords"), "keywords"),
        entities=_build_entities(data.get("entities")),
        action_items=_build_action_items(data.get("actionItems")),
        key_quotes=_string_list(data.get("keyQuotes"), "keyQuotes"),
    )


def build_stats(raw: Any) -> DocumentStats:
    """Validate the nested stats object.

    Raises:
        SchemaMismatchError: if required fields are missing or ill-typed.
    """
    if not isinstance(raw, dict):
        raise SchemaMismatchError("'stats' must be an object")
    for name in _REQUIRED_STATS_FIELDS:
        if raw.get(name) is None:
            raise SchemaMismatchError(f"Missing required field: stats.{name}")
    tone = raw["tone"]
    if not isinstance(tone, str):
        raise SchemaMismatchError("'stats.tone' must be a string")
    return DocumentStats(
        word_count=_count(raw["wordCount"], "stats.wordCount"),
        sentiment_score=_score(raw["sentimentScore"], "stats.sentimentScore"),
        tone=tone,
        page_count=_count(raw.get("pageCount", 0), "stats.pageCount"),
        paragraph_count=_count(raw.get("paragraphCount", 0), "stats.paragraphCount"),
        image_count=_count(raw.get("imageCount", 0), "stats.imageCount"),
        complexity_score=_score(raw.get("complexityScore", 0), "stats.complexityScore"),
        reading_time_minutes=_non_negative(raw.get("readingTimeMin", 0), "stats.readingTimeMin"),
        language=_optional_string(raw, "language", "stats.language"),
        category=_optional_string(raw, "category", "stats.category"),
    )

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _non_negative(value: Any, path: str) -> float:
    if not _is_number(value):
        raise SchemaMismatchError(f"'{path}' must be a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise SchemaMismatchError(f"'{path}' must be a finite number, got {value!r}")
    if value < 0:
        raise SchemaMismatchError(f"'{path}' must not be negative, got {value!r}")
    try:
        return float(value)
    except OverflowError as exc:
        raise SchemaMismatchError(f"'{path}' is too large") from exc


def _count(value: Any, path: str) -> int:
    # Python ints are unbounded, so counts never go through float.
    if not _is_number(value):
        raise SchemaMismatchError(f"'{path}' must be a number, got {value!r}")
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            raise SchemaMismatchError(f"'{path}' must be a whole number, got {value!r}")
        value = int(value)
    if value < 0:
        raise SchemaMismatchError(f"'{path}' must not be negative, got {value!r}")
    return value


def _score(value: Any, path: str) -> float:
    if not _is_number(value):
        raise SchemaMismatchError(f"'{path}' must be a number, got {value!r}")
    if not _SCORE_MIN <= value <= _SCORE_MAX:
        raise SchemaMismatchError(
            f"'{path}' must be within [{_SCORE_MIN:g}, {_SCORE_MAX:g}], got {value!r}"
        )
    return float(value)


def _optional_string(data: dict[str, Any], key: str, path: str | None = None) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SchemaMismatchError(f"'{path or key}' must be a string")
    return value


def _string_list(raw: Any, path: str) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SchemaMismatchError(f"'{path}' must be a list")
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise SchemaMismatchError(f"'{path}' item at index {i} must be a string")
    return tuple(raw)


def _build_entities(raw: Any) -> tuple[Entity, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SchemaMismatchError("'entities' must be a list")
    return tuple(_build_entity(item, i) for i, item in enumerate(raw))


def _build_entity(raw: Any, index: int) -> Entity:
    if not isinstance(raw, dict):
        raise SchemaMismatchError(f"Entity at index {index} must be an object")
    kind = raw.get("type")
    if kind is None:
        kind = DEFAULT_ENTITY_KIND.value
    elif kind not in _ENTITY_KINDS:
        raise SchemaMismatchError(
            f"Entity at index {index}: 'type' must be one of "
            f"{sorted(_ENTITY_KINDS)}, got {kind!r}"
        )
    return Entity(
        name=_optional_string(raw, "name", f"entities[{index}].name"),
        kind=EntityKind(kind),
        mention_count=_count(raw.get("count", 0), f"entities[{index}].count"),
    )


def _build_action_items(raw: Any) -> tuple[ActionItem, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise SchemaMismatchError("'actionItems' must be a list")
    return tuple(_build_action_item(item, i) for i, item in enumerate(raw))


def _build_action_item(raw: Any, index: int) -> ActionItem:
    if not isinstance(raw, dict):
        raise SchemaMismatchError(f"Action item at index {index} must be an object")
    priority = raw.get("priority")
    if priority is None:
        priority = DEFAULT_PRIORITY.value
    elif priority not in _PRIORITIES:
        raise SchemaMismatchError(
            f"Action item at index {index}: 'priority' must be one of "
            f"{sorted(_PRIORITIES)}, got {priority!r}"
        )
    return ActionItem(
        task=_optional_string(raw, "task", f"actionItems[{index}].task"),
        priority=Priority(priority),
    )
