"""Converts analysis models to their camelCase wire form."""

from typing import Any

from smartdoc.analysis.models import ActionItem, AnalysisResult, DocumentStats, Entity


def stats_to_dict(stats: DocumentStats) -> dict[str, Any]:
    return {
        "pageCount": stats.page_count,
        "wordCount": stats.word_count,
        "paragraphCount": stats.paragraph_count,
        "imageCount": stats.image_count,
        "sentimentScore": stats.sentiment_score,
        "complexityScore": stats.complexity_score,
        "readingTimeMin": stats.reading_time_minutes,
        "language": stats.language,
        "category": stats.category,
        "tone": stats.tone,
    }


def _entity_to_dict(entity: Entity) -> dict[str, Any]:
    return {"name": entity.name, "type": entity.kind.value, "count": entity.mention_count}


def _action_item_to_dict(item: ActionItem) -> dict[str, Any]:
    return {"task": item.task, "priority": item.priority.value}


def result_to_dict(result: AnalysisResult) -> dict[str, Any]:
    """Serialize an AnalysisResult using the same keys the provider returns."""
    return {
        "markdownContent": result.markdown_content,
        "summary": result.summary,
        "suggestedFilename": result.suggested_filename,
        "keywords": list(result.keywords),
        "keyQuotes": list(result.key_quotes),
        "actionItems": [_action_item_to_dict(a) for a in result.action_items],
        "entities": [_entity_to_dict(e) for e in result.entities],
        "stats": stats_to_dict(result.stats),
    }
