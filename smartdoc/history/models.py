from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from smartdoc.analysis.models import AnalysisResult, DocumentStats
from smartdoc.analysis.serializer import stats_to_dict
from smartdoc.ingestion.models import Document


@dataclass(frozen=True)
class HistoryEntry:
    """Lossy record of a completed analysis kept for recall.

    The id is the document identity: the SHA-256 of its content, so
    re-processing the same file replaces its earlier entry.
    """

    id: str
    file_name: str
    recorded_at: datetime
    summary: str
    stats: DocumentStats

    @classmethod
    def from_result(cls, document: Document, result: AnalysisResult) -> "HistoryEntry":
        return cls(
            id=document.file_hash_sha256,
            file_name=document.name,
            recorded_at=datetime.now(timezone.utc),
            summary=result.summary,
            stats=result.stats,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "recordedAt": self.recorded_at.isoformat(),
            "summary": self.summary,
            "stats": stats_to_dict(self.stats),
        }
