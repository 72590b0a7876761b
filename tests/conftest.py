import base64
import copy
from datetime import datetime, timezone
from typing import Any

import pytest

from smartdoc.analysis.models import AnalysisResult
from smartdoc.analysis.validator import validate_and_build
from smartdoc.ingestion.models import Document

_VALID_PAYLOAD: dict[str, Any] = {
    "markdownContent": "# Quarterly Report\n\nRevenue grew **12%** this quarter.",
    "summary": "Revenue grew twelve percent.",
    "suggestedFilename": "quarterly_report.docx",
    "keywords": ["revenue", "growth"],
    "keyQuotes": ["Revenue grew 12% this quarter."],
    "actionItems": [{"task": "Review budget", "priority": "High"}],
    "entities": [
        {"name": "Acme Corp", "type": "Organization", "count": 3},
        {"name": "Q3", "type": "Date", "count": 1},
    ],
    "stats": {
        "pageCount": 2,
        "wordCount": 500,
        "paragraphCount": 8,
        "imageCount": 0,
        "sentimentScore": 70,
        "complexityScore": 35,
        "readingTimeMin": 2.5,
        "language": "English",
        "category": "Finance",
        "tone": "neutral",
    },
}


@pytest.fixture()
def analysis_payload() -> dict[str, Any]:
    """A complete, valid provider response as parsed JSON."""
    return copy.deepcopy(_VALID_PAYLOAD)


@pytest.fixture()
def analysis_result(analysis_payload: dict[str, Any]) -> AnalysisResult:
    return validate_and_build(analysis_payload)


@pytest.fixture()
def document() -> Document:
    raw = b"%PDF-1.4 fake"
    return Document(
        id="doc-1",
        name="report.pdf",
        byte_size=len(raw),
        mime_type="application/pdf",
        encoded_bytes=base64.b64encode(raw).decode("ascii"),
        file_hash_sha256="a" * 64,
        ingested_at=datetime(2025, 1, 10, tzinfo=timezone.utc),
    )
