from dataclasses import dataclass, field

from smartdoc.analysis.models import AnalysisResult
from smartdoc.chat.models import ChatTurn
from smartdoc.ingestion.models import Document


@dataclass(slots=True)
class SessionContext:
    """State of one user session: the active analysis and its conversation.

    The active Document/AnalysisResult pair is replaced only by a successful
    run. The transcript is only non-empty while a result is active.
    """

    document: Document | None = None
    result: AnalysisResult | None = None
    transcript: list[ChatTurn] = field(default_factory=list)

    @property
    def has_result(self) -> bool:
        return self.result is not None

    def begin_ingestion(self) -> None:
        """A new document is being ingested; the conversation no longer applies."""
        self.transcript = []

    def publish(self, document: Document, result: AnalysisResult) -> None:
        self.document = document
        self.result = result
        self.transcript = []

    def clear(self) -> None:
        self.document = None
        self.result = None
        self.transcript = []
