from smartdoc.analysis.analyzer import Analyzer
from smartdoc.analysis.exceptions import SchemaMismatchError, ServiceUnavailableError
from smartdoc.analysis.factory import AnalysisClientFactory
from smartdoc.analysis.models import AnalysisResult
from smartdoc.chat.grounding import GroundingPromptBuilder
from smartdoc.chat.session_manager import ChatSessionManager
from smartdoc.config.settings import Settings
from smartdoc.history.factory import KeyValueStoreFactory
from smartdoc.history.ledger import HistoryLedger
from smartdoc.history.models import HistoryEntry
from smartdoc.ingestion.exceptions import FileReadError, SizeExceededError
from smartdoc.ingestion.file_ingestor import FileIngestor
from smartdoc.ingestion.models import Document, RawFile
from smartdoc.logging.logger import Log
from smartdoc.processor.exceptions import AlreadyInFlightError
from smartdoc.processor.session import SessionContext
from smartdoc.processor.state_machine import ProcessingStateMachine

_FAILURE_KINDS: dict[type[Exception], str] = {
    SizeExceededError: "SizeExceeded",
    FileReadError: "FileReadError",
    ServiceUnavailableError: "ServiceUnavailable",
    SchemaMismatchError: "SchemaMismatch",
}


class AnalysisOrchestrator:
    """Drives one document through ingestion, analysis and validation.

    Pipeline: size check -> ingest -> analyze (one request) -> publish -> record.
    Any progress steps a UI shows between Analyzing and Completed are display
    pacing only; the analysis itself is a single provider request.
    """

    def __init__(
        self,
        *,
        ingestor: FileIngestor,
        analyzer: Analyzer,
        ledger: HistoryLedger,
        session: SessionContext | None = None,
        state: ProcessingStateMachine | None = None,
    ) -> None:
        self._ingestor = ingestor
        self._analyzer = analyzer
        self._ledger = ledger
        self._session = session if session is not None else SessionContext()
        self._state = state if state is not None else ProcessingStateMachine()

    @property
    def state(self) -> ProcessingStateMachine:
        return self._state

    @property
    def session(self) -> SessionContext:
        return self._session

    @property
    def ledger(self) -> HistoryLedger:
        return self._ledger

    async def process(self, raw_file: RawFile) -> AnalysisResult:
        """Run the full pipeline for one submitted file.

        On failure the state machine ends in Failed, the previously active
        result is left untouched and the error is re-raised.

        Raises:
            AlreadyInFlightError: if another run is in progress.
            SizeExceededError: if the file is too large; the phase is unchanged.
            FileReadError: if the file cannot be read.
            ServiceUnavailableError: if the analysis request fails.
            SchemaMismatchError: if the response fails validation.
        """
        if self._state.is_busy:
            raise AlreadyInFlightError(
                f"Cannot process '{raw_file.name}': a run is already in progress"
            )
        self._ingestor.check_size(raw_file)

        Log.info(f"Processing '{raw_file.name}' ({raw_file.size_bytes} bytes)")
        self._state.start(raw_file.name)
        self._session.begin_ingestion()

        try:
            document = await self._ingestor.ingest(raw_file)
            self._state.begin_analysis(document)
            result = await self._analyzer.analyze(document)
        except Exception as exc:
            self._fail(exc)
            raise

        self._session.publish(document, result)
        self._state.complete()
        self._record_history(document, result)
        return result

    def reset(self) -> None:
        """Clear the active result and conversation and return to Idle.

        Raises:
            IllegalTransitionError: if a run is in progress.
        """
        self._state.reset()
        self._session.clear()
        Log.info("Session cleared")

    def _record_history(self, document: Document, result: AnalysisResult) -> None:
        # The run already completed; a history write failure is not a run failure.
        try:
            self._ledger.record(HistoryEntry.from_result(document, result))
        except Exception as exc:
            Log.error(f"Failed to record '{document.name}' in history: {exc}")

    def _fail(self, exc: Exception) -> None:
        kind = _FAILURE_KINDS.get(type(exc), type(exc).__name__)
        cause = f"{kind}: {exc}"
        Log.error(f"Processing failed: {cause}")
        self._state.fail(cause)


def build_orchestrator(settings: Settings) -> tuple[AnalysisOrchestrator, ChatSessionManager]:
    """Build an orchestrator and a chat manager sharing one session."""
    client = AnalysisClientFactory.create(settings)
    model = AnalysisClientFactory.model_name(settings)
    session = SessionContext()
    ledger = HistoryLedger(
        KeyValueStoreFactory.create(settings),
        key=settings.history_key,
        max_entries=settings.history_max_entries,
    )
    orchestrator = AnalysisOrchestrator(
        ingestor=FileIngestor(max_size_bytes=settings.max_file_size_bytes),
        analyzer=Analyzer(
            client=client,
            model=model,
            temperature=settings.analysis_temperature,
        ),
        ledger=ledger,
        session=session,
    )
    chat = ChatSessionManager(
        session=session,
        client=client,
        model=model,
        temperature=settings.chat_temperature,
        grounding=GroundingPromptBuilder(max_chars=settings.chat_context_max_chars),
    )
    return orchestrator, chat
