from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from smartdoc.ingestion.models import Document
from smartdoc.logging.logger import Log
from smartdoc.processor.exceptions import IllegalTransitionError


class PipelinePhase(str, Enum):
    IDLE = "Idle"
    INGESTING = "Ingesting"
    ANALYZING = "Analyzing"
    COMPLETED = "Completed"
    FAILED = "Failed"


@dataclass(frozen=True)
class PhaseTransition:
    """A single phase change, delivered to observers."""

    previous: PipelinePhase
    current: PipelinePhase
    file_name: str = ""
    document: Document | None = None
    cause: str = ""


TransitionListener = Callable[[PhaseTransition], None]

_ALLOWED: dict[PipelinePhase, frozenset[PipelinePhase]] = {
    PipelinePhase.IDLE: frozenset({PipelinePhase.INGESTING}),
    PipelinePhase.INGESTING: frozenset({PipelinePhase.ANALYZING, PipelinePhase.FAILED}),
    PipelinePhase.ANALYZING: frozenset({PipelinePhase.COMPLETED, PipelinePhase.FAILED}),
    PipelinePhase.COMPLETED: frozenset({PipelinePhase.IDLE}),
    PipelinePhase.FAILED: frozenset({PipelinePhase.IDLE}),
}


class ProcessingStateMachine:
    """Tracks one document's journey from intake to a terminal phase."""

    def __init__(self) -> None:
        self._phase = PipelinePhase.IDLE
        self._file_name = ""
        self._document: Document | None = None
        self._cause = ""
        self._visited: list[PipelinePhase] = [PipelinePhase.IDLE]
        self._listeners: list[TransitionListener] = []

    @property
    def phase(self) -> PipelinePhase:
        return self._phase

    @property
    def document(self) -> Document | None:
        """The in-flight document, once ingestion has produced it."""
        return self._document

    @property
    def cause(self) -> str:
        """Human-readable cause of the last failure, empty otherwise."""
        return self._cause

    @property
    def visited(self) -> list[PipelinePhase]:
        """Phases entered during the current run, starting at Idle."""
        return list(self._visited)

    @property
    def is_busy(self) -> bool:
        return self._phase in (PipelinePhase.INGESTING, PipelinePhase.ANALYZING)

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        """Register a transition observer. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def start(self, file_name: str) -> None:
        """Idle -> Ingesting. A terminal machine is reset to Idle first."""
        if self._phase in (PipelinePhase.COMPLETED, PipelinePhase.FAILED):
            self.reset()
        self._file_name = file_name
        self._transition(PipelinePhase.INGESTING)

    def begin_analysis(self, document: Document) -> None:
        """Ingesting -> Analyzing, carrying the ingested document."""
        self._require(PipelinePhase.ANALYZING)
        self._document = document
        self._transition(PipelinePhase.ANALYZING)

    def complete(self) -> None:
        """Analyzing -> Completed."""
        self._transition(PipelinePhase.COMPLETED)

    def fail(self, cause: str) -> None:
        """(Ingesting|Analyzing) -> Failed with a human-readable cause."""
        self._require(PipelinePhase.FAILED)
        self._cause = cause
        self._transition(PipelinePhase.FAILED)

    def reset(self) -> None:
        """(Completed|Failed) -> Idle. Resetting an idle machine does nothing."""
        if self._phase is PipelinePhase.IDLE:
            return
        self._require(PipelinePhase.IDLE)
        self._file_name = ""
        self._document = None
        self._cause = ""
        self._transition(PipelinePhase.IDLE)
        self._visited = [PipelinePhase.IDLE]

    def _require(self, target: PipelinePhase) -> None:
        if target not in _ALLOWED[self._phase]:
            raise IllegalTransitionError(
                f"Cannot move from {self._phase.value} to {target.value}"
            )

    def _transition(self, target: PipelinePhase) -> None:
        self._require(target)
        previous = self._phase
        self._phase = target
        self._visited.append(target)
        event = PhaseTransition(
            previous=previous,
            current=target,
            file_name=self._file_name,
            document=self._document,
            cause=self._cause,
        )
        Log.info(f"Pipeline phase {previous.value} -> {target.value}")
        for listener in list(self._listeners):
            listener(event)
