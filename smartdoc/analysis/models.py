from dataclasses import dataclass
from enum import Enum


class EntityKind(str, Enum):
    PERSON = "Person"
    ORGANIZATION = "Organization"
    LOCATION = "Location"
    DATE = "Date"
    CONCEPT = "Concept"


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


@dataclass(frozen=True)
class DocumentStats:
    """Document statistics reported by the analysis service."""

    word_count: int
    sentiment_score: float
    tone: str
    page_count: int = 0
    paragraph_count: int = 0
    image_count: int = 0
    complexity_score: float = 0.0
    reading_time_minutes: float = 0.0
    language: str = ""
    category: str = ""


@dataclass(frozen=True)
class Entity:
    """A named entity found in the document."""

    name: str
    kind: EntityKind
    mention_count: int = 0


@dataclass(frozen=True)
class ActionItem:
    """An actionable takeaway extracted from the document."""

    task: str
    priority: Priority


@dataclass(frozen=True)
class AnalysisResult:
    """Validated output of one analysis run."""

    markdown_content: str
    stats: DocumentStats
    summary: str = ""
    suggested_filename: str = ""
    keywords: tuple[str, ...] = ()
    entities: tuple[Entity, ...] = ()
    action_items: tuple[ActionItem, ...] = ()
    key_quotes: tuple[str, ...] = ()
