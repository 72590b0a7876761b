from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ChatRole(str, Enum):
    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ChatTurn:
    """One message in a grounded conversation."""

    id: str
    role: ChatRole
    text: str
    created_at: datetime
