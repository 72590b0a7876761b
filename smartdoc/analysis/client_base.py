from abc import ABC, abstractmethod
from collections.abc import Sequence

from smartdoc.chat.models import ChatTurn


class BaseAnalysisClient(ABC):
    """Contract for provider-specific analysis and chat clients."""

    @abstractmethod
    async def analyze_document(
        self,
        *,
        model: str,
        temperature: float,
        instruction: str,
        file_name: str,
        mime_type: str,
        encoded_bytes: str,
        json_schema: dict[str, object],
    ) -> str:
        """Send one document with the output schema and return the raw JSON text.

        Raises:
            ServiceUnavailableError: on network or provider failure.
        """

    @abstractmethod
    async def chat(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        prior_turns: Sequence[ChatTurn],
        message: str,
    ) -> str:
        """Send one conversational turn and return the reply text.

        Raises:
            ServiceUnavailableError: on network or provider failure.
        """
