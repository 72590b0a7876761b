"""Grounded conversation over the active analysis result."""

import uuid
from datetime import datetime, timezone

from smartdoc.analysis.client_base import BaseAnalysisClient
from smartdoc.analysis.exceptions import ServiceUnavailableError
from smartdoc.chat.exceptions import NoActiveAnalysisError
from smartdoc.chat.grounding import GroundingPromptBuilder
from smartdoc.chat.models import ChatRole, ChatTurn
from smartdoc.logging.logger import Log
from smartdoc.processor.exceptions import AlreadyInFlightError
from smartdoc.processor.session import SessionContext

EMPTY_REPLY_FALLBACK = "I couldn't generate a response."


class ChatSessionManager:
    """Answers questions about the active result, one request at a time.

    The user's turn is appended before the request is sent, so it stays in
    the transcript when the request fails. A second question asked while a
    request is in flight is rejected.
    """

    def __init__(
        self,
        *,
        session: SessionContext,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.4,
        grounding: GroundingPromptBuilder | None = None,
    ) -> None:
        self._session = session
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._grounding = grounding or GroundingPromptBuilder()
        self._in_flight = False

    @property
    def transcript(self) -> list[ChatTurn]:
        return list(self._session.transcript)

    @property
    def is_busy(self) -> bool:
        return self._in_flight

    async def ask(self, question: str) -> str:
        """Send a question grounded in the active result and return the answer.

        Raises:
            NoActiveAnalysisError: if no analysis result is active.
            AlreadyInFlightError: if another question is still awaiting a reply.
            ServiceUnavailableError: if the provider call fails.
        """
        result = self._session.result
        if result is None:
            raise NoActiveAnalysisError("No analysis result is active")
        if self._in_flight:
            raise AlreadyInFlightError("A chat request is already in flight")
        text = question.strip()
        if not text:
            raise ValueError("Question must not be empty")

        self._in_flight = True
        try:
            prior_turns = list(self._session.transcript)
            user_turn = self._new_turn(ChatRole.USER, text)
            self._session.transcript.append(user_turn)
            try:
                answer = await self._client.chat(
                    model=self._model,
                    temperature=self._temperature,
                    system_prompt=self._grounding.build(result.markdown_content),
                    prior_turns=prior_turns,
                    message=text,
                )
            except ServiceUnavailableError as exc:
                Log.error(f"Chat request failed: {exc}")
                raise
        finally:
            self._in_flight = False

        answer = answer or EMPTY_REPLY_FALLBACK
        if user_turn not in self._session.transcript:
            Log.warning("Session changed while chat request was in flight; reply discarded")
            return answer
        self._session.transcript.append(self._new_turn(ChatRole.MODEL, answer))
        Log.info(f"Chat turn answered ({len(self._session.transcript)} turns)")
        return answer

    def clear(self) -> None:
        self._session.transcript = []

    @staticmethod
    def _new_turn(role: ChatRole, text: str) -> ChatTurn:
        return ChatTurn(
            id=str(uuid.uuid4()),
            role=role,
            text=text,
            created_at=datetime.now(timezone.utc),
        )
