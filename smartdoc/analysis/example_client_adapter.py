"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalysisClientFactory.
"""

import json
from collections.abc import Sequence
from typing import ClassVar

from smartdoc.analysis.client_base import BaseAnalysisClient
from smartdoc.chat.models import ChatTurn


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns a fixed valid analysis JSON.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "markdownContent": "# Example Document\n\nThis is an example conversion.",
        "summary": "An example document used for local development.",
        "suggestedFilename": "example_document",
        "keywords": ["example"],
        "keyQuotes": [],
        "actionItems": [],
        "entities": [],
        "stats": {
            "pageCount": 1,
            "wordCount": 6,
            "paragraphCount": 1,
            "imageCount": 0,
            "sentimentScore": 50,
            "complexityScore": 10,
            "readingTimeMin": 1,
            "language": "English",
            "category": "Example",
            "tone": "neutral",
        },
    }
    CHAT_REPLY: ClassVar[str] = "This is an example answer based on the document."

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
        _ = model, temperature, instruction, file_name, mime_type, encoded_bytes, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)

    async def chat(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        prior_turns: Sequence[ChatTurn],
        message: str,
    ) -> str:
        _ = model, temperature, system_prompt, prior_turns, message
        return self.CHAT_REPLY
