from collections.abc import Sequence
from typing import Any

import httpx
import openai

from smartdoc.analysis.client_base import BaseAnalysisClient
from smartdoc.analysis.exceptions import ServiceUnavailableError
from smartdoc.chat.models import ChatRole, ChatTurn

_ROLE_MAP = {ChatRole.USER: "user", ChatRole.MODEL: "assistant"}


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        messages: list[dict[str, Any]] = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "file",
                        "file": {
                            "filename": file_name,
                            "file_data": f"data:{mime_type};base64,{encoded_bytes}",
                        },
                    },
                    {"type": "text", "text": instruction},
                ],
            }
        ]
        return await self._complete(
            model=model,
            temperature=temperature,
            messages=messages,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": "analysis_result",
                    "strict": False,
                    "schema": json_schema,
                },
            },
        )

    async def chat(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        prior_turns: Sequence[ChatTurn],
        message: str,
    ) -> str:
        messages: list[dict[str, Any]] = [{"role": "system", "content": system_prompt}]
        messages.extend(
            {"role": _ROLE_MAP[turn.role], "content": turn.text} for turn in prior_turns
        )
        messages.append({"role": "user", "content": message})
        return await self._complete(model=model, temperature=temperature, messages=messages)

    async def _complete(self, **kwargs: Any) -> str:
        try:
            response = await self._client.chat.completions.create(**kwargs)
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ServiceUnavailableError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ServiceUnavailableError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ServiceUnavailableError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ServiceUnavailableError("AI returned empty response")
        return content
