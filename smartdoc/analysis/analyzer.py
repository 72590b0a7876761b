"""Single-request document analysis against the external service."""

import json
from pathlib import Path

from smartdoc.analysis.client_base import BaseAnalysisClient
from smartdoc.analysis.exceptions import SchemaMismatchError
from smartdoc.analysis.models import AnalysisResult
from smartdoc.analysis.prompt_loader import load_json_schema, load_prompt_template
from smartdoc.analysis.validator import validate_and_build
from smartdoc.ingestion.models import Document
from smartdoc.logging.logger import Log


class Analyzer:
    """Turns one ingested Document into a validated AnalysisResult.

    The whole analysis (markdown conversion, statistics, entities, action
    items, quotes) is produced by one provider request. There are no
    intermediate substeps to observe.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        temperature: float = 0.2,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        schema_str = load_json_schema(json_schema_path)
        self._json_schema_dict = json.loads(schema_str)
        self._instruction = load_prompt_template(prompt_template_path).format(
            json_schema=schema_str
        )

    async def analyze(self, document: Document) -> AnalysisResult:
        """Request analysis of the document and validate the response.

        Raises:
            ServiceUnavailableError: if the provider call fails.
            SchemaMismatchError: if the response is not a valid analysis result.
        """
        Log.debug(f"Analysis instruction:\n{self._instruction}")
        raw_response = await self._client.analyze_document(
            model=self._model,
            temperature=self._temperature,
            instruction=self._instruction,
            file_name=document.name,
            mime_type=document.mime_type,
            encoded_bytes=document.encoded_bytes,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Analysis complete for {document.id}: {result.stats.word_count} words, "
            f"{len(result.entities)} entities, {len(result.action_items)} action items"
        )
        return result

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise SchemaMismatchError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise SchemaMismatchError("JSON response must be an object")
        return parsed
