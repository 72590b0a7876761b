from pathlib import Path

from smartdoc.analysis.prompt_loader import load_prompt_template

CONTEXT_MAX_CHARS = 500_000


class GroundingPromptBuilder:
    """Embeds document content into the grounding instruction template."""

    def __init__(
        self,
        max_chars: int = CONTEXT_MAX_CHARS,
        template_path: Path | None = None,
    ) -> None:
        self._max_chars = max_chars
        self._template = load_prompt_template(template_path, "grounding_prompt.txt")

    def build(self, document_content: str) -> str:
        return self._template.format(document_content=document_content[: self._max_chars])
