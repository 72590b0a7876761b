import json
import re

from smartdoc.analysis.models import AnalysisResult
from smartdoc.analysis.serializer import result_to_dict
from smartdoc.export.models import ExportArtifact, ExportFormat

_DOC_HEADER = (
    "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
    "xmlns:w='urn:schemas-microsoft-com:office:word'>"
    "<head><meta charset='utf-8'></head><body>"
)
_DOC_FOOTER = "</body></html>"
_KNOWN_SUFFIXES = (".docx", ".doc", ".md", ".json", ".txt", ".pdf")


class Exporter:
    """Converts an analysis result into downloadable bytes. Holds no state."""

    def export(self, result: AnalysisResult, fmt: ExportFormat | str) -> ExportArtifact:
        fmt = ExportFormat(fmt)
        base_name = self._base_name(result.suggested_filename)
        if fmt is ExportFormat.DOCUMENT:
            body = self._markdown_to_html(result.markdown_content)
            return self._artifact(
                _DOC_HEADER + body + _DOC_FOOTER, "doc", "application/msword", base_name
            )
        if fmt is ExportFormat.JSON:
            payload = json.dumps(result_to_dict(result), ensure_ascii=False, indent=2)
            return self._artifact(payload, "json", "application/json", base_name)
        if fmt is ExportFormat.MARKDOWN:
            return self._artifact(result.markdown_content, "md", "text/markdown", base_name)
        return self._artifact(result.markdown_content, "txt", "text/plain", base_name)

    @staticmethod
    def _markdown_to_html(markdown: str) -> str:
        html = re.sub(r"^## (.*)$", r"<h2>\1</h2>", markdown, flags=re.MULTILINE)
        html = re.sub(r"^# (.*)$", r"<h1>\1</h1>", html, flags=re.MULTILINE)
        html = re.sub(r"\*\*(.+?)\*\*", r"<b>\1</b>", html)
        return html.replace("\n", "<br>")

    @staticmethod
    def _base_name(suggested: str) -> str:
        name = suggested.strip()
        lowered = name.lower()
        for suffix in _KNOWN_SUFFIXES:
            if lowered.endswith(suffix):
                name = name[: -len(suffix)]
                break
        return name or "document"

    @staticmethod
    def _artifact(text: str, extension: str, mime_type: str, base_name: str) -> ExportArtifact:
        return ExportArtifact(
            data=text.encode("utf-8"),
            extension=extension,
            mime_type=mime_type,
            file_name=f"{base_name}.{extension}",
        )
