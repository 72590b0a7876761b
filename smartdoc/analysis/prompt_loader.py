from pathlib import Path

from smartdoc.exceptions import SmartDocError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(
    path: Path | None = None,
    default_name: str = "analysis_prompt.txt",
) -> str:
    """Load a prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled template named by default_name.
        default_name: File name inside the bundled prompts directory.

    Returns:
        The raw template string with placeholders.

    Raises:
        SmartDocError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / default_name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SmartDocError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the analysis output schema descriptor.

    Raises:
        SmartDocError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SmartDocError(f"Failed to load JSON schema: {exc}") from exc
