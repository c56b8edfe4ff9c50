from pathlib import Path

from docworker.summarization.exceptions import SummarizationError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the summarization prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled summarization_prompt.txt.

    Returns:
        The raw template with ``{text}``, ``{min_length}`` and ``{max_length}``
        placeholders.

    Raises:
        SummarizationError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "summarization_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SummarizationError(f"Failed to load prompt template: {exc}") from exc
