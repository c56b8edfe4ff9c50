from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessorResult:
    """Output of one successful pass through the stages."""

    document_id: str
    extracted_text: str
    summary: str
    processed_location: str
