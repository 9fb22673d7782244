"""Expected JSON shapes for each oracle call site.

Every structured oracle response is validated against one of these models.
Any deviation raises :class:`OracleFormatError`; callers decide the safe
default.
"""

from typing import TypeVar

from pydantic import BaseModel, Field, ValidationError

from site_explorer.errors import OracleFormatError

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ScoredLink(BaseModel):
    """One entry of a batched link-relevance response."""

    url: str
    relevance_score: float = Field(alias="relevanceScore")
    reasoning: str = ""

    model_config = {"allow_inf_nan": False}


class LinkScoresResponse(BaseModel):
    """Response shape for batched link scoring."""

    scores: list[ScoredLink]


class ValidationResponse(BaseModel):
    """Response shape for chunk validation."""

    is_valid: bool = Field(alias="isValid")
    confidence: float = 0.0
    reasoning: str = ""

    model_config = {"allow_inf_nan": False}


class ExtractedAnswer(BaseModel):
    """Inner ``answer`` object of an extraction response."""

    found: bool
    content: str = ""
    confidence: float = 0.0
    found_in_url: str | None = Field(default=None, alias="foundInUrl")
    reasoning: str = ""

    model_config = {"allow_inf_nan": False}


class ExtractionResponse(BaseModel):
    """Response shape for answer extraction."""

    answer: ExtractedAnswer


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapping a response, if any."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [line for line in lines if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned.strip()


def parse_oracle_json(text: str, model: type[ResponseT]) -> ResponseT:
    """Parse an oracle response against its expected shape.

    Args:
        text: Raw oracle response.
        model: Pydantic model describing the expected shape.

    Returns:
        The validated response.

    Raises:
        OracleFormatError: If the text is not JSON or does not match the shape.
    """
    cleaned = strip_code_fences(text)
    if not cleaned:
        raise OracleFormatError(f"Empty response, expected {model.__name__}", raw=text)
    try:
        return model.model_validate_json(cleaned)
    except ValidationError as e:
        raise OracleFormatError(
            f"Response does not match {model.__name__}: {e.error_count()} error(s)", raw=text
        ) from e


def clamp_unit(value: float) -> float:
    """Clamp a score or confidence into [0.0, 1.0]."""
    return max(0.0, min(1.0, float(value)))


def json_prompt(content: str, response_format: str) -> str:
    """Wrap content in an instruction demanding a bare JSON object."""
    return (
        "IMPORTANT: Return ONLY a JSON object. No text before or after. No markdown. "
        "No code blocks. No explanations.\n\n"
        f"Content to analyze:\n{content}\n\n"
        f"Required JSON format:\n{response_format}"
    )
