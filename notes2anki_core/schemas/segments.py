"""Text segment schemas produced by the delimiter scanner."""

from enum import Enum

from pydantic import BaseModel, Field


class SegmentKind(str, Enum):
    """Formatting context of a slice of text."""

    PLAIN = "plain"
    CODE = "code"
    MATH = "math"


class Segment(BaseModel):
    """A half-open character range of a text with its formatting context."""

    kind: SegmentKind
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)
    text: str = Field(..., description="The characters in [start, end)")
