"""Transform invocation data models."""

from typing import Optional

from pydantic import BaseModel, Field

from jitc.config import settings
from jitc.models.error import ErrorRecord


class TransformOptions(BaseModel):
    """Options for a single file transform."""

    filename: str = Field(..., description="Source file name, selects the language plugin")
    debug: bool = Field(default_factory=lambda: settings.debug, description="Log the rewritten source and failures verbosely")
    stats: bool = Field(default_factory=lambda: settings.stats, description="Log the time spent per file and in total")


class TransformReport(BaseModel):
    """Counters collected during one traversal."""

    visited: int = 0
    exempt_by_try: int = 0
    exempt_by_comment: int = 0
    rewritten: int = 0
    unlocated: int = 0
    unhandled: int = 0


class TransformResult(BaseModel):
    """Outcome of transforming one file."""

    filename: str
    code: str
    changed: bool = False
    report: Optional[TransformReport] = None
    error: Optional[ErrorRecord] = None
    duration_ms: Optional[float] = None
