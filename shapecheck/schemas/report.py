"""
Match Report Schema

Pydantic model describing the verdict of a single match, for callers
that hand validation results across a serialization boundary (an API
error body, a job log, a queue message).
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


class MatchReport(BaseModel):
    """Verdict of explain(value, pattern)."""
    ok: bool = Field(..., description="True when the value conforms to the pattern.")
    message: Optional[str] = Field(None, description="Full 'Match error: ...' message.")
    reason: Optional[str] = Field(None, description="Pattern-specific reason without prefix or path.")
    path: str = Field("", description="Accessor chain to the divergence; empty at the root.")
    core_version: str

    model_config = {"frozen": True, "json_schema_extra": {"examples": [
        {"ok": False, "message": "Match error: Expected string, got number in field foo[1].bar",
         "reason": "Expected string, got number", "path": "foo[1].bar", "core_version": "1.0.0"},
    ]}}
