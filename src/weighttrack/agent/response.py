"""Response envelope for machine-readable JSON output."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class AgentResponse:
    """Standardized response envelope for all CLI commands.

    Gives scripts and agents a consistent structure to parse: success
    status, data, errors and suggested next steps.
    """

    success: bool
    command: str
    data: dict[str, Any] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    human_summary: str = ""
    schema_version: str = "1.0"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "command": self.command,
            "data": self.data,
            "errors": self.errors,
            "warnings": self.warnings,
            "suggestions": self.suggestions,
            "human_summary": self.human_summary,
            "timestamp": datetime.now().isoformat(),
            "schema_version": self.schema_version,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def create_response(
    command: str,
    data: Optional[dict[str, Any]] = None,
    warnings: Optional[list[str]] = None,
    human_summary: str = "",
) -> AgentResponse:
    """Create a successful AgentResponse.

    Warnings carry non-fatal problems, such as stored records that were
    dropped while loading.
    """
    return AgentResponse(
        success=True,
        command=command,
        data=data or {},
        warnings=list(warnings or []),
        human_summary=human_summary,
    )


def error_response(
    command: str,
    error: str,
    suggestions: Optional[list[str]] = None,
    data: Optional[dict[str, Any]] = None,
) -> AgentResponse:
    """Create an error response.

    Args:
        command: The command that failed
        error: Error message
        suggestions: Suggestions for fixing the error
        data: Extra structured detail (e.g. the offending field)

    Returns:
        AgentResponse with success=False
    """
    return AgentResponse(
        success=False,
        command=command,
        data=data or {},
        errors=[error],
        suggestions=suggestions or [],
        human_summary=f"Error: {error}",
    )
