"""JSON response envelope for scripted use of the CLI."""

from __future__ import annotations

from weighttrack.agent.response import AgentResponse, create_response, error_response

__all__ = [
    "AgentResponse",
    "create_response",
    "error_response",
]
