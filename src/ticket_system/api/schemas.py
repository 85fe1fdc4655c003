"""Pydantic models for HTTP request/response bodies.

The module request and data contracts are reused as-is; this file only
holds the transport-specific shapes around them.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..core.enums import IssueStatus


class ProblemDetails(BaseModel):
    """RFC 9457 Problem Details for HTTP APIs."""

    type: str = Field(description="A URI reference that identifies the problem type")
    title: str = Field(description="A short, human-readable summary of the problem type")
    status: int = Field(description="The HTTP status code")
    detail: Optional[str] = Field(
        None, description="A human-readable explanation specific to this occurrence"
    )
    instance: Optional[str] = Field(
        None, description="A URI reference that identifies the specific occurrence"
    )
    field: Optional[str] = Field(None, description="Input field the problem relates to")


class CreatedResponse(BaseModel):
    """Identity of a newly created aggregate."""

    id: int


class AssignUserRequest(BaseModel):
    """Assign an issue to a user; ``null`` unassigns."""

    user_id: Optional[int] = None


class AssignTeamRequest(BaseModel):
    """Assign an issue to a team; ``null`` unassigns."""

    team_id: Optional[int] = None


class UpdateStatusRequest(BaseModel):
    status: IssueStatus


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
