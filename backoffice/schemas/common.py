"""
Tienda Back Office — Shared Response Schemas
==============================================

What:  Envelope models shared by every endpoint.
Why:   Clients parse one error shape and one write-acknowledgement shape,
       whatever resource they talk to. The models also document those
       shapes in the OpenAPI schema.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body.

    Example:
        {
            "error": "Invalid data",
            "details": [{"field": "price", "message": "Input should be greater than 0"}]
        }
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[List[Dict[str, str]]] = Field(
        default=None, description="Per-field validation errors (400 only)"
    )
    resource: Optional[str] = Field(
        default=None, description="Unrecognized resource token (unknown-resource 404 only)"
    )


class MessageResponse(BaseModel):
    """Acknowledgement returned by create, update and delete."""
    mensaje: str = Field(description="Human-readable success message")
    id: Optional[int] = Field(default=None, description="Identifier of the created record")


class HealthResponse(BaseModel):
    """Returned by GET /health for load balancer and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
