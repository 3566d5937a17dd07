from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class GlobalSchemaResponse(BaseModel):
    """Tenant-wide header and footer schemas; ``None`` when not configured."""

    header: Optional[Any] = None
    footer: Optional[Any] = None


class HealthResponse(BaseModel):
    status: Literal["ok", "degraded"]
    timestamp: datetime
    database: Literal["ok", "unavailable"]
