from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import Field

from app.core.enums import ReportFormat, ReportType
from app.core.schemas import CamelModel


class ReportCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    type: ReportType
    format: ReportFormat
    filters: Dict[str, Any] = Field(default_factory=dict)
    generated_at: Optional[date] = None  # defaults to today
    download_url: Optional[str] = Field(None, max_length=512)


class ReportResponse(CamelModel):
    id: str
    name: str
    type: ReportType
    filters: Dict[str, Any] = Field(default_factory=dict)
    generated_at: date
    generated_by: str
    format: ReportFormat
    download_url: Optional[str] = None
    created_at: Optional[datetime] = None
