"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    books: int
    years: int
    source: Optional[str] = None


class YearCount(BaseModel):
    year: int
    books: int


class YearsResponse(BaseModel):
    years: list[YearCount]
    default_year: Optional[int] = None


class UploadResponse(BaseModel):
    status: str
    filename: str
    books: int
    years: list[YearCount]
    default_year: Optional[int] = None


class ShareCreateRequest(BaseModel):
    year: Optional[int] = None
    name: Optional[str] = None


class ShareResponse(BaseModel):
    id: str
    url: str
    expires_at: str
    year: Optional[int] = None
