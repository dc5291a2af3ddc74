"""Pydantic request schemas for index endpoints."""
from typing import Optional

from pydantic import BaseModel, Field


class GenerateIndexRequest(BaseModel):
    # Emptiness is checked by the endpoint so it can answer 400
    prompt: Optional[str] = Field(None, description="Investment theme in plain language")


class IndexUpdate(BaseModel):
    """Partial update; only the fields sent are applied."""
    name: Optional[str] = None
    description: Optional[str] = None
    isPublic: Optional[bool] = None


class NapkinRequest(BaseModel):
    indexId: Optional[int] = None
