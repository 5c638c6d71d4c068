"""Pydantic schemas for action results and errors."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResultResponse(BaseModel):
    """A short code and the URL it stands for."""

    model_config = ConfigDict(populate_by_name=True)

    short_code: str = Field(..., alias="shortCode", description="The short code")
    raw_url: str = Field(..., alias="rawUrl", description="The original long URL")


class ListResponse(BaseModel):
    """One page of stored mappings."""

    items: List[ResultResponse] = Field(default_factory=list)
    count: int = Field(..., ge=0, description="Number of items on this page")
    limit: int = Field(..., description="Requested page size")
    offset: int = Field(..., description="Requested offset")


class DeleteResponse(BaseModel):
    """Confirmation that a mapping was removed."""

    model_config = ConfigDict(populate_by_name=True)

    deleted: bool
    short_code: str = Field(..., alias="shortCode")


class ErrorResponse(BaseModel):
    """Error record written for every failed action."""

    error: str = Field(..., description="Stable error summary")
    details: Optional[str] = Field(None, description="Underlying cause, if any")
