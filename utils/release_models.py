#!/usr/bin/env python3
"""Pydantic models for GitHub releases and their classified notes."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field


class Release(BaseModel):
    """A published GitHub release, as returned by the REST listing."""

    tag_name: str = Field(..., description="Release tag")
    published_at: datetime = Field(..., description="Publish timestamp")
    body: Optional[str] = Field(None, description="Free-text release notes")
    prerelease: bool = Field(False, description="Whether the release is a prerelease")

    model_config = {"extra": "ignore", "frozen": True}


class ClassifiedRelease(BaseModel):
    """Release note bullets sorted into changelog sections."""

    features: List[str] = Field(default_factory=list)
    improvements: List[str] = Field(default_factory=list)
    fixes: List[str] = Field(default_factory=list)
    breaking: bool = False
    breaking_description: Optional[str] = None
