"""
Note Service — Tag Schemas
===========================

What:  Pydantic models for the tag resource. Same shape conventions as
       schemas/note.py: a view model plus create and partial-update DTOs.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    uuid: str = Field(description="Unique tag identifier assigned by storage")
    name: str = Field(description="Display name of the tag")
    created_at: Optional[datetime] = Field(default=None, description="Creation time (UTC)")
    updated_at: Optional[datetime] = Field(default=None, description="Last update time (UTC)")


class CreateTagDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str


class UpdateTagDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
