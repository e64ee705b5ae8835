from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class EntryCreate(BaseModel):
    entry_date: date
    primary_mood_id: int
    secondary_mood1_id: int | None = None
    secondary_mood2_id: int | None = None
    title: str = Field(default="", max_length=200)
    content: str = Field(default="")
    category: str = Field(default="", max_length=100)
    tag_ids: list[int] = Field(default_factory=list)


class EntryCreateResponse(BaseModel):
    ok: bool = True
    id: int
    word_count: int


class MoodModel(BaseModel):
    id: int
    name: str
    sentiment: str
    emoji: str

    model_config = ConfigDict(from_attributes=True)


class MoodListResponse(BaseModel):
    items: list[MoodModel]


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class TagModel(BaseModel):
    id: int
    name: str
    is_predefined: bool
    usage_count: int

    model_config = ConfigDict(from_attributes=True)


class TagListResponse(BaseModel):
    items: list[TagModel]


class TagUsageResponse(BaseModel):
    usage: dict[str, int]
