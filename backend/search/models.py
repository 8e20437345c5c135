from __future__ import annotations

from pydantic import BaseModel, Field

from ..markdown.models import Document

DEFAULT_SOURCE_TITLE = "Google Maps Source"


class LatLng(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class GroundingSource(BaseModel):
    uri: str | None = None
    title: str | None = None

    @property
    def display_title(self) -> str:
        return self.title or DEFAULT_SOURCE_TITLE


class RestaurantInfo(BaseModel):
    text: str
    sources: list[GroundingSource] = Field(default_factory=list)


class SearchRequest(BaseModel):
    query: str = Field(..., max_length=1000)


class LocationErrorRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=500)


class RenderRequest(BaseModel):
    text: str


class RenderResponse(BaseModel):
    document: Document
    html: str


class SearchResponse(BaseModel):
    query: str
    text: str
    document: Document
    html: str
    sources: list[GroundingSource]
