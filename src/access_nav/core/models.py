"""Pydantic return models for core provider functions."""

from typing import Literal

from pydantic import BaseModel, Field

from access_nav.models import GeoPoint


class ProviderPath(BaseModel):
    """Return type for fetch_walking_route."""
    points: list[GeoPoint] = Field(min_length=2)
    distance_m: float = Field(ge=0)
    source: Literal["provider", "fallback"] = "provider"
