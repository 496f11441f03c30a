"""
HairBook Backend — User & Location Schemas
============================================

What:  Public projections of a user and the location report bodies.
Who:   Login response, POST /api/location, GET /api/admin/users-locations.

Projections list their fields explicitly; `password_hash` is never part of
any response model.
"""

from typing import List, Optional

from pydantic import Field

from app.schemas.common import CamelModel, UtcDatetime


class PublicUser(CamelModel):
    """User fields safe to show the user themselves."""
    name: str
    email: str
    phone: str
    role: str


class LocationUpdateRequest(CamelModel):
    """POST /api/location body. 0.0 is a valid coordinate; only None is missing."""
    lat: Optional[float] = Field(default=None, description="Latitude in degrees")
    lng: Optional[float] = Field(default=None, description="Longitude in degrees")

    def missing_fields(self) -> List[str]:
        return [field for field in ("lat", "lng") if getattr(self, field) is None]


class Location(CamelModel):
    lat: float
    lng: float
    updated_at: Optional[UtcDatetime] = None


class UserLocation(CamelModel):
    """One row of the admin locations report."""
    name: str
    email: str
    phone: str
    location: Location
