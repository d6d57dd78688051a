"""Bloc Location — lieu de la cérémonie, accès et stationnement."""
from typing import Literal, Optional
from pydantic import BaseModel
from .base import BaseBlock, BlockPayload


class GeoPoint(BaseModel):
    lat: float
    lng: float


class LocationPayload(BlockPayload):
    REQUIRED = ("venue_name", "address")

    venue_name: str = ""
    address: str = ""
    detail_address: Optional[str] = None
    coordinates: Optional[GeoPoint] = None
    parking_info: Optional[str] = None
    transport_info: Optional[str] = None


class LocationBlock(BaseBlock):
    kind: Literal["location"] = "location"
    payload: LocationPayload = LocationPayload()
