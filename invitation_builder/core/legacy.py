"""
Format legacy « canevas libre » — éléments positionnés + fiche wedding-info à plat.

C'est le format de persistance historique : clés camelCase sur le fil,
aucune notion de bloc au-delà de text/image/divider.
"""
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _LegacyModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(_LegacyModel):
    x: float = 0
    y: float = 0


class Size(_LegacyModel):
    width: float = 0
    height: float = 0


class LegacyElement(_LegacyModel):
    id: str
    type: Literal["text", "image", "divider"] = "text"
    content: str = ""
    position: Position = Position()
    size: Size = Size()
    style: Dict[str, Any] = Field(default_factory=dict)


class WeddingInfo(_LegacyModel):
    """Fiche à plat. Les clés inconnues (dressCode, mealInfo…) sont conservées."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    # en-tête
    groom_name: Optional[str] = None
    bride_name: Optional[str] = None
    wedding_date: Optional[str] = None
    wedding_time: Optional[str] = None
    # lieu
    venue: Optional[str] = None
    address: Optional[str] = None
    detail_address: Optional[str] = None
    parking_info: Optional[str] = None
    transport_info: Optional[str] = None
    # contacts
    groom_contact: Optional[str] = None
    bride_contact: Optional[str] = None
    # rsvp
    rsvp_enabled: Optional[bool] = None
    rsvp_deadline: Optional[str] = None

    def extras(self) -> Dict[str, Any]:
        """Champs hors schéma, tels que reçus (clés camelCase)."""
        return dict(self.model_extra or {})

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class LegacyFlatState(_LegacyModel):
    elements: List[LegacyElement] = Field(default_factory=list)
    wedding_info: WeddingInfo = Field(default_factory=WeddingInfo)

    def to_wire(self) -> Dict[str, Any]:
        """Représentation JSON persistée (camelCase, sans champs vides)."""
        return self.model_dump(by_alias=True, exclude_none=True)
