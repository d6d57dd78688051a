"""Bloc Contact — liste ordonnée de contacts (nom, lien, téléphone)."""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from .base import BaseBlock, BlockPayload

GROOM = "groom"
BRIDE = "bride"


class ContactEntry(BaseModel):
    name: str = ""
    relation: str = ""
    phone: str = ""


def _default_contacts() -> List[ContactEntry]:
    return [
        ContactEntry(name="Marié", relation=GROOM),
        ContactEntry(name="Mariée", relation=BRIDE),
    ]


class ContactPayload(BlockPayload):
    title: Optional[str] = "Contacts"
    contacts: List[ContactEntry] = Field(default_factory=_default_contacts)


class ContactBlock(BaseBlock):
    kind: Literal["contact"] = "contact"
    payload: ContactPayload = Field(default_factory=ContactPayload)
