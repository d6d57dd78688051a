"""Palette des blocs — ce que l'éditeur propose d'ajouter."""
from typing import Any, Dict, List, Literal
from pydantic import BaseModel

from . import BLOCK_REGISTRY


class PaletteItem(BaseModel):
    kind: str
    name: str
    description: str
    category: Literal["essential", "content", "media", "contact"]
    default_payload: Dict[str, Any]


_PALETTE_META = {
    "header":   ("En-tête",     "Noms des mariés, date et heure",           "essential"),
    "content":  ("Texte",       "Texte libre",                              "content"),
    "image":    ("Image",       "Photo avec légende",                       "media"),
    "contact":  ("Contacts",    "Téléphones des mariés",                    "contact"),
    "location": ("Lieu",        "Adresse de la cérémonie et accès",         "contact"),
    "rsvp":     ("Présence",    "Confirmation de présence des invités",     "essential"),
}


def block_palette() -> List[PaletteItem]:
    items = []
    for kind, cls in BLOCK_REGISTRY.items():
        name, description, category = _PALETTE_META[kind]
        items.append(PaletteItem(
            kind=kind,
            name=name,
            description=description,
            category=category,
            default_payload=cls().payload.model_dump(),
        ))
    return items
