"""
Blocs — exports publics, BlockUnion discriminé par `kind` et registry des types.
"""
from typing import Annotated, Any, Union

from pydantic import Field, TypeAdapter

from .base import BaseBlock, BlockPayload, BlockStyle, default_style, new_block_id
from .header import HeaderBlock, HeaderPayload
from .content import ContentBlock, ContentPayload
from .image import ImageBlock, ImagePayload
from .contact import ContactBlock, ContactPayload, ContactEntry, GROOM, BRIDE
from .location import LocationBlock, LocationPayload, GeoPoint
from .rsvp import RsvpBlock, RsvpPayload

# Union discriminée par kind, utilisable dans Pydantic avec discriminator
Block = Annotated[
    Union[
        HeaderBlock,
        ContentBlock,
        ImageBlock,
        ContactBlock,
        LocationBlock,
        RsvpBlock,
    ],
    Field(discriminator="kind"),
]

BLOCK_REGISTRY: dict = {
    "header":   HeaderBlock,
    "content":  ContentBlock,
    "image":    ImageBlock,
    "contact":  ContactBlock,
    "location": LocationBlock,
    "rsvp":     RsvpBlock,
}

BLOCK_KINDS = tuple(BLOCK_REGISTRY)

_BLOCK_ADAPTER: TypeAdapter = TypeAdapter(Block)


def block_class(kind: str) -> type:
    """Classe du bloc pour `kind`, UnknownBlockKindError sinon."""
    cls = BLOCK_REGISTRY.get(kind)
    if cls is None:
        from ..core.errors import UnknownBlockKindError
        raise UnknownBlockKindError(kind)
    return cls


def create_block(kind: str, **fields: Any) -> BaseBlock:
    """Nouveau bloc complet-par-défaut (payload vide mais rendable)."""
    return block_class(kind)(**fields)


def parse_block(data: dict) -> BaseBlock:
    """dict (JSON) → bloc typé selon `kind`."""
    return _BLOCK_ADAPTER.validate_python(data)


from .palette import PaletteItem, block_palette  # noqa: E402

__all__ = [
    # Base
    "BaseBlock", "BlockPayload", "BlockStyle", "default_style", "new_block_id",
    # Types
    "HeaderBlock", "HeaderPayload",
    "ContentBlock", "ContentPayload",
    "ImageBlock", "ImagePayload",
    "ContactBlock", "ContactPayload", "ContactEntry", "GROOM", "BRIDE",
    "LocationBlock", "LocationPayload", "GeoPoint",
    "RsvpBlock", "RsvpPayload",
    # Union + registry
    "Block", "BLOCK_REGISTRY", "BLOCK_KINDS",
    "block_class", "create_block", "parse_block",
    # Palette
    "PaletteItem", "block_palette",
]
