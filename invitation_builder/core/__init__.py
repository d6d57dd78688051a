"""Core — document, format legacy, templates, fiche mariage, erreurs."""
from .errors import (
    InvitationBuilderError,
    UnknownBlockKindError,
    BlockNotFoundError,
    DocumentInvariantError,
    TemplateNotFoundError,
)
from .document import BlockDocument
from .legacy import LegacyElement, LegacyFlatState, Position, Size, WeddingInfo
from .templates import (
    SAMPLE_CONTEXT,
    Template,
    TemplateCategory,
    get_template,
    list_templates,
)
from .wedding import WeddingDetails

__all__ = [
    "InvitationBuilderError",
    "UnknownBlockKindError",
    "BlockNotFoundError",
    "DocumentInvariantError",
    "TemplateNotFoundError",
    "BlockDocument",
    "LegacyElement",
    "LegacyFlatState",
    "Position",
    "Size",
    "WeddingInfo",
    "SAMPLE_CONTEXT",
    "Template",
    "TemplateCategory",
    "get_template",
    "list_templates",
    "WeddingDetails",
]
