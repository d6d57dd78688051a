"""Conversion — document ⇄ legacy, génération depuis template, contexte de rendu."""
from .legacy import collapse_contacts, from_legacy_flat_state, to_legacy_flat_state
from .generators import extract_title, from_template
from .context import RenderContext, context_from_document, context_from_legacy

__all__ = [
    "collapse_contacts",
    "from_legacy_flat_state",
    "to_legacy_flat_state",
    "extract_title",
    "from_template",
    "RenderContext",
    "context_from_document",
    "context_from_legacy",
]
