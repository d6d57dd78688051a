"""
Invitation Builder v0.3 — éditeur de faire-parts de mariage par blocs.

Usage (document de blocs):
    >>> from invitation_builder import BlockDocumentController, get_template, from_template
    >>> ctl = BlockDocumentController(from_template(get_template("classic-elegant")))
    >>> ctl.add("content")

Usage (format legacy):
    >>> from invitation_builder import to_legacy_flat_state, from_legacy_flat_state
    >>> state = to_legacy_flat_state(ctl.document)

Usage (template HTML):
    >>> from invitation_builder import render, context_from_document
    >>> html = render(get_template("classic-elegant").html_structure, context_from_document(ctl.document))
"""

# ── Blocs ───────────────────────────────────────────────────────────────────
from .blocks import (
    BaseBlock, BlockPayload, BlockStyle, default_style, new_block_id,
    HeaderBlock, HeaderPayload,
    ContentBlock, ContentPayload,
    ImageBlock, ImagePayload,
    ContactBlock, ContactPayload, ContactEntry, GROOM, BRIDE,
    LocationBlock, LocationPayload, GeoPoint,
    RsvpBlock, RsvpPayload,
    Block, BLOCK_REGISTRY, BLOCK_KINDS,
    block_class, create_block, parse_block,
    PaletteItem, block_palette,
)

# ── Core ────────────────────────────────────────────────────────────────────
from .core import (
    InvitationBuilderError, UnknownBlockKindError, BlockNotFoundError,
    DocumentInvariantError, TemplateNotFoundError,
    BlockDocument,
    LegacyElement, LegacyFlatState, Position, Size, WeddingInfo,
    SAMPLE_CONTEXT, Template, TemplateCategory, get_template, list_templates,
    WeddingDetails,
)

# ── Conversion ──────────────────────────────────────────────────────────────
from .convert import (
    collapse_contacts, from_legacy_flat_state, to_legacy_flat_state,
    extract_title, from_template,
    RenderContext, context_from_document, context_from_legacy,
)

# ── Rendu ───────────────────────────────────────────────────────────────────
from .renderer import (
    render, substitute, resolve_directives, is_truthy,
    render_block, render_document, generate_page_css,
)

# ── Édition ─────────────────────────────────────────────────────────────────
from .editor import (
    BlockDocumentController, Mutation,
    EditingSession, SaveResult, SessionState, INCOMPLETE_BLOCKS,
)

__version__ = "0.3.0"

__all__ = [
    # blocs
    "BaseBlock", "BlockPayload", "BlockStyle", "default_style", "new_block_id",
    "HeaderBlock", "HeaderPayload",
    "ContentBlock", "ContentPayload",
    "ImageBlock", "ImagePayload",
    "ContactBlock", "ContactPayload", "ContactEntry", "GROOM", "BRIDE",
    "LocationBlock", "LocationPayload", "GeoPoint",
    "RsvpBlock", "RsvpPayload",
    "Block", "BLOCK_REGISTRY", "BLOCK_KINDS",
    "block_class", "create_block", "parse_block",
    "PaletteItem", "block_palette",
    # core
    "InvitationBuilderError", "UnknownBlockKindError", "BlockNotFoundError",
    "DocumentInvariantError", "TemplateNotFoundError",
    "BlockDocument",
    "LegacyElement", "LegacyFlatState", "Position", "Size", "WeddingInfo",
    "SAMPLE_CONTEXT", "Template", "TemplateCategory", "get_template", "list_templates",
    "WeddingDetails",
    # conversion
    "collapse_contacts", "from_legacy_flat_state", "to_legacy_flat_state",
    "extract_title", "from_template",
    "RenderContext", "context_from_document", "context_from_legacy",
    # rendu
    "render", "substitute", "resolve_directives", "is_truthy",
    "render_block", "render_document", "generate_page_css",
    # édition
    "BlockDocumentController", "Mutation",
    "EditingSession", "SaveResult", "SessionState", "INCOMPLETE_BLOCKS",
]
