"""
Contexte de rendu — map plate placeholder → texte, dérivée d'un document ou du format legacy.
"""
from typing import Any, Dict

from ..core.document import BlockDocument
from ..core.legacy import LegacyFlatState
from .legacy import collapse_contacts

RenderContext = Dict[str, str]


def _put(ctx: RenderContext, key: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, bool):
        value = "true" if value else "false"
    ctx[key] = str(value)


def _extras(extras: Dict[str, Any]) -> RenderContext:
    ctx: RenderContext = {}
    for key, value in extras.items():
        if isinstance(value, (str, int, float, bool)):
            _put(ctx, key, value)
    return ctx


def context_from_document(doc: BlockDocument) -> RenderContext:
    """Seuls les blocs visibles contribuent ; le premier bloc de chaque type l'emporte."""
    ctx = _extras(doc.info_extras)

    header = doc.first("header", visible_only=True)
    if header is not None:
        p = header.payload
        _put(ctx, "groomName", p.groom_name)
        _put(ctx, "brideName", p.bride_name)
        _put(ctx, "weddingDate", p.date)
        _put(ctx, "weddingTime", p.time)
        _put(ctx, "subtitle", p.subtitle)

    location = doc.first("location", visible_only=True)
    if location is not None:
        p = location.payload
        _put(ctx, "venueName", p.venue_name)
        _put(ctx, "venueAddress", p.address)
        _put(ctx, "detailAddress", p.detail_address)
        _put(ctx, "parkingInfo", p.parking_info)
        _put(ctx, "transportInfo", p.transport_info)

    contact = doc.first("contact", visible_only=True)
    if contact is not None:
        collapsed = collapse_contacts(contact.payload.contacts)
        _put(ctx, "groomContact", collapsed.get("groom_contact"))
        _put(ctx, "brideContact", collapsed.get("bride_contact"))

    content = doc.first("content", visible_only=True)
    if content is not None:
        _put(ctx, "customMessage", content.payload.body)

    image = doc.first("image", visible_only=True)
    if image is not None:
        _put(ctx, "backgroundImageUrl", image.payload.url)

    rsvp = doc.first("rsvp", visible_only=True)
    if rsvp is not None:
        _put(ctx, "rsvpEnabled", rsvp.payload.enabled)
        _put(ctx, "rsvpDeadline", rsvp.payload.due_date)

    return ctx


def context_from_legacy(state: LegacyFlatState) -> RenderContext:
    info = state.wedding_info
    ctx = _extras(info.extras())

    _put(ctx, "groomName", info.groom_name)
    _put(ctx, "brideName", info.bride_name)
    _put(ctx, "weddingDate", info.wedding_date)
    _put(ctx, "weddingTime", info.wedding_time)
    _put(ctx, "venueName", info.venue)
    _put(ctx, "venueAddress", info.address)
    _put(ctx, "detailAddress", info.detail_address)
    _put(ctx, "parkingInfo", info.parking_info)
    _put(ctx, "transportInfo", info.transport_info)
    _put(ctx, "groomContact", info.groom_contact)
    _put(ctx, "brideContact", info.bride_contact)
    _put(ctx, "rsvpEnabled", info.rsvp_enabled)
    _put(ctx, "rsvpDeadline", info.rsvp_deadline)

    first_text = next((el for el in state.elements if el.type == "text"), None)
    if first_text is not None and "customMessage" not in ctx:
        _put(ctx, "customMessage", first_text.content)
    first_image = next((el for el in state.elements if el.type == "image"), None)
    if first_image is not None and "backgroundImageUrl" not in ctx:
        _put(ctx, "backgroundImageUrl", first_image.content)

    return ctx
