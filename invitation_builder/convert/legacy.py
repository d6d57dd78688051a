"""
Conversion BlockDocument ⇄ format legacy (éléments positionnés + wedding-info).

Conversion avec perte dans les deux sens :
- blocs → legacy : un bloc contact ne garde qu'un téléphone « groom » et un
  « bride » (dernier trouvé pour chaque lien) ; titres, sous-titre, coordonnées,
  visibilité et styles fins sont perdus ; la mise en page 2D est recalculée
  depuis l'ordre, jamais conservée ;
- legacy → blocs : les blocs header/location/contact/rsvp sont régénérés
  depuis la fiche (ordre fixe), puis les éléments text/image deviennent des
  blocs content/image dans leur ordre d'origine. Les dividers sont ignorés.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..blocks import (
    BaseBlock, BlockStyle, new_block_id, GROOM, BRIDE,
    HeaderBlock, HeaderPayload,
    ContentBlock, ContentPayload,
    ImageBlock, ImagePayload,
    ContactBlock, ContactPayload, ContactEntry,
    LocationBlock, LocationPayload,
    RsvpBlock, RsvpPayload,
)
from ..core.document import BlockDocument
from ..core.legacy import LegacyElement, LegacyFlatState, Position, Size, WeddingInfo

log = logging.getLogger(__name__)

HEADER_BLOCK_ID   = "header-block"
LOCATION_BLOCK_ID = "location-block"
CONTACT_BLOCK_ID  = "contact-block"
RSVP_BLOCK_ID     = "rsvp-block"

# Mise en page synthétique du canevas legacy : x fixe, y dérivé de l'ordre
_CANVAS_X = 50
_CANVAS_Y = 50
_TEXT_STEP,  _TEXT_SIZE  = 100, Size(width=200, height=50)
_IMAGE_STEP, _IMAGE_SIZE = 150, Size(width=200, height=150)

_CONTACT_FIELDS = {GROOM: "groom_contact", BRIDE: "bride_contact"}


def _header_style() -> BlockStyle:
    return BlockStyle(text_align="center", font_size="large", font_weight="bold",
                      padding="large", margin="medium")


def _section_style() -> BlockStyle:
    return BlockStyle(text_align="center", font_size="medium", padding="medium", margin="medium")


def _present(*values: Any) -> bool:
    return any(v not in (None, "") for v in values)


# ── Blocs → legacy ──────────────────────────────────────────────────────────

def collapse_contacts(contacts: Iterable[ContactEntry]) -> Dict[str, str]:
    """
    Réduit une liste de contacts à au plus deux champs scalaires.
    Seuls les liens exactement "groom" et "bride" survivent ; pour un même lien,
    le dernier contact l'emporte. Le reste est ignoré.
    """
    collapsed: Dict[str, str] = {}
    for entry in contacts:
        field = _CONTACT_FIELDS.get(entry.relation)
        if field is None:
            log.debug("Contact ignoré à l'aplatissement : %s (%s)", entry.name, entry.relation)
            continue
        if field in collapsed:
            log.debug("Contact %s écrasé par %s (%s)", collapsed[field], entry.phone, entry.relation)
        collapsed[field] = entry.phone
    return collapsed


def _text_element(block: ContentBlock, index: int) -> LegacyElement:
    st = block.style
    return LegacyElement(
        id=block.id,
        type="text",
        content=block.payload.body,
        position=Position(x=_CANVAS_X, y=_CANVAS_Y + index * _TEXT_STEP),
        size=_TEXT_SIZE,
        style={
            "fontSize":   "18px" if st.font_size == "large" else "14px",
            "fontFamily": "Arial",
            "color":      st.text_color or "#000000",
            "textAlign":  st.text_align or "center",
            "fontWeight": st.font_weight or "normal",
        },
    )


def _image_element(block: ImageBlock, index: int) -> LegacyElement:
    return LegacyElement(
        id=block.id,
        type="image",
        content=block.payload.url,
        position=Position(x=_CANVAS_X, y=_CANVAS_Y + index * _IMAGE_STEP),
        size=_IMAGE_SIZE,
    )


def to_legacy_flat_state(doc: BlockDocument) -> LegacyFlatState:
    """BlockDocument → LegacyFlatState (fonction pure, le document n'est pas modifié)."""
    info: Dict[str, Any] = dict(doc.info_extras)
    elements: List[LegacyElement] = []

    for index, block in enumerate(doc.sorted_blocks()):
        p = block.payload
        if block.kind == "header":
            info.update(groom_name=p.groom_name, bride_name=p.bride_name,
                        wedding_date=p.date, wedding_time=p.time)
        elif block.kind == "location":
            info.update(venue=p.venue_name, address=p.address, detail_address=p.detail_address,
                        parking_info=p.parking_info, transport_info=p.transport_info)
        elif block.kind == "contact":
            info.update(collapse_contacts(p.contacts))
        elif block.kind == "rsvp":
            info.update(rsvp_enabled=p.enabled, rsvp_deadline=p.due_date)
        elif block.kind == "content":
            elements.append(_text_element(block, index))
        elif block.kind == "image":
            elements.append(_image_element(block, index))

    return LegacyFlatState(elements=elements, wedding_info=WeddingInfo(**info))


# ── Legacy → blocs ──────────────────────────────────────────────────────────

def _font_size(value: Any) -> str:
    try:
        px = float(str(value).lower().removesuffix("px"))
    except ValueError:
        return "medium"
    return "large" if px >= 18 else "medium"


def _content_from_element(el: LegacyElement, block_id: str, order: int) -> ContentBlock:
    style = el.style
    return ContentBlock(
        id=block_id,
        order=order,
        payload=ContentPayload(title=None, body=el.content, rich_text=False),
        style=BlockStyle(
            text_align=style.get("textAlign") if style.get("textAlign") in ("left", "center", "right") else "center",
            font_size=_font_size(style.get("fontSize", "")),
            font_weight="bold" if style.get("fontWeight") == "bold" else "normal",
            text_color=style.get("color"),
            padding="medium",
            margin="medium",
        ),
    )


def _image_from_element(el: LegacyElement, block_id: str, order: int) -> ImageBlock:
    return ImageBlock(
        id=block_id,
        order=order,
        payload=ImagePayload(url=el.content, alt="Image", caption="", aspect_ratio="landscape"),
        style=BlockStyle(text_align="center", padding="medium", margin="medium"),
    )


def _blocks_from_info(info: WeddingInfo) -> List[BaseBlock]:
    """Régénère header, location, contact, rsvp (dans cet ordre) pour chaque groupe présent."""
    blocks: List[BaseBlock] = []

    if _present(info.groom_name, info.bride_name, info.wedding_date, info.wedding_time):
        blocks.append(HeaderBlock(
            id=HEADER_BLOCK_ID,
            style=_header_style(),
            payload=HeaderPayload(
                groom_name=info.groom_name or "",
                bride_name=info.bride_name or "",
                date=info.wedding_date or "",
                time=info.wedding_time or "",
            ),
        ))

    if _present(info.venue, info.address, info.detail_address, info.parking_info, info.transport_info):
        blocks.append(LocationBlock(
            id=LOCATION_BLOCK_ID,
            style=_section_style(),
            payload=LocationPayload(
                venue_name=info.venue or "",
                address=info.address or "",
                detail_address=info.detail_address,
                parking_info=info.parking_info,
                transport_info=info.transport_info,
            ),
        ))

    if _present(info.groom_contact, info.bride_contact):
        contacts = []
        if _present(info.groom_contact):
            contacts.append(ContactEntry(name=info.groom_name or "Marié", relation=GROOM, phone=info.groom_contact))
        if _present(info.bride_contact):
            contacts.append(ContactEntry(name=info.bride_name or "Mariée", relation=BRIDE, phone=info.bride_contact))
        blocks.append(ContactBlock(
            id=CONTACT_BLOCK_ID,
            style=_section_style(),
            payload=ContactPayload(title="Contacts", contacts=contacts),
        ))

    if info.rsvp_enabled is not None or _present(info.rsvp_deadline):
        blocks.append(RsvpBlock(
            id=RSVP_BLOCK_ID,
            style=_section_style(),
            payload=RsvpPayload(
                enabled=True if info.rsvp_enabled is None else info.rsvp_enabled,
                due_date=info.rsvp_deadline,
            ),
        ))

    return blocks


def from_legacy_flat_state(
    state: LegacyFlatState,
    invitation_id: Optional[str] = None,
    template_id: Optional[str] = None,
) -> BlockDocument:
    """LegacyFlatState → BlockDocument (ordres 0..n-1, ids uniques)."""
    blocks = _blocks_from_info(state.wedding_info)
    used = {b.id for b in blocks}

    for el in state.elements:
        if el.type == "divider":
            log.debug("Élément divider ignoré : %s", el.id)
            continue
        block_id = el.id
        if not block_id or block_id in used:
            block_id = new_block_id()
            log.debug("Identifiant d'élément %r déjà pris, remplacé par %s", el.id, block_id)
        used.add(block_id)
        if el.type == "text":
            blocks.append(_content_from_element(el, block_id, 0))
        else:
            blocks.append(_image_from_element(el, block_id, 0))

    for order, block in enumerate(blocks):
        block.order = order

    return BlockDocument(
        blocks=blocks,
        invitation_id=invitation_id,
        template_id=template_id,
        info_extras=state.wedding_info.extras(),
    )
