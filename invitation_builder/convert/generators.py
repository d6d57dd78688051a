"""
Génération du document initial depuis un template (+ fiche mariage optionnelle).

Document canonique : header, mot d'accueil, image (sauf catégorie minimal),
lieu, contacts, rsvp. Sans fiche, les champs texte reçoivent des
placeholders lisibles pour que le document se rende avant toute saisie ;
les champs formatés (date, heure, URL) restent vides.
"""
from typing import Any, Dict, List, Optional

from ..blocks import (
    BaseBlock, BlockStyle, GROOM, BRIDE,
    HeaderBlock, HeaderPayload,
    ContentBlock, ContentPayload,
    ImageBlock, ImagePayload,
    ContactBlock, ContactPayload, ContactEntry,
    LocationBlock, LocationPayload,
    RsvpBlock, RsvpPayload,
)
from ..core.document import BlockDocument
from ..core.templates import Template, TemplateCategory
from ..core.wedding import WeddingDetails
from .legacy import HEADER_BLOCK_ID, LOCATION_BLOCK_ID, CONTACT_BLOCK_ID, RSVP_BLOCK_ID

GREETING_BLOCK_ID   = "greeting-block"
MAIN_IMAGE_BLOCK_ID = "main-image-block"

PLACEHOLDER_GROOM    = "Prénom du marié"
PLACEHOLDER_BRIDE    = "Prénom de la mariée"
PLACEHOLDER_VENUE    = "Nom du lieu de réception"
PLACEHOLDER_ADDRESS  = "Adresse du lieu de réception"
PLACEHOLDER_PHONE    = "010-0000-0000"
DEFAULT_SUBTITLE     = "Nous nous marions"
DEFAULT_GREETING     = ("Nous avons la joie de vous annoncer notre mariage.\n"
                        "Nous serions heureux de vous compter parmi nous.")
DEFAULT_TITLE        = "Nouveau faire-part"

# champs de la fiche sans bloc dédié, conservés pour le rendu des templates
_EXTRA_FIELDS = ("custom_message", "dress_code", "meal_info", "special_notes",
                 "account_info", "groom_parents", "bride_parents", "background_image_url")


def _style(**overrides: Any) -> BlockStyle:
    base = dict(text_align="center", font_size="medium", padding="medium", margin="medium")
    base.update(overrides)
    return BlockStyle(**base)


def _contacts(details: Optional[WeddingDetails]) -> List[ContactEntry]:
    groom = details.groom_name if details else PLACEHOLDER_GROOM
    bride = details.bride_name if details else PLACEHOLDER_BRIDE
    contacts = []
    if details and details.groom_contact:
        contacts.append(ContactEntry(name=groom, relation=GROOM, phone=details.groom_contact))
    if details and details.bride_contact:
        contacts.append(ContactEntry(name=bride, relation=BRIDE, phone=details.bride_contact))
    # aucun numéro saisi → placeholders
    if not contacts:
        contacts = [
            ContactEntry(name=groom, relation=GROOM, phone=PLACEHOLDER_PHONE),
            ContactEntry(name=bride, relation=BRIDE, phone=PLACEHOLDER_PHONE),
        ]
    return contacts


def _info_extras(details: Optional[WeddingDetails]) -> Dict[str, Any]:
    if details is None:
        return {}
    dumped = details.model_dump(by_alias=True, include=set(_EXTRA_FIELDS), exclude_none=True)
    return {k: v for k, v in dumped.items() if v != ""}


def from_template(template: Template, details: Optional[WeddingDetails] = None) -> BlockDocument:
    """Template (+ fiche) → BlockDocument canonique, ordres 0..n-1."""
    d = details
    blocks: List[BaseBlock] = []

    blocks.append(HeaderBlock(
        id=HEADER_BLOCK_ID,
        style=_style(font_size="large", font_weight="bold", padding="large",
                     text_color=template.css_styles.get("primaryColor")),
        payload=HeaderPayload(
            groom_name=d.groom_name if d else PLACEHOLDER_GROOM,
            bride_name=d.bride_name if d else PLACEHOLDER_BRIDE,
            subtitle=DEFAULT_SUBTITLE,
            date=d.wedding_date if d else "",
            time=d.wedding_time if d else "",
        ),
    ))

    blocks.append(ContentBlock(
        id=GREETING_BLOCK_ID,
        style=_style(),
        payload=ContentPayload(
            title="Le mot des mariés",
            body=(d.custom_message if d and d.custom_message else DEFAULT_GREETING),
        ),
    ))

    if template.category != TemplateCategory.MINIMAL:
        url = (d.background_image_url if d else None) or template.preview_image_url or ""
        blocks.append(ImageBlock(
            id=MAIN_IMAGE_BLOCK_ID,
            style=BlockStyle(text_align="center", padding="medium", margin="medium"),
            payload=ImagePayload(url=url, alt="Photo des mariés", aspect_ratio="landscape"),
        ))

    blocks.append(LocationBlock(
        id=LOCATION_BLOCK_ID,
        style=_style(),
        payload=LocationPayload(
            venue_name=d.venue_name if d else PLACEHOLDER_VENUE,
            address=d.venue_address if d else PLACEHOLDER_ADDRESS,
            detail_address=d.venue_hall if d else None,
            parking_info=d.parking_info if d else None,
        ),
    ))

    blocks.append(ContactBlock(
        id=CONTACT_BLOCK_ID,
        style=_style(),
        payload=ContactPayload(title="Contacts", contacts=_contacts(d)),
    ))

    blocks.append(RsvpBlock(
        id=RSVP_BLOCK_ID,
        style=_style(),
        payload=RsvpPayload(
            enabled=d.rsvp_enabled if d else True,
            due_date=d.rsvp_deadline if d else None,
        ),
    ))

    for order, block in enumerate(blocks):
        block.order = order

    return BlockDocument(blocks=blocks, template_id=template.id, info_extras=_info_extras(d))


def extract_title(doc: BlockDocument) -> str:
    """« Marié ♥ Mariée » si le header porte les deux noms, titre par défaut sinon."""
    header = doc.first("header")
    if header is not None and header.payload.groom_name and header.payload.bride_name:
        return f"{header.payload.groom_name} ♥ {header.payload.bride_name}"
    return DEFAULT_TITLE
