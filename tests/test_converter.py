"""Tests conversion BlockDocument ⇄ format legacy."""
import pytest

from invitation_builder.blocks import (
    BlockStyle, ContactBlock, ContactEntry, ContactPayload, ContentBlock, ContentPayload,
    HeaderBlock, HeaderPayload, ImageBlock, ImagePayload, LocationBlock, LocationPayload,
    RsvpBlock, RsvpPayload,
)
from invitation_builder.convert import collapse_contacts, from_legacy_flat_state, to_legacy_flat_state
from invitation_builder.convert.legacy import CONTACT_BLOCK_ID, HEADER_BLOCK_ID, LOCATION_BLOCK_ID, RSVP_BLOCK_ID
from invitation_builder.core import BlockDocument, LegacyFlatState


def _contact_doc(*entries):
    return BlockDocument(blocks=[ContactBlock(
        id="c", payload=ContactPayload(contacts=[ContactEntry(**e) for e in entries]),
    )])


# ── Contacts ────────────────────────────────────────────────────────────────

def test_contacts_collapse_to_groom_and_bride():
    doc = _contact_doc(
        {"name": "Julien", "relation": "groom", "phone": "010-1"},
        {"name": "Camille", "relation": "bride", "phone": "010-2"},
        {"name": "Ami", "relation": "friend", "phone": "010-3"},
    )
    info = to_legacy_flat_state(doc).wedding_info
    assert info.groom_contact == "010-1"
    assert info.bride_contact == "010-2"
    assert "010-3" not in str(to_legacy_flat_state(doc).to_wire())


def test_last_contact_per_relation_wins():
    collapsed = collapse_contacts([
        ContactEntry(name="A", relation="groom", phone="010-1"),
        ContactEntry(name="B", relation="bride", phone="010-2"),
        ContactEntry(name="C", relation="groom", phone="010-9"),
    ])
    assert collapsed == {"groom_contact": "010-9", "bride_contact": "010-2"}


@pytest.mark.parametrize("relation", [" Groom", "GROOM", "bride ", "Bride"])
def test_relation_must_match_exactly(relation):
    assert collapse_contacts([ContactEntry(name="X", relation=relation, phone="010-5")]) == {}


def test_no_groom_or_bride_contact():
    info = to_legacy_flat_state(_contact_doc({"name": "Père", "relation": "father", "phone": "9"})).wedding_info
    assert info.groom_contact is None
    assert info.bride_contact is None


# ── Blocs → legacy ──────────────────────────────────────────────────────────

def test_empty_document():
    state = to_legacy_flat_state(BlockDocument())
    assert state.elements == []
    assert state.to_wire() == {"elements": [], "weddingInfo": {}}


def test_header_location_rsvp_fields():
    doc = BlockDocument(blocks=[
        HeaderBlock(id="h", payload=HeaderPayload(groom_name="Julien", bride_name="Camille",
                                                  date="2027-06-12", time="15:00")),
        LocationBlock(id="l", order=1, payload=LocationPayload(venue_name="Domaine", address="12 rue X",
                                                               parking_info="Parking P1")),
        RsvpBlock(id="r", order=2, payload=RsvpPayload(enabled=False, due_date="2027-05-01")),
    ])
    wire = to_legacy_flat_state(doc).to_wire()["weddingInfo"]
    assert wire["groomName"] == "Julien"
    assert wire["weddingDate"] == "2027-06-12"
    assert wire["weddingTime"] == "15:00"
    assert wire["venue"] == "Domaine"
    assert wire["address"] == "12 rue X"
    assert wire["parkingInfo"] == "Parking P1"
    assert wire["rsvpEnabled"] is False
    assert wire["rsvpDeadline"] == "2027-05-01"


def test_elements_laid_out_from_order():
    doc = BlockDocument(blocks=[
        HeaderBlock(id="h", order=0),
        ContentBlock(id="t", order=1, style=BlockStyle(font_size="large", text_color="#8b5a3c")),
        ImageBlock(id="i", order=2, payload=ImagePayload(url="/photo.jpg")),
    ])
    text, image = to_legacy_flat_state(doc).elements
    assert (text.type, text.position.x, text.position.y) == ("text", 50, 150)
    assert (text.size.width, text.size.height) == (200, 50)
    assert text.style["fontSize"] == "18px"
    assert text.style["color"] == "#8b5a3c"
    assert (image.type, image.content, image.position.y) == ("image", "/photo.jpg", 350)
    assert (image.size.width, image.size.height) == (200, 150)


def test_medium_text_is_14px():
    doc = BlockDocument(blocks=[ContentBlock(id="t")])
    assert to_legacy_flat_state(doc).elements[0].style["fontSize"] == "14px"


def test_hidden_blocks_still_converted():
    doc = BlockDocument(blocks=[ContentBlock(id="t", visible=False)])
    assert [e.id for e in to_legacy_flat_state(doc).elements] == ["t"]


def test_document_not_mutated():
    doc = BlockDocument(blocks=[ContentBlock(id="t", order=4)])
    before = doc.model_dump()
    to_legacy_flat_state(doc)
    assert doc.model_dump() == before


def test_info_extras_carried_out():
    doc = BlockDocument(info_extras={"dressCode": "Chic"})
    assert to_legacy_flat_state(doc).to_wire()["weddingInfo"]["dressCode"] == "Chic"


# ── Legacy → blocs ──────────────────────────────────────────────────────────

_WIRE = {
    "elements": [
        {"id": "e1", "type": "text", "content": "Bienvenue",
         "style": {"fontSize": "20px", "textAlign": "left", "fontWeight": "bold", "color": "#111"}},
        {"id": "d1", "type": "divider"},
        {"id": "e2", "type": "image", "content": "/cover.jpg"},
    ],
    "weddingInfo": {
        "groomName": "Julien", "brideName": "Camille", "weddingDate": "2027-06-12",
        "venue": "Domaine", "address": "12 rue X",
        "groomContact": "010-1111-2222",
        "rsvpEnabled": True,
        "dressCode": "Chic",
    },
}


def test_from_legacy_block_sequence():
    doc = from_legacy_flat_state(LegacyFlatState.model_validate(_WIRE), invitation_id="inv-1")
    seq = doc.sorted_blocks()
    assert [b.id for b in seq] == [HEADER_BLOCK_ID, LOCATION_BLOCK_ID, CONTACT_BLOCK_ID, RSVP_BLOCK_ID, "e1", "e2"]
    assert [b.order for b in seq] == list(range(6))
    assert doc.invitation_id == "inv-1"


def test_from_legacy_fields():
    doc = from_legacy_flat_state(LegacyFlatState.model_validate(_WIRE))
    header = doc.get(HEADER_BLOCK_ID)
    assert header.payload.groom_name == "Julien"
    assert header.payload.time == ""
    contacts = doc.get(CONTACT_BLOCK_ID).payload.contacts
    assert [(c.name, c.relation, c.phone) for c in contacts] == [("Julien", "groom", "010-1111-2222")]
    text = doc.get("e1")
    assert text.payload.body == "Bienvenue"
    assert (text.style.font_size, text.style.text_align, text.style.font_weight) == ("large", "left", "bold")
    assert doc.get("e2").payload.url == "/cover.jpg"


def test_dividers_dropped():
    doc = from_legacy_flat_state(LegacyFlatState.model_validate(_WIRE))
    assert "d1" not in doc


def test_legacy_extras_kept():
    doc = from_legacy_flat_state(LegacyFlatState.model_validate(_WIRE))
    assert doc.info_extras == {"dressCode": "Chic"}
    assert to_legacy_flat_state(doc).to_wire()["weddingInfo"]["dressCode"] == "Chic"


def test_only_present_groups_generated():
    state = LegacyFlatState.model_validate({"weddingInfo": {"venue": "Domaine"}})
    doc = from_legacy_flat_state(state)
    assert [b.kind for b in doc.sorted_blocks()] == ["location"]


def test_empty_state():
    assert len(from_legacy_flat_state(LegacyFlatState())) == 0


def test_colliding_element_id_renamed():
    state = LegacyFlatState.model_validate({
        "elements": [{"id": "x", "type": "text"}, {"id": "x", "type": "text"}],
    })
    doc = from_legacy_flat_state(state)
    ids = [b.id for b in doc.sorted_blocks()]
    assert ids[0] == "x"
    assert len(set(ids)) == 2


def test_round_trip_keeps_essentials():
    doc = BlockDocument(blocks=[
        HeaderBlock(id="h", payload=HeaderPayload(groom_name="Julien", bride_name="Camille")),
        ContentBlock(id="t", order=1, payload=ContentPayload(title="Titre perdu", body="Corps")),
    ])
    again = from_legacy_flat_state(to_legacy_flat_state(doc))
    assert again.get(HEADER_BLOCK_ID).payload.groom_name == "Julien"
    body = again.get("t")
    assert body.payload.body == "Corps"
    assert body.payload.title is None
