"""Tests contexte de rendu — document et format legacy."""
from invitation_builder.blocks import (
    ContactBlock, ContactEntry, ContactPayload, ContentBlock, ContentPayload,
    HeaderBlock, HeaderPayload, RsvpBlock, RsvpPayload,
)
from invitation_builder.convert import context_from_document, context_from_legacy, from_template
from invitation_builder.core import BlockDocument, LegacyFlatState, get_template
from invitation_builder.renderer import render


def test_context_from_header_and_rsvp():
    doc = BlockDocument(blocks=[
        HeaderBlock(id="h", payload=HeaderPayload(groom_name="Julien", bride_name="Camille", date="2027-06-12")),
        RsvpBlock(id="r", order=1, payload=RsvpPayload(enabled=False)),
    ])
    ctx = context_from_document(doc)
    assert ctx["groomName"] == "Julien"
    assert ctx["weddingDate"] == "2027-06-12"
    assert ctx["rsvpEnabled"] == "false"
    assert "rsvpDeadline" not in ctx
    assert "venueName" not in ctx


def test_hidden_blocks_ignored():
    doc = BlockDocument(blocks=[
        ContentBlock(id="a", payload=ContentPayload(body="caché"), visible=False),
        ContentBlock(id="b", order=1, payload=ContentPayload(body="visible")),
    ])
    assert context_from_document(doc)["customMessage"] == "visible"


def test_contact_context_collapsed():
    doc = BlockDocument(blocks=[ContactBlock(id="c", payload=ContactPayload(contacts=[
        ContactEntry(name="Ami", relation="friend", phone="010-3"),
        ContactEntry(name="Camille", relation="bride", phone="010-2"),
    ]))])
    ctx = context_from_document(doc)
    assert ctx == {"brideContact": "010-2"}


def test_extras_in_context():
    doc = BlockDocument(info_extras={"dressCode": "Chic", "nested": {"a": 1}})
    assert context_from_document(doc) == {"dressCode": "Chic"}


def test_block_wins_over_extras():
    doc = BlockDocument(
        blocks=[ContentBlock(id="c", payload=ContentPayload(body="Texte du bloc"))],
        info_extras={"customMessage": "Texte de la fiche"},
    )
    assert context_from_document(doc)["customMessage"] == "Texte du bloc"


def test_context_from_legacy():
    state = LegacyFlatState.model_validate({
        "elements": [{"id": "e", "type": "text", "content": "Bonjour"},
                     {"id": "i", "type": "image", "content": "/p.jpg"}],
        "weddingInfo": {"groomName": "Julien", "venue": "Domaine", "rsvpEnabled": True, "mealInfo": "Buffet"},
    })
    ctx = context_from_legacy(state)
    assert ctx["groomName"] == "Julien"
    assert ctx["venueName"] == "Domaine"
    assert ctx["rsvpEnabled"] == "true"
    assert ctx["mealInfo"] == "Buffet"
    assert ctx["customMessage"] == "Bonjour"
    assert ctx["backgroundImageUrl"] == "/p.jpg"


def test_seeded_document_renders_its_template():
    template = get_template("classic-elegant")
    doc = from_template(template)
    html = render(template.html_structure, context_from_document(doc))
    assert "Prénom du marié &amp; Prénom de la mariée" in html
    assert "Pas de stationnement sur place" in html
