"""Tests BlockDocumentController — mutations, invariants, historique, notifications."""
import pytest
from pydantic import ValidationError

from invitation_builder.blocks import ContentBlock, HeaderBlock
from invitation_builder.convert import from_template
from invitation_builder.core import BlockDocument, BlockNotFoundError, UnknownBlockKindError, get_template
from invitation_builder.editor import BlockDocumentController


def _ids(ctl):
    return [b.id for b in ctl.document.sorted_blocks()]


def _orders(ctl):
    return [b.order for b in ctl.document.sorted_blocks()]


def _seeded():
    return BlockDocumentController(from_template(get_template("classic-elegant")))


def _assert_invariants(ctl):
    orders = _orders(ctl)
    assert all(a < b for a, b in zip(orders, orders[1:]))
    ids = [b.id for b in ctl.document.blocks]
    assert len(ids) == len(set(ids))


# ── add / remove ────────────────────────────────────────────────────────────

def test_add_appends_at_max_plus_one():
    ctl = BlockDocumentController()
    ctl.add("header")
    ctl.add("content")
    assert _orders(ctl) == [0, 1]
    assert [b.kind for b in ctl.document.sorted_blocks()] == ["header", "content"]


def test_add_after_inserts_in_place():
    ctl = _seeded()
    ctl.add("image", after="header-block")
    seq = ctl.document.sorted_blocks()
    assert seq[0].id == "header-block"
    assert seq[1].kind == "image"
    assert seq[2].id == "greeting-block"
    _assert_invariants(ctl)


def test_add_unknown_kind_leaves_document_unchanged():
    ctl = _seeded()
    before = _ids(ctl)
    with pytest.raises(UnknownBlockKindError):
        ctl.add("video")
    assert _ids(ctl) == before
    assert ctl.revision == 0


def test_remove_keeps_gaps():
    ctl = _seeded()
    ctl.remove("main-image-block")
    assert "main-image-block" not in ctl.document
    assert _orders(ctl) == [0, 1, 3, 4, 5]
    _assert_invariants(ctl)


def test_remove_unknown_id():
    ctl = _seeded()
    with pytest.raises(BlockNotFoundError):
        ctl.remove("nope")
    assert len(ctl.document) == 6


# ── update ──────────────────────────────────────────────────────────────────

def test_update_merges_payload():
    ctl = _seeded()
    ctl.update("header-block", {"groom_name": "Julien"})
    p = ctl.document.get("header-block").payload
    assert p.groom_name == "Julien"
    assert p.subtitle == "Nous nous marions"


def test_update_unknown_field_rejected():
    ctl = _seeded()
    with pytest.raises(ValueError):
        ctl.update("header-block", {"venue_name": "Domaine"})
    assert ctl.revision == 0


def test_update_invalid_value_rejected():
    ctl = _seeded()
    with pytest.raises(ValidationError):
        ctl.update("main-image-block", {"aspect_ratio": "panorama"})
    assert ctl.document.get("main-image-block").payload.aspect_ratio == "landscape"


def test_update_style_merges():
    ctl = _seeded()
    ctl.update_style("greeting-block", {"text_align": "left"})
    st = ctl.document.get("greeting-block").style
    assert st.text_align == "left"
    assert st.padding == "medium"


# ── duplicate ───────────────────────────────────────────────────────────────

def test_duplicate_inserts_after_source():
    ctl = _seeded()
    n = len(ctl.document)
    ctl.update("greeting-block", {"body": "Mot d'accueil"})
    ctl.duplicate("greeting-block")
    seq = ctl.document.sorted_blocks()
    assert len(ctl.document) == n + 1
    clone = seq[2]
    assert seq[1].id == "greeting-block"
    assert clone.id != "greeting-block"
    assert clone.payload == seq[1].payload
    assert clone.payload is not seq[1].payload
    _assert_invariants(ctl)


def test_duplicate_clone_is_independent():
    ctl = _seeded()
    ctl.duplicate("contact-block")
    clone = ctl.document.sorted_blocks()[ctl.document.get("contact-block").order + 1]
    clone.payload.contacts[0].phone = "010-9999-9999"
    assert ctl.document.get("contact-block").payload.contacts[0].phone == "010-0000-0000"


def test_duplicate_last_block():
    ctl = _seeded()
    ctl.duplicate("rsvp-block")
    seq = ctl.document.sorted_blocks()
    assert seq[-2].id == "rsvp-block"
    assert seq[-1].kind == "rsvp"


# ── move ────────────────────────────────────────────────────────────────────

def test_move_up_swaps_with_previous():
    ctl = _seeded()
    ctl.move_up("greeting-block")
    assert _ids(ctl)[:2] == ["greeting-block", "header-block"]
    _assert_invariants(ctl)


def test_move_boundaries_are_noops():
    ctl = _seeded()
    before = _ids(ctl)
    ctl.move_up("header-block")
    ctl.move_down("rsvp-block")
    assert _ids(ctl) == before
    assert ctl.revision == 0


def test_move_up_then_down_is_identity():
    ctl = _seeded()
    before = [(b.id, b.order) for b in ctl.document.sorted_blocks()]
    ctl.move_up("location-block")
    ctl.move_down("location-block")
    assert [(b.id, b.order) for b in ctl.document.sorted_blocks()] == before


def test_move_across_gap():
    ctl = _seeded()
    ctl.remove("main-image-block")
    ctl.move_up("location-block")
    assert _ids(ctl)[1:3] == ["location-block", "greeting-block"]
    _assert_invariants(ctl)


def test_move_with_ties_normalizes_first():
    doc = BlockDocument(blocks=[ContentBlock(id="a", order=0), ContentBlock(id="b", order=0),
                                ContentBlock(id="c", order=0)])
    ctl = BlockDocumentController(doc)
    ctl.move_down("a")
    assert _ids(ctl) == ["b", "a", "c"]
    assert _orders(ctl) == [0, 1, 2]


# ── Invariants après une séquence quelconque ────────────────────────────────

def test_invariants_hold_after_mixed_operations():
    ctl = _seeded()
    ctl.add("content", after="header-block")
    ctl.duplicate("location-block")
    ctl.remove("greeting-block")
    ctl.move_down("header-block")
    ctl.add("image")
    ctl.move_up(_ids(ctl)[-1])
    _assert_invariants(ctl)


# ── Visibilité / édition ────────────────────────────────────────────────────

def test_set_visible():
    ctl = _seeded()
    ctl.set_visible("main-image-block", False)
    assert "main-image-block" not in [b.id for b in ctl.visible_blocks()]
    assert ctl.revision == 1
    ctl.set_visible("main-image-block", False)
    assert ctl.revision == 1


def test_toggle_editing_is_exclusive_and_not_dirty():
    ctl = _seeded()
    ctl.toggle_editing("header-block")
    ctl.toggle_editing("greeting-block")
    editing = [b.id for b in ctl.document.blocks if b.editing]
    assert editing == ["greeting-block"]
    ctl.toggle_editing("greeting-block")
    assert not any(b.editing for b in ctl.document.blocks)
    assert ctl.dirty is False


def test_visible_blocks_are_copies():
    ctl = _seeded()
    projection = ctl.visible_blocks()
    assert isinstance(projection, tuple)
    projection[0].visible = False
    assert ctl.document.get(projection[0].id).visible is True


# ── Validation / normalisation ──────────────────────────────────────────────

def test_validate_reports_incomplete_visible_blocks():
    ctl = BlockDocumentController()
    ctl.add("header")
    ctl.add("content")
    invalid = ctl.validate()
    assert [b.kind for b in invalid] == ["header"]
    ctl.set_visible(invalid[0].id, False)
    assert ctl.validate() == []


def test_normalize_closes_gaps():
    ctl = _seeded()
    ctl.remove("main-image-block")
    ctl.normalize()
    assert _orders(ctl) == [0, 1, 2, 3, 4]
    rev = ctl.revision
    ctl.normalize()
    assert ctl.revision == rev


def test_load_resets_history():
    ctl = _seeded()
    ctl.add("content")
    doc = BlockDocument(blocks=[HeaderBlock(id="h", order=4), ContentBlock(id="c", order=9)])
    ctl.load(doc)
    assert _orders(ctl) == [0, 1]
    assert not ctl.can_undo
    assert ctl.dirty is False


# ── Historique ──────────────────────────────────────────────────────────────

def test_undo_redo():
    ctl = _seeded()
    ctl.update("header-block", {"groom_name": "Julien"})
    ctl.remove("rsvp-block")
    ctl.undo()
    assert "rsvp-block" in ctl.document
    ctl.undo()
    assert ctl.document.get("header-block").payload.groom_name != "Julien"
    assert not ctl.can_undo
    ctl.redo()
    assert ctl.document.get("header-block").payload.groom_name == "Julien"
    assert ctl.can_redo


def test_new_mutation_clears_redo():
    ctl = _seeded()
    ctl.add("content")
    ctl.undo()
    ctl.add("image")
    assert not ctl.can_redo


def test_history_limit():
    ctl = BlockDocumentController(history_limit=2)
    for _ in range(4):
        ctl.add("content")
    ctl.undo()
    ctl.undo()
    ctl.undo()
    assert len(ctl.document) == 2


def test_undo_on_empty_history_is_noop():
    ctl = BlockDocumentController()
    ctl.undo()
    ctl.redo()
    assert ctl.revision == 0


# ── Notifications ───────────────────────────────────────────────────────────

def test_listeners_receive_mutations():
    ctl = _seeded()
    seen = []
    unsubscribe = ctl.subscribe(seen.append)
    ctl.update("header-block", {"groom_name": "Julien"})
    ctl.move_down("header-block")
    assert [(m.op, m.block_id, m.revision) for m in seen] == [
        ("update", "header-block", 1),
        ("move_down", "header-block", 2),
    ]
    unsubscribe()
    ctl.add("content")
    assert len(seen) == 2


def test_mutation_marks_dirty_and_touches():
    ctl = _seeded()
    ctl.document.last_modified = "2000-01-01T00:00:00+00:00"
    ctl.add("content")
    assert ctl.dirty is True
    assert ctl.document.last_modified != "2000-01-01T00:00:00+00:00"
    ctl.mark_clean()
    assert ctl.dirty is False


def test_failing_listener_does_not_fail_mutation():
    ctl = _seeded()
    seen = []

    def broken(mutation):
        raise RuntimeError("listener cassé")

    ctl.subscribe(broken)
    ctl.subscribe(seen.append)
    ctl.add("content")
    assert len(ctl.document) == 7
    assert [m.op for m in seen] == ["add"]
    assert ctl.revision == 1
