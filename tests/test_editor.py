"""Tests session d'édition — intents, sélection, sauvegarde asynchrone, abandon."""
import asyncio
from unittest.mock import MagicMock

import pytest

from funnel_builder import database
from funnel_builder.blocks import HeadingBlock, TextBlock
from funnel_builder.core import PageLayout, ParentRecord, PersistenceFailure
from funnel_builder.editor import EditorSession
from funnel_builder.engine import Selected, Unselected
from funnel_builder.persistence import LayoutStore


def _record(page_layout=None):
    return ParentRecord(kind="campaigns", id="c1", steps=[
        {"id": "initial_data", "label": "Seus Dados", "order": 0, "page_layout": page_layout},
    ])


@pytest.fixture
def store():
    store = MagicMock(spec=LayoutStore)
    store.save_layout.side_effect = lambda kind, rid, sid, doc: _record(doc.to_json())
    return store


@pytest.fixture
def session(store):
    doc = PageLayout(blocks=[HeadingBlock(id="H", order=0), TextBlock(id="T", order=1)])
    return EditorSession("campaigns", _record(doc.to_json()), "initial_data", doc, store=store)


# ── Ouverture ─────────────────────────────────────────────────────────────────

def test_open_unsaved_step_synthesizes_default():
    session = EditorSession.from_record(_record(), "initial_data")
    assert session.synthesized
    assert session.dirty
    assert session.document.blocks[0].content == "Seus Dados"


def test_open_saved_step_uses_saved_layout():
    doc = PageLayout(blocks=[TextBlock(id="T", content="Meu layout")])
    session = EditorSession.from_record(_record(doc.to_json()), "initial_data")
    assert not session.synthesized
    assert session.document == doc


# ── Intents ───────────────────────────────────────────────────────────────────

def test_add_selects_new_block():
    session = EditorSession("campaigns", _record(), "initial_data", PageLayout())
    seen = []
    session.selection.subscribe(seen.append)
    assert session.selection.state == Unselected()
    heading_id = session.add_block("heading")
    text_id = session.add_block("text")
    assert [b.order for b in session.document.blocks] == [0, 1]
    assert session.selection.state == Selected(block_id=text_id)
    assert seen == [heading_id, text_id]


def test_update_selected(session):
    session.select("H")
    assert session.update_selected({"content": "Seus Dados", "level": 1})
    assert session.selected_block.content == "Seus Dados"
    assert session.dirty


def test_update_without_selection_is_noop(session):
    assert not session.update_selected({"content": "x"})


def test_stale_or_invalid_updates_are_noops(session):
    before = session.document
    assert not session.update_block("gone", {"content": "x"})
    assert not session.update_block("H", {"src": "/x.png"})
    assert not session.update_block("H", {"level": 12})
    assert session.document is before
    assert not session.dirty


def test_delete_selected_clears_selection(session):
    session.select("T")
    assert session.delete_selected()
    assert session.selection.state == Unselected()
    assert session.document.ids() == ["H"]


def test_duplicate_selected_selects_copy(session):
    session.select("H")
    copy_id = session.duplicate_selected()
    assert session.selection.selected_block_id == copy_id
    assert session.document.ids() == ["H", copy_id, "T"]


def test_duplicate_unknown_returns_none(session):
    assert session.duplicate_block("gone") is None


def test_move_selected(session):
    session.select("T")
    assert session.move_selected_up()
    assert not session.move_selected_up()
    assert session.document.ids() == ["T", "H"]


def test_add_into_non_card_is_noop(session):
    assert session.add_block("text", parent_id="H") is None
    assert session.document.ids() == ["H", "T"]


def test_add_unknown_type_is_noop(session):
    before = session.document
    assert session.add_block("video") is None
    assert session.document is before
    assert not session.dirty


def test_drag_end(session):
    session.drag_start("H")
    session.drag_over("T")
    assert session.document.ids() == ["H", "T"]
    assert session.drag_end("H", "T")
    assert session.document.ids() == ["T", "H"]
    assert not session.drag_end("H", "gone")


def test_update_page(session):
    assert session.update_page(background_color="#fff", containerWidth="600px")
    assert session.document.background_color == "#fff"
    assert session.document.container_width == "600px"
    assert not session.update_page(padding=3)


# ── Sauvegarde / abandon ──────────────────────────────────────────────────────

def test_save_writes_current_document(session, store):
    session.add_block("spacer")
    record = asyncio.run(session.save())
    store.save_layout.assert_called_once_with("campaigns", "c1", "initial_data", session.document)
    assert not session.dirty
    assert not session.saving
    assert session.record is record


def test_save_failure_keeps_local_document(session, store):
    store.save_layout.side_effect = PersistenceFailure("c1", "database is locked")
    session.add_block("spacer")
    doc = session.document
    with pytest.raises(PersistenceFailure):
        asyncio.run(session.save())
    assert session.document is doc
    assert session.dirty
    assert session.last_error is not None

    store.save_layout.side_effect = None
    store.save_layout.return_value = _record(doc.to_json())
    asyncio.run(session.save())
    assert session.last_error is None


def test_save_without_store():
    session = EditorSession("campaigns", _record(), "initial_data", PageLayout())
    with pytest.raises(RuntimeError):
        asyncio.run(session.save())


def test_discard_never_touches_store(session, store):
    session.add_block("text")
    session.discard()
    store.save_layout.assert_not_called()
    assert session.selection.state == Unselected()
    assert not session.dirty


def test_open_save_reopen_with_sqlite(tmp_path):
    database.init_db(f"sqlite:///{tmp_path / 'test.db'}")
    store = LayoutStore()
    record = store.create("campaigns", "Uniformes", [{"id": "review", "label": "Revisão", "order": 0}])

    session = EditorSession.open("campaigns", record.id, "review", store)
    assert session.synthesized
    session.select(session.document.blocks[0].id)
    session.update_selected({"content": "Confira seu pedido"})
    asyncio.run(session.save())

    reopened = EditorSession.open("campaigns", record.id, "review", store)
    assert not reopened.synthesized
    assert reopened.document == session.document


def test_load_document_resets_selection(session):
    session.select("H")
    session.add_block("text")
    session.load_document(PageLayout())
    assert session.selection.state == Unselected()
    assert not session.dirty
    assert session.document.blocks == []
