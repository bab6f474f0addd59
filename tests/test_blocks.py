"""Tests blocs — valeurs par défaut, format JSON camelCase, aller-retour, types inconnus."""
import pytest
from pydantic import ValidationError

from funnel_builder.blocks import (
    BLOCK_REGISTRY, ButtonBlock, CardBlock, CustomEditorBlock, DividerBlock, FormFieldBlock,
    HeadingBlock, ImageBlock, SpacerBlock, TextBlock, UnknownBlock,
    block_catalog, dump_block, new_block, parse_block,
)


# ── Création ──────────────────────────────────────────────────────────────────

def test_heading_defaults():
    b = new_block("heading")
    assert isinstance(b, HeadingBlock)
    assert b.content == "Novo Título"
    assert b.level == 2
    assert b.align == "left"
    assert b.id.startswith("heading-")


def test_each_registered_type_builds():
    for block_type, cls in BLOCK_REGISTRY.items():
        b = new_block(block_type)
        assert isinstance(b, cls)
        assert b.type == block_type


def test_ids_are_unique():
    ids = {new_block("text").id for _ in range(200)}
    assert len(ids) == 200


def test_new_block_ignores_given_id():
    assert new_block("text", id="fixe").id != "fixe"


def test_form_field_gets_data_key():
    a, b = new_block("form_field"), new_block("form_field")
    assert a.data_key.startswith("field_")
    assert a.data_key != b.data_key


def test_new_block_unknown_type_raises():
    with pytest.raises(ValueError, match="Bloc inconnu"):
        new_block("video")


def test_heading_level_bounds():
    with pytest.raises(ValidationError):
        HeadingBlock(level=7)
    with pytest.raises(ValidationError):
        HeadingBlock(level=0)


def test_invalid_alignment_rejected():
    with pytest.raises(ValidationError):
        TextBlock(align="justify")


def test_blocks_are_immutable():
    b = new_block("text")
    with pytest.raises(ValidationError):
        b.content = "autre"


# ── Format JSON ───────────────────────────────────────────────────────────────

def test_form_field_json_uses_camel_case():
    b = new_block("form_field", field_type="email", data_key="email", label="E-mail")
    data = b.to_json()
    assert data["fieldType"] == "email"
    assert data["dataKey"] == "email"
    assert data["required"] is False
    assert "placeholder" not in data
    assert data["order"] == 0 and isinstance(data["order"], int)


def test_camel_case_input_accepted():
    b = parse_block({"id": "b1", "type": "button", "order": 1, "text": "Ir", "onClick": "next_step",
                     "className": "cta"})
    assert isinstance(b, ButtonBlock)
    assert b.on_click == "next_step"
    assert b.class_name == "cta"


def test_fractional_order_kept_in_json():
    assert TextBlock(id="t", order=1.5).to_json()["order"] == 1.5


def test_card_children_are_typed():
    card = parse_block({
        "id": "c1", "type": "card", "order": 0,
        "children": [{"id": "h1", "type": "heading", "order": 0, "content": "Resumo", "level": 3, "align": "left"}],
    })
    assert isinstance(card, CardBlock)
    assert isinstance(card.children[0], HeadingBlock)
    assert card.to_json()["children"][0]["level"] == 3


# ── Aller-retour ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize("block", [
    HeadingBlock(id="h", content="Seus Dados", level=1, align="center", color="#111"),
    TextBlock(id="t", order=2, content="Olá", font_size="18px", class_name="lead"),
    ImageBlock(id="i", src="/logo.png", alt="Logo", width="120px"),
    ButtonBlock(id="b", text="Enviar", variant="outline", size="lg", on_click="submit"),
    FormFieldBlock(id="f", field_type="select", label="Tamanho", data_key="size", required=True,
                   options=["P", "M", "G"]),
    SpacerBlock(id="s", height="40px"),
    DividerBlock(id="d", color="#e5e7eb", thickness="1px"),
    CardBlock(id="c", children=[TextBlock(id="c-t", content="Dentro"), SpacerBlock(id="c-s", order=1)]),
    CustomEditorBlock(id="e", editor_type="sleeve_left"),
])
def test_round_trip(block):
    assert parse_block(dump_block(block)) == block


def test_round_trip_keeps_extra_keys():
    raw = {"id": "h1", "type": "heading", "order": 0, "content": "Oi", "level": 2, "align": "left",
           "dataTestId": "titulo"}
    b = parse_block(raw)
    assert b.model_extra == {"dataTestId": "titulo"}
    assert b.to_json() == raw


def test_explicit_null_kept_on_round_trip():
    raw = {"id": "h1", "type": "heading", "order": 0, "content": "Oi", "level": 2, "align": "left", "color": None}
    assert parse_block(raw).to_json() == raw
    assert "color" not in HeadingBlock(id="h2").to_json()


# ── Types inconnus ────────────────────────────────────────────────────────────

def test_unknown_type_preserved_verbatim():
    raw = {"id": "v1", "type": "video", "order": 3, "url": "https://exemplo.com/v.mp4", "autoplay": True}
    b = parse_block(raw)
    assert isinstance(b, UnknownBlock)
    assert b.to_json() == raw


def test_unknown_type_keeps_null_values():
    raw = {"id": "v1", "type": "video", "order": 0, "className": None, "url": "u", "meta": {"a": None}}
    assert parse_block(raw).to_json() == raw


def test_unknown_type_inside_card():
    card = parse_block({"id": "c", "type": "card", "order": 0,
                        "children": [{"id": "x", "type": "carousel", "order": 0, "slides": [1, 2]}]})
    assert isinstance(card.children[0], UnknownBlock)
    assert card.to_json()["children"][0]["slides"] == [1, 2]


# ── Catalogue ─────────────────────────────────────────────────────────────────

def test_catalog_lists_every_type():
    catalog = block_catalog()
    assert [entry["type"] for entry in catalog] == list(BLOCK_REGISTRY)
    form = next(entry for entry in catalog if entry["type"] == "form_field")
    assert "dataKey" in form["schema"]["properties"]
