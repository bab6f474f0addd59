"""Tests layouts par défaut — déterminisme, textes résolus, rôle inconnu."""
import pytest

from funnel_builder.blocks import CardBlock, CustomEditorBlock, FormFieldBlock, HeadingBlock
from funnel_builder.core.ordering import is_dense
from funnel_builder.defaults import available_roles, synthesize


def _strip_ids(value):
    if isinstance(value, dict):
        return {k: _strip_ids(v) for k, v in value.items() if k != "id"}
    if isinstance(value, list):
        return [_strip_ids(v) for v in value]
    return value


def _strings(value):
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for v in value.values():
            yield from _strings(v)
    elif isinstance(value, list):
        for v in value:
            yield from _strings(v)


# ── Déterminisme ──────────────────────────────────────────────────────────────

def test_same_role_same_structure():
    a = synthesize("initial_data", "Seus Dados")
    b = synthesize("initial_data", "Seus Dados")
    assert _strip_ids(a.to_json()) == _strip_ids(b.to_json())
    assert not set(a.ids()) & set(b.ids())


def test_initial_data_layout():
    layout = synthesize("initial_data", "Seus Dados")
    title = layout.blocks[0]
    assert isinstance(title, HeadingBlock)
    assert title.content == "Seus Dados"
    assert title.level == 1
    fields = [b for b in layout.blocks if isinstance(b, FormFieldBlock)]
    assert [f.data_key for f in fields] == ["customer_name", "customer_phone"]
    assert fields[1].field_type == "tel"
    assert layout.blocks[-1].on_click == "next_step"


def test_editor_roles_use_custom_editor():
    layout = synthesize("customize_sleeves_left", "Manga esquerda")
    editors = [b for b in layout.blocks if isinstance(b, CustomEditorBlock)]
    assert [e.editor_type for e in editors] == ["sleeve_left"]


def test_review_has_summary_card():
    layout = synthesize("review", "Revisão")
    card = next(b for b in layout.blocks if isinstance(b, CardBlock))
    assert [c.type for c in card.children] == ["heading", "text"]
    assert card.children[0].content == "Resumo do pedido"


@pytest.mark.parametrize("role", available_roles())
@pytest.mark.parametrize("lang", ["pt", "fr"])
def test_every_role_is_complete(role, lang):
    layout = synthesize(role, "Etapa", lang=lang)
    assert is_dense(layout.blocks)
    assert len(set(layout.ids())) == len(layout.ids())
    assert not [s for s in _strings(layout.to_json()) if s.startswith("[missing:") or s.startswith("@")]


# ── Rôle inconnu / libellé vide ───────────────────────────────────────────────

def test_unknown_role_falls_back_to_title():
    layout = synthesize("etapa_personalizada", "Brindes")
    assert len(layout.blocks) == 1
    assert layout.blocks[0].content == "Brindes"


def test_empty_label_uses_default_title():
    assert synthesize("etapa_personalizada", "").blocks[0].content == "Nova etapa"
    assert synthesize("etapa_personalizada", "", lang="fr").blocks[0].content == "Nouvelle étape"


def test_french_texts():
    layout = synthesize("select_quantity", "Quantité", lang="fr")
    assert layout.blocks[-1].text == "Continuer"
    field = next(b for b in layout.blocks if isinstance(b, FormFieldBlock))
    assert field.label == "Quantité"
    assert field.field_type == "number"
