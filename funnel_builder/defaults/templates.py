"""
Layouts par défaut de chaque rôle d'étape du workflow.

Format : liste de blocs au format JSON stocké (sans id ni order).
Textes en "@defaults.<rôle>.<clé>" → i18n ; "{step_label}" → libellé de l'étape.
"""

_TITLE = {"type": "heading", "content": "{step_label}", "level": 1, "align": "center"}
_CONTINUE = {
    "type": "button", "text": "@defaults.common.continue",
    "variant": "default", "size": "lg", "align": "center", "onClick": "next_step",
}


def _intro(role: str) -> dict:
    return {"type": "text", "content": f"@defaults.{role}.intro", "align": "center"}


def _editor_step(role: str, editor_type: str) -> list:
    return [
        _TITLE,
        _intro(role),
        {"type": "custom_editor", "editorType": editor_type},
        {"type": "spacer", "height": "2rem"},
        _CONTINUE,
    ]


STEP_TEMPLATES: dict = {
    "initial_data": [
        _TITLE,
        _intro("initial_data"),
        {
            "type": "form_field", "fieldType": "text", "dataKey": "customer_name", "required": True,
            "label": "@defaults.initial_data.name_label",
            "placeholder": "@defaults.initial_data.name_placeholder",
        },
        {
            "type": "form_field", "fieldType": "tel", "dataKey": "customer_phone", "required": True,
            "label": "@defaults.initial_data.phone_label",
            "placeholder": "@defaults.initial_data.phone_placeholder",
        },
        {"type": "spacer", "height": "1rem"},
        _CONTINUE,
    ],
    "select_type": [
        _TITLE,
        _intro("select_type"),
        {
            "type": "form_field", "fieldType": "select", "dataKey": "uniform_type", "required": True,
            "label": "@defaults.select_type.label",
            "placeholder": "@defaults.select_type.placeholder",
            "options": ["Camiseta", "Polo", "Regata", "Manga longa"],
        },
        _CONTINUE,
    ],
    "enter_name": [
        _TITLE,
        _intro("enter_name"),
        {
            "type": "form_field", "fieldType": "text", "dataKey": "customer_name", "required": True,
            "label": "@defaults.enter_name.label",
            "placeholder": "@defaults.enter_name.placeholder",
        },
        _CONTINUE,
    ],
    "enter_phone": [
        _TITLE,
        _intro("enter_phone"),
        {
            "type": "form_field", "fieldType": "tel", "dataKey": "customer_phone", "required": True,
            "label": "@defaults.enter_phone.label",
            "placeholder": "@defaults.enter_phone.placeholder",
        },
        _CONTINUE,
    ],
    "select_quantity": [
        _TITLE,
        _intro("select_quantity"),
        {
            "type": "form_field", "fieldType": "number", "dataKey": "quantity", "required": True,
            "label": "@defaults.select_quantity.label",
            "placeholder": "@defaults.select_quantity.placeholder",
        },
        _CONTINUE,
    ],
    "choose_model": [
        _TITLE,
        _intro("choose_model"),
        {"type": "image", "src": "", "alt": "@defaults.choose_model.image_alt", "align": "center"},
        _CONTINUE,
    ],
    "customize_front":         _editor_step("customize_front", "front"),
    "customize_back":          _editor_step("customize_back", "back"),
    "customize_sleeves_left":  _editor_step("customize_sleeves_left", "sleeve_left"),
    "customize_sleeves_right": _editor_step("customize_sleeves_right", "sleeve_right"),
    "upload_logos": [
        _TITLE,
        _intro("upload_logos"),
        {
            "type": "button", "text": "@defaults.upload_logos.upload",
            "variant": "outline", "size": "default", "align": "center", "onClick": "upload_logo",
        },
        {"type": "spacer", "height": "2rem"},
        _CONTINUE,
    ],
    "review": [
        _TITLE,
        _intro("review"),
        {
            "type": "card",
            "children": [
                {"type": "heading", "content": "@defaults.review.summary_title", "level": 3, "align": "left"},
                {"type": "text", "content": "@defaults.review.summary_text", "align": "left"},
            ],
        },
        {"type": "divider", "color": "#e5e7eb", "thickness": "1px"},
        {
            "type": "button", "text": "@defaults.common.submit",
            "variant": "default", "size": "lg", "align": "center", "onClick": "submit",
        },
    ],
}

FALLBACK_TEMPLATE: list = [_TITLE]
