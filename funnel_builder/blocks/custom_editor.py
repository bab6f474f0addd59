"""
Bloc Éditeur spécialisé — délègue le rendu à un mini-éditeur métier
(frente, costas, mangas du uniforme). Seule échappatoire ouverte du schéma.
"""
from typing import Literal
from .base import BaseBlock

EditorKind = Literal["front", "back", "sleeve_right", "sleeve_left"]


class CustomEditorBlock(BaseBlock):
    type: Literal["custom_editor"] = "custom_editor"
    editor_type: EditorKind = "front"
