"""
i18n — textes de l'éditeur (libellés de la liste de structure, layouts par défaut).

"@namespace.key"  → texte du catalog funnel_builder/i18n/{lang}.json,
                    puis du catalog DEFAULT_LANG si la clé manque
texte direct      → inchangé
{step_label}, …   → remplacés depuis le dict `context`
"""
import json
import re
from pathlib import Path
from typing import Any, Optional

DEFAULT_LANG = "pt"

_CATALOGS: dict = {}
_CATALOG_DIR = Path(__file__).parent.parent / "i18n"
_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def catalog(lang: str) -> dict:
    """Catalog d'une langue (lu une fois puis gardé en mémoire ; {} si absent)."""
    if lang not in _CATALOGS:
        path = _CATALOG_DIR / f"{lang}.json"
        _CATALOGS[lang] = json.loads(path.read_text(encoding="utf-8")) if path.exists() else {}
    return _CATALOGS[lang]


def available_langs() -> list[str]:
    return sorted(p.stem for p in _CATALOG_DIR.glob("*.json"))


def _lookup(lang: str, key: str) -> Optional[str]:
    node: Any = catalog(lang)
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return None if isinstance(node, dict) else str(node)


def i18n_resolve(value: str, lang: str = DEFAULT_LANG) -> str:
    """
    "@blocks.heading" → "Título H{level}" ; "Seus Dados" → "Seus Dados".
    Clé introuvable (ou qui désigne un namespace) → "[missing:<clé>]".
    """
    if not value or not value.startswith("@"):
        return value
    key = value[1:]
    text = _lookup(lang, key)
    if text is None and lang != DEFAULT_LANG:
        text = _lookup(DEFAULT_LANG, key)
    return f"[missing:{key}]" if text is None else text


def resolve_placeholders(text: str, context: Optional[dict] = None) -> str:
    """Placeholders sans valeur dans `context` laissés tels quels."""
    if not text or not context:
        return text
    return _PLACEHOLDER_RE.sub(lambda m: str(context.get(m.group(1), m.group(0))), text)


def resolve(value: str, lang: str = DEFAULT_LANG, context: Optional[dict] = None) -> str:
    """
    i18n puis placeholders.
    Usage : resolve("@blocks.form_field", lang="pt", context={"label": "Nome"}) → "Campo: Nome"
    """
    return resolve_placeholders(i18n_resolve(value, lang), context)


def resolve_strings(obj, lang: str = DEFAULT_LANG, context: Optional[dict] = None):
    """resolve() appliqué à chaque chaîne d'une structure dict / list imbriquée."""
    if isinstance(obj, str):
        return resolve(obj, lang=lang, context=context)
    if isinstance(obj, dict):
        return {k: resolve_strings(v, lang, context) for k, v in obj.items()}
    if isinstance(obj, list):
        return [resolve_strings(v, lang, context) for v in obj]
    return obj


def reload_cache():
    """Vide le cache des catalogs (fichiers JSON modifiés, tests)."""
    _CATALOGS.clear()
