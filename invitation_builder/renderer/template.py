"""
Moteur de rendu des templates de faire-part.

Deux passes, dans cet ordre :
1. substitution `{{champ}}` → valeur du contexte, chaîne vide si absent ;
2. directives `{{#if champ}}…{{/if}}` puis `{{#unless champ}}…{{/unless}}`,
   évaluées sur le contexte brut (pas sur le texte substitué).

Les directives sont extraites par regex non gourmande et ne s'imbriquent pas :
une directive imbriquée est mal découpée sans erreur. Une directive sans
balise fermante reste telle quelle dans la sortie. Aucune passe de
substitution ne suit la résolution des directives.
"""
import re
from typing import Any, Mapping, Optional

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")
_IF_RE          = re.compile(r"\{\{#if\s+(\w+)\}\}([\s\S]*?)\{\{/if\}\}")
_UNLESS_RE      = re.compile(r"\{\{#unless\s+(\w+)\}\}([\s\S]*?)\{\{/unless\}\}")

# seules valeurs textuelles fausses : vide, et "false" (booléen mis à plat dans le contexte)
_FALSY = {"", "false"}


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_truthy(context: Mapping[str, Any], field: str) -> bool:
    """Vrai si le champ existe et n'est ni vide ni "false" ("0" et "  " sont vrais)."""
    if field not in context:
        return False
    value = context[field]
    if isinstance(value, bool):
        return value
    return _as_text(value) not in _FALSY


def substitute(template_html: str, context: Mapping[str, Any]) -> str:
    """Remplace chaque `{{champ}}` ; un champ absent devient une chaîne vide."""
    return _PLACEHOLDER_RE.sub(lambda m: _as_text(context.get(m.group(1))), template_html)


def resolve_directives(html: str, context: Mapping[str, Any]) -> str:
    """Résout les `#if` puis les `#unless` de premier niveau."""
    html = _IF_RE.sub(lambda m: m.group(2) if is_truthy(context, m.group(1)) else "", html)
    return _UNLESS_RE.sub(lambda m: "" if is_truthy(context, m.group(1)) else m.group(2), html)


def render(template_html: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """
    Rend un template HTML avec un contexte plat.

    Ne lève jamais d'exception pour un champ manquant ou une directive mal formée.

    >>> render("A{{#if customMessage}}{{customMessage}}{{/if}}C", {"customMessage": "hi"})
    'AhiC'
    """
    context = context or {}
    rendered = substitute(template_html or "", context)
    return resolve_directives(rendered, context)
