"""
Templates de faire-part — catalogue intégré.

Un template porte un HTML à placeholders `{{champ}}` et directives
`{{#if champ}}…{{/if}}` / `{{#unless champ}}…{{/unless}}`, plus des styles
qui ne servent qu'à initialiser les blocs (jamais lus par le renderer).
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .errors import TemplateNotFoundError


class TemplateCategory(str, Enum):
    CLASSIC  = "classic"
    MODERN   = "modern"
    ROMANTIC = "romantic"
    MINIMAL  = "minimal"


class Template(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    category: TemplateCategory
    html_structure: str
    css_styles: Dict[str, str] = Field(default_factory=dict)
    preview_image_url: Optional[str] = None


# ── Données d'aperçu ────────────────────────────────────────────────────────

SAMPLE_CONTEXT: Dict[str, str] = {
    "groomName":     "Julien",
    "brideName":     "Camille",
    "weddingDate":   "2027-06-12",
    "weddingTime":   "15:00",
    "venueName":     "Domaine des Tilleuls",
    "venueAddress":  "12 chemin des Vignes, 33000 Bordeaux",
    "customMessage": "Nous serions heureux de partager ce jour avec vous.",
    "dressCode":     "Tenue de cocktail",
    "parkingInfo":   "Parking gratuit sur place",
    "mealInfo":      "Dîner servi à 19h",
    "specialNotes":  "Votre présence est notre plus beau cadeau.",
}


# ── Catalogue ───────────────────────────────────────────────────────────────

_TEMPLATES: List[Template] = [
    Template(
        id="classic-elegant",
        name="Classique élégant",
        category=TemplateCategory.CLASSIC,
        preview_image_url="/templates/classic-elegant.jpg",
        css_styles={
            "backgroundColor": "#faf7f4",
            "fontFamily": "Cormorant Garamond",
            "primaryColor": "#8b5a3c",
            "accentColor": "#d4af37",
        },
        html_structure="""
<div class="invitation classic-elegant">
  <header class="invitation__header">
    <h1 class="invitation__names">{{groomName}} &amp; {{brideName}}</h1>
    <div class="invitation__date">{{weddingDate}} {{weddingTime}}</div>
  </header>
  {{#if customMessage}}<p class="invitation__message">{{customMessage}}</p>{{/if}}
  <section class="invitation__venue">
    <h3>{{venueName}}</h3>
    <p>{{venueAddress}}</p>
    {{#if parkingInfo}}<p class="invitation__parking">{{parkingInfo}}</p>{{/if}}
    {{#unless parkingInfo}}<p class="invitation__parking">Pas de stationnement sur place</p>{{/unless}}
  </section>
</div>""",
    ),
    Template(
        id="modern-line",
        name="Moderne ligne",
        category=TemplateCategory.MODERN,
        preview_image_url="/templates/modern-line.jpg",
        css_styles={
            "backgroundColor": "#ffffff",
            "fontFamily": "Inter",
            "primaryColor": "#1f2937",
            "accentColor": "#6366f1",
        },
        html_structure="""
<div class="invitation modern-line">
  {{#if backgroundImageUrl}}<img class="invitation__cover" src="{{backgroundImageUrl}}" alt="">{{/if}}
  <h1>{{groomName}} — {{brideName}}</h1>
  <p class="invitation__when">{{weddingDate}} · {{weddingTime}}</p>
  <p class="invitation__where">{{venueName}}, {{venueAddress}}</p>
  {{#if dressCode}}<p class="invitation__dress">Dress code : {{dressCode}}</p>{{/if}}
  {{#if mealInfo}}<p class="invitation__meal">{{mealInfo}}</p>{{/if}}
</div>""",
    ),
    Template(
        id="romantic-floral",
        name="Romantique floral",
        category=TemplateCategory.ROMANTIC,
        preview_image_url="/templates/romantic-floral.jpg",
        css_styles={
            "backgroundColor": "#fff5f7",
            "fontFamily": "Great Vibes",
            "primaryColor": "#be185d",
            "accentColor": "#f9a8d4",
        },
        html_structure="""
<div class="invitation romantic-floral">
  <div class="invitation__flowers"></div>
  <h1 class="invitation__names">{{groomName}} ♥ {{brideName}}</h1>
  <p>{{weddingDate}} à {{weddingTime}}</p>
  {{#if customMessage}}<blockquote>{{customMessage}}</blockquote>{{/if}}
  <p>{{venueName}}</p>
  <p>{{venueAddress}}</p>
  {{#if specialNotes}}<p class="invitation__notes">{{specialNotes}}</p>{{/if}}
</div>""",
    ),
    Template(
        id="minimal-white",
        name="Minimal blanc",
        category=TemplateCategory.MINIMAL,
        preview_image_url="/templates/minimal-white.jpg",
        css_styles={
            "backgroundColor": "#ffffff",
            "fontFamily": "Helvetica Neue",
            "primaryColor": "#111111",
            "accentColor": "#999999",
        },
        html_structure="""
<div class="invitation minimal-white">
  <h1>{{groomName}} &amp; {{brideName}}</h1>
  <p>{{weddingDate}}</p>
  <p>{{venueName}}</p>
</div>""",
    ),
]

_BY_ID: Dict[str, Template] = {t.id: t for t in _TEMPLATES}


def get_template(template_id: str) -> Template:
    try:
        return _BY_ID[template_id]
    except KeyError:
        raise TemplateNotFoundError(template_id) from None


def list_templates(category: Optional[TemplateCategory] = None) -> List[Template]:
    if category is None:
        return list(_TEMPLATES)
    return [t for t in _TEMPLATES if t.category == category]
