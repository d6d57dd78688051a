"""
CSS du faire-part — variables depuis les styles du template + règles des blocs.
"""
from typing import Dict, Optional

_DEFAULTS = {
    "backgroundColor": "#ffffff",
    "fontFamily": "Georgia",
    "primaryColor": "#333333",
    "accentColor": "#c9a96e",
}

_SPACING = {"small": "8px", "medium": "16px", "large": "32px"}
_FONT_SIZE = {"small": "14px", "medium": "16px", "large": "24px"}

_BLOCKS_CSS = """
body{margin:0;background:var(--color-bg);font-family:var(--font-family);color:var(--color-primary)}
.invitation-page{max-width:640px;margin:0 auto}
.block{box-sizing:border-box}
.header-block__names{font-size:2rem;margin:0}
.header-block__subtitle{color:var(--color-accent);letter-spacing:.1em}
.content-block__title{font-size:1.25rem}
.content-block__body{white-space:pre-line;line-height:1.6}
.image-block img{width:100%;object-fit:cover}
.image-block--square img{aspect-ratio:1/1}
.image-block--portrait img{aspect-ratio:3/4}
.image-block--landscape img{aspect-ratio:4/3}
.contact-block__list{list-style:none;padding:0}
.location-block__venue{font-weight:700}
.rsvp-block__button{display:inline-block;padding:.6rem 1.4rem;border:1px solid var(--color-accent)}
"""


def generate_css_variables(css_styles: Optional[Dict[str, str]] = None) -> str:
    """Bloc :root { ... } depuis les styles d'un template (valeurs par défaut sinon)."""
    styles = {**_DEFAULTS, **(css_styles or {})}
    return f""":root {{
  --color-bg:      {styles["backgroundColor"]};
  --color-primary: {styles["primaryColor"]};
  --color-accent:  {styles["accentColor"]};
  --font-family:   '{styles["fontFamily"]}', serif;
}}"""


def generate_page_css(css_styles: Optional[Dict[str, str]] = None) -> str:
    return generate_css_variables(css_styles) + "\n" + _BLOCKS_CSS


def inline_style(style) -> str:
    """Attribut style="" depuis un BlockStyle (vide si aucun attribut)."""
    rules = []
    if style.text_align:
        rules.append(f"text-align:{style.text_align}")
    if style.font_size:
        rules.append(f"font-size:{_FONT_SIZE[style.font_size]}")
    if style.font_weight:
        rules.append(f"font-weight:{style.font_weight}")
    if style.text_color:
        rules.append(f"color:{style.text_color}")
    if style.background_color:
        rules.append(f"background:{style.background_color}")
    if style.padding:
        rules.append(f"padding:{_SPACING[style.padding]}")
    if style.margin:
        rules.append(f"margin:{_SPACING[style.margin]} 0")
    return f' style="{";".join(rules)}"' if rules else ""
