"""
Renderer HTML des blocs — aperçu de l'éditeur et page publique bloc par bloc.
Dispatch par type de bloc ; seuls les blocs visibles sont rendus, dans l'ordre.
"""
from html import escape
from typing import Optional

from ..blocks import (
    BaseBlock, HeaderBlock, ContentBlock, ImageBlock,
    ContactBlock, LocationBlock, RsvpBlock,
)
from ..core.document import BlockDocument
from ..core.templates import Template
from .css import generate_page_css, inline_style


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_document(doc: BlockDocument, template: Optional[Template] = None, title: str = "") -> str:
    """Génère le HTML complet d'un faire-part à partir de ses blocs visibles."""
    css = generate_page_css(template.css_styles if template else None)
    body = "\n".join(render_block(b) for b in doc.visible_blocks())
    return f"""<!DOCTYPE html>
<html lang="fr">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape(title)}</title>
  <style>{css}</style>
</head>
<body>
<main class="invitation-page">
{body}
</main>
</body>
</html>"""


def render_block(block: BaseBlock) -> str:
    """Dispatch vers le renderer du type."""
    if isinstance(block, HeaderBlock):   return render_header_block(block)
    if isinstance(block, ContentBlock):  return render_content_block(block)
    if isinstance(block, ImageBlock):    return render_image_block(block)
    if isinstance(block, ContactBlock):  return render_contact_block(block)
    if isinstance(block, LocationBlock): return render_location_block(block)
    if isinstance(block, RsvpBlock):     return render_rsvp_block(block)

    return f"<!-- Bloc non implémenté : {escape(getattr(block, 'kind', '?'))} -->"


def _wrap(block: BaseBlock, tag: str, inner: str) -> str:
    return (f'<{tag} class="block {block.kind}-block" data-block-id="{escape(block.id)}"'
            f'{inline_style(block.style)}>\n{inner}\n</{tag}>')


# ── Renderers par type ──────────────────────────────────────────────────────

def render_header_block(b: HeaderBlock) -> str:
    p = b.payload
    when = " ".join(x for x in (p.date, p.time) if x)
    when_html = f'\n  <p class="header-block__date">{escape(when)}</p>' if when else ""
    subtitle = f'  <p class="header-block__subtitle">{escape(p.subtitle)}</p>\n' if p.subtitle else ""
    inner = (f'{subtitle}  <h1 class="header-block__names">{escape(p.groom_name)} &amp; '
             f'{escape(p.bride_name)}</h1>{when_html}')
    return _wrap(b, "header", inner)


def render_content_block(b: ContentBlock) -> str:
    p = b.payload
    title = f'  <h2 class="content-block__title">{escape(p.title)}</h2>\n' if p.title else ""
    # texte riche : HTML fourni par l'éditeur, inséré tel quel
    body = p.body if p.rich_text else escape(p.body)
    return _wrap(b, "section", f'{title}  <div class="content-block__body">{body}</div>')


def render_image_block(b: ImageBlock) -> str:
    p = b.payload
    if not p.url:
        return f'<!-- Image vide : {escape(b.id)} -->'
    caption = f'\n  <figcaption>{escape(p.caption)}</figcaption>' if p.caption else ""
    inner = f'  <img src="{escape(p.url)}" alt="{escape(p.alt)}">{caption}'
    html = _wrap(b, "figure", inner)
    return html.replace('class="block image-block"', f'class="block image-block image-block--{p.aspect_ratio}"', 1)


def render_contact_block(b: ContactBlock) -> str:
    p = b.payload
    title = f'  <h2>{escape(p.title)}</h2>\n' if p.title else ""
    items = "".join(
        f'<li><span class="contact-block__name">{escape(c.name)}</span> '
        f'<a href="tel:{escape(c.phone)}">{escape(c.phone)}</a></li>'
        for c in p.contacts
    )
    return _wrap(b, "section", f'{title}  <ul class="contact-block__list">{items}</ul>')


def render_location_block(b: LocationBlock) -> str:
    p = b.payload
    lines = [f'  <p class="location-block__venue">{escape(p.venue_name)}</p>',
             f'  <p class="location-block__address">{escape(p.address)}</p>']
    if p.detail_address:
        lines.append(f'  <p class="location-block__detail">{escape(p.detail_address)}</p>')
    if p.parking_info:
        lines.append(f'  <p class="location-block__parking">{escape(p.parking_info)}</p>')
    if p.transport_info:
        lines.append(f'  <p class="location-block__transport">{escape(p.transport_info)}</p>')
    if p.coordinates:
        lines.append(f'  <div class="location-block__map" data-lat="{p.coordinates.lat}" '
                     f'data-lng="{p.coordinates.lng}"></div>')
    return _wrap(b, "section", "\n".join(lines))


def render_rsvp_block(b: RsvpBlock) -> str:
    p = b.payload
    if not p.enabled:
        return f'<!-- RSVP désactivé : {escape(b.id)} -->'
    due = f'\n  <p class="rsvp-block__due">Réponse avant le {escape(p.due_date)}</p>' if p.due_date else ""
    inner = (f'  <h2>{escape(p.title)}</h2>\n  <p>{escape(p.description)}</p>{due}\n'
             f'  <a class="rsvp-block__button" href="#rsvp">Répondre</a>')
    return _wrap(b, "section", inner)
