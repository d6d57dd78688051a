"""Renderers — moteur de templates à placeholders et rendu HTML des blocs."""
from .template import render, substitute, resolve_directives, is_truthy
from .blocks import render_block, render_document
from .css import generate_page_css

__all__ = [
    "render",
    "substitute",
    "resolve_directives",
    "is_truthy",
    "render_block",
    "render_document",
    "generate_page_css",
]
