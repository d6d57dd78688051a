"""
Router FastAPI — faire-parts.

GET  /invitations/templates                  → catalogue (filtre `category`)
GET  /invitations/templates/{id}/preview     → template rendu avec les données d'exemple
POST /invitations/templates/{id}/render      → template rendu avec un contexte posté
POST /invitations/templates/{id}/blocks      → document initial (fiche mariage optionnelle)
GET  /invitations/{invitation_id}/view       → page publique (template + contexte du document)
GET  /invitations/{invitation_id}/preview    → aperçu bloc par bloc
"""
import logging
from typing import Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse

from .convert.context import context_from_document
from .convert.generators import extract_title, from_template
from .core.errors import TemplateNotFoundError
from .core.templates import SAMPLE_CONTEXT, Template, TemplateCategory, get_template, list_templates
from .core.wedding import WeddingDetails
from .renderer.blocks import render_document
from .renderer.template import render
from .store import InvitationStore

log = logging.getLogger(__name__)

router = APIRouter(prefix="/invitations", tags=["invitations"])

_store: Optional[InvitationStore] = None


def get_store() -> InvitationStore:
    """Store par défaut (SQLite de la config), créé au premier appel."""
    global _store
    if _store is None:
        _store = InvitationStore()
        _store.init_db()
    return _store


def _template_or_404(template_id: str) -> Template:
    try:
        return get_template(template_id)
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/templates", summary="Liste les templates disponibles")
def templates(category: Optional[TemplateCategory] = None) -> JSONResponse:
    data = [t.model_dump(by_alias=True, mode="json") for t in list_templates(category)]
    return JSONResponse({"templates": data})


@router.get("/templates/{template_id}/preview", response_class=HTMLResponse, summary="Aperçu avec données d'exemple")
def preview_template(template_id: str) -> HTMLResponse:
    template = _template_or_404(template_id)
    return HTMLResponse(render(template.html_structure, SAMPLE_CONTEXT))


@router.post("/templates/{template_id}/render", response_class=HTMLResponse, summary="Rend un template avec un contexte")
def render_template(template_id: str, context: Dict[str, str] = Body(default={})) -> HTMLResponse:
    template = _template_or_404(template_id)
    return HTMLResponse(render(template.html_structure, context))


@router.post("/templates/{template_id}/blocks", summary="Document initial depuis un template")
def seed_blocks(template_id: str, details: Optional[WeddingDetails] = None) -> JSONResponse:
    template = _template_or_404(template_id)
    doc = from_template(template, details)
    return JSONResponse({"title": extract_title(doc), "document": doc.model_dump(mode="json")})


@router.get("/{invitation_id}/view", response_class=HTMLResponse, summary="Page publique d'un faire-part")
def view_invitation(invitation_id: str, store: InvitationStore = Depends(get_store)) -> HTMLResponse:
    doc = store.load_document(invitation_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Faire-part introuvable : {invitation_id}")
    if doc.template_id is None:
        return HTMLResponse(render_document(doc, title=extract_title(doc)))
    template = _template_or_404(doc.template_id)
    return HTMLResponse(render(template.html_structure, context_from_document(doc)))


@router.get("/{invitation_id}/preview", response_class=HTMLResponse, summary="Aperçu bloc par bloc")
def preview_invitation(invitation_id: str, store: InvitationStore = Depends(get_store)) -> HTMLResponse:
    doc = store.load_document(invitation_id)
    if doc is None:
        raise HTTPException(status_code=404, detail=f"Faire-part introuvable : {invitation_id}")
    template = _template_or_404(doc.template_id) if doc.template_id else None
    return HTMLResponse(render_document(doc, template, title=extract_title(doc)))
