"""
Application FastAPI — faire-parts.
Démarrer : uvicorn invitation_builder.app:app --reload --port 8001
"""
import logging
from typing import Optional

from fastapi import FastAPI

from .router import get_store, router
from .store import InvitationStore

log = logging.getLogger(__name__)


def create_app(store: Optional[InvitationStore] = None) -> FastAPI:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
    app = FastAPI(title="Faire-part — éditeur par blocs", version="0.3.0", docs_url="/docs")
    app.include_router(router)
    if store is not None:
        store.init_db()
        app.dependency_overrides[get_store] = lambda: store
    log.info("Application initialisée")
    return app


app = create_app()
