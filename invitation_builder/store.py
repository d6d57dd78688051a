"""
Store SQLite — persistance des faire-parts au format legacy.

Implémente le collaborateur `save(state)` consommé par EditingSession
(voir `InvitationStore.saver`) et le chargement `load(id)`.
"""
import asyncio
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker

from . import config
from .convert.generators import extract_title
from .convert.legacy import from_legacy_flat_state, to_legacy_flat_state
from .core.document import BlockDocument
from .core.legacy import LegacyFlatState
from .editor.session import SaveFn, SaveResult

log = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ── ORM ────────────────────────────────────────────────────────────────

class Base(DeclarativeBase):
    pass


class InvitationDB(Base):
    __tablename__ = "invitations"
    invitation_id: Mapped[str]           = mapped_column(sa.String, primary_key=True, default=lambda: str(uuid.uuid4()))
    title:         Mapped[str]           = mapped_column(sa.String, default="")
    template_id:   Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    editor_state:  Mapped[str]           = mapped_column(sa.Text, default="{}")
    created_at:    Mapped[datetime]      = mapped_column(sa.DateTime, default=_utcnow)
    updated_at:    Mapped[datetime]      = mapped_column(sa.DateTime, default=_utcnow, onupdate=_utcnow)


# ── JSON helpers ──
def jd(o) -> str:
    return json.dumps(o, ensure_ascii=False)


class InvitationStore:
    """
    Usage:
        >>> store = InvitationStore("sqlite:///data/invitations.db")
        >>> store.init_db()
        >>> iid = store.create(from_template(get_template("classic-elegant")))
        >>> session = EditingSession(controller, store.saver(iid))
    """

    def __init__(self, db_url: Optional[str] = None):
        if db_url is None:
            config.DATA_DIR.mkdir(parents=True, exist_ok=True)
            db_url = f"sqlite:///{config.DB_PATH}"
        self.engine = create_engine(db_url, connect_args={"check_same_thread": False})
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    # ── Écriture ──

    def create(self, doc: BlockDocument, invitation_id: Optional[str] = None) -> str:
        state = to_legacy_flat_state(doc.normalized())
        row = InvitationDB(
            invitation_id=invitation_id or str(uuid.uuid4()),
            title=extract_title(doc),
            template_id=doc.template_id,
            editor_state=jd(state.to_wire()),
        )
        with self.SessionLocal() as db:
            db.add(row)
            db.commit()
            iid = row.invitation_id
        log.info("Faire-part créé : %s", iid)
        return iid

    def save_state(self, invitation_id: str, state: LegacyFlatState) -> bool:
        with self.SessionLocal() as db:
            row = db.get(InvitationDB, invitation_id)
            if row is None:
                return False
            row.editor_state = jd(state.to_wire())
            row.title = extract_title(from_legacy_flat_state(state))
            db.commit()
        return True

    async def save(self, invitation_id: str, state: LegacyFlatState) -> SaveResult:
        """Écriture SQLite dans un thread : la boucle de l'éditeur n'est pas bloquée."""
        if await asyncio.to_thread(self.save_state, invitation_id, state):
            return SaveResult.success()
        log.warning("Sauvegarde impossible, faire-part inconnu : %s", invitation_id)
        return SaveResult.failure("not_found")

    def saver(self, invitation_id: str) -> SaveFn:
        """Collaborateur `save(state)` lié à un faire-part, pour EditingSession."""
        async def _save(state: LegacyFlatState) -> SaveResult:
            return await self.save(invitation_id, state)
        return _save

    # ── Lecture ──

    def get(self, invitation_id: str) -> Optional[InvitationDB]:
        with self.SessionLocal() as db:
            return db.get(InvitationDB, invitation_id)

    def load(self, invitation_id: str) -> Optional[LegacyFlatState]:
        row = self.get(invitation_id)
        if row is None:
            return None
        return LegacyFlatState.model_validate(json.loads(row.editor_state or "{}"))

    def load_document(self, invitation_id: str) -> Optional[BlockDocument]:
        row = self.get(invitation_id)
        if row is None:
            return None
        state = LegacyFlatState.model_validate(json.loads(row.editor_state or "{}"))
        return from_legacy_flat_state(state, invitation_id=row.invitation_id, template_id=row.template_id)
