"""
EditingSession — autosave debouncé, une seule sauvegarde en vol.

États :
- CLEAN  : aucune mutation non enregistrée ;
- DIRTY  : mutations en attente, pas de sauvegarde en cours ;
- SAVING : sauvegarde en vol ; une mutation pendant ce temps lève `pending`.

Le timer (AUTOSAVE_DELAY_MS) ne déclenche que depuis DIRTY. Succès : CLEAN,
ou réarmement immédiat si `pending`. Échec : retour à DIRTY, erreur remontée,
pas de nouvel essai automatique.

La session vit dans une boucle asyncio (UI mono-thread) : pas de verrou,
l'exclusion passe par l'état SAVING.
"""
import asyncio
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Union

from pydantic import BaseModel, Field

from .. import config
from ..convert.legacy import to_legacy_flat_state
from ..core.legacy import LegacyFlatState
from .controller import BlockDocumentController, Mutation

log = logging.getLogger(__name__)


class SessionState(str, Enum):
    CLEAN  = "clean"
    DIRTY  = "dirty"
    SAVING = "saving"


class SaveResult(BaseModel):
    ok: bool
    reason: Optional[str] = None
    invalid_block_ids: List[str] = Field(default_factory=list)

    @classmethod
    def success(cls) -> "SaveResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str, invalid_block_ids: Optional[List[str]] = None) -> "SaveResult":
        return cls(ok=False, reason=reason, invalid_block_ids=invalid_block_ids or [])


# Collaborateur de persistance : `save(state)` ; None/True = succès, False = échec
SaveFn = Callable[[LegacyFlatState], Awaitable[Union[SaveResult, bool, None]]]

INCOMPLETE_BLOCKS = "incomplete_blocks"


def _coerce(raw: Union[SaveResult, bool, None]) -> SaveResult:
    if isinstance(raw, SaveResult):
        return raw
    if raw is None or raw is True:
        return SaveResult.success()
    return SaveResult.failure("save_failed")


class EditingSession:
    """
    À construire depuis la boucle asyncio de l'éditeur : la boucle courante est
    capturée ici (RuntimeError hors boucle, avant tout abonnement au contrôleur).
    """

    def __init__(
        self,
        controller: BlockDocumentController,
        save: SaveFn,
        delay_ms: Optional[int] = None,
        save_drafts: Optional[bool] = None,
        on_error: Optional[Callable[[SaveResult], None]] = None,
    ):
        self.controller = controller
        self._save = save
        self.delay = (config.AUTOSAVE_DELAY_MS if delay_ms is None else delay_ms) / 1000
        self.save_drafts = config.SAVE_DRAFTS if save_drafts is None else save_drafts
        self.on_error = on_error
        self._loop = asyncio.get_running_loop()

        self.state = SessionState.CLEAN
        self.pending = False
        self.last_result: Optional[SaveResult] = None
        self.last_saved_at: Optional[datetime] = None
        self.save_count = 0

        self._timer: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None
        self._unsubscribe = controller.subscribe(self._on_mutation)

    # ── Transitions ──────────────────────────────────────────────────────────

    def _on_mutation(self, mutation: Mutation) -> None:
        self.mark_dirty()

    def mark_dirty(self) -> None:
        """CLEAN/DIRTY → DIRTY (timer réarmé) ; SAVING → pending."""
        if self.state == SessionState.SAVING:
            self.pending = True
            return
        self.state = SessionState.DIRTY
        self._arm()

    def _arm(self) -> None:
        self._cancel_timer()
        if self._loop.is_closed():
            log.warning("Boucle fermée, autosave non programmé")
            return
        self._timer = self._loop.call_later(self.delay, self._fire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        if self.state != SessionState.DIRTY:
            return
        self._start_save(self.save_drafts)

    def _start_save(self, save_drafts: bool) -> Optional[asyncio.Task]:
        """DIRTY → SAVING avec un instantané pris maintenant. None si la validation bloque."""
        if not save_drafts:
            invalid = self.controller.validate()
            if invalid:
                ids = [b.id for b in invalid]
                log.warning("Sauvegarde bloquée : %d bloc(s) incomplet(s) %s", len(ids), ids)
                self._report(SaveResult.failure(INCOMPLETE_BLOCKS, ids))
                return None

        snapshot = to_legacy_flat_state(self.controller.document)
        self.state = SessionState.SAVING
        self.pending = False
        self._task = self._loop.create_task(self._run_save(snapshot))
        return self._task

    async def _run_save(self, snapshot: LegacyFlatState) -> SaveResult:
        try:
            result = _coerce(await self._save(snapshot))
        except Exception as exc:
            log.warning("Échec de la sauvegarde : %s", exc)
            result = SaveResult.failure(str(exc) or type(exc).__name__)

        if result.ok:
            self.save_count += 1
            self.last_result = result
            self.last_saved_at = datetime.now(timezone.utc)
            if self.pending:
                # mutations arrivées pendant la sauvegarde : nouvelle sauvegarde
                self.pending = False
                self.state = SessionState.DIRTY
                self._arm()
            else:
                self.state = SessionState.CLEAN
                self.controller.mark_clean()
            log.info("Faire-part enregistré (%s)", self.state.value)
        else:
            self.pending = False
            self.state = SessionState.DIRTY
            self._report(result)
        return result

    def _report(self, result: SaveResult) -> None:
        self.last_result = result
        if self.on_error is not None:
            self.on_error(result)

    # ── API appelant ─────────────────────────────────────────────────────────

    @property
    def is_saving(self) -> bool:
        return self.state == SessionState.SAVING

    async def save_now(self, save_drafts: Optional[bool] = None) -> SaveResult:
        """
        Sauvegarde immédiate à l'initiative de l'appelant (aussi utilisée pour réessayer).
        Attend la sauvegarde en vol le cas échéant ; ne lance jamais deux sauvegardes en parallèle.
        """
        if self.state == SessionState.SAVING and self._task is not None:
            await asyncio.shield(self._task)
        if self.state == SessionState.CLEAN:
            return self.last_result or SaveResult.success()
        self._cancel_timer()
        task = self._start_save(self.save_drafts if save_drafts is None else save_drafts)
        if task is None:
            return self.last_result
        return await asyncio.shield(task)

    async def wait_idle(self) -> None:
        """Attend la fin de la sauvegarde en vol (s'il y en a une)."""
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)

    def close(self) -> None:
        """Annule le timer et se désabonne du contrôleur. Une sauvegarde en vol n'est pas annulée."""
        self._cancel_timer()
        self._unsubscribe()
