"""
BlockDocumentController — API de mutation d'un BlockDocument.

Chaque opération est synchrone, modifie le document possédé par le contrôleur
et le retourne ; la persistance est laissée à l'appelant. Les erreurs
(type inconnu, id absent, payload invalide) sont levées avant toute mutation.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .. import config
from ..blocks import BaseBlock, BlockStyle, block_class, new_block_id
from ..core.document import BlockDocument

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Mutation:
    op: str
    block_id: Optional[str]
    revision: int


Listener = Callable[[Mutation], None]


class BlockDocumentController:
    """
    Usage:
        >>> ctrl = BlockDocumentController()
        >>> doc = ctrl.add("header")
        >>> ctrl.update(doc.blocks[0].id, {"groom_name": "Julien"})
    """

    def __init__(self, document: Optional[BlockDocument] = None, history_limit: Optional[int] = None):
        self._doc = document if document is not None else BlockDocument()
        self._history_limit = config.HISTORY_LIMIT if history_limit is None else history_limit
        self._past: List[BlockDocument] = []
        self._future: List[BlockDocument] = []
        self._listeners: List[Listener] = []
        self.revision = 0
        self.dirty = False

    @property
    def document(self) -> BlockDocument:
        return self._doc

    # ── Abonnements (signal « dirty ») ───────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Enregistre un listener appelé après chaque mutation. Retourne la fonction de désabonnement."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def mark_clean(self) -> None:
        self.dirty = False

    # ── Opérations ───────────────────────────────────────────────────────────

    def add(self, kind: str, after: Optional[str] = None) -> BlockDocument:
        """Ajoute un bloc par défaut en fin (order = max + 1) ou juste après `after`."""
        cls = block_class(kind)
        anchor = self._doc.get(after) if after is not None else None
        self._checkpoint()
        block = cls()
        if anchor is None:
            block.order = self._doc.max_order() + 1
        else:
            block.order = self._open_slot_after(anchor)
        self._doc.insert(block)
        return self._commit("add", block.id)

    def remove(self, block_id: str) -> BlockDocument:
        """Supprime le bloc ; les ordres restants ne bougent pas (trous permis)."""
        self._doc.get(block_id)
        self._checkpoint()
        self._doc.pop(block_id)
        return self._commit("remove", block_id)

    def update(self, block_id: str, partial_payload: Mapping[str, Any]) -> BlockDocument:
        """Fusionne `partial_payload` dans le payload existant (jamais de remplacement complet)."""
        block = self._doc.get(block_id)
        payload_cls = type(block.payload)
        unknown = set(partial_payload) - set(payload_cls.model_fields)
        if unknown:
            raise ValueError(f"Champs inconnus pour un bloc {block.kind} : {sorted(unknown)}")
        merged = payload_cls.model_validate({**block.payload.model_dump(), **partial_payload})
        self._checkpoint()
        block.payload = merged
        return self._commit("update", block_id)

    def update_style(self, block_id: str, partial_style: Mapping[str, Any]) -> BlockDocument:
        block = self._doc.get(block_id)
        merged = BlockStyle.model_validate({**block.style.model_dump(), **partial_style})
        self._checkpoint()
        block.style = merged
        return self._commit("update_style", block_id)

    def duplicate(self, block_id: str) -> BlockDocument:
        """Clone payload et style sous un nouvel id, inséré juste après la source."""
        source = self._doc.get(block_id)
        cls = block_class(source.kind)
        self._checkpoint()
        clone = cls(
            id=new_block_id(),
            visible=source.visible,
            style=source.style.model_copy(deep=True),
            payload=source.payload.model_copy(deep=True),
        )
        clone.order = self._open_slot_after(source)
        self._doc.insert(clone)
        return self._commit("duplicate", clone.id)

    def move_up(self, block_id: str) -> BlockDocument:
        return self._move(block_id, -1)

    def move_down(self, block_id: str) -> BlockDocument:
        return self._move(block_id, +1)

    def set_visible(self, block_id: str, visible: bool) -> BlockDocument:
        block = self._doc.get(block_id)
        if block.visible == visible:
            return self._doc
        self._checkpoint()
        block.visible = visible
        return self._commit("set_visible", block_id)

    def toggle_editing(self, block_id: str) -> BlockDocument:
        """Bascule l'édition du bloc ; au plus un bloc en édition. État transitoire : pas de dirty."""
        target = self._doc.get(block_id)
        editing = not target.editing
        for block in self._doc.blocks:
            block.editing = False
        target.editing = editing
        return self._doc

    def normalize(self) -> BlockDocument:
        """Renumérote les ordres en 0..n-1 (avant persistance)."""
        orders = [b.order for b in self._doc.sorted_blocks()]
        if orders == list(range(len(orders))):
            return self._doc
        self._checkpoint()
        self._doc.normalize()
        return self._commit("normalize", None)

    def load(self, document: BlockDocument) -> BlockDocument:
        """Remplace le document (normalisé), vide l'historique, état propre."""
        self._doc = document
        self._doc.normalize()
        self._doc.check_invariants(strict=True)
        self._past.clear()
        self._future.clear()
        self.dirty = False
        return self._doc

    # ── Historique ───────────────────────────────────────────────────────────

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def undo(self) -> BlockDocument:
        if not self._past:
            return self._doc
        self._future.append(self._doc.copy_document())
        self._doc = self._past.pop()
        return self._commit("undo", None)

    def redo(self) -> BlockDocument:
        if not self._future:
            return self._doc
        self._past.append(self._doc.copy_document())
        self._doc = self._future.pop()
        return self._commit("redo", None)

    # ── Lecture ──────────────────────────────────────────────────────────────

    def validate(self) -> List[BaseBlock]:
        """Blocs visibles incomplets ; liste vide ⇒ enregistrable."""
        return self._doc.invalid_blocks()

    def visible_blocks(self) -> Tuple[BaseBlock, ...]:
        """Projection triée, visibles uniquement, en copies (lecture seule)."""
        return tuple(b.model_copy(deep=True) for b in self._doc.visible_blocks())

    # ── Interne ──────────────────────────────────────────────────────────────

    def _open_slot_after(self, anchor: BaseBlock) -> int:
        """Décale d'un cran chaque bloc qui suit `anchor` et retourne l'ordre libéré."""
        seq = self._doc.sorted_blocks()
        slot = anchor.order + 1
        previous = slot
        start = next(i for i, b in enumerate(seq) if b is anchor)
        for block in seq[start + 1:]:
            block.order = max(block.order + 1, previous + 1)
            previous = block.order
        return slot

    def _move(self, block_id: str, step: int) -> BlockDocument:
        self._doc.get(block_id)
        seq = self._doc.sorted_blocks()
        index = next(i for i, b in enumerate(seq) if b.id == block_id)
        neighbour = index + step
        if neighbour < 0 or neighbour >= len(seq):
            log.debug("Déplacement ignoré en bordure : %s", block_id)
            return self._doc
        self._checkpoint()
        if not self._doc.has_strict_order():
            self._doc.normalize()
        a, b = seq[index], seq[neighbour]
        a.order, b.order = b.order, a.order
        return self._commit("move_up" if step < 0 else "move_down", block_id)

    def _checkpoint(self) -> None:
        self._past.append(self._doc.copy_document())
        if len(self._past) > self._history_limit:
            del self._past[0]
        self._future.clear()

    def _commit(self, op: str, block_id: Optional[str]) -> BlockDocument:
        self._doc.touch()
        self._doc.check_invariants()
        self.revision += 1
        self.dirty = True
        mutation = Mutation(op=op, block_id=block_id, revision=self.revision)
        # mutation déjà appliquée : l'échec d'un listener est journalisé, pas propagé
        for listener in list(self._listeners):
            try:
                listener(mutation)
            except Exception:
                log.exception("Listener en échec après %s (révision %d)", op, self.revision)
        return self._doc
