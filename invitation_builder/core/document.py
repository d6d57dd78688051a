"""
BlockDocument — collection ordonnée de blocs (liste + index par id).

Invariants :
- chaque `id` est unique dans le document ;
- l'ordre de rendu est donné par `order` croissant ; les ex-aequo sont tolérés
  transitoirement mais doivent être normalisés avant persistance.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, PrivateAttr

from ..blocks import BaseBlock, Block
from .errors import BlockNotFoundError, DocumentInvariantError


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class BlockDocument(BaseModel):
    blocks: List[Block] = Field(default_factory=list)
    invitation_id: Optional[str] = None
    template_id: Optional[str] = None
    last_modified: str = Field(default_factory=_now_iso)
    # champs wedding-info legacy sans bloc correspondant (dressCode, mealInfo…), transmis tels quels
    info_extras: Dict[str, Any] = Field(default_factory=dict)

    _index: dict = PrivateAttr(default_factory=dict)

    def model_post_init(self, __context) -> None:
        self._index = {}
        for block in self.blocks:
            if block.id in self._index:
                raise DocumentInvariantError(f"Identifiant de bloc dupliqué : {block.id!r}")
            self._index[block.id] = block

    # ── Lecture ──────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.blocks)

    def __contains__(self, block_id: str) -> bool:
        return block_id in self._index

    def get(self, block_id: str) -> BaseBlock:
        try:
            return self._index[block_id]
        except KeyError:
            raise BlockNotFoundError(block_id) from None

    def sorted_blocks(self) -> List[BaseBlock]:
        """Séquence de rendu : `order` croissant, position d'insertion en cas d'égalité."""
        return [b for _, b in sorted(enumerate(self.blocks), key=lambda p: (p[1].order, p[0]))]

    def visible_blocks(self) -> List[BaseBlock]:
        return [b for b in self.sorted_blocks() if b.visible]

    def first(self, kind: str, visible_only: bool = False) -> Optional[BaseBlock]:
        seq = self.visible_blocks() if visible_only else self.sorted_blocks()
        return next((b for b in seq if b.kind == kind), None)

    def max_order(self) -> int:
        return max((b.order for b in self.blocks), default=-1)

    def invalid_blocks(self) -> List[BaseBlock]:
        """Blocs visibles incomplets (vide ⇒ document enregistrable)."""
        return [b for b in self.visible_blocks() if not b.is_complete()]

    # ── Mutations bas niveau (réservées au contrôleur) ───────────────────────

    def insert(self, block: BaseBlock) -> None:
        if block.id in self._index:
            raise DocumentInvariantError(f"Identifiant de bloc dupliqué : {block.id!r}")
        self.blocks.append(block)
        self._index[block.id] = block

    def pop(self, block_id: str) -> BaseBlock:
        block = self.get(block_id)
        self.blocks.remove(block)
        del self._index[block_id]
        return block

    def touch(self) -> None:
        self.last_modified = _now_iso()

    # ── Invariants ───────────────────────────────────────────────────────────

    def has_strict_order(self) -> bool:
        orders = [b.order for b in self.sorted_blocks()]
        return all(a < b for a, b in zip(orders, orders[1:]))

    def check_invariants(self, strict: bool = False) -> None:
        """Lève DocumentInvariantError si un invariant est violé (strict : pas d'ex-aequo)."""
        ids = [b.id for b in self.blocks]
        if len(set(ids)) != len(ids) or set(ids) != set(self._index):
            raise DocumentInvariantError("Identifiants de blocs non uniques ou index désynchronisé")
        if strict and not self.has_strict_order():
            raise DocumentInvariantError("Ordre des blocs non normalisé (valeurs `order` en double)")

    def normalize(self) -> None:
        """Renumérote `order` en 0..n-1 selon la séquence de rendu (en place)."""
        for i, block in enumerate(self.sorted_blocks()):
            block.order = i

    def normalized(self) -> "BlockDocument":
        doc = self.copy_document()
        doc.normalize()
        return doc

    def copy_document(self) -> "BlockDocument":
        """Copie profonde (les blocs sont clonés, l'index reconstruit)."""
        return BlockDocument(
            blocks=[b.model_copy(deep=True) for b in self.blocks],
            invitation_id=self.invitation_id,
            template_id=self.template_id,
            last_modified=self.last_modified,
            info_extras=dict(self.info_extras),
        )
