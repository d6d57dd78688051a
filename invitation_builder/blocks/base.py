"""
Blocs de base du faire-part.
Style (opaque, transmis tel quel) + payload spécifique au type + BaseBlock discriminé par `kind`.
"""
import uuid
from typing import ClassVar, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Spacing = Literal["small", "medium", "large"]


def new_block_id() -> str:
    return uuid.uuid4().hex[:12]


class BlockStyle(BaseModel):
    """Attributs de présentation. Le cœur ne les interprète pas : clés inconnues conservées."""
    model_config = ConfigDict(extra="allow")

    text_color: Optional[str] = None
    background_color: Optional[str] = None
    font_size: Optional[Spacing] = None
    font_weight: Optional[Literal["normal", "bold"]] = None
    text_align: Optional[Literal["left", "center", "right"]] = None
    padding: Optional[Spacing] = None
    margin: Optional[Spacing] = None


def default_style() -> BlockStyle:
    return BlockStyle(text_align="center", font_size="medium", padding="medium", margin="medium")


class BlockPayload(BaseModel):
    """Contenu d'un bloc. REQUIRED liste les champs qui rendent le bloc « complet »."""
    REQUIRED: ClassVar[tuple[str, ...]] = ()

    def missing_fields(self) -> list[str]:
        return [name for name in self.REQUIRED if not str(getattr(self, name) or "").strip()]


class BaseBlock(BaseModel):
    """Bloc de base (classe parente des six types)."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_block_id)
    kind: str
    order: int = 0
    visible: bool = True
    # état d'UI transitoire, jamais persisté
    editing: bool = Field(default=False, exclude=True)
    style: BlockStyle = Field(default_factory=default_style)
    payload: BlockPayload = BlockPayload()

    def missing_fields(self) -> list[str]:
        return self.payload.missing_fields()

    def is_complete(self) -> bool:
        return not self.missing_fields()
