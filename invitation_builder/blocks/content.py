"""Bloc Content — texte libre avec titre optionnel."""
from typing import Literal, Optional
from .base import BaseBlock, BlockPayload


class ContentPayload(BlockPayload):
    title: Optional[str] = None
    body: str = "Saisissez votre texte"
    rich_text: bool = False


class ContentBlock(BaseBlock):
    kind: Literal["content"] = "content"
    payload: ContentPayload = ContentPayload()
