"""Bloc Image — photo avec légende optionnelle."""
from typing import Literal
from .base import BaseBlock, BlockPayload


class ImagePayload(BlockPayload):
    url: str = ""
    alt: str = ""
    caption: str = ""
    aspect_ratio: Literal["square", "portrait", "landscape"] = "landscape"


class ImageBlock(BaseBlock):
    kind: Literal["image"] = "image"
    payload: ImagePayload = ImagePayload()
