"""Bloc Header — noms des mariés, date et heure."""
from typing import Literal
from .base import BaseBlock, BlockPayload


class HeaderPayload(BlockPayload):
    REQUIRED = ("groom_name", "bride_name")

    groom_name: str = ""
    bride_name: str = ""
    subtitle: str = "Nous nous marions"
    date: str = ""   # ISO AAAA-MM-JJ
    time: str = ""   # HH:mm


class HeaderBlock(BaseBlock):
    kind: Literal["header"] = "header"
    payload: HeaderPayload = HeaderPayload()
