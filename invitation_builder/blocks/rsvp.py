"""Bloc RSVP — invitation à confirmer sa présence."""
from typing import Literal, Optional
from .base import BaseBlock, BlockPayload


class RsvpPayload(BlockPayload):
    enabled: bool = True
    title: str = "Confirmez votre présence"
    description: str = "Merci de nous indiquer si vous serez des nôtres"
    due_date: Optional[str] = None


class RsvpBlock(BaseBlock):
    kind: Literal["rsvp"] = "rsvp"
    payload: RsvpPayload = RsvpPayload()
