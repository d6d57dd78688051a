"""Éditeur — contrôleur de document et session d'autosave."""
from .controller import BlockDocumentController, Mutation
from .session import EditingSession, SaveResult, SessionState, INCOMPLETE_BLOCKS

__all__ = [
    "BlockDocumentController",
    "Mutation",
    "EditingSession",
    "SaveResult",
    "SessionState",
    "INCOMPLETE_BLOCKS",
]
