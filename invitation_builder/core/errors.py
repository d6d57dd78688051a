"""Exceptions du faire-part — aucune n'est fatale, le document reste intact."""


class InvitationBuilderError(Exception):
    """Racine de toutes les erreurs du module."""


class UnknownBlockKindError(InvitationBuilderError, ValueError):
    def __init__(self, kind: str):
        from ..blocks import BLOCK_KINDS
        super().__init__(f"Type de bloc inconnu : {kind!r}. Types valides : {list(BLOCK_KINDS)}")
        self.kind = kind


class BlockNotFoundError(InvitationBuilderError, KeyError):
    def __init__(self, block_id: str):
        super().__init__(block_id)
        self.block_id = block_id

    def __str__(self) -> str:
        return f"Bloc introuvable : {self.block_id!r}"


class DocumentInvariantError(InvitationBuilderError):
    """Identifiants dupliqués ou ordre non strict là où il est exigé."""


class TemplateNotFoundError(InvitationBuilderError, LookupError):
    def __init__(self, template_id: str):
        super().__init__(f"Template introuvable : {template_id!r}")
        self.template_id = template_id
