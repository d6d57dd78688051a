"""
Configuration — lue une seule fois depuis l'environnement (valeurs par défaut sinon).

INVITATION_DATA_DIR           dossier des données (base SQLite par défaut)
INVITATION_AUTOSAVE_DELAY_MS  délai de debounce de l'autosave (ms)
INVITATION_HISTORY_LIMIT      profondeur de l'historique undo/redo
INVITATION_DB_PATH            fichier SQLite du store par défaut
INVITATION_SAVE_DRAFTS        "1" → l'autosave enregistre aussi les brouillons incomplets
"""
import os
from pathlib import Path

DATA_DIR = Path(os.getenv("INVITATION_DATA_DIR", str(Path.cwd() / "data")))

AUTOSAVE_DELAY_MS = int(os.getenv("INVITATION_AUTOSAVE_DELAY_MS", "3000"))
HISTORY_LIMIT     = int(os.getenv("INVITATION_HISTORY_LIMIT", "50"))
DB_PATH           = os.getenv("INVITATION_DB_PATH", str(DATA_DIR / "invitations.db"))
SAVE_DRAFTS       = os.getenv("INVITATION_SAVE_DRAFTS", "0").lower() in ("1", "true", "yes")
