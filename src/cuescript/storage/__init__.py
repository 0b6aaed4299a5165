"""Storage collaborators for cuescript documents."""

from cuescript.storage.files import import_text, load_script, save_script
from cuescript.storage.memory import InMemoryScriptStore

__all__ = [
    "InMemoryScriptStore",
    "import_text",
    "load_script",
    "save_script",
]
