"""Named selections persisted as one JSON document: {"selections": {name: [values]}}."""

import json
import logging
import os
from typing import Dict, List

SELECTION_STORE_PATH = os.getenv("SELECTION_STORE_PATH", "./selections.json")

logger = logging.getLogger(__name__)


def _read_selections() -> Dict[str, List[str]]:
    try:
        with open(SELECTION_STORE_PATH, "r", encoding="utf-8") as f:
            return dict(json.load(f).get("selections") or {})
    except FileNotFoundError:
        return {}
    except (json.JSONDecodeError, OSError, AttributeError):
        logger.warning("Selection store %s is unreadable; starting empty", SELECTION_STORE_PATH)
        return {}


def _write_selections(selections: Dict[str, List[str]]) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(SELECTION_STORE_PATH)), exist_ok=True)
    with open(SELECTION_STORE_PATH, "w", encoding="utf-8") as f:
        json.dump({"selections": selections}, f, ensure_ascii=False, indent=2)


# ---------------- Selections ----------------

def load_selection(name: str) -> List[str]:
    return list(_read_selections().get(name) or [])


def save_selection(name: str, values: List[str]) -> List[str]:
    """Replace the selection stored under `name`; values are stored as strings."""
    selections = _read_selections()
    selections[name] = [str(v) for v in values]
    _write_selections(selections)
    logger.info("Stored selection %s (%d values)", name, len(selections[name]))
    return selections[name]


def list_selections() -> Dict[str, List[str]]:
    return {name: list(values) for name, values in _read_selections().items()}


def delete_selection(name: str) -> bool:
    selections = _read_selections()
    if name not in selections:
        return False
    del selections[name]
    _write_selections(selections)
    return True
