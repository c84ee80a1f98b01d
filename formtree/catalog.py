"""Choice catalog backing the demo page's check boxes."""

import json
import logging
import os
from typing import Dict, List

from pydantic import ValidationError

from formtree.schemas import Topping

CATALOG_PATH = os.getenv("CATALOG_PATH", "")

logger = logging.getLogger(__name__)

DEFAULT_TOPPINGS: List[Topping] = [
    Topping(topping_id="cheese", label="Cheese"),
    Topping(topping_id="mushroom", label="Mushrooms"),
    Topping(topping_id="olive", label="Olives"),
    Topping(topping_id="pepper", label="Green peppers"),
]

DEFAULT_EXTRAS: List[Topping] = [
    Topping(topping_id="napkins", label="Napkins"),
    Topping(topping_id="cutlery", label="Cutlery"),
    Topping(topping_id="dip", label="Garlic dip"),
]


def load_catalog() -> Dict[str, List[Topping]]:
    """
    Return the toppings and extras offered on the order page.

    Reads `CATALOG_PATH` (a JSON object with "toppings" and "extras" lists)
    when set; otherwise, or when a section is missing, uses the defaults.
    """
    catalog = {"toppings": list(DEFAULT_TOPPINGS), "extras": list(DEFAULT_EXTRAS)}
    if not CATALOG_PATH:
        return catalog

    try:
        with open(CATALOG_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except (json.JSONDecodeError, OSError) as exc:
        raise ValueError(f"Catalog file {CATALOG_PATH} is unreadable: {exc}") from exc

    for section in ("toppings", "extras"):
        if section not in raw:
            continue
        try:
            catalog[section] = [Topping.model_validate(item) for item in raw[section]]
        except ValidationError as exc:
            raise ValueError(f"Invalid {section} entry in {CATALOG_PATH}: {exc}") from exc
    logger.info(
        "Loaded catalog from %s (%d toppings, %d extras)",
        CATALOG_PATH,
        len(catalog["toppings"]),
        len(catalog["extras"]),
    )
    return catalog
