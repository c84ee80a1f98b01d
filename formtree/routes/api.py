"""Public JSON API routes for the order selections.

These handlers translate HTTP requests into component-tree calls and return
validated responses. Keep the logic thin and delegate to the domain package.
"""

from typing import Dict, List

from fastapi import APIRouter, HTTPException

from formtree.catalog import load_catalog
from formtree.domain import CheckGroup, UnresolvedTokenError
from formtree.order_page import OrderPage
from formtree.routes.pages import current_page
from formtree.schemas import SelectionError, SelectionOut, SelectionUpdate, Topping
from formtree.selection_store import delete_selection, list_selections

router = APIRouter(prefix="/api", tags=["api"])


# ---------------- Helpers ----------------

def _group(page: OrderPage, name: str) -> CheckGroup:
    """Return the check group called `name` or raise 404."""
    groups = {"toppings": page.toppings, "extras": page.extras}
    if name not in groups:
        raise HTTPException(status_code=404, detail="Selection not found")
    return groups[name]


def _selection_out(name: str, group: CheckGroup) -> Dict[str, object]:
    return {
        "name": name,
        "values": list(group.get_model_object()),
        "wire_value": group.projected_wire_value(),
    }


# ---------------- Catalog ----------------

@router.get("/options", response_model=Dict[str, List[Topping]])
def options_list():
    """List the toppings and extras offered on the order page."""
    try:
        return load_catalog()
    except ValueError as exc:
        raise HTTPException(status_code=500, detail=str(exc))


# ---------------- Selections ----------------

@router.get("/selections", response_model=Dict[str, List[str]])
def selections_list():
    """Return every stored selection by name."""
    return list_selections()


@router.get("/selections/{name}", response_model=SelectionOut)
def selections_get(name: str):
    """Return a stored selection and the wire value it renders to."""
    group = _group(current_page(), name)
    return _selection_out(name, group)


@router.put("/selections/{name}", response_model=SelectionOut)
def selections_update(name: str, payload: SelectionUpdate):
    """Resolve submitted check tokens, replace the selection and notify its group."""
    group = _group(current_page(), name)
    try:
        selection = group.resolve_and_commit(payload.tokens)
    except UnresolvedTokenError as exc:
        raise HTTPException(
            status_code=409,
            detail=SelectionError(
                detail=str(exc), group=exc.path, token=exc.token, submitted=exc.submitted
            ).model_dump(),
        )
    group.on_selection_changed(selection)
    return _selection_out(name, group)


@router.delete("/selections/{name}")
def selections_delete(name: str):
    """Forget a stored selection; 404 when nothing was stored under `name`."""
    removed = delete_selection(name)
    if not removed:
        raise HTTPException(status_code=404, detail="Selection not found")
    return {"ok": True, "deleted": name}
