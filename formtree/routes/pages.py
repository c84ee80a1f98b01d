"""HTML page routes for the order form."""

import logging
import os

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from formtree.catalog import load_catalog
from formtree.domain import ComponentNotFoundError, RequestListener, UnresolvedTokenError
from formtree.order_page import OrderPage, build_order_page
from formtree.request import RequestParameters
from formtree.selection_store import load_selection, save_selection

TEMPLATES_DIR = os.getenv(
    "TEMPLATES_DIR",
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "templates"),
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=TEMPLATES_DIR)


def current_page() -> OrderPage:
    """Rebuild the order page from the stored selections; commits are persisted back."""
    return build_order_page(
        load_selection("toppings"),
        load_selection("extras"),
        load_catalog(),
        persist=save_selection,
    )


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    """Render the order page with the current selections checked."""
    page = current_page()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": "Order",
            "page_markup": page.render(),
            "toppings_value": page.toppings.projected_wire_value(),
            "extras_value": page.extras.projected_wire_value(),
        },
    )


@router.post("/listener/{path:path}")
async def listener(path: str, request: Request):
    """Dispatch a posted request to the component at `path` (a form or a check group)."""
    form_data = await request.form()
    page = current_page()
    page.attach_request(RequestParameters.from_form_data(form_data))
    try:
        component = page.find_component(path)
        if not isinstance(component, RequestListener):
            raise HTTPException(status_code=400, detail=f"Component [{path}] does not accept requests")
        component.on_request()
        page.run_submit_phases()
    except ComponentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except UnresolvedTokenError as exc:
        logger.warning("Rejected stale submission for %s: token %r", exc.path, exc.token)
        raise HTTPException(status_code=409, detail=str(exc))
    finally:
        page.detach_request()
    return RedirectResponse(url="/", status_code=303)
