"""Assembles the order page: a form-bound topping group and a free-standing extras group."""

import logging
from typing import Callable, Dict, List, Optional

from formtree.domain import Button, Check, CheckGroup, Form, Label, MarkupContainer, Page
from formtree.schemas import Topping

logger = logging.getLogger(__name__)

Persist = Callable[[str, List[str]], object]


class OptionRow(MarkupContainer):
    """`<label>` wrapping one check box and its caption."""

    tag_name = "label"


class OrderPage(Page):
    def __init__(self, form: Form, toppings: CheckGroup, extras: CheckGroup):
        super().__init__("order-page")
        self.form = form
        self.toppings = toppings
        self.extras = extras
        self.add(form, extras)


def _add_options(group: CheckGroup, options: List[Topping]) -> None:
    for option in options:
        row = OptionRow(option.topping_id)
        row.add(
            Check("check", option.topping_id, value=option.topping_id),
            Label("caption", option.label),
        )
        group.add(row)


def build_order_page(
    selected_toppings: List[str],
    selected_extras: List[str],
    catalog: Dict[str, List[Topping]],
    persist: Optional[Persist] = None,
) -> OrderPage:
    """
    Build a fresh component tree for one request.

    Check tokens are the option ids, so a tree rebuilt from the same catalog
    resolves the tokens a previous render emitted. When `persist` is given,
    committed selections are handed to it as `(group id, values)`.
    """

    def store(name: str) -> Callable[[List[str]], None]:
        def _store(selection: List[str]) -> None:
            if persist is not None:
                persist(name, list(selection))

        return _store

    toppings = CheckGroup(
        "toppings",
        collection=selected_toppings,
        on_selection_changed=store("toppings"),
        wants_notifications=True,
    )
    _add_options(toppings, catalog["toppings"])

    form = Form("order", on_submit=lambda f: store("toppings")(toppings.get_model_object()))
    form.add(toppings, Button("save", "Save order"))

    extras = CheckGroup(
        "extras",
        collection=selected_extras,
        on_selection_changed=store("extras"),
        wants_notifications=True,
    )
    _add_options(extras, catalog["extras"])

    page = OrderPage(form, toppings, extras)
    logger.debug("Built order page with %d toppings, %d extras", len(toppings.checks()), len(extras.checks()))
    return page
