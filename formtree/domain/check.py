"""
Check boxes and the group that binds them to a collection model.

A `CheckGroup` has no registry of its checks: they are discovered by walking
the subtree each time the selection is projected (model -> wire tokens) or
resolved (submitted tokens -> model objects). A check belongs to the nearest
enclosing group unless it was given one explicitly.
"""

import json
import logging
import os
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .component import Component
from .errors import FormTreeRuntimeError, UnresolvedTokenError
from .form import VALUE_SEPARATOR, FormComponent, update_collection_model
from .markup import ComponentTag
from .models import CollectionModel, Model
from .visit import Visit, iter_children, visit_children

logger = logging.getLogger(__name__)

WARN_DUPLICATE_TOKENS = os.getenv("FORMTREE_WARN_DUPLICATE_TOKENS", "0").lower() in ("1", "true", "yes")

SelectionCallback = Callable[[List[Any]], None]


def _contains(selection: Iterable[Any], value: Any) -> bool:
    try:
        return value in selection
    except TypeError:
        # unhashable value tested against a set: never selected
        return False


class Check(Component):
    """
    A single checkbox whose model object is the domain value it stands for.

    Its wire token is `value` when given, otherwise `check<N>` with N taken
    from the page's auto index the first time the token is needed.
    """

    tag_name = "input"

    def __init__(self, id: str, model: Any = None, group: Optional["CheckGroup"] = None, value: Optional[str] = None):
        if model is not None and not isinstance(model, Model):
            model = Model(model)
        super().__init__(id, model)
        self._group = group
        self._value = value

    def get_value(self) -> str:
        if self._value is None:
            page = self.page
            if page is None:
                raise FormTreeRuntimeError(f"Check component [{self.path}] is not attached to a page")
            self._value = f"check{page.get_auto_index()}"
        return self._value

    def get_group(self) -> "CheckGroup":
        group = self._group if self._group is not None else self.find_parent(CheckGroup)
        if group is None:
            raise FormTreeRuntimeError(
                f"Check component [{self.path}] cannot find its parent CheckGroup"
            )
        return group

    def is_selected(self) -> bool:
        group = self.get_group()
        if group.has_raw_input():
            raw = group.raw_input
            return raw is not None and self.get_value() in raw.split(VALUE_SEPARATOR)
        return _contains(group.get_model_object() or (), self.get_model_object())

    def create_tag(self) -> ComponentTag:
        return ComponentTag(self.tag_name, {"id": self.markup_id}, open_close=True)

    def on_component_tag(self, tag: ComponentTag) -> None:
        super().on_component_tag(tag)
        group = self.get_group()
        tag.put("type", "checkbox")
        tag.put("name", group.input_name)
        tag.put("value", self.get_value())
        if self.is_selected():
            tag.put("checked", "checked")
        if not (self.is_enabled_in_hierarchy() and group.is_enabled_in_hierarchy()):
            tag.put("disabled", "disabled")
        if group.want_on_selection_changed_notifications():
            url = group.listener_url()
            if group.get_form() is not None:
                tag.put("onclick", f"formtree.submitTo(this.form, {json.dumps(url)});")
            else:
                tag.put("onclick", f"formtree.notify({json.dumps(url)}, {json.dumps(group.input_name)});")


class SelectionChangeSubmitter:
    """Submit participant that commits a group's selection during its form's submit phase."""

    def __init__(self, group: "CheckGroup"):
        self.group = group

    def on_submit(self) -> None:
        self.group.commit_selection()

    def on_error(self) -> None:
        pass

    def on_after_submit(self) -> None:
        pass

    def get_form(self):
        return self.group.get_form()

    def get_default_form_processing(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"SelectionChangeSubmitter({self.group.path!r})"


class CheckGroup(FormComponent):
    """
    Connects the `Check` components below it to one collection model.

    The model collection holds the model objects of every selected check.
    Pass `collection` to wrap a plain collection, `model` to supply your own
    model, or neither to start from an empty list.

    `on_selection_changed` and `wants_notifications` configure the selection
    change hooks; subclasses may override `on_selection_changed` and
    `want_on_selection_changed_notifications` instead.
    """

    def __init__(
        self,
        id: str,
        model: Optional[Model] = None,
        collection: Optional[Iterable[Any]] = None,
        on_selection_changed: Optional[SelectionCallback] = None,
        wants_notifications: bool = False,
    ):
        if model is None:
            model = CollectionModel(collection)
        super().__init__(id, model)
        self.render_body_only = True
        self._on_selection_changed = on_selection_changed
        self._wants_notifications = wants_notifications

    def _owns(self, component: Any) -> bool:
        return isinstance(component, Check) and component.get_group() is self

    def checks(self) -> List[Check]:
        return list(iter_children(self, self._owns))

    # ---------------- Model -> wire ----------------

    def get_model_value(self) -> str:
        selection = self.get_model_object() or ()
        tokens: List[str] = []

        def collect(check: Check, visit: Visit) -> None:
            if _contains(selection, check.get_model_object()):
                tokens.append(check.get_value())

        visit_children(self, collect, self._owns)
        return VALUE_SEPARATOR.join(tokens)

    def projected_wire_value(self) -> str:
        return self.get_model_value()

    # ---------------- Wire -> model ----------------

    def resolve_tokens(self, values: Optional[Sequence[Optional[str]]]) -> List[Any]:
        """
        Map submitted tokens to the model objects of the checks they name.

        None entries are skipped. When several checks share a token the first
        one in document order wins.
        """
        resolved: List[Any] = []
        if not values:
            return resolved

        for value in values:
            if value is None:
                continue

            def match(check: Check, visit: Visit) -> None:
                if str(check.get_value()) == value:
                    visit.stop(check)

            check = visit_children(self, match, self._owns)
            if check is None:
                raise UnresolvedTokenError(values, self.path, value)
            if WARN_DUPLICATE_TOKENS:
                self._warn_on_duplicates(value)
            resolved.append(check.get_model_object())
        return resolved

    def convert_value(self, values: Optional[Sequence[Optional[str]]]) -> List[Any]:
        return self.resolve_tokens(values)

    def _warn_on_duplicates(self, token: str) -> None:
        owners = [c for c in iter_children(self, self._owns) if str(c.get_value()) == token]
        if len(owners) > 1:
            logger.warning(
                "CheckGroup %s: token %r is shared by %d checks (%s); the first one wins",
                self.path,
                token,
                len(owners),
                ", ".join(c.path for c in owners),
            )

    def update_model(self) -> None:
        update_collection_model(self)

    def resolve_and_commit(self, submitted_tokens: Optional[Sequence[Optional[str]]]) -> List[Any]:
        """Resolve `submitted_tokens` and replace the model selection with the result."""
        self.converted_input = self.resolve_tokens(submitted_tokens)
        self.update_model()
        return self.get_model_object()

    # ---------------- Selection change dispatch ----------------

    def on_request(self) -> None:
        """
        Called when a selection changes.

        Outside a form the selection is committed and notified right away.
        Inside a form a participant is registered instead and the commit runs
        when the form's submit phase does, without the form's own processing.
        """
        form = self.get_form()
        if form is None:
            self.commit_selection()
            return
        if any(isinstance(p, SelectionChangeSubmitter) and p.group is self for p in form.pending_participants):
            # already queued for this submit phase
            return
        logger.debug("CheckGroup %s: deferring selection change to form %s", self.path, form.path)
        form.register_submit_participant(SelectionChangeSubmitter(self))

    def commit_selection(self) -> None:
        self.convert_input()
        self.update_model()
        selection = self.get_model_object()
        logger.info("CheckGroup %s: selection changed (%d selected)", self.path, len(selection or ()))
        self.on_selection_changed(selection)

    def on_selection_changed(self, new_selection: List[Any]) -> None:
        """Notified with the freshly committed model collection. No-op unless a callback was given."""
        if self._on_selection_changed is not None:
            self._on_selection_changed(new_selection)

    def want_on_selection_changed_notifications(self) -> bool:
        return self._wants_notifications

    def get_stateless_hint(self) -> bool:
        if self.want_on_selection_changed_notifications():
            return False
        return super().get_stateless_hint()

    def listener_url(self) -> str:
        page = self.page
        if page is None:
            raise FormTreeRuntimeError(f"CheckGroup [{self.path}] is not attached to a page")
        return page.listener_url(self)

    # ---------------- Markup ----------------

    def on_component_tag(self, tag: ComponentTag) -> None:
        super().on_component_tag(tag)
        # not valid on the grouping element
        tag.remove("disabled")
        tag.remove("name")
