"""
Component tree primitives: components, containers and the page root.

Components form an ownership tree through `MarkupContainer.add`. Paths are
colon-joined component ids starting below the page, e.g. `form:toppings:cheese`.
"""

import logging
from typing import Any, Iterator, List, Optional, Protocol, Type, runtime_checkable

from markupsafe import Markup, escape

from .errors import ComponentNotFoundError
from .markup import ComponentTag
from .models import Model
from .visit import iter_children

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ":"


@runtime_checkable
class RequestListener(Protocol):
    """Anything that can be the target of a listener URL."""

    def on_request(self) -> None:
        ...


class Component:
    tag_name = "span"

    def __init__(self, id: str, model: Optional[Model] = None):
        if not id or PATH_SEPARATOR in id:
            raise ValueError(f"Invalid component id: {id!r}")
        self.id = id
        self.parent: Optional["MarkupContainer"] = None
        self._model = model
        self.render_body_only = False
        self.enabled = True
        self.visible = True

    # ---------------- Hierarchy ----------------

    @property
    def path(self) -> str:
        ids: List[str] = []
        node: Optional[Component] = self
        while node is not None and not isinstance(node, Page):
            ids.append(node.id)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(ids))

    @property
    def page(self) -> Optional["Page"]:
        node: Optional[Component] = self
        while node is not None:
            if isinstance(node, Page):
                return node
            node = node.parent
        return None

    def find_parent(self, kind: Type[Any]) -> Optional[Any]:
        node = self.parent
        while node is not None:
            if isinstance(node, kind):
                return node
            node = node.parent
        return None

    def get_form(self):
        """Nearest enclosing form, or None when the component is not inside one."""
        from .form import Form

        return self.find_parent(Form)

    def is_enabled_in_hierarchy(self) -> bool:
        node: Optional[Component] = self
        while node is not None:
            if not node.enabled:
                return False
            node = node.parent
        return True

    @property
    def markup_id(self) -> str:
        return self.path.replace(PATH_SEPARATOR, "_") or self.id

    # ---------------- Model ----------------

    def get_model(self) -> Optional[Model]:
        return self._model

    def set_model(self, model: Optional[Model]) -> None:
        self._model = model

    def get_model_object(self) -> Any:
        return self._model.get_object() if self._model is not None else None

    def set_model_object(self, obj: Any) -> None:
        if self._model is None:
            self._model = Model()
        self._model.set_object(obj)
        self.model_changed()

    def model_changed(self) -> None:
        logger.debug("Model changed for component %s", self.path)

    # ---------------- Stateless policy ----------------

    def get_stateless_hint(self) -> bool:
        return True

    def is_stateless(self) -> bool:
        if not self.get_stateless_hint():
            return False
        return all(child.get_stateless_hint() for child in iter_children(self))

    # ---------------- Rendering ----------------

    def create_tag(self) -> ComponentTag:
        return ComponentTag(self.tag_name, {"id": self.markup_id})

    def on_component_tag(self, tag: ComponentTag) -> None:
        """Hook to adjust the component's own tag before it is emitted."""

    def render_body(self) -> Markup:
        return Markup("")

    def render(self) -> Markup:
        if not self.visible:
            return Markup("")
        body = self.render_body()
        if self.render_body_only:
            return body
        tag = self.create_tag()
        self.on_component_tag(tag)
        return tag.to_markup() + body + tag.closing_markup()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.path!r})"


class Label(Component):
    def __init__(self, id: str, text: str = ""):
        super().__init__(id, Model(text))

    def render_body(self) -> Markup:
        return escape(self.get_model_object() or "")


class MarkupContainer(Component):
    tag_name = "div"

    def __init__(self, id: str, model: Optional[Model] = None):
        super().__init__(id, model)
        self.children: List[Component] = []

    def add(self, *children: Component) -> "MarkupContainer":
        for child in children:
            if any(existing.id == child.id for existing in self.children):
                raise ValueError(f"A child with id '{child.id}' already exists in {self.path or self.id}")
            child.parent = self
            self.children.append(child)
        return self

    def remove(self, child: Component) -> None:
        self.children.remove(child)
        child.parent = None

    def get(self, path: str) -> Optional[Component]:
        node: Component = self
        for part in path.split(PATH_SEPARATOR):
            if not isinstance(node, MarkupContainer):
                return None
            match = next((c for c in node.children if c.id == part), None)
            if match is None:
                return None
            node = match
        return node

    def __iter__(self) -> Iterator[Component]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def render_body(self) -> Markup:
        return Markup("").join(child.render() for child in self.children)


class Page(MarkupContainer):
    """Root of a component tree; owns per-page counters and the current request."""

    def __init__(self, id: str = "page"):
        super().__init__(id)
        self.render_body_only = True
        self._auto_index = 0
        self.request = None

    def get_auto_index(self) -> int:
        index = self._auto_index
        self._auto_index += 1
        return index

    def attach_request(self, parameters) -> None:
        self.request = parameters

    def detach_request(self) -> None:
        self.request = None

    def find_component(self, path: str) -> Component:
        found = self.get(path) if path else None
        if found is None:
            raise ComponentNotFoundError(path)
        return found

    def listener_url(self, component: Component) -> str:
        return f"/listener/{component.path}"

    def run_submit_phases(self) -> None:
        """Run the submit phase of every form that has registered participants waiting."""
        from .form import Form

        for form in iter_children(self, Form):
            if form.pending_participants:
                form.on_form_submitted()
