"""Depth-first traversal over a component subtree with early exit."""

from typing import Any, Callable, Iterator, Type, Union

ComponentKind = Union[Type[Any], Callable[[Any], bool], None]
Visitor = Callable[[Any, "Visit"], None]


class Visit:
    """Control handle passed to a visitor for each matching component."""

    def __init__(self) -> None:
        self._stopped = False
        self._skip_children = False
        self.result: Any = None

    def stop(self, result: Any = None) -> None:
        """End the traversal, carrying `result` back to the caller."""
        self._stopped = True
        self.result = result

    def dont_go_deeper(self) -> None:
        """Skip the descendants of the component currently being visited."""
        self._skip_children = True

    @property
    def is_stopped(self) -> bool:
        return self._stopped


def _matcher(kind: ComponentKind) -> Callable[[Any], bool]:
    if kind is None:
        return lambda _component: True
    if isinstance(kind, type):
        return lambda component: isinstance(component, kind)
    return kind


def _children_of(component: Any) -> list:
    children = getattr(component, "children", None)
    return list(children) if children else []


def visit_children(parent: Any, visitor: Visitor, kind: ComponentKind = None) -> Any:
    """
    Walk every descendant of `parent` in document order (pre-order).

    `kind` filters which components reach the visitor: a class, a predicate,
    or None for all. Non-matching containers are still descended into.
    Returns whatever the visitor passed to `Visit.stop`, else None.
    """
    matches = _matcher(kind)
    visit = Visit()

    def walk(component: Any) -> bool:
        for child in _children_of(component):
            visit._skip_children = False
            if matches(child):
                visitor(child, visit)
                if visit.is_stopped:
                    return True
            if visit._skip_children:
                continue
            if walk(child):
                return True
        return False

    walk(parent)
    return visit.result if visit.is_stopped else None


def iter_children(parent: Any, kind: ComponentKind = None) -> Iterator[Any]:
    """Yield the descendants of `parent` that match `kind`, in document order."""
    matches = _matcher(kind)
    for child in _children_of(parent):
        if matches(child):
            yield child
        yield from iter_children(child, kind)
