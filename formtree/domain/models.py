"""Model cells that hold a component's backing object."""

from typing import Any, Iterable, List, Optional


class Model:
    """A single mutable cell."""

    def __init__(self, obj: Any = None):
        self._obj = obj

    def get_object(self) -> Any:
        return self._obj

    def set_object(self, obj: Any) -> None:
        self._obj = obj

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._obj!r})"


class CollectionModel(Model):
    """Model over a list; wraps a copy of the given collection so the caller's stays untouched."""

    def __init__(self, collection: Optional[Iterable[Any]] = None):
        super().__init__(list(collection) if collection is not None else [])

    def set_object(self, obj: Optional[Iterable[Any]]) -> None:
        if obj is None:
            obj = []
        elif not isinstance(obj, list):
            obj = list(obj)
        super().set_object(obj)

    def get_object(self) -> List[Any]:
        return self._obj
