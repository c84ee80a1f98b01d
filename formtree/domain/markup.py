"""Outbound tag representation used while components emit markup."""

from typing import Dict, Iterator, Optional

from markupsafe import Markup, escape


class ComponentTag:
    """
    A single start tag with an ordered attribute set.

    Attributes whose value is None are rendered as bare boolean attributes
    (e.g. `checked`).
    """

    def __init__(self, name: str, attributes: Optional[Dict[str, Optional[str]]] = None, open_close: bool = False):
        self.name = name
        self.attributes: Dict[str, Optional[str]] = dict(attributes or {})
        self.open_close = open_close

    def get(self, key: str) -> Optional[str]:
        return self.attributes.get(key)

    def put(self, key: str, value: Optional[str] = None) -> None:
        self.attributes[key] = value

    def remove(self, key: str) -> None:
        self.attributes.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self.attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def to_markup(self) -> Markup:
        parts = [self.name]
        for key, value in self.attributes.items():
            if value is None:
                parts.append(str(escape(key)))
            else:
                parts.append(f'{escape(key)}="{escape(value)}"')
        closing = "/>" if self.open_close else ">"
        return Markup("<" + " ".join(parts) + closing)

    def closing_markup(self) -> Markup:
        if self.open_close:
            return Markup("")
        return Markup(f"</{self.name}>")

    def __repr__(self) -> str:
        return f"ComponentTag({self.name!r}, {self.attributes!r})"
