"""Request parameters as seen by the component tree."""

from typing import Dict, Iterable, List, Mapping, Optional, Union

from starlette.datastructures import FormData, QueryParams


class RequestParameters:
    """Immutable multi-value mapping of parameter name -> submitted strings."""

    def __init__(self, values: Optional[Dict[str, List[str]]] = None):
        self._values: Dict[str, List[str]] = {k: list(v) for k, v in (values or {}).items()}

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Union[str, Iterable[str], None]]) -> "RequestParameters":
        values: Dict[str, List[str]] = {}
        for key, raw in mapping.items():
            if raw is None:
                continue
            values[key] = [raw] if isinstance(raw, str) else list(raw)
        return cls(values)

    @classmethod
    def from_form_data(cls, form: Union[FormData, QueryParams]) -> "RequestParameters":
        values: Dict[str, List[str]] = {}
        for key in form.keys():
            # uploads are not form values for this tree
            values[key] = [v for v in form.getlist(key) if isinstance(v, str)]
        return cls(values)

    def get_values(self, name: str) -> Optional[List[str]]:
        values = self._values.get(name)
        return list(values) if values is not None else None

    def get(self, name: str) -> Optional[str]:
        values = self._values.get(name)
        return values[0] if values else None

    def __contains__(self, name: str) -> bool:
        return name in self._values

    def __repr__(self) -> str:
        return f"RequestParameters({self._values!r})"
