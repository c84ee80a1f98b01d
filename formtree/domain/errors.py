"""Error kinds raised by the component tree."""

from typing import List, Optional, Sequence


class FormTreeRuntimeError(RuntimeError):
    """Structural failure inside the component tree (not a user input error)."""


class ComponentNotFoundError(FormTreeRuntimeError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"No component found at path [{path}]")


class UnresolvedTokenError(FormTreeRuntimeError):
    """
    A submitted token points to no Check below the group.

    Attributes:
        submitted: Every token submitted for the group, in request order.
        path: Path of the group that tried to resolve the tokens.
        token: The token that did not resolve.
    """

    def __init__(self, submitted: Sequence[Optional[str]], path: str, token: str):
        self.submitted: List[Optional[str]] = list(submitted)
        self.path = path
        self.token = token
        joined = ",".join("" if v is None else v for v in self.submitted)
        super().__init__(
            f"submitted http post value [{joined}] for CheckGroup component [{path}] "
            f"contains an illegal value [{token}] which does not point to a Check component. "
            "The CheckGroup cannot resolve the selected Check pointed to by this value. "
            "A possible reason is that the component hierarchy changed between rendering "
            "and form submission."
        )
