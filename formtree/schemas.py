from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------- Catalog ----------------

class Topping(BaseModel):
    """One choosable option; `topping_id` is the domain value stored in selections."""
    model_config = ConfigDict(extra="forbid")
    topping_id: str = Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_-]+$")
    label: str = Field(min_length=1)
    description: Optional[str] = None


# ---------------- Selections ----------------

class SelectionOut(BaseModel):
    name: str
    values: List[str] = Field(default_factory=list)
    # tokens of the selected checks joined by the value separator
    wire_value: str = ""


class SelectionUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")
    # None means "nothing submitted", same as an empty list
    tokens: Optional[List[Optional[str]]] = None


class SelectionError(BaseModel):
    detail: str
    group: Optional[str] = None
    token: Optional[str] = None
    submitted: List[Optional[str]] = Field(default_factory=list)
