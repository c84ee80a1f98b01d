import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import formtree
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from formtree import selection_store  # noqa: E402
from formtree.domain import Check, CheckGroup, Form, Page  # noqa: E402


# Common test fixtures
@pytest.fixture
def store_path(tmp_path: Path, monkeypatch):
    """Point the selection store at a throwaway file."""
    path = tmp_path / "selections.json"
    monkeypatch.setattr(selection_store, "SELECTION_STORE_PATH", str(path))
    return path


@pytest.fixture
def make_group():
    """Build `page > group > checks` with one check per value; returns (page, group)."""

    def _make(values, selected=(), tokens=None, **group_kwargs):
        page = Page()
        group = CheckGroup("group", collection=list(selected), **group_kwargs)
        page.add(group)
        for i, value in enumerate(values):
            token = tokens[i] if tokens else None
            group.add(Check(f"c{i}", value, value=token))
        return page, group

    return _make


@pytest.fixture
def make_form_group():
    """Build `page > form > group > checks`; returns (page, form, group)."""

    def _make(values, selected=(), **group_kwargs):
        page = Page()
        form = Form("form")
        group = CheckGroup("group", collection=list(selected), **group_kwargs)
        for i, value in enumerate(values):
            group.add(Check(f"c{i}", value, value=f"t{i}"))
        form.add(group)
        page.add(form)
        return page, form, group

    return _make
