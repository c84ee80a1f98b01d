"""
Unit Tests for CheckGroup

Tests for projecting the model selection to wire tokens and resolving
submitted tokens back to model objects.
"""

import logging
from collections.abc import MutableSet

import pytest

from formtree.domain import (
    VALUE_SEPARATOR,
    Check,
    CheckGroup,
    CollectionModel,
    FormTreeRuntimeError,
    Model,
    Page,
    UnresolvedTokenError,
)
from formtree.domain import check as check_module


class OrderedBag(MutableSet):
    """Insertion-ordered set without the built-in set API."""

    def __init__(self, items=()):
        self._items = []
        for item in items:
            self.add(item)

    def __contains__(self, item):
        return item in self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def add(self, item):
        if item not in self._items:
            self._items.append(item)

    def discard(self, item):
        if item in self._items:
            self._items.remove(item)


class TestConstruction:
    """Tests for the three ways of building a group."""

    def test_init_when_id_only_then_model_is_empty_list(self):
        group = CheckGroup("group")
        assert group.get_model_object() == []
        assert group.render_body_only is True

    def test_init_when_collection_given_then_wraps_a_copy(self):
        source = ["a", "b"]
        group = CheckGroup("group", collection=source)
        group.get_model_object().append("c")
        assert source == ["a", "b"]
        assert isinstance(group.get_model(), CollectionModel)

    def test_init_when_model_given_then_uses_it(self):
        model = Model({"a"})
        group = CheckGroup("group", model=model)
        assert group.get_model() is model


class TestProjection:
    """Tests for the outbound model -> wire value."""

    def test_projected_value_when_selection_then_joins_tokens_in_document_order(self, make_group):
        """Selected tokens appear in tree order, not selection order."""
        _, group = make_group(["a", "b", "c"], selected=["c", "a"], tokens=["ta", "tb", "tc"])
        assert group.projected_wire_value() == "ta" + VALUE_SEPARATOR + "tc"

    def test_projected_value_when_empty_selection_then_empty_string(self, make_group):
        _, group = make_group(["a", "b"], selected=[])
        assert group.projected_wire_value() == ""

    def test_projected_value_when_called_twice_then_identical(self, make_group):
        """Projection is a pure read."""
        _, group = make_group(["a", "b", "c"], selected=["b", "c"])
        first = group.projected_wire_value()
        assert group.projected_wire_value() == first
        assert group.get_model_object() == ["b", "c"]

    def test_projected_value_when_check_value_unhashable_then_never_selected(self):
        """Values the collection cannot compare are simply not selected."""
        page = Page()
        group = CheckGroup("group", model=Model({"a"}))
        page.add(group)
        group.add(Check("hashable", "a", value="ta"), Check("list", ["x"], value="tx"))
        assert group.projected_wire_value() == "ta"

    def test_projected_value_when_auto_tokens_then_uses_page_index(self, make_group):
        _, group = make_group(["a", "b"], selected=["a", "b"])
        assert group.projected_wire_value() == "check0;check1"

    def test_projected_value_when_nested_group_then_ignores_its_checks(self):
        """Checks owned by an inner group do not belong to the outer one."""
        page = Page()
        outer = CheckGroup("outer", collection=["a", "b"])
        inner = CheckGroup("inner", collection=["b"])
        inner.add(Check("b", "b", value="tb"))
        outer.add(Check("a", "a", value="ta"), inner)
        page.add(outer)
        assert outer.projected_wire_value() == "ta"
        assert inner.projected_wire_value() == "tb"


class TestResolution:
    """Tests for the inbound wire -> model resolution."""

    @pytest.mark.parametrize("submitted", [None, []])
    def test_resolve_when_nothing_submitted_then_empty(self, make_group, submitted):
        _, group = make_group(["a", "b"], selected=["a"])
        assert group.resolve_tokens(submitted) == []

    def test_resolve_when_tokens_match_then_returns_values_in_submitted_order(self, make_group):
        _, group = make_group(["a", "b", "c"], tokens=["ta", "tb", "tc"])
        assert group.resolve_tokens(["tc", "ta"]) == ["c", "a"]

    def test_resolve_when_null_entries_then_skips_them(self, make_group):
        _, group = make_group(["a", "b"], tokens=["ta", "tb"])
        assert group.resolve_tokens([None, "tb", None]) == ["b"]

    def test_resolve_when_only_nulls_then_empty(self, make_group):
        _, group = make_group(["a"], tokens=["ta"])
        assert group.resolve_tokens([None]) == []

    def test_resolve_when_case_differs_then_raises(self, make_group):
        """Token comparison is exact."""
        _, group = make_group(["a"], tokens=["Token"])
        with pytest.raises(UnresolvedTokenError):
            group.resolve_tokens(["token"])

    def test_resolve_when_token_unknown_then_error_carries_context(self, make_group):
        """A token with no matching check names the token, the list and the group."""
        _, group = make_group(["a", "b"], tokens=["ta", "tb"])
        with pytest.raises(UnresolvedTokenError) as info:
            group.resolve_tokens(["ta", "stale", "tb"])
        err = info.value
        assert err.token == "stale"
        assert err.submitted == ["ta", "stale", "tb"]
        assert err.path == "group"
        assert "[ta,stale,tb]" in str(err)
        assert "[stale]" in str(err)

    def test_resolve_when_duplicate_tokens_then_first_in_document_order_wins(self, make_group):
        """Shared tokens resolve to the first check, on every run."""
        _, group = make_group(["first", "second", "other"], tokens=["dup", "dup", "x"])
        results = [group.resolve_tokens(["dup"]) for _ in range(5)]
        assert results == [["first"]] * 5

    def test_resolve_when_duplicate_warning_enabled_then_logs(self, make_group, monkeypatch, caplog):
        monkeypatch.setattr(check_module, "WARN_DUPLICATE_TOKENS", True)
        _, group = make_group(["first", "second"], tokens=["dup", "dup"])
        with caplog.at_level(logging.WARNING, logger="formtree.domain.check"):
            assert group.resolve_tokens(["dup"]) == ["first"]
        assert "shared by 2 checks" in caplog.text

    def test_resolve_when_token_belongs_to_nested_group_then_raises(self):
        page = Page()
        outer = CheckGroup("outer")
        inner = CheckGroup("inner")
        inner.add(Check("b", "b", value="tb"))
        outer.add(Check("a", "a", value="ta"), inner)
        page.add(outer)
        with pytest.raises(UnresolvedTokenError):
            outer.resolve_tokens(["tb"])


class TestResolveAndCommit:
    """Tests for resolve_and_commit."""

    def test_round_trip_when_projected_then_reproduces_selection(self, make_group):
        """Resolving the projected value gives back the same selection."""
        _, group = make_group(["a", "b", "c", "d"], selected=["d", "b"])
        tokens = group.projected_wire_value().split(VALUE_SEPARATOR)
        group.resolve_and_commit(tokens)
        assert set(group.get_model_object()) == {"b", "d"}

    def test_commit_when_collection_held_then_refills_same_instance(self, make_group):
        _, group = make_group(["a", "b"], selected=["a"], tokens=["ta", "tb"])
        before = group.get_model_object()
        result = group.resolve_and_commit(["tb"])
        assert result is before
        assert before == ["b"]

    def test_commit_when_model_is_set_then_keeps_set_semantics(self):
        page = Page()
        group = CheckGroup("group", model=Model({"a"}))
        page.add(group)
        group.add(Check("a", "a", value="ta"), Check("b", "b", value="tb"))
        group.resolve_and_commit(["tb", "tb"])
        assert group.get_model_object() == {"b"}

    def test_commit_when_model_is_custom_mutable_set_then_refilled(self):
        page = Page()
        bag = OrderedBag(["a"])
        group = CheckGroup("group", model=Model(bag))
        page.add(group)
        group.add(Check("a", "a", value="ta"), Check("b", "b", value="tb"))

        result = group.resolve_and_commit(["tb", "ta", "tb"])

        assert result is bag
        assert list(bag) == ["b", "a"]

    def test_commit_when_nothing_submitted_then_selection_cleared(self, make_group):
        _, group = make_group(["a"], selected=["a"], tokens=["ta"])
        assert group.resolve_and_commit(None) == []

    def test_commit_when_token_unknown_then_model_untouched(self, make_group):
        """A mismatch aborts before the model changes."""
        _, group = make_group(["a", "b"], selected=["a"], tokens=["ta", "tb"])
        with pytest.raises(UnresolvedTokenError):
            group.resolve_and_commit(["tb", "gone"])
        assert group.get_model_object() == ["a"]


class TestCheck:
    """Tests for Check tokens and group lookup."""

    def test_get_value_when_auto_then_stable_for_lifetime(self):
        page = Page()
        group = CheckGroup("group")
        first, second = Check("a", "a"), Check("b", "b")
        group.add(first, second)
        page.add(group)
        assert second.get_value() == "check0"
        assert first.get_value() == "check1"
        assert second.get_value() == "check0"

    def test_get_value_when_detached_then_raises(self):
        with pytest.raises(FormTreeRuntimeError):
            Check("a", "a").get_value()

    def test_get_group_when_no_group_then_raises(self):
        page = Page()
        check = Check("lonely", "x")
        page.add(check)
        with pytest.raises(FormTreeRuntimeError, match="cannot find its parent CheckGroup"):
            check.get_group()

    def test_get_group_when_explicit_group_is_empty_then_still_explicit(self):
        page = Page()
        host = CheckGroup("host", collection=["x"])
        target = CheckGroup("target")
        check = Check("c", "x", group=target, value="tx")
        host.add(check)
        page.add(host, target)

        assert len(target) == 0
        assert check.get_group() is target
        assert host.projected_wire_value() == ""
        with pytest.raises(UnresolvedTokenError):
            host.resolve_tokens(["tx"])
