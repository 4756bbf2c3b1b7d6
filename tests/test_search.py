"""
Tests for the source searcher, the search context and value classification.
"""

import pytest

from reshaper.context import SearchContext
from reshaper.hints import HintPool
from reshaper.schema import Kind
from reshaper.search import find_leaf, iter_containers, iter_slots
from reshaper.settings import ReshapeSettings
from reshaper.values import ValueKind, value_kind


class TestValueKind:
    """value_kind tags every supported value."""

    @pytest.mark.parametrize("value,kind", [
        ({"a": 1}, ValueKind.OBJECT),
        ([1], ValueKind.ARRAY),
        ((1,), ValueKind.ARRAY),
        ("s", ValueKind.STRING),
        (1, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        (True, ValueKind.BOOLEAN),
        (None, ValueKind.NULL),
    ])
    def test_kinds(self, value, kind):
        assert value_kind(value) == kind

    def test_unsupported(self):
        with pytest.raises(TypeError, match="set"):
            value_kind({1})

    def test_container_flag(self):
        assert ValueKind.OBJECT.is_container
        assert ValueKind.ARRAY.is_container
        assert not ValueKind.STRING.is_container


class TestTraversal:
    """Breadth-first order, key order within a level."""

    def test_iter_slots_breadth_first(self):
        source = {"a": {"deep": 1}, "b": 2}
        keys = [(slot.depth, slot.key) for slot in iter_slots(source)]
        assert keys == [(1, "a"), (1, "b"), (2, "deep")]

    def test_iter_slots_respects_max_depth(self):
        source = {"a": {"deep": 1}, "b": 2}
        keys = [slot.key for slot in iter_slots(source, max_depth=1)]
        assert keys == ["a", "b"]

    def test_iter_slots_paths_extend_origin(self):
        source = {"a": [{"b": 1}]}
        paths = [slot.path for slot in iter_slots(source, origin=(3,))]
        assert paths == [(3, "a"), (3, "a", 0), (3, "a", 0, "b")]

    def test_shared_object_has_distinct_paths(self):
        record = {"x": 1}
        paths = [slot.path for slot in iter_slots([record, record])]
        assert paths == [(0,), (1,), (0, "x"), (1, "x")]

    def test_iter_slots_of_primitive(self):
        assert list(iter_slots(5)) == []

    def test_iter_containers(self):
        inner = [1, 2]
        source = {"x": 1, "list": inner}
        containers = list(iter_containers(source))
        assert containers[0] == (0, (), source)
        assert containers[1] == (1, ("list",), inner)
        assert len(containers) == 2


class TestFindLeaf:
    """Shallowest match, hints and used slots."""

    def setup_method(self):
        self.people = {
            "name": "Joel",
            "info": {"age": 23, "lastName": "Auterson", "middleName": "Robert"},
        }

    def test_root_primitive(self):
        found = find_leaf(Kind.NUMBER, 7, SearchContext())
        assert found.value == 7
        assert found.depth == 0
        assert found.key is None

    def test_primitive_of_other_kind(self):
        assert find_leaf(Kind.NUMBER, "7", SearchContext()) is None

    def test_shallowest(self):
        found = find_leaf(Kind.STRING, self.people, SearchContext())
        assert (found.value, found.key, found.depth) == ("Joel", "name", 1)
        assert found.path == ("name",)

    def test_preferred_name_beats_depth(self):
        found = find_leaf(Kind.STRING, self.people, SearchContext(), ["lastName"])
        assert found.value == "Auterson"

    def test_pool_hint_consumed(self):
        ctx = SearchContext(HintPool(names=["middleName", "lastName"]))
        found = find_leaf(Kind.STRING, self.people, ctx)
        assert found.value == "Robert"
        assert ctx.hints.names == ["lastName"]

    def test_used_slot_skipped(self):
        ctx = SearchContext()
        first = find_leaf(Kind.STRING, self.people, ctx)
        second = find_leaf(Kind.STRING, self.people, ctx)
        assert (first.value, second.value) == ("Joel", "Auterson")
        assert ctx.chosen == ["name", "lastName"]

    def test_sticky_key_used_after_pool(self):
        ctx = SearchContext(sticky=["middleName"])
        assert find_leaf(Kind.STRING, self.people, ctx).value == "Robert"

    def test_sticky_keys_disabled(self):
        ctx = SearchContext(settings=ReshapeSettings(sticky_keys=False), sticky=["middleName"])
        assert find_leaf(Kind.STRING, self.people, ctx).value == "Joel"

    def test_max_depth(self):
        ctx = SearchContext(settings=ReshapeSettings(max_depth=1))
        assert find_leaf(Kind.NUMBER, self.people, ctx) is None

    def test_array_elements_searched(self):
        found = find_leaf(Kind.NUMBER, ["a", [3]], SearchContext())
        assert (found.value, found.depth) == (3, 2)


class TestSearchContext:
    """Forks are independent until adopted."""

    def test_fork_and_adopt(self):
        ctx = SearchContext(HintPool(names=["a"]))
        attempt = ctx.fork()
        attempt.claim(("a",))
        attempt.hints.consume("a")

        assert not ctx.is_used(("a",))
        assert ctx.hints.names == ["a"]

        ctx.adopt(attempt)
        assert ctx.is_used(("a",))
        assert ctx.hints.names == []
        assert ctx.chosen == ["a"]

    def test_index_keys_not_chosen(self):
        ctx = SearchContext()
        ctx.claim(("list", 0))
        assert ctx.is_used(("list", 0))
        assert ctx.chosen == []

    def test_object_frame_isolates_used_paths(self):
        ctx = SearchContext()
        ctx.claim(("x",))
        with ctx.object_frame():
            assert not ctx.is_used(("x",))
            ctx.claim(("y",))
        assert ctx.is_used(("x",))
        assert not ctx.is_used(("y",))

    def test_object_frame_restored_on_failure(self):
        ctx = SearchContext()
        ctx.claim(("x",))
        with pytest.raises(RuntimeError):
            with ctx.object_frame():
                raise RuntimeError("boom")
        assert ctx.used == {("x",)}
