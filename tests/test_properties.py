"""
Property-based tests for reshape() using hypothesis.
"""

import unittest

from hypothesis import given, settings, strategies as st

from reshaper import MatchNotFound, reshape

keys = st.text(alphabet="abcdefgh", min_size=1, max_size=4)
numbers = st.one_of(st.integers(), st.floats(allow_nan=False))

number_records = st.lists(
    st.dictionaries(keys, numbers, min_size=1, max_size=4),
    min_size=1,
    max_size=5,
)

person = st.fixed_dictionaries({
    "a": st.integers(),
    "b": st.text(),
    "c": st.fixed_dictionaries({"d": st.booleans(), "e": st.text()}),
})


class TestReshapeProperties(unittest.TestCase):

    @given(number_records)
    @settings(max_examples=100)
    def test_deterministic(self, records):
        """Identical inputs give identical outputs."""
        self.assertEqual(reshape(records, ["Number"]), reshape(records, ["Number"]))

    @given(number_records)
    @settings(max_examples=100)
    def test_one_value_per_record(self, records):
        """Every element comes from its own record."""
        result = reshape(records, ["Number"])
        self.assertEqual(len(result), len(records))
        for value, record in zip(result, records):
            self.assertIn(value, list(record.values()))

    @given(st.lists(person, min_size=1, max_size=4), st.permutations(["a", "b", "d"]))
    @settings(max_examples=50)
    def test_key_order_independent(self, records, order):
        """With keys naming source properties, declaration order only reorders keys."""
        full = {"a": ["Number"], "b": ["String"], "d": ["Boolean"]}
        shuffled = {key: full[key] for key in order}
        self.assertEqual(reshape(records, shuffled), reshape(records, full))

    @given(st.lists(person, min_size=1, max_size=4))
    @settings(max_examples=50)
    def test_shallowest_and_hint(self, records):
        """Depth 1 wins without a hint; the hint wins with one."""
        self.assertEqual(reshape(records, ["String"]), [r["b"] for r in records])
        self.assertEqual(reshape(records, ["String"], "e"), [r["c"]["e"] for r in records])

    @given(st.lists(st.dictionaries(keys, st.text(), min_size=1), min_size=1, max_size=4))
    @settings(max_examples=50)
    def test_missing_kind_fails(self, records):
        """A kind absent from the source always raises MatchNotFound."""
        with self.assertRaises(MatchNotFound):
            reshape(records, ["Number"])
