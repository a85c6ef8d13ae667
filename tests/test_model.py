"""
Tests for likertkit Core Model Objects

These tests verify:
    - LabelSet construction, ordering and lookups
    - Code normalization in variables
    - validate() reporting of unlabelled codes
    - RecodeMap construction and fail-fast ambiguity
    - Dataset container invariants
"""

import numpy as np
import pytest

from likertkit.model import (
    MISSING,
    AmbiguousRecodeError,
    CodedVariable,
    Dataset,
    DuplicateCodeError,
    LabelledVariable,
    LabellingError,
    LabelSet,
    RecodeMap,
)


DA5 = LabelSet.from_mapping(
    {
        1: "Strongly disagree",
        2: "Somewhat disagree",
        3: "Neither",
        4: "Somewhat agree",
        5: "Strongly agree",
    },
    name="da5",
)


class TestLabelSet:
    """Test LabelSet objects."""

    def test_codes_and_labels_keep_order(self):
        """Insertion order is the display order, not numeric order."""
        s = LabelSet(entries=((3, "Post"), (1, "Pre"), (2, "Mid")))
        assert s.codes == (3, 1, 2)
        assert s.labels == ("Post", "Pre", "Mid")

    def test_duplicate_code_raises(self):
        with pytest.raises(DuplicateCodeError) as exc:
            LabelSet(entries=((1, "A"), (2, "B"), (1, "C")))
        assert exc.value.code == 1

    def test_duplicate_error_is_labelling_error(self):
        """All validation errors share a ValueError base."""
        with pytest.raises(LabellingError):
            LabelSet(entries=((1, "A"), (1, "A")))
        with pytest.raises(ValueError):
            LabelSet(entries=((1, "A"), (1, "A")))

    def test_duplicate_labels_allowed(self):
        s = LabelSet(entries=((1, "Agree"), (2, "Agree")))
        assert len(s) == 2
        assert s.code_for("Agree") == 1

    def test_lookups(self):
        assert DA5.label_for(4) == "Somewhat agree"
        assert DA5.label_for(6) is None
        assert DA5.label_for(MISSING) is None
        assert DA5.code_for("Neither") == 3
        assert DA5.code_for("Nope") is None
        assert 5 in DA5
        assert 6 not in DA5

    def test_integral_float_codes_normalized(self):
        s = LabelSet(entries=((1.0, "A"), (np.int64(2), "B")))
        assert s.codes == (1, 2)
        assert all(type(c) is int for c in s.codes)

    def test_missing_code_cannot_be_labelled(self):
        with pytest.raises(TypeError):
            LabelSet(entries=((None, "Missing"),))

    def test_reversed_keeps_codes(self):
        r = DA5.reversed()
        assert r.codes == DA5.codes
        assert r.label_for(1) == "Strongly agree"
        assert r.label_for(5) == "Strongly disagree"
        assert r.label_for(3) == "Neither"

    def test_reversed_is_involutive(self):
        assert DA5.reversed().reversed() == DA5

    def test_reversed_does_not_mutate(self):
        DA5.reversed(name="ad5")
        assert DA5.label_for(1) == "Strongly disagree"
        assert DA5.name == "da5"

    def test_frozen(self):
        with pytest.raises(Exception):
            DA5.name = "other"

    def test_iteration_yields_pairs(self):
        assert list(DA5)[0] == (1, "Strongly disagree")
        assert DA5.as_dict()[2] == "Somewhat disagree"


class TestCodedVariable:
    """Test CodedVariable and LabelledVariable objects."""

    def test_codes_become_tuple(self):
        v = CodedVariable(name="q1", codes=[1, 2, 3])
        assert v.codes == (1, 2, 3)
        assert len(v) == 3

    def test_nan_and_none_are_missing(self):
        v = CodedVariable(name="q1", codes=[1.0, float("nan"), None, np.float64(2.0)])
        assert v.codes == (1, MISSING, MISSING, 2)
        assert v.missing_count == 2

    def test_non_integral_code_rejected(self):
        with pytest.raises(TypeError):
            CodedVariable(name="q1", codes=[1.5])

    def test_string_code_rejected(self):
        with pytest.raises(TypeError):
            CodedVariable(name="q1", codes=["1"])

    def test_validate_reports_unlabelled(self):
        v = CodedVariable(name="q1", codes=[1, 2, 9, 7, 9, None], label_set=DA5)
        assert v.validate() == (7, 9)

    def test_validate_clean(self):
        v = CodedVariable(name="q1", codes=[1, 2, 5, None], label_set=DA5)
        assert v.validate() == ()

    def test_validate_without_label_set(self):
        v = CodedVariable(name="q1", codes=[3, 1, 3])
        assert v.validate() == (1, 3)

    def test_labels_per_observation(self):
        v = CodedVariable(name="q1", codes=[1, None, 8], label_set=DA5)
        assert v.labels() == ["Strongly disagree", None, None]

    def test_labelled_variable_requires_label_set(self):
        with pytest.raises(TypeError):
            LabelledVariable(name="q1", codes=[1])

    def test_renamed_keeps_type_and_labels(self):
        v = LabelledVariable(name="q1", codes=[1], label_set=DA5, description="Item 1")
        r = v.renamed("q1_copy")
        assert isinstance(r, LabelledVariable)
        assert r.name == "q1_copy"
        assert r.label_set is DA5
        assert r.description == "Item 1"
        assert v.name == "q1"


class TestRecodeMap:
    """Test RecodeMap construction."""

    def test_from_dict_groups(self):
        m = RecodeMap.from_groups({(1, 2): 1, (3,): 2, (4, 5): 3})
        assert m.target(1) == 1
        assert m.target(2) == 1
        assert m.target(3) == 2
        assert m.target(5) == 3
        assert m.target(6) is None
        assert len(m) == 5
        assert m.target_codes == (1, 2, 3)

    def test_from_pairs_and_single_int_key(self):
        m = RecodeMap.from_groups([([1, 2], 10), (3, 20)])
        assert m.as_dict() == {1: 10, 2: 10, 3: 20}

    def test_code_in_two_groups_fails_at_construction(self):
        with pytest.raises(AmbiguousRecodeError) as exc:
            RecodeMap.from_groups({(1, 2, 3): 1, (3, 4): 2})
        assert exc.value.code == 3

    def test_code_in_two_groups_same_target_is_still_ambiguous(self):
        with pytest.raises(AmbiguousRecodeError):
            RecodeMap.from_groups([((1, 3), 1), ((3,), 1)])

    def test_repeat_within_group_is_folded(self):
        m = RecodeMap.from_groups({(1, 1, 2): 1})
        assert m.groups == (((1, 2), 1),)

    def test_identity(self):
        m = RecodeMap.identity([1, 2, 3])
        assert all(m.target(c) == c for c in (1, 2, 3))
        assert m.source_codes == (1, 2, 3)


class TestDataset:
    """Test Dataset root container."""

    def test_get_variable(self):
        q1 = CodedVariable(name="q1", codes=[1])
        ds = Dataset(name="d", variables=[q1])
        assert ds.get_variable("q1") is q1
        assert ds.get_variable("q2") is None
        assert ds.names == ["q1"]
        assert len(ds) == 1

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError):
            Dataset(name="d", variables=[CodedVariable("q1", [1]), CodedVariable("q1", [2])])

    def test_empty_dataset(self):
        ds = Dataset(name="empty")
        assert ds.variables == []
        assert ds.metadata == {}


def test_missing_sentinel_is_none():
    assert MISSING is None
