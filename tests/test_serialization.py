"""
Tests for serialization and deserialization of likertkit objects.

These tests ensure lossless JSON/YAML round-trip using the explicit
serialization functions in `likertkit.serialization`, including label
order, missing codes and the labelled/unlabelled distinction.
"""

import pytest

from likertkit.model import CodedVariable, Dataset, LabelledVariable, RecodeMap
from likertkit.recode import attach_labels
from likertkit.scales import AGREE_5_REVERSED, COLLAPSE_5_TO_3, define
from likertkit.serialization import (
    dataset_from_json,
    dataset_from_yaml,
    dataset_to_dict,
    dataset_to_json,
    dataset_to_yaml,
    label_set_from_dict,
    label_set_to_dict,
    label_sets_from_yaml,
    label_sets_to_yaml,
    recode_map_from_dict,
    recode_map_to_dict,
)


def build_sample_dataset() -> Dataset:
    # Codes deliberately out of numeric order
    wave = define([("Pre", 2), ("Post", 1)], name="wave")
    return Dataset(
        name="Serialization Test Dataset",
        variables=[
            attach_labels(CodedVariable(name="wave", codes=[2, 1, 2]), wave),
            attach_labels(
                CodedVariable(name="q1", codes=[5, None, 1], description="I enjoy surveys"),
                AGREE_5_REVERSED,
            ),
            CodedVariable(name="id", codes=[101, 102, 103]),
        ],
        metadata={"source": "sample"},
    )


def test_json_roundtrip():
    ds = build_sample_dataset()
    before = dataset_to_dict(ds)
    restored = dataset_from_json(dataset_to_json(ds))
    assert dataset_to_dict(restored) == before
    assert restored.variables == ds.variables


def test_yaml_roundtrip():
    ds = build_sample_dataset()
    before = dataset_to_dict(ds)
    restored = dataset_from_yaml(dataset_to_yaml(ds))
    assert dataset_to_dict(restored) == before


def test_label_order_survives_json_key_sorting():
    restored = dataset_from_json(dataset_to_json(build_sample_dataset()))
    assert restored.get_variable("wave").label_set.labels == ("Pre", "Post")


def test_labelled_type_restored():
    restored = dataset_from_yaml(dataset_to_yaml(build_sample_dataset()))
    assert isinstance(restored.get_variable("q1"), LabelledVariable)
    assert not isinstance(restored.get_variable("id"), LabelledVariable)
    assert restored.get_variable("q1").codes == (5, None, 1)


def test_label_set_dict_roundtrip():
    d = label_set_to_dict(AGREE_5_REVERSED)
    assert d["entries"][0] == {"code": 1, "label": "Strongly agree"}
    assert label_set_from_dict(d) == AGREE_5_REVERSED
    assert label_set_to_dict(None) is None


def test_label_set_entries_must_be_list():
    with pytest.raises(TypeError):
        label_set_from_dict({"name": "x", "entries": {1: "A"}})


def test_recode_map_roundtrip():
    assert recode_map_from_dict(recode_map_to_dict(COLLAPSE_5_TO_3)) == COLLAPSE_5_TO_3
    assert isinstance(recode_map_from_dict({"groups": []}), RecodeMap)


def test_label_sets_config():
    text = """
label_sets:
  - name: yes_no
    entries:
      - {code: 1, label: "Yes"}
      - {code: 2, label: "No"}
  - name: agree_3
    entries:
      - {code: 1, label: Disagree}
      - {code: 2, label: Neutral}
      - {code: 3, label: Agree}
"""
    sets = label_sets_from_yaml(text)
    assert list(sets) == ["yes_no", "agree_3"]
    assert sets["yes_no"].label_for(1) == "Yes"
    assert sets["agree_3"].labels == ("Disagree", "Neutral", "Agree")
    assert label_sets_from_yaml(label_sets_to_yaml(list(sets.values()))) == sets


def test_label_sets_config_requires_names():
    with pytest.raises(ValueError):
        label_sets_from_yaml("label_sets:\n  - entries: [{code: 1, label: A}]\n")


def test_label_sets_config_rejects_duplicate_names():
    text = "label_sets:\n  - name: a\n    entries: []\n  - name: a\n    entries: []\n"
    with pytest.raises(ValueError):
        label_sets_from_yaml(text)
