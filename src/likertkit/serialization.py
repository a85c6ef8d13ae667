"""
Serialization helpers for likertkit objects (LabelSet, RecodeMap, variables, Dataset).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
Label sets are stored as ordered lists of {code, label} entries, never as
mappings, so label order survives formats that sort keys.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

import yaml

from likertkit.model import (
    CodedVariable,
    Dataset,
    LabelledVariable,
    LabelSet,
    RecodeMap,
)


def label_set_to_dict(s: LabelSet | None) -> Dict[str, Any] | None:
    if s is None:
        return None
    return {
        "name": s.name,
        "entries": [{"code": code, "label": label} for code, label in s.entries],
    }


def label_set_from_dict(d: Dict[str, Any] | None) -> LabelSet | None:
    if d is None:
        return None
    entries = d.get("entries")
    if not isinstance(entries, list):
        raise TypeError(f"Label set entries must be a list, got {type(entries).__name__}")
    return LabelSet(
        entries=tuple((e["code"], e["label"]) for e in entries),
        name=d.get("name"),
    )


def recode_map_to_dict(m: RecodeMap) -> Dict[str, Any]:
    return {"groups": [{"from": list(old), "to": new} for old, new in m.groups]}


def recode_map_from_dict(d: Dict[str, Any]) -> RecodeMap:
    return RecodeMap(groups=tuple((tuple(g["from"]), g["to"]) for g in d.get("groups", [])))


def variable_to_dict(v: CodedVariable) -> Dict[str, Any]:
    return {
        "name": v.name,
        "description": v.description,
        "codes": list(v.codes),
        "label_set": label_set_to_dict(v.label_set),
    }


def variable_from_dict(d: Dict[str, Any]) -> CodedVariable:
    label_set = label_set_from_dict(d.get("label_set"))
    cls = CodedVariable if label_set is None else LabelledVariable
    return cls(
        name=d["name"],
        codes=tuple(d.get("codes", [])),
        label_set=label_set,
        description=d.get("description"),
    )


def dataset_to_dict(ds: Dataset) -> Dict[str, Any]:
    return {
        "name": ds.name,
        "variables": [variable_to_dict(v) for v in ds.variables],
        "metadata": ds.metadata,
    }


def dataset_from_dict(d: Dict[str, Any]) -> Dataset:
    return Dataset(
        name=d.get("name", ""),
        variables=[variable_from_dict(v) for v in d.get("variables", [])],
        metadata=d.get("metadata", {}),
    )


def dataset_to_json(ds: Dataset) -> str:
    return json.dumps(dataset_to_dict(ds), sort_keys=True)


def dataset_from_json(s: str) -> Dataset:
    d = json.loads(s)
    return dataset_from_dict(d)


def dataset_to_yaml(ds: Dataset) -> str:
    return yaml.safe_dump(dataset_to_dict(ds), sort_keys=False)


def dataset_from_yaml(s: str) -> Dataset:
    d = yaml.safe_load(s)
    return dataset_from_dict(d)


def label_sets_to_yaml(sets: List[LabelSet]) -> str:
    return yaml.safe_dump({"label_sets": [label_set_to_dict(s) for s in sets]}, sort_keys=False)


def label_sets_from_yaml(s: str) -> Dict[str, LabelSet]:
    """
    Load named label sets from a YAML config document.

    Accepted shape:
        label_sets:
          - name: agree_3
            entries:
              - {code: 1, label: Disagree}
              - {code: 2, label: Neutral}
              - {code: 3, label: Agree}
    """
    d = yaml.safe_load(s) or {}
    result: Dict[str, LabelSet] = {}
    for entry in d.get("label_sets", []):
        label_set = label_set_from_dict(entry)
        if not label_set.name:
            raise ValueError("Label sets loaded from config must have a name")
        if label_set.name in result:
            raise ValueError(f"Label set {label_set.name!r} defined twice")
        result[label_set.name] = label_set
    return result
