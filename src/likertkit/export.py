"""
Export collaborators: DataFrames, SPSS .sav, and YAML/JSON files.

The binary SPSS format is handled entirely by pyreadstat; this module
only translates Dataset objects to and from the shapes it expects
(a DataFrame plus value-label and column-label metadata).
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import numpy as np
import pandas as pd
import pyreadstat

from likertkit.model import CodedVariable, Dataset, LabelledVariable, LabelSet
from likertkit.serialization import (
    dataset_from_json,
    dataset_from_yaml,
    dataset_to_json,
    dataset_to_yaml,
)

PathLike = Union[str, Path]


def to_dataframe(dataset: Dataset) -> pd.DataFrame:
    """
    Codes as a float DataFrame (NaN for missing), one column per variable.

    Value labels and variable descriptions are kept in `df.attrs` under
    "value_labels" and "column_labels".
    """
    lengths = {len(v) for v in dataset.variables}
    if len(lengths) > 1:
        raise ValueError(
            f"Variables in dataset {dataset.name!r} have different lengths: {sorted(lengths)}"
        )
    columns = {
        v.name: pd.Series([np.nan if c is None else float(c) for c in v.codes], dtype="float64")
        for v in dataset.variables
    }
    df = pd.DataFrame(columns, columns=dataset.names)
    df.attrs["value_labels"] = {
        v.name: v.label_set.as_dict() for v in dataset.variables if v.label_set is not None
    }
    df.attrs["column_labels"] = {v.name: v.description for v in dataset.variables}
    return df


def from_dataframe(
    df: pd.DataFrame,
    label_sets: Optional[Mapping[str, LabelSet]] = None,
    descriptions: Optional[Mapping[str, Optional[str]]] = None,
    name: str = "",
) -> Dataset:
    """Build a Dataset from a code DataFrame and per-column label sets."""
    label_sets = label_sets or {}
    descriptions = descriptions or {}
    variables: List[CodedVariable] = []
    for column in df.columns:
        label_set = label_sets.get(column)
        cls = CodedVariable if label_set is None else LabelledVariable
        variables.append(
            cls(
                name=str(column),
                codes=tuple(df[column].tolist()),
                label_set=label_set,
                description=descriptions.get(column) or None,
            )
        )
    return Dataset(name=name, variables=variables)


def to_categorical(variable: CodedVariable) -> pd.Categorical:
    """
    Ordered pandas Categorical of labels, in LabelSet order.

    Missing and unlabelled codes become NaN.
    """
    if variable.label_set is None:
        raise ValueError(f"Variable {variable.name!r} has no label set")
    categories = list(dict.fromkeys(variable.label_set.labels))
    return pd.Categorical(variable.labels(), categories=categories, ordered=True)


def write_sav(dataset: Dataset, path: PathLike, file_label: str = "") -> None:
    """Write an SPSS .sav file with value labels via pyreadstat."""
    df = to_dataframe(dataset)
    value_labels = {
        v.name: {code: label for code, label in v.label_set}
        for v in dataset.variables
        if v.label_set is not None
    }
    pyreadstat.write_sav(
        df,
        str(path),
        file_label=file_label or dataset.name,
        column_labels=[v.description or "" for v in dataset.variables],
        variable_value_labels=value_labels,
        variable_measure={
            v.name: "ordinal" if v.label_set is not None else "scale" for v in dataset.variables
        },
    )


def read_sav(path: PathLike, name: Optional[str] = None) -> Dataset:
    """
    Read an SPSS .sav file back into a Dataset, rebuilding label sets.

    Value labels keep the order they are stored in the file. Labelled
    values that are not whole numbers raise TypeError.
    """
    df, meta = pyreadstat.read_sav(str(path))
    label_sets: Dict[str, LabelSet] = {}
    for column, labels in (meta.variable_value_labels or {}).items():
        label_sets[column] = LabelSet(
            entries=tuple(labels.items()),
            name=column,
        )
    return from_dataframe(
        df,
        label_sets=label_sets,
        descriptions=meta.column_names_to_labels or {},
        name=name if name is not None else (meta.file_label or Path(path).stem),
    )


def write_dataset(dataset: Dataset, path: PathLike) -> None:
    """Persist a Dataset as YAML (.yaml/.yml) or JSON (.json)."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        text = dataset_to_yaml(dataset)
    elif suffix == ".json":
        text = dataset_to_json(dataset)
    else:
        raise ValueError(f"Unsupported dataset file type {suffix!r} (use .yaml, .yml or .json)")
    path.write_text(text, encoding="utf-8")


def read_dataset(path: PathLike) -> Dataset:
    """Load a Dataset written by write_dataset()."""
    path = Path(path)
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix in (".yaml", ".yml"):
        return dataset_from_yaml(text)
    if suffix == ".json":
        return dataset_from_json(text)
    raise ValueError(f"Unsupported dataset file type {suffix!r} (use .yaml, .yml or .json)")
