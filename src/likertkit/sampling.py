"""
Synthetic survey responses for demos and tests.

Draws codes or categories uniformly with replacement. Non-deterministic
by default; pass `seed` to reproduce the same sample.
"""
from typing import List, Optional, Sequence

import numpy as np

from likertkit.model import CodedVariable, Dataset, LabelSet
from likertkit.recode import attach_labels


def _rng(seed: Optional[int]) -> np.random.Generator:
    return np.random.default_rng(seed)


def sample_codes(
    label_set: LabelSet,
    size: int,
    seed: Optional[int] = None,
    name: str = "",
) -> CodedVariable:
    """Sample `size` codes from `label_set`'s domain and attach the labels."""
    if size < 0:
        raise ValueError(f"size must be non-negative, got {size}")
    drawn = _rng(seed).choice(np.array(label_set.codes), size=size, replace=True)
    variable = CodedVariable(name=name, codes=tuple(int(c) for c in drawn))
    return attach_labels(variable, label_set)


def sample_categories(
    categories: Sequence[str],
    size: int,
    seed: Optional[int] = None,
) -> List[str]:
    """Sample `size` text values from `categories`."""
    if not categories:
        raise ValueError("categories must not be empty")
    picks = _rng(seed).integers(0, len(categories), size=size)
    return [categories[i] for i in picks]


def sample_dataset(
    names: Sequence[str],
    label_set: LabelSet,
    size: int,
    seed: Optional[int] = None,
    name: str = "sample",
) -> Dataset:
    """
    One sampled variable per name, all on `label_set`.

    A single generator feeds every column, so the whole dataset is
    reproducible from one seed while columns still differ.
    """
    rng = _rng(seed)
    variables = []
    for var_name in names:
        # Derive a per-column seed from the shared generator
        column_seed = int(rng.integers(0, 2**32 - 1))
        variables.append(sample_codes(label_set, size, seed=column_seed, name=var_name))
    return Dataset(name=name, variables=variables)
