"""
Dataset Analyzer — frequency tables and label checks.

This module provides the "double check your transformation" step as code:
    - Frequency tables per variable, in label order
    - Cross-tabulation of a variable before and after a recode
    - Dataset-wide report of unlabelled codes, unused labels and missing data

IMPORTANT: This is read-only. It does NOT modify variables or datasets.
It only produces reports.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from likertkit.model import MISSING, CodedVariable, Dataset


@dataclass
class FrequencyRow:
    """One line of a frequency table."""
    code: Optional[int]
    label: Optional[str]
    count: int
    percent: float


def frequency_table(variable: CodedVariable) -> List[FrequencyRow]:
    """
    Count observations per code.

    Row order: every code of the LabelSet in label order (zero counts
    included), then unlabelled codes ascending, then a MISSING row if any
    observation is missing.
    """
    counts = Counter(variable.codes)
    total = len(variable)

    def row(code: Optional[int]) -> FrequencyRow:
        label = variable.label_set.label_for(code) if variable.label_set is not None else None
        n = counts.get(code, 0)
        return FrequencyRow(code=code, label=label, count=n,
                            percent=(n / total * 100) if total else 0.0)

    rows = []
    if variable.label_set is not None:
        rows.extend(row(code) for code in variable.label_set.codes)
    rows.extend(row(code) for code in variable.validate())
    if counts.get(MISSING):
        rows.append(row(MISSING))
    return rows


def crosstab(before: CodedVariable, after: CodedVariable) -> Dict[Tuple[Optional[int], Optional[int]], int]:
    """
    Count (old code, new code) pairs, observation by observation.

    Every old code should land in exactly one new code; a recode that
    splits a code shows up as two keys with the same first element.
    """
    if len(before) != len(after):
        raise ValueError(
            f"Cannot cross-tabulate {before.name!r} ({len(before)} obs) "
            f"with {after.name!r} ({len(after)} obs)"
        )
    return dict(Counter(zip(before.codes, after.codes)))


@dataclass
class VariableReport:
    """Label checks for a single variable."""
    name: str
    observations: int = 0
    missing: int = 0
    label_set_name: Optional[str] = None
    unlabelled_codes: Tuple[int, ...] = ()
    unused_codes: Tuple[int, ...] = ()


@dataclass
class DatasetReport:
    """Analysis report for a dataset."""

    dataset_name: str
    total_variables: int = 0
    labelled_variables: int = 0
    variables: Dict[str, VariableReport] = field(default_factory=dict)

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_variable(variable: CodedVariable) -> VariableReport:
    observed = {c for c in variable.codes if c is not MISSING}
    report = VariableReport(
        name=variable.name,
        observations=len(variable),
        missing=variable.missing_count,
        unlabelled_codes=variable.validate(),
    )
    if variable.label_set is not None:
        report.label_set_name = variable.label_set.name
        report.unused_codes = tuple(c for c in variable.label_set.codes if c not in observed)
    return report


def analyze_dataset(dataset: Dataset) -> DatasetReport:
    """
    Check every variable in `dataset` against its label set.

    Flags:
    - Variables without a label set
    - Codes with no label (likely a wrong label set or a data error)
    - Variables with different observation counts
    - Variables that are entirely missing
    """
    report = DatasetReport(dataset_name=dataset.name, total_variables=len(dataset))

    for variable in dataset.variables:
        var_report = analyze_variable(variable)
        report.variables[variable.name] = var_report

        if variable.label_set is None:
            report.add_warning(f"Unlabelled variable: {variable.name}")
            continue
        report.labelled_variables += 1

        if var_report.unlabelled_codes:
            report.add_warning(
                f"Codes without labels in {variable.name}: "
                f"{', '.join(str(c) for c in var_report.unlabelled_codes)}"
            )
        if var_report.observations and var_report.missing == var_report.observations:
            report.add_warning(f"All observations missing in {variable.name}")

    lengths = {r.observations for r in report.variables.values()}
    if len(lengths) > 1:
        report.add_warning(
            f"Variables have different lengths: {', '.join(str(n) for n in sorted(lengths))}"
        )

    return report
