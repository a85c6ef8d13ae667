#!/usr/bin/env python3
"""
Complete Pipeline Demo: sample data → labels → recode → checks → files

Shows the full workflow:
1. Generate reproducible Likert responses
2. Attach label sets
3. Collapse 5-point items to 3 points
4. Double check the recode with frequency tables and a cross-tab
5. Write SPSS and YAML files
"""

import sys
from pathlib import Path

from likertkit.analyzer import analyze_dataset, crosstab, frequency_table
from likertkit.categories import encode_categories
from likertkit.export import write_dataset, write_sav
from likertkit.model import Dataset
from likertkit.recode import UnmappedPolicy, apply_to_variables, name_startswith, recode
from likertkit.sampling import sample_categories, sample_dataset
from likertkit.scales import AGREE_3, AGREE_5, COLLAPSE_5_TO_3


def collapse(variable):
    return recode(variable, COLLAPSE_5_TO_3, UnmappedPolicy.FAIL, label_set=AGREE_3)


def main(output_dir: str = "."):
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: sample → label → recode → check → export")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Sample data
    # =========================================================================
    print("\n1. SAMPLING RESPONSES...")
    items = sample_dataset(["q1", "q2", "q3"], AGREE_5, size=50, seed=2024, name="likert_demo")
    wave = encode_categories(
        sample_categories(["Pre", "Post"], size=50, seed=7),
        order=["Pre", "Post"],
        name="wave",
    )
    dataset = Dataset(name=items.name, variables=[wave] + items.variables)
    print(f"   ✓ Variables: {', '.join(dataset.names)}")
    print(f"   ✓ Observations: {len(wave)}")

    # =========================================================================
    # STEP 2: Recode q* items to 3 points, kept alongside the originals
    # =========================================================================
    print("\n2. RECODING 5 → 3 POINTS...")
    dataset = apply_to_variables(dataset, collapse, where=name_startswith("q"), suffix="_3pt")
    print(f"   ✓ Variables: {', '.join(dataset.names)}")

    # =========================================================================
    # STEP 3: Double check
    # =========================================================================
    print("\n3. CHECKING q1 → q1_3pt...")
    for row in frequency_table(dataset.get_variable("q1_3pt")):
        print(f"   {row.code!s:>4}  {row.label or '':<28} {row.count:>4}  {row.percent:5.1f}%")
    pairs = crosstab(dataset.get_variable("q1"), dataset.get_variable("q1_3pt"))
    for (old, new), n in sorted(pairs.items()):
        print(f"   {old} → {new}: {n}")

    report = analyze_dataset(dataset)
    print(f"   ✓ Labelled variables: {report.labelled_variables}/{report.total_variables}")
    for warning in report.warnings:
        print(f"      - {warning}")

    # =========================================================================
    # STEP 4: Export
    # =========================================================================
    print("\n4. WRITING FILES...")
    write_sav(dataset, out / "likert_demo.sav")
    print(f"   ✓ Saved {out / 'likert_demo.sav'}")
    write_dataset(dataset, out / "likert_demo.yaml")
    print(f"   ✓ Saved {out / 'likert_demo.yaml'}")

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE!")
    print("=" * 80)


if __name__ == "__main__":
    main(*sys.argv[1:2])
