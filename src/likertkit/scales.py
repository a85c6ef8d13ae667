"""
Label set registry: named constant scales used across survey work.

Builds the common Likert scales (agreement, importance, truth frequency),
their reversed variants, and the standard 5 → 3 point collapse.
All values are immutable and safe to share.
"""
from typing import Dict, Optional, Sequence, Tuple

from likertkit.model import LabelSet, RecodeMap


def define(codes_in_order: Sequence[Tuple[str, int]], name: Optional[str] = None) -> LabelSet:
    """
    Build a LabelSet from (label, code) pairs, in display order.

        define([("Disagree", 1), ("Agree", 2)])

    Raises DuplicateCodeError if a code repeats.
    """
    return LabelSet(entries=tuple((code, label) for label, code in codes_in_order), name=name)


def reversed_labels(label_set: LabelSet, name: Optional[str] = None) -> LabelSet:
    """Same codes, labels in reverse order. See LabelSet.reversed()."""
    return label_set.reversed(name=name)


AGREE_5 = define(
    [
        ("Strongly disagree", 1),
        ("Somewhat disagree", 2),
        ("Neither agree nor disagree", 3),
        ("Somewhat agree", 4),
        ("Strongly agree", 5),
    ],
    name="agree_5",
)

# Agree → disagree wording on the same codes
AGREE_5_REVERSED = reversed_labels(AGREE_5, name="agree_5_reversed")

AGREE_3 = define(
    [
        ("Disagree", 1),
        ("Neither agree nor disagree", 2),
        ("Agree", 3),
    ],
    name="agree_3",
)

IMPORTANCE_5 = define(
    [
        ("Not at all important", 1),
        ("Slightly important", 2),
        ("Moderately important", 3),
        ("Very important", 4),
        ("Extremely important", 5),
    ],
    name="importance_5",
)

TRUE_7 = define(
    [
        ("Never true", 1),
        ("Rarely true", 2),
        ("Sometimes but infrequently true", 3),
        ("Neutral", 4),
        ("Sometimes true", 5),
        ("Usually true", 6),
        ("Always true", 7),
    ],
    name="true_7",
)

# Template with reserved non-substantive codes; 6 and 8 are unused
AGREE_5_DK_REFUSED = define(
    [(label, code) for code, label in AGREE_5]
    + [("Don't know", 7), ("Refused", 9)],
    name="agree_5_dk_refused",
)

COLLAPSE_5_TO_3 = RecodeMap.from_groups({(1, 2): 1, (3,): 2, (4, 5): 3})


LABEL_SETS: Dict[str, LabelSet] = {
    s.name: s
    for s in (AGREE_5, AGREE_5_REVERSED, AGREE_3, IMPORTANCE_5, TRUE_7, AGREE_5_DK_REFUSED)
}


def get_label_set(name: str) -> LabelSet:
    """Look up a registered LabelSet by name."""
    try:
        return LABEL_SETS[name]
    except KeyError:
        raise KeyError(
            f"Unknown label set {name!r}; known: {', '.join(sorted(LABEL_SETS))}"
        ) from None
