"""
Core Labelling Model Objects

Defines the fundamental data structures for labelled categorical data:
    - LabelSet (ordered code → label mapping, one scale's categories)
    - CodedVariable / LabelledVariable (one column of observed codes)
    - RecodeMap (many-to-one mapping from old codes to new codes)
    - Dataset (root container handed to exporters)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable (frozen dataclasses, tuples inside)
        - Know nothing about SPSS, YAML or DataFrames
        - Validate their own invariants at construction
        - Never change once built; transforms return new objects
"""

import math
import warnings
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union


# Marks a missing observation. Never treated as an unmapped code.
MISSING = None

Code = Optional[int]


# =============================================================================
# ERRORS
# =============================================================================


class LabellingError(ValueError):
    """Base class for labelling and recoding validation failures."""
    pass


class DuplicateCodeError(LabellingError):
    """Raised when a code appears twice in one LabelSet."""

    def __init__(self, code: Any, message: Optional[str] = None):
        self.code = code
        super().__init__(message or f"Duplicate code {code!r} in label set")


class AmbiguousRecodeError(LabellingError):
    """Raised when one old code is assigned to two different recode groups."""

    def __init__(self, code: int, targets: Tuple[int, int]):
        self.code = code
        self.targets = targets
        super().__init__(
            f"Code {code!r} appears in more than one recode group "
            f"(targets {targets[0]!r} and {targets[1]!r})"
        )


class UnmappedCodeError(LabellingError):
    """Raised when recoding meets a code it has no rule for."""

    def __init__(self, code: int, index: int, reason: str = "not covered by the recode map"):
        self.code = code
        self.index = index
        super().__init__(f"Code {code!r} at observation {index} is {reason}")


class UnknownCategoryError(LabellingError):
    """Raised when a text value is not in the explicit category order."""

    def __init__(self, value: Any, index: int):
        self.value = value
        self.index = index
        super().__init__(f"Unknown category {value!r} at observation {index}")


class UnlabelledCodeWarning(UserWarning):
    """Observed codes have no label in the attached LabelSet."""
    pass


def _coerce_code(value: Any) -> Code:
    """Normalize one observed value to an int code or MISSING."""
    if value is None:
        return MISSING
    if isinstance(value, bool):
        raise TypeError(f"Boolean {value!r} is not a valid code")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            return MISSING
        if value.is_integer():
            return int(value)
        raise TypeError(f"Non-integral code {value!r}")
    # numpy integer / floating scalars
    if hasattr(value, "item"):
        return _coerce_code(value.item())
    raise TypeError(f"Unsupported code type {type(value).__name__}: {value!r}")


# =============================================================================
# LABEL SET
# =============================================================================


@dataclass(frozen=True)
class LabelSet:
    """
    Ordered mapping from integer code to display label.

    Represents the category system of one scale, e.g. a 5-point
    disagree→agree Likert scale.

    Properties:
        entries:
            Tuple of (code, label) pairs.
            Order is the canonical display and factor order.
        name:
            Optional identifier (e.g. "agree_5")

    INVARIANTS:
        - Codes are unique (DuplicateCodeError otherwise)
        - Labels need NOT be unique
        - Immutable after construction
    """

    entries: Tuple[Tuple[int, str], ...]
    name: Optional[str] = None
    _lookup: Dict[int, str] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        entries = tuple((_coerce_code(code), str(label)) for code, label in self.entries)
        lookup: Dict[int, str] = {}
        for code, label in entries:
            if code is MISSING:
                raise TypeError("The missing sentinel cannot be given a label")
            if code in lookup:
                raise DuplicateCodeError(code)
            lookup[code] = label
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_lookup", lookup)

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, str], name: Optional[str] = None) -> "LabelSet":
        """Build from a code → label mapping, keeping its iteration order."""
        return cls(entries=tuple(mapping.items()), name=name)

    @property
    def codes(self) -> Tuple[int, ...]:
        return tuple(code for code, _ in self.entries)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(label for _, label in self.entries)

    def label_for(self, code: Code) -> Optional[str]:
        """Label of `code`, or None if the code is missing or unlabelled."""
        if code is MISSING:
            return None
        return self._lookup.get(code)

    def code_for(self, label: str) -> Optional[int]:
        """First code carrying `label`, or None."""
        for code, candidate in self.entries:
            if candidate == label:
                return code
        return None

    def reversed(self, name: Optional[str] = None) -> "LabelSet":
        """
        Same codes in the same order, labels reassigned in reverse order.

        Turns a disagree→agree scale into agree→disagree and back:
            {1: "Disagree", 2: "Neutral", 3: "Agree"}
        becomes
            {1: "Agree", 2: "Neutral", 3: "Disagree"}
        """
        pairs = zip(self.codes, reversed(self.labels))
        return LabelSet(entries=tuple(pairs), name=self.name if name is None else name)

    def as_dict(self) -> Dict[int, str]:
        return dict(self.entries)

    def __contains__(self, code: object) -> bool:
        return code in self._lookup

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


# =============================================================================
# VARIABLES
# =============================================================================


@dataclass(frozen=True)
class CodedVariable:
    """
    A named column of integer codes, one per observation.

    Properties:
        name:
            Variable identifier (e.g. "q1_satisfaction")

        codes:
            Observed codes. MISSING (None) marks a missing observation.
            Integral floats and NaN (as pandas produces them) are accepted
            and normalized to int / MISSING.

        label_set:
            Optional attached LabelSet

        description:
            Optional human-readable variable label (question text)

    IMPORTANT:
        Labels are advisory metadata, not a projection.
        Codes outside the LabelSet are kept; validate() reports them.
    """

    name: str
    codes: Tuple[Code, ...]
    label_set: Optional[LabelSet] = None
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "codes", tuple(_coerce_code(c) for c in self.codes))

    def validate(self) -> Tuple[int, ...]:
        """
        Return the distinct observed codes that have no label, sorted.

        Missing observations are ignored. With no LabelSet attached,
        every observed code is unlabelled.
        """
        observed = {c for c in self.codes if c is not MISSING}
        if self.label_set is None:
            return tuple(sorted(observed))
        return tuple(sorted(c for c in observed if c not in self.label_set))

    def labels(self) -> List[Optional[str]]:
        """Display label per observation (None for missing or unlabelled)."""
        if self.label_set is None:
            return [None] * len(self.codes)
        return [self.label_set.label_for(c) for c in self.codes]

    @property
    def missing_count(self) -> int:
        return sum(1 for c in self.codes if c is MISSING)

    def renamed(self, name: str) -> "CodedVariable":
        return type(self)(name=name, codes=self.codes, label_set=self.label_set,
                          description=self.description)

    def __len__(self) -> int:
        return len(self.codes)

    def __iter__(self) -> Iterator[Code]:
        return iter(self.codes)


@dataclass(frozen=True)
class LabelledVariable(CodedVariable):
    """
    A CodedVariable with a LabelSet attached.

    Build these with attach_labels() so mismatches are reported.
    """

    def __post_init__(self):
        super().__post_init__()
        if self.label_set is None:
            raise TypeError(f"LabelledVariable {self.name!r} requires a label_set")


# =============================================================================
# RECODE MAP
# =============================================================================


GroupsInput = Union[
    Mapping[Union[int, Tuple[int, ...]], int],
    Iterable[Tuple[Union[int, Sequence[int]], int]],
]


@dataclass(frozen=True)
class RecodeMap:
    """
    Declarative many-to-one recode: groups of old codes → one new code.

    Example (collapse a 5-point scale to 3 points):
        RecodeMap.from_groups({(1, 2): 1, (3,): 2, (4, 5): 3})

    Properties:
        groups:
            Tuple of (old_codes, new_code) pairs, in declaration order

    INVARIANTS:
        - An old code belongs to at most one group.
          Violations raise AmbiguousRecodeError HERE, before any recode runs.
        - A code repeated inside a single group is folded.
        - Codes not mentioned are "unmapped"; recode() decides their fate.
    """

    groups: Tuple[Tuple[Tuple[int, ...], int], ...]
    _lookup: Dict[int, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        groups = []
        lookup: Dict[int, int] = {}
        for old_codes, new_code in self.groups:
            if isinstance(old_codes, (int, float)) or hasattr(old_codes, "item"):
                old_codes = (old_codes,)
            new_code = _coerce_code(new_code)
            folded: List[int] = []
            for old in old_codes:
                old = _coerce_code(old)
                if old in folded:
                    continue
                if old in lookup:
                    raise AmbiguousRecodeError(old, (lookup[old], new_code))
                lookup[old] = new_code
                folded.append(old)
            groups.append((tuple(folded), new_code))
        object.__setattr__(self, "groups", tuple(groups))
        object.__setattr__(self, "_lookup", lookup)

    @classmethod
    def from_groups(cls, groups: GroupsInput) -> "RecodeMap":
        """Build from a {old_codes: new} mapping or (old_codes, new) pairs."""
        if isinstance(groups, Mapping):
            groups = groups.items()
        return cls(groups=tuple(groups))

    @classmethod
    def identity(cls, codes: Iterable[int]) -> "RecodeMap":
        """Map that sends every code to itself."""
        return cls(groups=tuple(((c,), c) for c in codes))

    def target(self, code: Code) -> Optional[int]:
        """New code for `code`, or None when unmapped."""
        return self._lookup.get(code)

    @property
    def source_codes(self) -> Tuple[int, ...]:
        return tuple(self._lookup)

    @property
    def target_codes(self) -> Tuple[int, ...]:
        seen: List[int] = []
        for _, new_code in self.groups:
            if new_code not in seen:
                seen.append(new_code)
        return tuple(seen)

    def as_dict(self) -> Dict[int, int]:
        return dict(self._lookup)

    def __contains__(self, code: object) -> bool:
        return code in self._lookup

    def __len__(self) -> int:
        return len(self._lookup)


# =============================================================================
# DATASET
# =============================================================================


@dataclass
class Dataset:
    """
    Root container: an ordered collection of named variables.

    This is the unit handed to export collaborators (SPSS, YAML, JSON).

    Properties:
        name: Dataset identifier
        variables: Variables in column order (names must be unique)
        metadata: Arbitrary key-value pairs (use sparingly)
    """

    name: str
    variables: List[CodedVariable] = field(default_factory=list)
    metadata: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.variables = list(self.variables)
        seen = set()
        for var in self.variables:
            if var.name in seen:
                raise ValueError(f"Duplicate variable name {var.name!r} in dataset {self.name!r}")
            seen.add(var.name)

    @property
    def names(self) -> List[str]:
        return [v.name for v in self.variables]

    def get_variable(self, var_name: str) -> Optional[CodedVariable]:
        """
        Retrieve a variable by name.

        Returns:
            Variable or None if not found
        """
        for var in self.variables:
            if var.name == var_name:
                return var
        return None

    def __len__(self) -> int:
        return len(self.variables)


def warn_unlabelled(variable: CodedVariable, stacklevel: int = 3) -> Tuple[int, ...]:
    """Emit UnlabelledCodeWarning if `variable` has codes outside its LabelSet."""
    unlabelled = variable.validate()
    if unlabelled and variable.label_set is not None:
        warnings.warn(
            f"Variable {variable.name!r} has codes without labels: "
            f"{', '.join(str(c) for c in unlabelled)}",
            UnlabelledCodeWarning,
            stacklevel=stacklevel,
        )
    return unlabelled
