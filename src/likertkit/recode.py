"""
Labelling and Recoding Operations

Pure transforms over the model objects:
    - attach_labels: CodedVariable + LabelSet → LabelledVariable
    - recode: LabelledVariable + RecodeMap → new LabelledVariable
    - apply_to_variables: run a transform over a selected set of variables

ARCHITECTURAL RULE:
    Nothing here mutates its input.
    Every call returns a NEW variable or dataset.
"""

from enum import Enum
from typing import Callable, Iterable, List, Optional, Union

from likertkit.model import (
    MISSING,
    CodedVariable,
    Dataset,
    LabelledVariable,
    LabelSet,
    RecodeMap,
    UnmappedCodeError,
    warn_unlabelled,
)


class UnmappedPolicy(Enum):
    """
    What recode() does with a code the RecodeMap does not mention.

    PROPAGATE_MISSING: emit MISSING
    PASS_THROUGH: keep the original code (must exist in the new LabelSet)
    FAIL: raise UnmappedCodeError
    """

    PROPAGATE_MISSING = "propagate_missing"
    PASS_THROUGH = "pass_through"
    FAIL = "fail"


def attach_labels(variable: CodedVariable, label_set: LabelSet) -> LabelledVariable:
    """
    Attach `label_set` to `variable`, returning a new LabelledVariable.

    Codes without a label do NOT fail the call: labels are advisory.
    They trigger an UnlabelledCodeWarning, and LabelledVariable.validate()
    lists them for tests and inspection.
    """
    labelled = LabelledVariable(
        name=variable.name,
        codes=variable.codes,
        label_set=label_set,
        description=variable.description,
    )
    warn_unlabelled(labelled)
    return labelled


def recode(
    variable: CodedVariable,
    recode_map: RecodeMap,
    unmapped_policy: Union[UnmappedPolicy, str] = UnmappedPolicy.FAIL,
    *,
    label_set: LabelSet,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> LabelledVariable:
    """
    Recode `variable` element-wise through `recode_map`.

    Args:
        variable: Source variable (labelled or not). Never modified.
        recode_map: Old code → new code groups
        unmapped_policy: UnmappedPolicy member or its string value
        label_set: LabelSet of the NEW scale. Never inferred.
        name: Name of the result (defaults to the source name)
        description: Variable label of the result (defaults to the source's)

    Returns:
        LabelledVariable of the same length, same observation order.

    Raises:
        UnmappedCodeError: Under FAIL for any unmapped code, or under
            PASS_THROUGH for a code the new LabelSet does not contain.

    Missing observations stay missing under every policy.
    """
    policy = UnmappedPolicy(unmapped_policy)
    new_codes = []
    for index, code in enumerate(variable.codes):
        if code is MISSING:
            new_codes.append(MISSING)
            continue
        if code in recode_map:
            new_codes.append(recode_map.target(code))
        elif policy is UnmappedPolicy.PROPAGATE_MISSING:
            new_codes.append(MISSING)
        elif policy is UnmappedPolicy.PASS_THROUGH:
            if code not in label_set:
                raise UnmappedCodeError(
                    code, index, reason="passed through but absent from the new label set"
                )
            new_codes.append(code)
        else:
            raise UnmappedCodeError(code, index)

    result = LabelledVariable(
        name=variable.name if name is None else name,
        codes=tuple(new_codes),
        label_set=label_set,
        description=variable.description if description is None else description,
    )
    warn_unlabelled(result)
    return result


# =============================================================================
# APPLYING TRANSFORMS ACROSS VARIABLES
# =============================================================================

VariablePredicate = Callable[[CodedVariable], bool]
Transform = Callable[[CodedVariable], CodedVariable]


def name_contains(fragment: str) -> VariablePredicate:
    return lambda var: fragment in var.name


def name_startswith(prefix: str) -> VariablePredicate:
    return lambda var: var.name.startswith(prefix)


def name_endswith(suffix: str) -> VariablePredicate:
    return lambda var: var.name.endswith(suffix)


def name_in(names: Iterable[str]) -> VariablePredicate:
    wanted = set(names)
    return lambda var: var.name in wanted


def apply_to_variables(
    dataset: Dataset,
    transform: Transform,
    where: Optional[VariablePredicate] = None,
    suffix: Optional[str] = None,
) -> Dataset:
    """
    Apply `transform` to every variable selected by `where`.

    Selection is an explicit predicate, e.g. name_startswith("q"),
    never a pattern matched against names behind the caller's back.

    Without `suffix`, transformed variables replace the originals in place
    of column order. With `suffix`, they are appended after all existing
    columns as new variables named `<name><suffix>`, keeping the originals.

    The input dataset is not modified; a new Dataset is returned.
    """
    selected = [var for var in dataset.variables if where is None or where(var)]
    selected_names = {var.name for var in selected}

    if suffix is None:
        variables: List[CodedVariable] = [
            transform(var) if var.name in selected_names else var
            for var in dataset.variables
        ]
        return Dataset(name=dataset.name, variables=variables, metadata=dict(dataset.metadata))

    added = [transform(var).renamed(var.name + suffix) for var in selected]
    return Dataset(
        name=dataset.name,
        variables=list(dataset.variables) + added,
        metadata=dict(dataset.metadata),
    )
