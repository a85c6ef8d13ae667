"""
Text category encoding.

Maps text responses (e.g. "Pre" / "Post") onto integer codes in an
explicitly supplied order. Alphabetical order is never used: it would
put "Post" before "Pre" and silently flip the meaning of the codes.
"""

from typing import List, Optional, Sequence

from likertkit.model import (
    MISSING,
    CodedVariable,
    DuplicateCodeError,
    LabelledVariable,
    LabelSet,
    UnknownCategoryError,
)


def encode_categories(
    values: Sequence[Optional[str]],
    order: Sequence[str],
    name: str = "",
    start: int = 1,
) -> CodedVariable:
    """
    Encode `values` as codes by their position in `order`.

    The first category in `order` gets `start`, the next `start + 1`, ...
    The result carries a LabelSet whose labels are the category texts.
    None values become MISSING.

    Raises:
        UnknownCategoryError: A value is not listed in `order`
        DuplicateCodeError: `order` lists a category twice
        TypeError: `values` or `order` is a single string
    """
    for arg_name, arg in (("values", values), ("order", order)):
        if isinstance(arg, str):
            raise TypeError(f"{arg_name} must be a sequence of categories, not a string")

    positions = {}
    for offset, category in enumerate(order):
        if category in positions:
            raise DuplicateCodeError(
                category, message=f"Category {category!r} listed twice in order"
            )
        positions[category] = start + offset

    codes = []
    for index, value in enumerate(values):
        if value is None:
            codes.append(MISSING)
        elif value in positions:
            codes.append(positions[value])
        else:
            raise UnknownCategoryError(value, index)

    label_set = LabelSet(entries=tuple((code, category) for category, code in positions.items()))
    return LabelledVariable(name=name, codes=tuple(codes), label_set=label_set)


def decode_categories(variable: CodedVariable) -> List[Optional[str]]:
    """Map codes back to category text (None for missing or unknown)."""
    return variable.labels()
