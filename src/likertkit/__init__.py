"""
Labelled Categorical Variables (likertkit)

Attach code→label sets to integer-coded survey responses, check them
against the observed data, and recode fine Likert scales into coarser ones.

ARCHITECTURAL GUARANTEE:
------------------------
The core (model, recode, categories, scales) contains ZERO knowledge of:
    - File formats (SPSS, YAML, JSON)
    - DataFrames
    - Random sampling

Every transformation returns a NEW object. Nothing is mutated in place.

File formats and sample data live in the outer modules
(serialization, export, sampling).
"""

from likertkit.model import (
    MISSING,
    LabelSet,
    CodedVariable,
    LabelledVariable,
    RecodeMap,
    Dataset,
    LabellingError,
    DuplicateCodeError,
    AmbiguousRecodeError,
    UnmappedCodeError,
    UnknownCategoryError,
    UnlabelledCodeWarning,
)
from likertkit.recode import UnmappedPolicy, attach_labels, recode, apply_to_variables
from likertkit.categories import encode_categories, decode_categories
from likertkit.scales import define, reversed_labels

__version__ = "0.1.0"
