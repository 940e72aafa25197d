"""Shared Field Types — scalar constraints reused by entity schemas.

Invariants:
    - NonEmptyStr rejects non-strings and strings that are blank after stripping
    - PositiveNumber accepts int or float (never bool, never numeric strings), > 0
    - PositiveNumber is always finite: NaN and ±Infinity never reach the store
"""

import math
from typing import Annotated

from pydantic import AfterValidator, StrictFloat, StrictInt, StringConstraints


def _positive(v: int | float) -> int | float:
    if not math.isfinite(v):
        raise ValueError("must be a finite number")
    if v <= 0:
        raise ValueError("must be greater than 0")
    return v


NonEmptyStr = Annotated[
    str, StringConstraints(strict=True, strip_whitespace=True, min_length=1),
]
PositiveNumber = Annotated[StrictInt | StrictFloat, AfterValidator(_positive)]
