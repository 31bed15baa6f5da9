"""Preconditions shared by the geometry and QC engines."""
from __future__ import annotations

from typing import Union

Number = Union[int, float]


class StageContractError(AssertionError):
    """A caller passed dimensions the engines never accept (zero or negative).

    By the time numbers reach the engines they must have been validated by the
    probing step, so this is a programming defect rather than a user error.
    """


def require_positive(name: str, value: Number) -> Number:
    if value is None or not value > 0:
        raise StageContractError(f"{name} must be positive, got {value!r}")
    return value
