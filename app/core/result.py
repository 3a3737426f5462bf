# File: app/core/result.py

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Ok[T]:
    """
    Successful branch of a Result.
    """

    # positional field for `case Ok(value)`
    __match_args__ = ("value",)

    value: T


@dataclass(slots=True, frozen=True)
class Err[E]:
    """
    Failed branch of a Result.
    """

    __match_args__ = ("error",)

    error: E


type Result[T, E] = Ok[T] | Err[E]
"""
Value-or-error returned across the service layer.

- T: success type
- E: error type
"""


__all__ = [
    "Ok",
    "Err",
    "Result",
]
