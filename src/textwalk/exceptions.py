"""Exceptions raised by TextWalk."""

from typing import Optional


class TextWalkError(Exception):
    """Base exception for all TextWalk errors."""
    pass


class InvalidInputError(TextWalkError):
    """
    Input cannot be reduced to a 3D vector.

    Raised when:
    - The embedding is empty
    - The embedding holds non-numeric or non-finite values
    - The simple method gets fewer than 3 values (no non-empty chunks)
    - The text handed to the service is blank

    The failure is deterministic: the same input fails the same way on retry.
    """

    def __init__(self, message: str, length: Optional[int] = None):
        super().__init__(message)
        self.length = length


class ConfigError(TextWalkError):
    """
    Invalid TextWalk configuration.

    Raised when:
    - A dimension count is not positive
    - A scale is not a positive finite number
    - The focus lerp factor is outside [0, 1]
    """
    pass
