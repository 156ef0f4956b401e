from __future__ import annotations

from fastapi import status


class CustomDigitsError(Exception):
    """Base error for custom-digit conversions, normalized by the tool layer."""

    code = "custom_digits_error"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        detail: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code


class AlphabetError(CustomDigitsError):
    code = "invalid_alphabet"


class DuplicateDigitError(AlphabetError):
    code = "duplicate_digit"

    def __init__(self, digit: str) -> None:
        super().__init__(f"Radix digits are not all unique (repeated digit: {digit}).")
        self.digit = digit


class RadixRangeError(AlphabetError):
    code = "radix_out_of_range"


class UnknownDigitError(CustomDigitsError):
    code = "unknown_digit"

    def __init__(self, digit: str) -> None:
        super().__init__(f"Digit is not in the set of custom digits ({digit}).")
        self.digit = digit


class MalformedNumberError(CustomDigitsError):
    code = "malformed_number"

    def __init__(self, value: object, base: str) -> None:
        super().__init__(f"Invalid {base} number: {value!r}")
        self.value = value
        self.base = base


class InsecureRandomSourceError(CustomDigitsError):
    code = "insecure_random_source"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RandomizationFailureError(CustomDigitsError):
    code = "randomization_failure"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class BackendUnavailableError(CustomDigitsError):
    code = "backend_unavailable"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class AlreadyInitializedError(RuntimeError):
    pass


__all__ = [
    "AlphabetError",
    "AlreadyInitializedError",
    "BackendUnavailableError",
    "CustomDigitsError",
    "DuplicateDigitError",
    "InsecureRandomSourceError",
    "MalformedNumberError",
    "RadixRangeError",
    "RandomizationFailureError",
    "UnknownDigitError",
]
