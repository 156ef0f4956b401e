from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import regex

from modules.custom_digits.core.digit_sets import DEFAULT_DIGITS
from modules.custom_digits.core.errors import (
    AlphabetError,
    DuplicateDigitError,
    RadixRangeError,
    UnknownDigitError,
)

_GRAPHEME = regex.compile(r"\X")


def split_graphemes(text: str) -> List[str]:
    """Split text into extended grapheme clusters."""
    return _GRAPHEME.findall(text)


def split_code_points(text: str) -> List[str]:
    return list(text)


def split_symbols(text: str, *, use_unicode: bool = True) -> List[str]:
    if use_unicode:
        return split_graphemes(text)
    return split_code_points(text)


@dataclass(frozen=True)
class DigitAlphabet:
    """Ordered digit symbols of a radix; the first symbol is zero.

    Direct construction takes the symbols as given; :meth:`build` also splits
    text and applies a radix. The alphabet keeps only the first
    ``radix`` symbols, but uniqueness is checked over everything supplied.
    """

    symbols: Tuple[str, ...]
    use_unicode: bool = True
    _values: Dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        values: Dict[str, int] = {}
        for ordinal, symbol in enumerate(self.symbols):
            if symbol == "":
                raise AlphabetError("Digit symbols must not be empty.")
            if symbol in values:
                raise DuplicateDigitError(symbol)
            values[symbol] = ordinal
        if not values:
            raise RadixRangeError("An alphabet needs at least one digit.")
        object.__setattr__(self, "symbols", tuple(self.symbols))
        object.__setattr__(self, "_values", values)

    @classmethod
    def build(
        cls,
        digits: str | Sequence[str] | None = None,
        radix: int | None = None,
        use_unicode: bool = True,
    ) -> "DigitAlphabet":
        if digits is None:
            digits = DEFAULT_DIGITS

        if isinstance(digits, str):
            supplied = split_symbols(digits, use_unicode=use_unicode)
        else:
            supplied = [str(digit) for digit in digits]

        values: Dict[str, int] = {}
        for ordinal, symbol in enumerate(supplied):
            if symbol == "":
                raise AlphabetError("Digit symbols must not be empty.")
            if symbol in values:
                raise DuplicateDigitError(symbol)
            values[symbol] = ordinal

        if radix is None:
            radix = len(values)
        if isinstance(radix, bool) or not isinstance(radix, int):
            raise RadixRangeError(f"Radix must be a whole number, got {radix!r}.")
        if radix < 1 or radix > len(values):
            raise RadixRangeError(
                f"Radix {radix} is out of range of available digits (1-{len(values)})."
            )

        return cls(symbols=tuple(supplied[:radix]), use_unicode=use_unicode)

    @property
    def radix(self) -> int:
        return len(self.symbols)

    @property
    def zero(self) -> str:
        return self.symbols[0]

    def split(self, text: str) -> List[str]:
        return split_symbols(text, use_unicode=self.use_unicode)

    def value_of(self, symbol: str) -> int:
        try:
            return self._values[symbol]
        except KeyError:
            raise UnknownDigitError(symbol) from None

    def symbol_for(self, value: int) -> str:
        return self.symbols[value]

    def validate_digit(self, symbol: str) -> None:
        if symbol not in self._values:
            raise UnknownDigitError(symbol)

    def validate_number(self, text: str) -> None:
        for symbol in self.split(text):
            self.validate_digit(symbol)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._values

    def __len__(self) -> int:
        return len(self.symbols)
