"""
Stage 1 (reader) data model.

These are the raw S-expressions produced by the Scheme reader before any
syntactic interpretation.  The set of variants is closed: `SExpr` lists every
shape a reader value can take, and every visitor over this stage must handle
all of them.

Pairs and vectors nest arbitrarily, but values must never be cyclic.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class SExprVoid:
    """The unspecified/void value."""


@dataclass(frozen=True)
class SExprNil:
    """The empty list."""


@dataclass(frozen=True)
class SExprBoolean:
    """A boolean (#t or #f)."""
    value: bool


@dataclass(frozen=True)
class SExprChar:
    """A character, held as a single display string (may be a control character)."""
    value: str


@dataclass(frozen=True)
class SExprString:
    """A string literal."""
    value: str


@dataclass(frozen=True)
class SExprSymbol:
    """A symbol."""
    value: str


@dataclass(frozen=True)
class SExprRational:
    """
    An exact rational number.

    The fraction is not guaranteed to be reduced, and the sign may sit on
    either the numerator or the denominator.
    """
    numerator: int
    denominator: int


@dataclass(frozen=True)
class SExprFloat:
    """An inexact (floating point) number."""
    value: float


@dataclass(frozen=True)
class SExprVector:
    """A vector of reader values."""
    elements: Tuple['SExpr', ...]


@dataclass(frozen=True)
class SExprPair:
    """A cons cell, the building block of proper and improper lists."""
    car: 'SExpr'
    cdr: 'SExpr'


SExprNumber = Union[SExprRational, SExprFloat]


# Union type for all reader values
SExpr = Union[
    SExprVoid,
    SExprNil,
    SExprBoolean,
    SExprChar,
    SExprString,
    SExprSymbol,
    SExprRational,
    SExprFloat,
    SExprVector,
    SExprPair,
]


def make_list(*items: SExpr, tail: SExpr | None = None) -> SExpr:
    """
    Build a chain of pairs from `items`.

    Args:
        items: Elements of the list, in order
        tail: Final cdr; the empty list if omitted, anything else gives an improper list

    Returns:
        The head of the pair chain, or `tail` itself if there are no items
    """
    result: SExpr = SExprNil() if tail is None else tail
    for item in reversed(items):
        result = SExprPair(item, result)

    return result
