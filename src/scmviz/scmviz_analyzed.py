"""
Stage 3 (semantic analyzer) data model.

Analyzed expressions mirror the parsed ones, with three refinements made by
the analyzer:

- every variable carries a resolved lexical address (free, a parameter of the
  current lambda, or a parameter of an enclosing lambda `major` hops out);
- variables that are captured by an inner closure and mutated are boxed, which
  introduces the Box, BoxGet and BoxSet forms;
- every application is classified as a tail call or a non-tail call.

Optional/variadic lambdas have already been lowered by this stage, so a lambda
only carries its parameter names and body.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from scmviz.scmviz_sexpr import SExpr


@dataclass(frozen=True)
class FreeAddress:
    """Variable is not bound by any enclosing lambda."""


@dataclass(frozen=True)
class ParamAddress:
    """Variable is parameter `minor` of the current lambda."""
    minor: int

    def __post_init__(self) -> None:
        if self.minor < 0:
            raise ValueError(f"Param minor index must be non-negative, got {self.minor}")


@dataclass(frozen=True)
class BoundAddress:
    """Variable is parameter `minor` of the lambda `major` hops outward."""
    major: int
    minor: int

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0:
            raise ValueError(
                f"Bound indices must be non-negative, got major={self.major}, minor={self.minor}"
            )


LexicalAddress = Union[FreeAddress, ParamAddress, BoundAddress]


class ApplicKind(Enum):
    """Tail-call classification of an application."""
    TAIL_CALL = "Tail_Call"
    NON_TAIL_CALL = "Non_Tail_Call"


@dataclass(frozen=True)
class AnalyzedVar:
    """A variable together with its resolved lexical address."""
    name: str
    address: LexicalAddress

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable name must be a non-empty string")


@dataclass(frozen=True)
class AnalyzedConst:
    """A constant."""
    sexpr: SExpr


@dataclass(frozen=True)
class AnalyzedVarGet:
    """A variable reference."""
    var: AnalyzedVar


@dataclass(frozen=True)
class AnalyzedIf:
    """A two-armed conditional."""
    test: 'AnalyzedExpr'
    then_branch: 'AnalyzedExpr'
    else_branch: 'AnalyzedExpr'


@dataclass(frozen=True)
class AnalyzedSeq:
    """Sequential evaluation of `exprs`."""
    exprs: Tuple['AnalyzedExpr', ...]


@dataclass(frozen=True)
class AnalyzedOr:
    """Short-circuiting disjunction of `exprs`."""
    exprs: Tuple['AnalyzedExpr', ...]


@dataclass(frozen=True)
class AnalyzedVarSet:
    """Assignment to an unboxed variable."""
    var: AnalyzedVar
    value: 'AnalyzedExpr'


@dataclass(frozen=True)
class AnalyzedVarDef:
    """Definition of a variable."""
    var: AnalyzedVar
    value: 'AnalyzedExpr'


@dataclass(frozen=True)
class AnalyzedBox:
    """Move a parameter's value into a fresh heap box."""
    var: AnalyzedVar


@dataclass(frozen=True)
class AnalyzedBoxGet:
    """Read a boxed variable."""
    var: AnalyzedVar


@dataclass(frozen=True)
class AnalyzedBoxSet:
    """Write a boxed variable."""
    var: AnalyzedVar
    value: 'AnalyzedExpr'


@dataclass(frozen=True)
class AnalyzedLambda:
    """A lambda expression; the body is a single expression."""
    params: Tuple[str, ...]
    body: 'AnalyzedExpr'


@dataclass(frozen=True)
class AnalyzedApplic:
    """Application of `operator` to `args`, with its tail-call classification."""
    operator: 'AnalyzedExpr'
    args: Tuple['AnalyzedExpr', ...]
    kind: ApplicKind


# Union type for all analyzed expressions
AnalyzedExpr = Union[
    AnalyzedConst,
    AnalyzedVarGet,
    AnalyzedIf,
    AnalyzedSeq,
    AnalyzedOr,
    AnalyzedVarSet,
    AnalyzedVarDef,
    AnalyzedBox,
    AnalyzedBoxGet,
    AnalyzedBoxSet,
    AnalyzedLambda,
    AnalyzedApplic,
]
