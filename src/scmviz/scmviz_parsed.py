"""
Stage 2 (tag parser) data model.

Parsed expressions are the syntactic forms recognised in reader output:
constants, variable access, conditionals, sequencing, disjunction, lambda and
application.  As with the reader stage the set of variants is closed, and
`ParsedExpr` enumerates all of them.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from scmviz.scmviz_sexpr import SExpr


@dataclass(frozen=True)
class ParsedVar:
    """A variable, identified only by its name."""
    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Variable name must be a non-empty string")


@dataclass(frozen=True)
class LambdaSimple:
    """Lambda with a fixed parameter list."""


@dataclass(frozen=True)
class LambdaOptional:
    """Lambda whose trailing arguments are collected into `rest`."""
    rest: str


LambdaKind = Union[LambdaSimple, LambdaOptional]


@dataclass(frozen=True)
class ParsedConst:
    """A quoted or self-evaluating constant."""
    sexpr: SExpr


@dataclass(frozen=True)
class ParsedVarGet:
    """A variable reference."""
    var: ParsedVar


@dataclass(frozen=True)
class ParsedIf:
    """A two-armed conditional."""
    test: 'ParsedExpr'
    then_branch: 'ParsedExpr'
    else_branch: 'ParsedExpr'


@dataclass(frozen=True)
class ParsedSeq:
    """Sequential evaluation of `exprs`."""
    exprs: Tuple['ParsedExpr', ...]


@dataclass(frozen=True)
class ParsedOr:
    """Short-circuiting disjunction of `exprs`."""
    exprs: Tuple['ParsedExpr', ...]


@dataclass(frozen=True)
class ParsedVarSet:
    """Assignment to an existing variable (set!)."""
    var: ParsedVar
    value: 'ParsedExpr'


@dataclass(frozen=True)
class ParsedVarDef:
    """Definition of a variable (define)."""
    var: ParsedVar
    value: 'ParsedExpr'


@dataclass(frozen=True)
class ParsedLambda:
    """
    A lambda expression.

    The body is always a single expression; multi-statement bodies arrive
    already wrapped in a ParsedSeq.
    """
    params: Tuple[str, ...]
    kind: LambdaKind
    body: 'ParsedExpr'


@dataclass(frozen=True)
class ParsedApplic:
    """Application of `operator` to `args`."""
    operator: 'ParsedExpr'
    args: Tuple['ParsedExpr', ...]


# Union type for all parsed expressions
ParsedExpr = Union[
    ParsedConst,
    ParsedVarGet,
    ParsedIf,
    ParsedSeq,
    ParsedOr,
    ParsedVarSet,
    ParsedVarDef,
    ParsedLambda,
    ParsedApplic,
]
