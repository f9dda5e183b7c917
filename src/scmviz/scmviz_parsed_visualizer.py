"""Visualizer for stage 2 (tag parser) expressions."""

from typing import Iterable

from scmviz.scmviz_error import SchemeVizUnknownNodeError
from scmviz.scmviz_parsed import (
    ParsedExpr, ParsedVar, LambdaKind, LambdaSimple, LambdaOptional, ParsedConst, ParsedVarGet,
    ParsedIf, ParsedSeq, ParsedOr, ParsedVarSet, ParsedVarDef, ParsedLambda, ParsedApplic
)
from scmviz.scmviz_parsing_mode import ParsingMode
from scmviz.scmviz_sexpr_visualizer import SExprVisualizer
from scmviz.scmviz_tree_node import TreeNode, leaf, branch


def visualize_params(params: Iterable[str]) -> TreeNode:
    """Render a lambda's parameter names as a branch of quoted-name leaves."""
    return branch('Params', (leaf(f'"{param}"') for param in params))


class ParsedVisualizer:
    """Converts parsed expressions into display trees."""

    def __init__(self, sexpr_visualizer: SExprVisualizer | None = None) -> None:
        """
        Initialize the visualizer.

        Args:
            sexpr_visualizer: Renderer for embedded constants (a new one is created if omitted)
        """
        self._sexpr_visualizer = sexpr_visualizer or SExprVisualizer()

    def visualize(self, expr: ParsedExpr) -> TreeNode:
        """
        Render a parsed expression.

        Args:
            expr: The expression to render

        Returns:
            The display tree for the expression

        Raises:
            SchemeVizUnknownNodeError: If `expr`, or any expression inside it, is not a parsed expression
        """
        if isinstance(expr, ParsedConst):
            return branch('Const', [self._sexpr_visualizer.visualize(expr.sexpr)])

        if isinstance(expr, ParsedVarGet):
            return branch('VarGet', [self.visualize_var(expr.var)])

        if isinstance(expr, ParsedIf):
            return branch('If', [
                self.visualize(expr.test),
                self.visualize(expr.then_branch),
                self.visualize(expr.else_branch)
            ])

        if isinstance(expr, ParsedSeq):
            return branch('Seq', (self.visualize(e) for e in expr.exprs))

        if isinstance(expr, ParsedOr):
            return branch('Or', (self.visualize(e) for e in expr.exprs))

        if isinstance(expr, ParsedVarSet):
            return branch('VarSet', [self.visualize_var(expr.var), self.visualize(expr.value)])

        if isinstance(expr, ParsedVarDef):
            return branch('VarDef', [self.visualize_var(expr.var), self.visualize(expr.value)])

        if isinstance(expr, ParsedLambda):
            return branch('Lambda', [
                visualize_params(expr.params),
                self.visualize_lambda_kind(expr.kind),
                self.visualize(expr.body)
            ])

        if isinstance(expr, ParsedApplic):
            return branch('Applic', [
                self.visualize(expr.operator),
                branch('Args', (self.visualize(arg) for arg in expr.args))
            ])

        raise SchemeVizUnknownNodeError(
            stage=ParsingMode.TAG_PARSER.value,
            tag=type(expr).__name__,
            expected="a parsed expression (Const, VarGet, If, Seq, Or, VarSet, VarDef, Lambda or Applic)"
        )

    def visualize_var(self, var: ParsedVar) -> TreeNode:
        """Render a variable name."""
        if not isinstance(var, ParsedVar):
            raise SchemeVizUnknownNodeError(
                stage=ParsingMode.TAG_PARSER.value,
                tag=type(var).__name__,
                expected="a parsed variable (ParsedVar)"
            )

        return leaf(f'var {var.name}')

    def visualize_lambda_kind(self, kind: LambdaKind) -> TreeNode:
        """Render a lambda's kind marker."""
        if isinstance(kind, LambdaSimple):
            return leaf('Simple')

        if isinstance(kind, LambdaOptional):
            return leaf(f'opt {kind.rest}')

        raise SchemeVizUnknownNodeError(
            stage=ParsingMode.TAG_PARSER.value,
            tag=type(kind).__name__,
            expected="a lambda kind (LambdaSimple or LambdaOptional)"
        )
