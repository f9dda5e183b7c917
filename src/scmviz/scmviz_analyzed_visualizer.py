"""
Visualizer for stage 3 (semantic analyzer) expressions.

Node names carry a trailing prime (e.g. "If'") so analyzed trees can be told
apart from parsed ones at a glance.  Variables render as a small branch
holding the variable's name and its lexical address, and the address leaf
also exposes its indices as attributes.
"""

from scmviz.scmviz_analyzed import (
    AnalyzedExpr, AnalyzedVar, LexicalAddress, FreeAddress, ParamAddress, BoundAddress, ApplicKind,
    AnalyzedConst, AnalyzedVarGet, AnalyzedIf, AnalyzedSeq, AnalyzedOr, AnalyzedVarSet,
    AnalyzedVarDef, AnalyzedBox, AnalyzedBoxGet, AnalyzedBoxSet, AnalyzedLambda, AnalyzedApplic
)
from scmviz.scmviz_error import SchemeVizUnknownNodeError
from scmviz.scmviz_parsed_visualizer import visualize_params
from scmviz.scmviz_parsing_mode import ParsingMode
from scmviz.scmviz_sexpr_visualizer import SExprVisualizer
from scmviz.scmviz_tree_node import TreeNode, leaf, branch


class AnalyzedVisualizer:
    """Converts analyzed expressions into display trees."""

    def __init__(self, sexpr_visualizer: SExprVisualizer | None = None) -> None:
        """
        Initialize the visualizer.

        Args:
            sexpr_visualizer: Renderer for embedded constants (a new one is created if omitted)
        """
        self._sexpr_visualizer = sexpr_visualizer or SExprVisualizer()

    def visualize(self, expr: AnalyzedExpr) -> TreeNode:
        """
        Render an analyzed expression.

        Args:
            expr: The expression to render

        Returns:
            The display tree for the expression

        Raises:
            SchemeVizUnknownNodeError: If `expr`, or any expression inside it, is not an analyzed expression
        """
        if isinstance(expr, AnalyzedConst):
            return branch("Const'", [self._sexpr_visualizer.visualize(expr.sexpr)])

        if isinstance(expr, AnalyzedVarGet):
            return branch("VarGet'", [self.visualize_var(expr.var)])

        if isinstance(expr, AnalyzedIf):
            return branch("If'", [
                self.visualize(expr.test),
                self.visualize(expr.then_branch),
                self.visualize(expr.else_branch)
            ])

        if isinstance(expr, AnalyzedSeq):
            return branch("Seq'", (self.visualize(e) for e in expr.exprs))

        if isinstance(expr, AnalyzedOr):
            return branch("Or'", (self.visualize(e) for e in expr.exprs))

        if isinstance(expr, AnalyzedVarSet):
            return branch("VarSet'", [self.visualize_var(expr.var), self.visualize(expr.value)])

        if isinstance(expr, AnalyzedVarDef):
            return branch("VarDef'", [self.visualize_var(expr.var), self.visualize(expr.value)])

        if isinstance(expr, AnalyzedBox):
            return branch("Box'", [self.visualize_var(expr.var)])

        if isinstance(expr, AnalyzedBoxGet):
            return branch("BoxGet'", [self.visualize_var(expr.var)])

        if isinstance(expr, AnalyzedBoxSet):
            return branch("BoxSet'", [self.visualize_var(expr.var), self.visualize(expr.value)])

        if isinstance(expr, AnalyzedLambda):
            return branch("Lambda'", [visualize_params(expr.params), self.visualize(expr.body)])

        if isinstance(expr, AnalyzedApplic):
            return branch("Applic'", [
                self.visualize(expr.operator),
                branch('Args', (self.visualize(arg) for arg in expr.args)),
                self.visualize_applic_kind(expr.kind)
            ])

        raise SchemeVizUnknownNodeError(
            stage=ParsingMode.SEMANTIC_ANALYZER.value,
            tag=type(expr).__name__,
            expected="an analyzed expression (Const, VarGet, If, Seq, Or, VarSet, VarDef, "
                "Box, BoxGet, BoxSet, Lambda or Applic)"
        )

    def visualize_var(self, var: AnalyzedVar) -> TreeNode:
        """Render a variable as its name followed by its lexical address."""
        if not isinstance(var, AnalyzedVar):
            raise SchemeVizUnknownNodeError(
                stage=ParsingMode.SEMANTIC_ANALYZER.value,
                tag=type(var).__name__,
                expected="an analyzed variable (AnalyzedVar)"
            )

        return branch("var'", [leaf(var.name), self.visualize_address(var.address)])

    def visualize_applic_kind(self, kind: ApplicKind) -> TreeNode:
        """Render an application's tail-call classification."""
        if not isinstance(kind, ApplicKind):
            raise SchemeVizUnknownNodeError(
                stage=ParsingMode.SEMANTIC_ANALYZER.value,
                tag=type(kind).__name__,
                expected="an application kind (ApplicKind.TAIL_CALL or ApplicKind.NON_TAIL_CALL)"
            )

        return leaf(kind.value)

    def visualize_address(self, address: LexicalAddress) -> TreeNode:
        """Render a lexical address."""
        if isinstance(address, FreeAddress):
            return leaf('Free', {'kind': 'free'})

        if isinstance(address, ParamAddress):
            return leaf(f'Param({address.minor})', {'kind': 'param', 'minor': str(address.minor)})

        if isinstance(address, BoundAddress):
            return leaf(
                f'Bound({address.major},{address.minor})',
                {'kind': 'bound', 'major': str(address.major), 'minor': str(address.minor)}
            )

        raise SchemeVizUnknownNodeError(
            stage=ParsingMode.SEMANTIC_ANALYZER.value,
            tag=type(address).__name__,
            expected="a lexical address (FreeAddress, ParamAddress or BoundAddress)"
        )
