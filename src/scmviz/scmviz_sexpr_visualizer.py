"""
Visualizer for stage 1 (reader) values.

Besides rendering whole reader trees, this class owns the value renderers
shared by the later stages: constants in parsed and analyzed expressions
embed reader values and are rendered through here.
"""

import math

from scmviz.scmviz_error import SchemeVizUnknownNodeError
from scmviz.scmviz_parsing_mode import ParsingMode
from scmviz.scmviz_sexpr import (
    SExpr, SExprVoid, SExprNil, SExprBoolean, SExprChar, SExprString, SExprSymbol,
    SExprRational, SExprFloat, SExprVector, SExprPair
)
from scmviz.scmviz_tree_node import TreeNode, leaf, branch


# Characters with a named mnemonic (#\newline etc.)
CHAR_NAMES = {
    '\n': 'newline',
    '\r': 'return',
    '\f': 'page',
    '\t': 'tab',
    ' ': 'space',
}

VOID_LABEL = '#<void>'
NIL_LABEL = "'()"


def format_float(value: float) -> str:
    """
    Format a float the way the parser service writes JSON numbers.

    Integral values have no fractional part, so 1.0 is shown as "1".
    """
    if math.isfinite(value) and float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))

    return repr(value)


class SExprVisualizer:
    """Converts reader values into display trees."""

    def visualize(self, sexpr: SExpr) -> TreeNode:
        """
        Render a reader value.

        Args:
            sexpr: The value to render

        Returns:
            The display tree for the value

        Raises:
            SchemeVizUnknownNodeError: If `sexpr` is not a reader value
        """
        if isinstance(sexpr, SExprVoid):
            return leaf(VOID_LABEL)

        if isinstance(sexpr, SExprNil):
            return leaf(NIL_LABEL)

        if isinstance(sexpr, SExprBoolean):
            return leaf('#t' if sexpr.value else '#f')

        if isinstance(sexpr, SExprChar):
            return self.visualize_char(sexpr)

        if isinstance(sexpr, SExprString):
            return leaf(f'"{sexpr.value}"')

        if isinstance(sexpr, SExprSymbol):
            return leaf(f"'{sexpr.value}")

        if isinstance(sexpr, (SExprRational, SExprFloat)):
            return self.visualize_number(sexpr)

        if isinstance(sexpr, SExprVector):
            return branch('Vector', (self.visualize(element) for element in sexpr.elements))

        if isinstance(sexpr, SExprPair):
            return branch('Pair', [self.visualize(sexpr.car), self.visualize(sexpr.cdr)])

        raise SchemeVizUnknownNodeError(
            stage=ParsingMode.READER.value,
            tag=type(sexpr).__name__,
            expected="a reader value (void, nil, boolean, char, string, symbol, number, vector or pair)"
        )

    def visualize_char(self, char: SExprChar) -> TreeNode:
        """Render a character using its mnemonic if it has one."""
        name = CHAR_NAMES.get(char.value)
        if name is not None:
            return leaf(f'#\\{name}')

        return leaf(f'#\\{char.value}')

    def visualize_number(self, number: SExprRational | SExprFloat) -> TreeNode:
        """
        Render a number.

        Rationals with a zero numerator or a denominator of 1 or -1 collapse to
        an integer; any other fraction is shown exactly as stored, without
        reduction.
        """
        if isinstance(number, SExprFloat):
            return leaf(format_float(number.value))

        if number.numerator == 0:
            return leaf('0')

        if number.denominator == 1:
            return leaf(str(number.numerator))

        if number.denominator == -1:
            return leaf(str(-number.numerator))

        return leaf(f'{number.numerator}/{number.denominator}')
