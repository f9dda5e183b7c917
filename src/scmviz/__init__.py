"""scmviz: display trees for the reader, tag parser and semantic analyzer stages of a Scheme front end."""

# Main API
from scmviz.scmviz import SchemeViz

# Exceptions
from scmviz.scmviz_error import (
    SchemeVizError, SchemeVizUnknownNodeError, SchemeVizDecodeError, SchemeVizServiceError, SchemeVizConfigError,
    SchemeVizNestingError
)

# Display tree
from scmviz.scmviz_tree_node import TreeNode
from scmviz.scmviz_tree_printer import format_tree

# Stage models
from scmviz.scmviz_parsing_mode import ParsingMode
from scmviz.scmviz_sexpr import (
    SExpr, SExprVoid, SExprNil, SExprBoolean, SExprChar, SExprString, SExprSymbol,
    SExprRational, SExprFloat, SExprVector, SExprPair, make_list
)
from scmviz.scmviz_parsed import (
    ParsedExpr, ParsedVar, LambdaSimple, LambdaOptional, ParsedConst, ParsedVarGet, ParsedIf,
    ParsedSeq, ParsedOr, ParsedVarSet, ParsedVarDef, ParsedLambda, ParsedApplic
)
from scmviz.scmviz_analyzed import (
    AnalyzedExpr, AnalyzedVar, FreeAddress, ParamAddress, BoundAddress, ApplicKind,
    AnalyzedConst, AnalyzedVarGet, AnalyzedIf, AnalyzedSeq, AnalyzedOr, AnalyzedVarSet,
    AnalyzedVarDef, AnalyzedBox, AnalyzedBoxGet, AnalyzedBoxSet, AnalyzedLambda, AnalyzedApplic
)

# Lower-level components
from scmviz.scmviz_sexpr_visualizer import SExprVisualizer
from scmviz.scmviz_parsed_visualizer import ParsedVisualizer
from scmviz.scmviz_analyzed_visualizer import AnalyzedVisualizer
from scmviz.scmviz_decoder import SchemeVizDecoder
from scmviz.scmviz_config import ParserServiceSettings
from scmviz.scmviz_client import SchemeParserClient


__all__ = [
    # Main API
    "SchemeViz",

    # Exceptions
    "SchemeVizError", "SchemeVizUnknownNodeError", "SchemeVizDecodeError", "SchemeVizServiceError",
    "SchemeVizConfigError", "SchemeVizNestingError",

    # Display tree
    "TreeNode", "format_tree",

    # Stage models
    "ParsingMode",
    "SExpr", "SExprVoid", "SExprNil", "SExprBoolean", "SExprChar", "SExprString", "SExprSymbol",
    "SExprRational", "SExprFloat", "SExprVector", "SExprPair", "make_list",
    "ParsedExpr", "ParsedVar", "LambdaSimple", "LambdaOptional", "ParsedConst", "ParsedVarGet", "ParsedIf",
    "ParsedSeq", "ParsedOr", "ParsedVarSet", "ParsedVarDef", "ParsedLambda", "ParsedApplic",
    "AnalyzedExpr", "AnalyzedVar", "FreeAddress", "ParamAddress", "BoundAddress", "ApplicKind",
    "AnalyzedConst", "AnalyzedVarGet", "AnalyzedIf", "AnalyzedSeq", "AnalyzedOr", "AnalyzedVarSet",
    "AnalyzedVarDef", "AnalyzedBox", "AnalyzedBoxGet", "AnalyzedBoxSet", "AnalyzedLambda", "AnalyzedApplic",

    # Lower-level components
    "SExprVisualizer", "ParsedVisualizer", "AnalyzedVisualizer", "SchemeVizDecoder",
    "ParserServiceSettings", "SchemeParserClient"
]
