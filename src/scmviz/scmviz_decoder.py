"""
Decoder for the parser service's JSON wire format.

The service encodes most nodes as `{"type": <tag>, "value": <payload>}`
objects, with a few exceptions inherited from its OCaml origins:

- booleans are bare JSON booleans and floats are bare JSON numbers;
- vectors and internal lists share the `OcamlList` tag;
- analyzed constants reuse the parsed `ScmConst` tag.

Everything decoded here is checked for shape, so the visualizers only ever
see well-formed stage values.  Any deviation raises SchemeVizDecodeError with
the JSON path of the offending element.
"""

import logging
from typing import Any, Callable, Dict, List, Tuple, TypeVar

from scmviz.scmviz_analyzed import (
    AnalyzedExpr, AnalyzedVar, LexicalAddress, FreeAddress, ParamAddress, BoundAddress, ApplicKind,
    AnalyzedConst, AnalyzedVarGet, AnalyzedIf, AnalyzedSeq, AnalyzedOr, AnalyzedVarSet,
    AnalyzedVarDef, AnalyzedBox, AnalyzedBoxGet, AnalyzedBoxSet, AnalyzedLambda, AnalyzedApplic
)
from scmviz.scmviz_error import SchemeVizDecodeError, SchemeVizNestingError
from scmviz.scmviz_parsed import (
    ParsedExpr, ParsedVar, LambdaKind, LambdaSimple, LambdaOptional, ParsedConst, ParsedVarGet,
    ParsedIf, ParsedSeq, ParsedOr, ParsedVarSet, ParsedVarDef, ParsedLambda, ParsedApplic
)
from scmviz.scmviz_parsing_mode import ParsingMode
from scmviz.scmviz_sexpr import (
    SExpr, SExprVoid, SExprNil, SExprBoolean, SExprChar, SExprString, SExprSymbol,
    SExprRational, SExprFloat, SExprVector, SExprPair
)


T = TypeVar('T')

# Wire tag shared by vectors and internal lists
LIST_TAG = 'OcamlList'


def _describe(data: Any, limit: int = 60) -> str:
    """Short printable rendering of a JSON value for error messages."""
    text = repr(data)
    if len(text) > limit:
        return text[:limit - 3] + '...'

    return text


class SchemeVizDecoder:
    """Decodes service responses into stage values."""

    def __init__(self) -> None:
        self._logger = logging.getLogger("SchemeVizDecoder")

    def decode_response(self, mode: ParsingMode, payload: Any) -> List[SExpr] | List[ParsedExpr] | List[AnalyzedExpr]:
        """
        Decode a complete service response.

        Args:
            mode: The stage the response was produced by
            payload: The decoded JSON response (a list of nodes)

        Returns:
            The decoded nodes, in response order

        Raises:
            SchemeVizDecodeError: If the response is not a list of valid nodes for `mode`
            SchemeVizNestingError: If a node is nested too deeply to decode
        """
        decoders: Dict[ParsingMode, Callable[[Any, str], Any]] = {
            ParsingMode.READER: self.decode_sexpr,
            ParsingMode.TAG_PARSER: self.decode_parsed,
            ParsingMode.SEMANTIC_ANALYZER: self.decode_analyzed,
        }
        decode = decoders[mode]

        if not isinstance(payload, list):
            raise SchemeVizDecodeError(
                "Service response is not a list",
                path='$',
                received=_describe(payload),
                expected="a JSON array of nodes"
            )

        try:
            return [decode(item, f'$[{i}]') for i, item in enumerate(payload)]

        except SchemeVizDecodeError as e:
            self._logger.debug("Rejected %s response at %s: %s", mode.value, e.path, e.message)
            raise

        except RecursionError as e:
            self._logger.debug("Rejected %s response: nesting exceeds the recursion limit", mode.value)
            raise SchemeVizNestingError(stage=mode.value, operation="decoding") from e

    # Helpers

    def _object(self, data: Any, path: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SchemeVizDecodeError(
                "Expected a JSON object", path=path, received=_describe(data), expected="{\"type\": ..., ...}"
            )

        return data

    def _tag(self, data: Any, path: str) -> str:
        obj = self._object(data, path)
        tag = obj.get('type')
        if not isinstance(tag, str):
            raise SchemeVizDecodeError(
                "Node has no string 'type' tag", path=path, received=_describe(data)
            )

        return tag

    def _value(self, data: Dict[str, Any], path: str) -> Any:
        if 'value' not in data:
            raise SchemeVizDecodeError(
                f"Node '{data.get('type')}' has no 'value'", path=path, received=_describe(data)
            )

        return data['value']

    def _field(self, data: Dict[str, Any], key: str, path: str) -> Any:
        value = self._object(self._value(data, path), f'{path}.value')
        if key not in value:
            raise SchemeVizDecodeError(
                f"Missing field '{key}'", path=f'{path}.value', received=_describe(value)
            )

        return value[key]

    def _string(self, data: Any, path: str) -> str:
        if not isinstance(data, str):
            raise SchemeVizDecodeError("Expected a string", path=path, received=_describe(data))

        return data

    def _name(self, data: Any, path: str) -> str:
        name = self._string(data, path)
        if not name:
            raise SchemeVizDecodeError("Expected a non-empty variable name", path=path, received=_describe(data))

        return name

    def _int(self, data: Any, path: str) -> int:
        if isinstance(data, bool) or not isinstance(data, int):
            raise SchemeVizDecodeError("Expected an integer", path=path, received=_describe(data))

        return data

    def _index(self, data: Any, path: str) -> int:
        index = self._int(data, path)
        if index < 0:
            raise SchemeVizDecodeError("Expected a non-negative index", path=path, received=_describe(data))

        return index

    def _list(self, data: Any, path: str, decode: Callable[[Any, str], T]) -> Tuple[T, ...]:
        """Decode an `OcamlList` wrapper, applying `decode` to each element."""
        tag = self._tag(data, path)
        if tag != LIST_TAG:
            raise SchemeVizDecodeError(
                f"Expected '{LIST_TAG}', got '{tag}'", path=path, received=_describe(data), expected=LIST_TAG
            )

        items = self._value(data, path)
        if not isinstance(items, list):
            raise SchemeVizDecodeError("List value is not an array", path=f'{path}.value', received=_describe(items))

        return tuple(decode(item, f'{path}.value[{i}]') for i, item in enumerate(items))

    def _names(self, data: Any, path: str) -> Tuple[str, ...]:
        """Decode a list of names, given either as a bare array or as an `OcamlList`."""
        if isinstance(data, list):
            return tuple(self._string(item, f'{path}[{i}]') for i, item in enumerate(data))

        return self._list(data, path, self._string)

    # Stage 1

    def decode_sexpr(self, data: Any, path: str = '$') -> SExpr:
        """
        Decode a reader value.

        Args:
            data: JSON value
            path: JSON path of `data`, used in error messages

        Returns:
            The decoded reader value

        Raises:
            SchemeVizDecodeError: If `data` is not a valid reader value
        """
        # Booleans must be checked before numbers: bool is a subclass of int
        if isinstance(data, bool):
            return SExprBoolean(data)

        if isinstance(data, (int, float)):
            try:
                return SExprFloat(float(data))

            except OverflowError as e:
                raise SchemeVizDecodeError(
                    "Number is too large to represent", path=path, received=f"integer of {data.bit_length()} bits"
                ) from e

        tag = self._tag(data, path)
        if tag == 'ScmVoid':
            return SExprVoid()

        if tag == 'ScmNil':
            return SExprNil()

        if tag == 'ScmRational':
            return SExprRational(
                numerator=self._int(self._field(data, 'numerator', path), f'{path}.value.numerator'),
                denominator=self._int(self._field(data, 'denominator', path), f'{path}.value.denominator')
            )

        if tag == 'ScmChar':
            return SExprChar(self._string(self._value(data, path), f'{path}.value'))

        if tag == 'ScmString':
            return SExprString(self._string(self._value(data, path), f'{path}.value'))

        if tag == 'ScmSymbol':
            return SExprSymbol(self._string(self._value(data, path), f'{path}.value'))

        if tag == LIST_TAG:
            return SExprVector(self._list(data, path, self.decode_sexpr))

        if tag == 'ScmPair':
            return SExprPair(
                car=self.decode_sexpr(self._field(data, 'car', path), f'{path}.value.car'),
                cdr=self.decode_sexpr(self._field(data, 'cdr', path), f'{path}.value.cdr')
            )

        raise SchemeVizDecodeError(f"Unknown reader value tag '{tag}'", path=path, received=_describe(data))

    # Stage 2

    def _parsed_var(self, data: Any, path: str) -> ParsedVar:
        tag = self._tag(data, path)
        if tag != 'ScmVar':
            raise SchemeVizDecodeError(f"Expected 'ScmVar', got '{tag}'", path=path, received=_describe(data))

        return ParsedVar(self._name(self._field(data, 'name', path), f'{path}.value.name'))

    def _lambda_kind(self, data: Any, path: str) -> LambdaKind:
        tag = self._tag(data, path)
        if tag == 'LambdaSimple':
            return LambdaSimple()

        if tag == 'LambdaOpt':
            return LambdaOptional(self._string(self._field(data, 'opt', path), f'{path}.value.opt'))

        raise SchemeVizDecodeError(f"Unknown lambda kind '{tag}'", path=path, received=_describe(data))

    def decode_parsed(self, data: Any, path: str = '$') -> ParsedExpr:
        """
        Decode a parsed expression.

        Args:
            data: JSON value
            path: JSON path of `data`, used in error messages

        Returns:
            The decoded expression

        Raises:
            SchemeVizDecodeError: If `data` is not a valid parsed expression
        """
        tag = self._tag(data, path)
        if tag == 'ScmConst':
            return ParsedConst(self.decode_sexpr(self._field(data, 'sexpr', path), f'{path}.value.sexpr'))

        if tag == 'ScmVarGet':
            return ParsedVarGet(self._parsed_var(self._field(data, 'var', path), f'{path}.value.var'))

        if tag == 'ScmIf':
            return ParsedIf(
                test=self.decode_parsed(self._field(data, 'test', path), f'{path}.value.test'),
                then_branch=self.decode_parsed(self._field(data, 'dit', path), f'{path}.value.dit'),
                else_branch=self.decode_parsed(self._field(data, 'dif', path), f'{path}.value.dif')
            )

        if tag == 'ScmSeq':
            return ParsedSeq(self._list(self._field(data, 'exprs', path), f'{path}.value.exprs', self.decode_parsed))

        if tag == 'ScmOr':
            return ParsedOr(self._list(self._field(data, 'exprs', path), f'{path}.value.exprs', self.decode_parsed))

        if tag in ('ScmVarSet', 'ScmVarDef'):
            var = self._parsed_var(self._field(data, 'var', path), f'{path}.value.var')
            value = self.decode_parsed(self._field(data, 'val', path), f'{path}.value.val')
            if tag == 'ScmVarSet':
                return ParsedVarSet(var, value)

            return ParsedVarDef(var, value)

        if tag == 'ScmLambda':
            return ParsedLambda(
                params=self._names(self._field(data, 'params', path), f'{path}.value.params'),
                kind=self._lambda_kind(self._field(data, 'kind', path), f'{path}.value.kind'),
                body=self.decode_parsed(self._field(data, 'body', path), f'{path}.value.body')
            )

        if tag == 'ScmApplic':
            return ParsedApplic(
                operator=self.decode_parsed(self._field(data, 'applicative', path), f'{path}.value.applicative'),
                args=self._list(self._field(data, 'params', path), f'{path}.value.params', self.decode_parsed)
            )

        raise SchemeVizDecodeError(f"Unknown parsed expression tag '{tag}'", path=path, received=_describe(data))

    # Stage 3

    def _address(self, data: Any, path: str) -> LexicalAddress:
        tag = self._tag(data, path)
        if tag == 'Free':
            return FreeAddress()

        if tag == 'Param':
            return ParamAddress(self._index(self._field(data, 'minor', path), f'{path}.value.minor'))

        if tag == 'Bound':
            return BoundAddress(
                major=self._index(self._field(data, 'major', path), f'{path}.value.major'),
                minor=self._index(self._field(data, 'minor', path), f'{path}.value.minor')
            )

        raise SchemeVizDecodeError(f"Unknown lexical address '{tag}'", path=path, received=_describe(data))

    def _analyzed_var(self, data: Any, path: str) -> AnalyzedVar:
        tag = self._tag(data, path)
        if tag != 'ScmVarTag':
            raise SchemeVizDecodeError(f"Expected 'ScmVarTag', got '{tag}'", path=path, received=_describe(data))

        return AnalyzedVar(
            name=self._name(self._field(data, 'name', path), f'{path}.value.name'),
            address=self._address(self._field(data, 'lexical_address', path), f'{path}.value.lexical_address')
        )

    def _applic_kind(self, data: Any, path: str) -> ApplicKind:
        tag = self._tag(data, path)
        if tag != 'AppKind':
            raise SchemeVizDecodeError(f"Expected 'AppKind', got '{tag}'", path=path, received=_describe(data))

        value = self._value(data, path)
        try:
            return ApplicKind(value)

        except ValueError as e:
            raise SchemeVizDecodeError(
                "Unknown application kind",
                path=f'{path}.value',
                received=_describe(value),
                expected="'Tail_Call' or 'Non_Tail_Call'"
            ) from e

    def decode_analyzed(self, data: Any, path: str = '$') -> AnalyzedExpr:
        """
        Decode an analyzed expression.

        Args:
            data: JSON value
            path: JSON path of `data`, used in error messages

        Returns:
            The decoded expression

        Raises:
            SchemeVizDecodeError: If `data` is not a valid analyzed expression
        """
        tag = self._tag(data, path)
        if tag == 'ScmConst':
            return AnalyzedConst(self.decode_sexpr(self._field(data, 'sexpr', path), f'{path}.value.sexpr'))

        if tag in ('ScmVarGetTag', 'ScmBoxTag', 'ScmBoxGetTag'):
            var = self._analyzed_var(self._field(data, 'var', path), f'{path}.value.var')
            if tag == 'ScmVarGetTag':
                return AnalyzedVarGet(var)

            if tag == 'ScmBoxTag':
                return AnalyzedBox(var)

            return AnalyzedBoxGet(var)

        if tag == 'ScmIfTag':
            return AnalyzedIf(
                test=self.decode_analyzed(self._field(data, 'test', path), f'{path}.value.test'),
                then_branch=self.decode_analyzed(self._field(data, 'dit', path), f'{path}.value.dit'),
                else_branch=self.decode_analyzed(self._field(data, 'dif', path), f'{path}.value.dif')
            )

        if tag == 'ScmSeqTag':
            return AnalyzedSeq(
                self._list(self._field(data, 'exprs', path), f'{path}.value.exprs', self.decode_analyzed)
            )

        if tag == 'ScmOrTag':
            return AnalyzedOr(
                self._list(self._field(data, 'exprs', path), f'{path}.value.exprs', self.decode_analyzed)
            )

        if tag in ('ScmVarSetTag', 'ScmVarDefTag', 'ScmBoxSetTag'):
            var = self._analyzed_var(self._field(data, 'var', path), f'{path}.value.var')
            value = self.decode_analyzed(self._field(data, 'val', path), f'{path}.value.val')
            if tag == 'ScmVarSetTag':
                return AnalyzedVarSet(var, value)

            if tag == 'ScmVarDefTag':
                return AnalyzedVarDef(var, value)

            return AnalyzedBoxSet(var, value)

        if tag == 'ScmLambdaTag':
            return AnalyzedLambda(
                params=self._names(self._field(data, 'params', path), f'{path}.value.params'),
                body=self.decode_analyzed(self._field(data, 'body', path), f'{path}.value.body')
            )

        if tag == 'ScmApplicTag':
            return AnalyzedApplic(
                operator=self.decode_analyzed(self._field(data, 'applicative', path), f'{path}.value.applicative'),
                args=self._list(self._field(data, 'params', path), f'{path}.value.params', self.decode_analyzed),
                kind=self._applic_kind(self._field(data, 'kind', path), f'{path}.value.kind')
            )

        raise SchemeVizDecodeError(f"Unknown analyzed expression tag '{tag}'", path=path, received=_describe(data))
