"""Tests for rendering semantic analyzer (stage 3) expressions."""

import pytest

from scmviz import (
    SExprFloat, SExprString, AnalyzedVar, FreeAddress, ParamAddress, BoundAddress, ApplicKind,
    AnalyzedConst, AnalyzedVarGet, AnalyzedIf, AnalyzedSeq, AnalyzedOr, AnalyzedVarSet, AnalyzedVarDef,
    AnalyzedBox, AnalyzedBoxGet, AnalyzedBoxSet, AnalyzedLambda, AnalyzedApplic,
    ParsedConst, SchemeVizUnknownNodeError
)


def _var(name: str, address=None) -> AnalyzedVar:
    return AnalyzedVar(name, address if address is not None else FreeAddress())


def _num(n: float) -> AnalyzedConst:
    return AnalyzedConst(SExprFloat(n))


class TestLexicalAddresses:
    """Test rendering of variables and their lexical addresses."""

    def test_free_variable(self, analyzed_visualizer, helpers):
        """A free variable renders its name and a Free leaf."""
        node = analyzed_visualizer.visualize(AnalyzedVarGet(_var('car')))
        assert node.name == "VarGet'"
        var = node.children[0]
        assert var.name == "var'"
        assert helpers.child_names(var) == ['car', 'Free']
        assert var.children[1].attributes == {'kind': 'free'}

    def test_param_variable(self, analyzed_visualizer, helpers):
        """A parameter renders its minor index."""
        node = analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', ParamAddress(2))))
        address = node.children[0].children[1]
        helpers.assert_leaf(address, 'Param(2)')
        assert address.attributes == {'kind': 'param', 'minor': '2'}

    def test_bound_variable(self, analyzed_visualizer, helpers):
        """A bound variable renders both indices distinguishably."""
        node = analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', BoundAddress(major=1, minor=2))))
        address = node.children[0].children[1]
        helpers.assert_leaf(address, 'Bound(1,2)')
        assert address.attributes == {'kind': 'bound', 'major': '1', 'minor': '2'}

    def test_bound_indices_not_interchangeable(self, analyzed_visualizer):
        """Swapping major and minor changes the output."""
        a = analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', BoundAddress(1, 2))))
        b = analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', BoundAddress(2, 1))))
        assert a != b

    def test_addresses_differ_for_same_name(self, analyzed_visualizer):
        """Free, Param and Bound give different trees for the same variable name."""
        trees = [
            analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', address)))
            for address in (FreeAddress(), ParamAddress(2), BoundAddress(1, 2))
        ]
        assert trees[0] != trees[1]
        assert trees[1] != trees[2]
        assert trees[0] != trees[2]

    def test_bound_major_zero(self, analyzed_visualizer, helpers):
        """Bound with major 0 is distinct from Param with the same minor."""
        bound = analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', BoundAddress(0, 1))))
        param = analyzed_visualizer.visualize(AnalyzedVarGet(_var('x', ParamAddress(1))))
        helpers.assert_leaf(bound.children[0].children[1], 'Bound(0,1)')
        assert bound != param

    def test_negative_indices_rejected(self):
        """Addresses cannot hold negative indices."""
        with pytest.raises(ValueError):
            ParamAddress(-1)

        with pytest.raises(ValueError):
            BoundAddress(-1, 0)

        with pytest.raises(ValueError):
            BoundAddress(0, -3)


class TestForms:
    """Test the forms shared with the parsed stage."""

    def test_const(self, analyzed_visualizer, helpers):
        """A constant renders its reader value."""
        node = analyzed_visualizer.visualize(AnalyzedConst(SExprString('hi')))
        assert node.name == "Const'"
        assert helpers.child_names(node) == ['"hi"']

    def test_if(self, analyzed_visualizer, helpers):
        """If renders test, then and else in order."""
        node = analyzed_visualizer.visualize(AnalyzedIf(AnalyzedVarGet(_var('p')), _num(1), _num(2)))
        assert node.name == "If'"
        assert helpers.leaf_names(node) == ['p', 'Free', '1', '2']

    @pytest.mark.parametrize('form, name', [(AnalyzedSeq, "Seq'"), (AnalyzedOr, "Or'")])
    def test_sequences(self, analyzed_visualizer, helpers, form, name):
        """Seq and Or keep element order."""
        node = analyzed_visualizer.visualize(form((_num(1), _num(2), _num(3))))
        assert node.name == name
        assert helpers.leaf_names(node) == ['1', '2', '3']

    @pytest.mark.parametrize('form', [AnalyzedSeq, AnalyzedOr])
    def test_empty_sequences_are_branches(self, analyzed_visualizer, form):
        """Empty Seq/Or are branches with no children."""
        node = analyzed_visualizer.visualize(form(()))
        assert not node.is_leaf
        assert node.children == ()

    def test_var_set_and_def(self, analyzed_visualizer, helpers):
        """Assignment and definition render the variable then the value."""
        set_node = analyzed_visualizer.visualize(AnalyzedVarSet(_var('x', ParamAddress(0)), _num(5)))
        def_node = analyzed_visualizer.visualize(AnalyzedVarDef(_var('y'), _num(6)))
        assert set_node.name == "VarSet'"
        assert def_node.name == "VarDef'"
        assert helpers.child_names(set_node) == ["var'", "Const'"]
        assert helpers.leaf_names(def_node) == ['y', 'Free', '6']

    def test_lambda_has_no_kind(self, analyzed_visualizer, helpers):
        """An analyzed lambda renders only params and body."""
        node = analyzed_visualizer.visualize(AnalyzedLambda(('a', 'b'), AnalyzedVarGet(_var('b', ParamAddress(1)))))
        assert node.name == "Lambda'"
        assert helpers.child_names(node) == ['Params', "VarGet'"]
        assert helpers.leaf_names(node) == ['"a"', '"b"', 'b', 'Param(1)']


class TestBoxes:
    """Test the box forms."""

    def test_box(self, analyzed_visualizer, helpers):
        """Box renders just the variable."""
        node = analyzed_visualizer.visualize(AnalyzedBox(_var('x', ParamAddress(0))))
        assert node.name == "Box'"
        assert helpers.child_names(node) == ["var'"]

    def test_box_get(self, analyzed_visualizer, helpers):
        """BoxGet renders just the variable."""
        node = analyzed_visualizer.visualize(AnalyzedBoxGet(_var('x', BoundAddress(0, 0))))
        assert node.name == "BoxGet'"
        assert helpers.leaf_names(node) == ['x', 'Bound(0,0)']

    def test_box_set(self, analyzed_visualizer, helpers):
        """BoxSet renders the variable then the value."""
        node = analyzed_visualizer.visualize(AnalyzedBoxSet(_var('x', BoundAddress(0, 0)), _num(7)))
        assert node.name == "BoxSet'"
        assert helpers.child_names(node) == ["var'", "Const'"]

    def test_boxed_counter(self, analyzed_visualizer, helpers):
        """A closure over a boxed parameter renders box creation, read and write."""
        # (lambda (n) (lambda () (set! n (+ n 1)) n)) after boxing n
        n_outer = _var('n', ParamAddress(0))
        n_inner = _var('n', BoundAddress(0, 0))
        increment = AnalyzedBoxSet(
            n_inner,
            AnalyzedApplic(AnalyzedVarGet(_var('+')), (AnalyzedBoxGet(n_inner), _num(1)), ApplicKind.NON_TAIL_CALL)
        )
        expr = AnalyzedLambda(('n',), AnalyzedSeq((
            AnalyzedVarSet(n_outer, AnalyzedBox(n_outer)),
            AnalyzedLambda((), AnalyzedSeq((increment, AnalyzedBoxGet(n_inner))))
        )))
        node = analyzed_visualizer.visualize(expr)
        assert helpers.leaf_names(node) == [
            '"n"',
            'n', 'Param(0)', 'n', 'Param(0)',
            'n', 'Bound(0,0)', '+', 'Free', 'n', 'Bound(0,0)', '1', 'Non_Tail_Call',
            'n', 'Bound(0,0)'
        ]


class TestApplic:
    """Test application rendering and tail-call classification."""

    def test_applic_children(self, analyzed_visualizer, helpers):
        """Application renders operator, args, then the kind."""
        node = analyzed_visualizer.visualize(
            AnalyzedApplic(AnalyzedVarGet(_var('f')), (_num(1),), ApplicKind.TAIL_CALL)
        )
        assert node.name == "Applic'"
        assert helpers.child_names(node) == ["VarGet'", 'Args', 'Tail_Call']
        helpers.assert_leaf(node.children[2], 'Tail_Call')

    def test_tail_call_kinds_differ(self, analyzed_visualizer):
        """Tail and non-tail calls give different trees."""
        tail = analyzed_visualizer.visualize(AnalyzedApplic(AnalyzedVarGet(_var('f')), (), ApplicKind.TAIL_CALL))
        non_tail = analyzed_visualizer.visualize(
            AnalyzedApplic(AnalyzedVarGet(_var('f')), (), ApplicKind.NON_TAIL_CALL)
        )
        assert tail != non_tail
        assert tail.children[2].name == 'Tail_Call'
        assert non_tail.children[2].name == 'Non_Tail_Call'


class TestUnknownNodes:
    """Test fail-fast behaviour on nodes outside the analyzed union."""

    def test_parsed_node_rejected(self, analyzed_visualizer):
        """Nodes from the parsed stage are rejected."""
        with pytest.raises(SchemeVizUnknownNodeError) as exc_info:
            analyzed_visualizer.visualize(ParsedConst(SExprFloat(1.0)))

        assert exc_info.value.stage == 'SEMANTIC_ANALYZER'
        assert exc_info.value.tag == 'ParsedConst'

    def test_unknown_address_rejected(self, analyzed_visualizer):
        """Addresses outside the address union are rejected."""
        with pytest.raises(SchemeVizUnknownNodeError, match='tuple'):
            analyzed_visualizer.visualize(AnalyzedVarGet(AnalyzedVar('x', (1, 2))))

    def test_unknown_node_in_args_rejected(self, analyzed_visualizer):
        """An unknown node among the arguments is rejected."""
        with pytest.raises(SchemeVizUnknownNodeError):
            analyzed_visualizer.visualize(
                AnalyzedApplic(AnalyzedVarGet(_var('f')), (None,), ApplicKind.TAIL_CALL)
            )

    def test_unknown_applic_kind_rejected(self, analyzed_visualizer):
        """The tail-call classification must be an ApplicKind."""
        with pytest.raises(SchemeVizUnknownNodeError) as exc_info:
            analyzed_visualizer.visualize(AnalyzedApplic(AnalyzedVarGet(_var('f')), (), 'Tail_Call'))

        assert exc_info.value.stage == 'SEMANTIC_ANALYZER'
        assert exc_info.value.tag == 'str'

    def test_unknown_var_rejected(self, analyzed_visualizer):
        """Variables must be AnalyzedVar, not bare names."""
        with pytest.raises(SchemeVizUnknownNodeError) as exc_info:
            analyzed_visualizer.visualize(AnalyzedBoxGet('x'))

        assert exc_info.value.stage == 'SEMANTIC_ANALYZER'
        assert exc_info.value.tag == 'str'

    def test_empty_var_name_rejected(self):
        """A variable cannot have an empty name."""
        with pytest.raises(ValueError):
            AnalyzedVar('', FreeAddress())
