"""
Unit tests for the tree model and the formula builders.
"""

import json

import pytest

from plantree.formula import _and, _const, _exists, _expr, _F, _modify, _not, _num, _P, _param
from plantree.tree import ExpressionType, ModifierType, Node, NodeType, Param, Tree


class TestTree:
    def test_empty(self):
        assert Tree().empty()
        assert len(Tree()) == 0
        assert Tree().to_string() == ""

    def test_child_ids_must_be_in_range(self):
        with pytest.raises(ValueError):
            Tree([Node(NodeType.AND, children=(1,))])

    def test_nodes_are_immutable(self):
        tree = _P("at", "robot", "room1").build()
        with pytest.raises(AttributeError):
            tree.nodes[0].name = "in"  # type: ignore

    def test_with_node_returns_new_tree(self):
        tree = _P("at", "robot", "room1").build()
        renamed = tree.with_node(0, tree.nodes[0].replace(name="in"))
        assert tree.nodes[0].name == "at"
        assert renamed.nodes[0].name == "in"

    def test_wire_round_trip(self):
        tree = _and(
            _not(_P("at", "?r", "room1")),
            _modify("increase", _F("battery", "?r"), _expr("*", 2, 3)),
        ).build()
        data = json.loads(json.dumps(tree.to_dict()))
        assert Tree.from_dict(data) == tree

    def test_from_dict_converts_tags(self):
        tree = Tree.from_dict(
            {
                "nodes": [
                    {"node_type": "expression", "children": [1, 2], "expression_type": ">="},
                    {"node_type": "function", "name": "battery",
                     "parameters": [{"name": "robot1", "type": "robot"}]},
                    {"node_type": "number", "value": 20},
                ]
            }
        )
        assert tree.nodes[0].node_type is NodeType.EXPRESSION
        assert tree.nodes[0].expression_type is ExpressionType.COMP_GE
        assert tree.nodes[1].parameters == (Param("robot1", "robot"),)
        assert tree.nodes[2].value == 20.0

    def test_unknown_tags_are_kept(self):
        node = Node.from_dict({"node_type": "forall", "modifier_type": "halve"})
        assert node.node_type == "forall"
        assert node.modifier_type == "halve"

    def test_to_string(self):
        tree = _and(
            _P("at", "robot", "room1"),
            _not(_P("busy")),
            _expr(">", _F("battery", "robot"), 20),
            _modify("scale-down", _F("battery", "robot"), 2.5),
            _exists(["?x", "?y"], _expr("=", _param("?x"), _const("door"))),
        ).build()
        assert tree.to_string() == (
            "(and (at robot room1) (not (busy)) (> (battery robot) 20) "
            "(scale-down (battery robot) 2.5) (exists (?x ?y) (= ?x door)))"
        )

    def test_to_string_of_subtree(self):
        tree = _and(_P("at", "robot", "room1"), _num(3)).build()
        assert tree.to_string(1) == "(at robot room1)"
        assert tree.to_string(2) == "3"


class TestParam:
    @pytest.mark.parametrize(
        "name,bound", [("robot", True), ("?r", False), ("", False), ("r?", True)]
    )
    def test_is_bound(self, name, bound):
        assert Param(name).is_bound == bound


class TestFormula:
    def test_root_is_first_node(self):
        tree = _and(_P("a"), _not(_P("b"))).build()
        assert tree.nodes[0].node_type is NodeType.AND
        assert tree.nodes[0].children == (1, 2)
        assert tree.nodes[2].node_type is NodeType.NOT
        assert tree.nodes[2].children == (3,)
        assert tree.nodes[3].name == "b"

    def test_numbers_become_number_nodes(self):
        tree = _modify("assign", _F("battery", "robot"), 10).build()
        assert tree.nodes[0].modifier_type is ModifierType.ASSIGN
        assert tree.nodes[2].node_type is NodeType.NUMBER
        assert tree.nodes[2].value == 10.0

    def test_unknown_operator(self):
        with pytest.raises(ValueError):
            _expr("%", 1, 2)

    def test_repr(self):
        formula = _exists(["?x"], _and(_P("at", "?x", "room1"), _not(_P("busy", "?x"))))
        assert repr(formula) == "(exists (?x) (and (at ?x room1) (not (busy ?x))))"
