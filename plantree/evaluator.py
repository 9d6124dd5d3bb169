import operator
import sys
from typing import Callable, Dict, NamedTuple

from plantree import grounding
from plantree.accessor import StateAccessor
from plantree.object import Function, Predicate
from plantree.tree import ExpressionType, ModifierType, Node, NodeType, Tree

DIVISION_EPSILON = 1e-5


class Result(NamedTuple):
    success: bool
    """Whether every read, write and arithmetic operation could be carried out."""

    truth: bool
    """Truth value of logical, comparison and quantifier nodes."""

    value: float
    """Numeric value of number, function, arithmetic and modifier nodes."""


FAILURE = Result(False, False, 0.0)

_COMPARISONS: Dict[ExpressionType, Callable[[float, float], bool]] = {
    ExpressionType.COMP_GE: operator.ge,
    ExpressionType.COMP_GT: operator.gt,
    ExpressionType.COMP_LE: operator.le,
    ExpressionType.COMP_LT: operator.lt,
}

_ARITHMETIC: Dict[ExpressionType, Callable[[float, float], float]] = {
    ExpressionType.ARITH_MULT: operator.mul,
    ExpressionType.ARITH_ADD: operator.add,
    ExpressionType.ARITH_SUB: operator.sub,
}

_MODIFIERS: Dict[ModifierType, Callable[[float, float], float]] = {
    ModifierType.ASSIGN: lambda left, right: right,
    ModifierType.INCREASE: operator.add,
    ModifierType.DECREASE: operator.sub,
    ModifierType.SCALE_UP: operator.mul,
}


def _symbol_name(node: Node) -> str:
    if node.node_type == NodeType.PARAMETER:
        return node.parameters[0].name if node.parameters else ""
    return node.name


def _is_symbolic(node: Node) -> bool:
    return node.node_type in (NodeType.PARAMETER, NodeType.CONSTANT)


class Evaluator:
    """Recursive interpreter over formula trees.

    Negation is pushed down to the leaves: `NOT` flips `negate` and predicates
    and comparisons interpret it. With `apply` set, predicates are added or
    removed and function modifiers write their result back through `accessor`.

    AND and OR nodes always visit every child, so effects after a failed child
    are still applied. Recursion depth equals the tree depth.
    """

    def __init__(self, accessor: StateAccessor, apply: bool = False, verbose: bool = False):
        self.accessor = accessor
        self.apply = apply
        self.verbose = verbose

    def evaluate(self, tree: Tree, node_id: int = 0, negate: bool = False) -> Result:
        if tree.empty():
            return Result(True, True, 0.0)

        node = tree.nodes[node_id]
        try:
            evaluate_fn = getattr(self, Evaluator._DISPATCH[node.node_type])
        except KeyError:
            self._report_error(tree, node_id, f"unrecognized node type {node.node_type!r}")
            return FAILURE

        result = evaluate_fn(tree, node_id, node, negate)
        if self.verbose:
            print("[plantree.evaluator.evaluate]", tree.to_string(node_id), "->", result)
        return result

    def _report_error(self, tree: Tree, node_id: int, message: str) -> None:
        print(
            "[plantree.evaluator.evaluate]",
            f"Error parsing expression [{tree.to_string(node_id)}]: {message}",
            file=sys.stderr,
        )

    def _evaluate_and(self, tree: Tree, node_id: int, node: Node, negate: bool) -> Result:
        success = True
        truth = True
        for child_id in node.children:
            result = self.evaluate(tree, child_id, negate)
            success = success and result.success
            truth = truth and result.truth
        return Result(success, truth, 0.0)

    def _evaluate_or(self, tree: Tree, node_id: int, node: Node, negate: bool) -> Result:
        success = True
        truth = False
        for child_id in node.children:
            result = self.evaluate(tree, child_id, negate)
            success = success and result.success
            truth = truth or result.truth
        return Result(success, truth, 0.0)

    def _evaluate_not(self, tree: Tree, node_id: int, node: Node, negate: bool) -> Result:
        if not node.children:
            self._report_error(tree, node_id, "negation without a child")
            return FAILURE
        return self.evaluate(tree, node.children[0], not negate)

    def _evaluate_predicate(
        self, tree: Tree, node_id: int, node: Node, negate: bool
    ) -> Result:
        predicate = Predicate.from_node(node)
        if self.apply:
            if negate:
                return Result(self.accessor.remove(predicate), False, 0.0)
            return Result(self.accessor.add(predicate), True, 0.0)

        # negate | exists | truth
        #   F    |   F    |   F
        #   F    |   T    |   T
        #   T    |   F    |   T
        #   T    |   T    |   F
        return Result(True, negate != self.accessor.exists(predicate), 0.0)

    def _evaluate_function(
        self, tree: Tree, node_id: int, node: Node, negate: bool
    ) -> Result:
        function = self.accessor.get_function(Function.from_node(node))
        if function is None:
            return FAILURE
        return Result(True, False, function.value)

    def _evaluate_expression(
        self, tree: Tree, node_id: int, node: Node, negate: bool
    ) -> Result:
        if len(node.children) != 2:
            self._report_error(tree, node_id, "expression needs two operands")
            return FAILURE

        left = self.evaluate(tree, node.children[0], negate)
        right = self.evaluate(tree, node.children[1], negate)
        if not left.success or not right.success:
            return FAILURE

        expression_type = node.expression_type
        if expression_type in _COMPARISONS:
            holds = _COMPARISONS[expression_type](left.value, right.value)
            return Result(True, negate != holds, 0.0)

        if expression_type == ExpressionType.COMP_EQ:
            c0 = tree.nodes[node.children[0]]
            c1 = tree.nodes[node.children[1]]
            if _is_symbolic(c0) and _is_symbolic(c1):
                return Result(True, negate != (_symbol_name(c0) == _symbol_name(c1)), 0.0)
            if c0.node_type == NodeType.NUMBER and c1.node_type == NodeType.NUMBER:
                return Result(True, negate != (left.value == right.value), 0.0)
            # Mixed symbolic and numeric operands cannot be compared.
            return FAILURE

        if expression_type in _ARITHMETIC:
            return Result(True, False, _ARITHMETIC[expression_type](left.value, right.value))

        if expression_type == ExpressionType.ARITH_DIV:
            if abs(right.value) > DIVISION_EPSILON:
                return Result(True, False, left.value / right.value)
            return FAILURE

        self._report_error(tree, node_id, f"unrecognized expression type {expression_type!r}")
        return FAILURE

    def _evaluate_function_modifier(
        self, tree: Tree, node_id: int, node: Node, negate: bool
    ) -> Result:
        if len(node.children) != 2:
            self._report_error(tree, node_id, "function modifier needs two operands")
            return FAILURE

        left = self.evaluate(tree, node.children[0], negate)
        right = self.evaluate(tree, node.children[1], negate)
        if not left.success or not right.success:
            return FAILURE

        modifier_type = node.modifier_type
        if modifier_type in _MODIFIERS:
            value = _MODIFIERS[modifier_type](left.value, right.value)
        elif modifier_type == ModifierType.SCALE_DOWN:
            if abs(right.value) <= DIVISION_EPSILON:
                return FAILURE
            value = left.value / right.value
        else:
            self._report_error(tree, node_id, f"unrecognized modifier type {modifier_type!r}")
            return FAILURE

        success = True
        if self.apply:
            target = tree.nodes[node.children[0]]
            success = self.accessor.update_function(
                Function(target.name, target.parameter_names, value)
            )
        return Result(success, False, value)

    def _evaluate_number(self, tree: Tree, node_id: int, node: Node, negate: bool) -> Result:
        return Result(True, True, node.value)

    def _evaluate_constant(
        self, tree: Tree, node_id: int, node: Node, negate: bool
    ) -> Result:
        return Result(True, len(node.name) > 0, 0.0)

    def _evaluate_parameter(
        self, tree: Tree, node_id: int, node: Node, negate: bool
    ) -> Result:
        # An unbound parameter is simply false; it is never quantified here.
        is_bound = len(node.parameters) > 0 and node.parameters[0].is_bound
        return Result(True, is_bound, 0.0)

    def _evaluate_exists(self, tree: Tree, node_id: int, node: Node, negate: bool) -> Result:
        if not node.children:
            self._report_error(tree, node_id, "quantifier without a condition")
            return FAILURE

        instances = [instance.name for instance in self.accessor.get_instances()]
        for grounded_tree in grounding.ground_exists(tree, node_id, instances):
            result = self.evaluate(
                grounded_tree, grounded_tree.nodes[node_id].children[0], negate
            )
            if result.truth:
                return result
        return Result(True, False, 0.0)

    _DISPATCH = {
        NodeType.AND: "_evaluate_and",
        NodeType.OR: "_evaluate_or",
        NodeType.NOT: "_evaluate_not",
        NodeType.PREDICATE: "_evaluate_predicate",
        NodeType.FUNCTION: "_evaluate_function",
        NodeType.EXPRESSION: "_evaluate_expression",
        NodeType.FUNCTION_MODIFIER: "_evaluate_function_modifier",
        NodeType.NUMBER: "_evaluate_number",
        NodeType.CONSTANT: "_evaluate_constant",
        NodeType.PARAMETER: "_evaluate_parameter",
        NodeType.EXISTS: "_evaluate_exists",
    }


assert set(Evaluator._DISPATCH) == set(NodeType), "Every node type needs an evaluator."
