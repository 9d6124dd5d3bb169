import abc
from typing import List, Optional, Sequence, Union

from plantree.tree import ExpressionType, ModifierType, Node, NodeType, Param, Tree


class Formula(abc.ABC):
    """Builder for formula trees.

    `build()` lays out the nodes in pre-order, so the root is always node 0 and
    every parent comes before its children.
    """

    @abc.abstractmethod
    def add_to(self, nodes: List[Optional[Node]]) -> int:
        pass

    def build(self) -> Tree:
        nodes: List[Optional[Node]] = []
        self.add_to(nodes)
        return Tree(nodes)  # type: ignore

    @staticmethod
    def _add(
        nodes: List[Optional[Node]], node: Node, children: Sequence["Formula"] = ()
    ) -> int:
        node_id = len(nodes)
        nodes.append(None)
        child_ids = tuple(child.add_to(nodes) for child in children)
        nodes[node_id] = node.replace(children=child_ids)
        return node_id


def _params(args: Sequence[str]) -> tuple:
    return tuple(Param(arg) for arg in args)


class _and(Formula):
    def __init__(self, *children: Formula):
        self.children = children

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        return self._add(nodes, Node(NodeType.AND), self.children)

    def __repr__(self) -> str:
        return f"(and {' '.join(map(repr, self.children))})"


class _or(Formula):
    def __init__(self, *children: Formula):
        self.children = children

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        return self._add(nodes, Node(NodeType.OR), self.children)

    def __repr__(self) -> str:
        return f"(or {' '.join(map(repr, self.children))})"


class _not(Formula):
    def __init__(self, child: Formula):
        self.child = child

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        return self._add(nodes, Node(NodeType.NOT), [self.child])

    def __repr__(self) -> str:
        return f"(not {self.child!r})"


class _P(Formula):
    def __init__(self, predicate: str, *args: str):
        self.predicate = predicate
        self.args = args

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        node = Node(NodeType.PREDICATE, name=self.predicate, parameters=_params(self.args))
        return self._add(nodes, node)

    def __repr__(self) -> str:
        return f"({' '.join((self.predicate,) + self.args)})"


class _F(Formula):
    def __init__(self, function: str, *args: str):
        self.function = function
        self.args = args

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        node = Node(NodeType.FUNCTION, name=self.function, parameters=_params(self.args))
        return self._add(nodes, node)

    def __repr__(self) -> str:
        return f"({' '.join((self.function,) + self.args)})"


class _num(Formula):
    def __init__(self, value: float):
        self.value = float(value)

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        return self._add(nodes, Node(NodeType.NUMBER, value=self.value))

    def __repr__(self) -> str:
        return str(self.value)


class _const(Formula):
    def __init__(self, name: str):
        self.name = name

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        return self._add(nodes, Node(NodeType.CONSTANT, name=self.name))

    def __repr__(self) -> str:
        return self.name


class _param(Formula):
    def __init__(self, name: str):
        self.name = name

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        return self._add(nodes, Node(NodeType.PARAMETER, parameters=(Param(self.name),)))

    def __repr__(self) -> str:
        return self.name


Operand = Union[Formula, float, int]


def _operand(value: Operand) -> Formula:
    if isinstance(value, Formula):
        return value
    return _num(value)


class _expr(Formula):
    def __init__(
        self, op: Union[ExpressionType, str], left: Operand, right: Operand
    ):
        self.op = ExpressionType(op)
        self.left = _operand(left)
        self.right = _operand(right)

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        node = Node(NodeType.EXPRESSION, expression_type=self.op)
        return self._add(nodes, node, [self.left, self.right])

    def __repr__(self) -> str:
        return f"({self.op.value} {self.left!r} {self.right!r})"


class _modify(Formula):
    def __init__(self, op: Union[ModifierType, str], function: _F, value: Operand):
        self.op = ModifierType(op)
        self.function = function
        self.value = _operand(value)

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        node = Node(NodeType.FUNCTION_MODIFIER, modifier_type=self.op)
        return self._add(nodes, node, [self.function, self.value])

    def __repr__(self) -> str:
        return f"({self.op.value} {self.function!r} {self.value!r})"


class _exists(Formula):
    def __init__(self, args: Sequence[str], child: Formula):
        self.args = tuple(args)
        self.child = child

    def add_to(self, nodes: List[Optional[Node]]) -> int:
        node = Node(NodeType.EXISTS, parameters=_params(self.args))
        return self._add(nodes, node, [self.child])

    def __repr__(self) -> str:
        return f"(exists ({' '.join(self.args)}) {self.child!r})"
