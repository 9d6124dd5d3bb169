import dataclasses
import enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

UNBOUND_MARKER = "?"


class NodeType(str, enum.Enum):
    AND = "and"
    OR = "or"
    NOT = "not"
    PREDICATE = "predicate"
    FUNCTION = "function"
    EXPRESSION = "expression"
    FUNCTION_MODIFIER = "function_modifier"
    NUMBER = "number"
    CONSTANT = "constant"
    PARAMETER = "parameter"
    EXISTS = "exists"


class ExpressionType(str, enum.Enum):
    COMP_GE = ">="
    COMP_GT = ">"
    COMP_LE = "<="
    COMP_LT = "<"
    COMP_EQ = "="
    ARITH_MULT = "*"
    ARITH_DIV = "/"
    ARITH_ADD = "+"
    ARITH_SUB = "-"


class ModifierType(str, enum.Enum):
    ASSIGN = "assign"
    INCREASE = "increase"
    DECREASE = "decrease"
    SCALE_UP = "scale-up"
    SCALE_DOWN = "scale-down"


def _maybe_enum(cls: Any, value: Any) -> Any:
    """Converts a wire tag to its enum, keeping unknown tags as raw strings."""
    if value is None or isinstance(value, cls):
        return value
    try:
        return cls(value)
    except ValueError:
        return value


@dataclasses.dataclass(frozen=True)
class Param:
    name: str
    type: str = ""

    @property
    def is_bound(self) -> bool:
        return len(self.name) > 0 and not self.name.startswith(UNBOUND_MARKER)

    def __str__(self) -> str:
        return self.name


@dataclasses.dataclass(frozen=True)
class Node:
    node_type: Union[NodeType, str]
    name: str = ""
    value: float = 0.0
    children: Tuple[int, ...] = ()
    parameters: Tuple[Param, ...] = ()
    expression_type: Optional[Union[ExpressionType, str]] = None
    modifier_type: Optional[Union[ModifierType, str]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "node_type", _maybe_enum(NodeType, self.node_type))
        object.__setattr__(
            self, "expression_type", _maybe_enum(ExpressionType, self.expression_type)
        )
        object.__setattr__(self, "modifier_type", _maybe_enum(ModifierType, self.modifier_type))
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "parameters", tuple(self.parameters))

    def replace(self, **changes: Any) -> "Node":
        return dataclasses.replace(self, **changes)

    @property
    def parameter_names(self) -> Tuple[str, ...]:
        return tuple(param.name for param in self.parameters)

    def to_dict(self) -> Dict[str, Any]:
        def tag(value: Any) -> Any:
            return value.value if isinstance(value, enum.Enum) else value

        return {
            "node_type": tag(self.node_type),
            "name": self.name,
            "value": self.value,
            "children": list(self.children),
            "parameters": [
                {"name": param.name, "type": param.type} for param in self.parameters
            ],
            "expression_type": tag(self.expression_type),
            "modifier_type": tag(self.modifier_type),
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Node":
        return Node(
            node_type=data["node_type"],
            name=data.get("name", ""),
            value=float(data.get("value", 0.0)),
            children=tuple(int(child) for child in data.get("children", ())),
            parameters=tuple(
                Param(param["name"], param.get("type", ""))
                for param in data.get("parameters", ())
            ),
            expression_type=data.get("expression_type"),
            modifier_type=data.get("modifier_type"),
        )


class Tree:
    """Formula tree stored as a flat sequence of nodes.

    Nodes refer to each other only by their index in `nodes`. The tree is never
    mutated after construction: `with_node()` returns a new tree.
    """

    def __init__(self, nodes: Iterable[Node] = ()):
        self._nodes: Tuple[Node, ...] = tuple(nodes)
        for node_id, node in enumerate(self._nodes):
            for child_id in node.children:
                if not 0 <= child_id < len(self._nodes):
                    raise ValueError(
                        f"Node {node_id} references child {child_id} outside of a tree "
                        f"with {len(self._nodes)} nodes."
                    )

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return self._nodes

    def empty(self) -> bool:
        return len(self._nodes) == 0

    def with_node(self, node_id: int, node: Node) -> "Tree":
        nodes = list(self._nodes)
        nodes[node_id] = node
        return Tree(nodes)

    def to_dict(self) -> Dict[str, Any]:
        return {"nodes": [node.to_dict() for node in self._nodes]}

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Tree":
        return Tree(Node.from_dict(node) for node in data.get("nodes", ()))

    def to_string(self, node_id: int = 0) -> str:
        """Renders the subtree rooted at `node_id` in PDDL syntax."""
        if self.empty():
            return ""
        node = self._nodes[node_id]
        children = [self.to_string(child_id) for child_id in node.children]
        params = " ".join(node.parameter_names)

        if node.node_type == NodeType.AND:
            return f"(and {' '.join(children)})"
        if node.node_type == NodeType.OR:
            return f"(or {' '.join(children)})"
        if node.node_type == NodeType.NOT:
            return f"(not {' '.join(children)})"
        if node.node_type in (NodeType.PREDICATE, NodeType.FUNCTION):
            return f"({node.name} {params})" if params else f"({node.name})"
        if node.node_type == NodeType.EXPRESSION:
            op = _tag_string(node.expression_type)
            return f"({op} {' '.join(children)})"
        if node.node_type == NodeType.FUNCTION_MODIFIER:
            op = _tag_string(node.modifier_type)
            return f"({op} {' '.join(children)})"
        if node.node_type == NodeType.NUMBER:
            return format_number(node.value)
        if node.node_type == NodeType.CONSTANT:
            return node.name
        if node.node_type == NodeType.PARAMETER:
            return node.parameters[0].name if node.parameters else ""
        if node.node_type == NodeType.EXISTS:
            return f"(exists ({params}) {' '.join(children)})"
        return f"<{_tag_string(node.node_type)}>"

    def __len__(self) -> int:
        return len(self._nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self._nodes == other._nodes

    def __hash__(self) -> int:
        return hash(self._nodes)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Tree({self.to_string()})"


def _tag_string(tag: Any) -> str:
    return tag.value if isinstance(tag, enum.Enum) else str(tag)


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)
