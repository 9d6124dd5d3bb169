from typing import Iterable, Sequence, Tuple

from plantree.tree import Node


class Instance:
    def __init__(self, name: str, object_type: str = ""):
        self.name = name
        self.type = object_type

    def __str__(self) -> str:
        return f"{self.name}"

    def __repr__(self) -> str:
        return f"{self.name}: {self.type}" if self.type else self.name

    def __eq__(self, other: object) -> bool:
        return str(self) == str(other)

    def __ne__(self, other: object) -> bool:
        return str(self) != str(other)

    def __lt__(self, other: object) -> bool:
        return str(self) < str(other)

    def __hash__(self) -> int:
        return hash(str(self))


class Predicate:
    """Ground atomic proposition.

    Equality and hashing use the PDDL string `(name arg1 arg2)`, so argument
    types never take part in lookups.
    """

    def __init__(self, name: str, parameters: Iterable[str] = ()):
        self.name = name
        self.parameters: Tuple[str, ...] = tuple(parameters)

    @staticmethod
    def from_node(node: Node) -> "Predicate":
        return Predicate(node.name, node.parameter_names)

    def __str__(self) -> str:
        if not self.parameters:
            return f"({self.name})"
        return f"({self.name} {' '.join(self.parameters)})"

    def __repr__(self) -> str:
        return str(self)

    def __eq__(self, other: object) -> bool:
        return str(self) == str(other)

    def __ne__(self, other: object) -> bool:
        return str(self) != str(other)

    def __hash__(self) -> int:
        return hash(str(self))


class Function(Predicate):
    """Ground numeric state variable.

    Shares the key of `Predicate`; `value` is not part of equality.
    """

    def __init__(self, name: str, parameters: Iterable[str] = (), value: float = 0.0):
        super().__init__(name, parameters)
        self.value = float(value)

    @staticmethod
    def from_node(node: Node) -> "Function":
        return Function(node.name, node.parameter_names, node.value)

    def __repr__(self) -> str:
        return f"{self} = {self.value}"

    def copy(self) -> "Function":
        return Function(self.name, self.parameters, self.value)


def collect_instances(predicates: Sequence[Predicate]) -> Sequence[Instance]:
    """Lists every argument that appears in `predicates`, in order of first use."""
    instances = {}
    for predicate in predicates:
        for arg in predicate.parameters:
            if arg not in instances:
                instances[arg] = Instance(arg)
    return list(instances.values())
