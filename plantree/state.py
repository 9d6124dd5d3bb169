from typing import Iterable, List, Optional

from plantree.object import Function, Instance, Predicate, collect_instances


class LocalState:
    """Caller-owned snapshot of predicates and functions.

    The lists are exposed directly so that `LocalAccessor` can mutate them in
    place. Use `copy()` before a lookahead that must not touch this state.
    """

    def __init__(
        self,
        predicates: Optional[Iterable[Predicate]] = None,
        functions: Optional[Iterable[Function]] = None,
    ):
        self.predicates: List[Predicate] = []
        self.functions: List[Function] = []
        for predicate in predicates or ():
            if predicate not in self.predicates:
                self.predicates.append(predicate)
        for function in functions or ():
            if function not in self.functions:
                self.functions.append(function)

    @staticmethod
    def from_client(client) -> "LocalState":
        """Takes a snapshot of a remote problem service."""
        return LocalState(client.get_predicates(), client.get_functions())

    def instances(self) -> List[Instance]:
        return list(collect_instances(self.predicates))

    def function_value(self, name: str, *args: str) -> Optional[float]:
        key = Function(name, args)
        for function in self.functions:
            if function == key:
                return function.value
        return None

    def copy(self) -> "LocalState":
        return LocalState(
            list(self.predicates), [function.copy() for function in self.functions]
        )

    def __contains__(self, predicate: object) -> bool:
        return predicate in self.predicates

    def __len__(self) -> int:
        return len(self.predicates)

    def __repr__(self) -> str:
        return f"LocalState(predicates={self.predicates}, functions={self.functions})"
