import abc
from typing import Dict, List, Optional

from plantree import utils
from plantree.object import Function, Instance, Predicate, collect_instances
from plantree.state import LocalState


class ProblemClient(abc.ABC):
    """Client of the service that owns the authoritative problem state.

    Every call is a blocking request that may fail. Failures are reported through
    the return values, never by raising.
    """

    @abc.abstractmethod
    def exist_predicate(self, predicate: Predicate) -> bool:
        pass

    @abc.abstractmethod
    def add_predicate(self, predicate: Predicate) -> bool:
        pass

    @abc.abstractmethod
    def remove_predicate(self, predicate: Predicate) -> bool:
        pass

    @abc.abstractmethod
    def get_function(self, name: str) -> Optional[Function]:
        """Looks up a function by its PDDL string, e.g. `(battery robot1)`."""
        pass

    @abc.abstractmethod
    def update_function(self, function: Function) -> bool:
        pass

    @abc.abstractmethod
    def get_instances(self) -> List[Instance]:
        pass

    def get_predicates(self) -> List[Predicate]:
        raise NotImplementedError

    def get_functions(self) -> List[Function]:
        raise NotImplementedError


class StateAccessor(abc.ABC):
    """Where the evaluator reads and writes predicates and functions."""

    @abc.abstractmethod
    def exists(self, predicate: Predicate) -> bool:
        pass

    @abc.abstractmethod
    def add(self, predicate: Predicate) -> bool:
        pass

    @abc.abstractmethod
    def remove(self, predicate: Predicate) -> bool:
        pass

    @abc.abstractmethod
    def get_function(self, function: Function) -> Optional[Function]:
        pass

    @abc.abstractmethod
    def update_function(self, function: Function) -> bool:
        pass

    @abc.abstractmethod
    def get_instances(self) -> List[Instance]:
        pass


class RemoteAccessor(StateAccessor):
    """Delegates every read and write to a `ProblemClient`.

    The wall time of each service call is recorded in `log`.
    """

    def __init__(self, client: ProblemClient, profile: bool = True):
        self.client = client
        self.log = utils.Profiler(disabled=not profile)

    def exists(self, predicate: Predicate) -> bool:
        with self.log.profile("exist_predicate"):
            return self.client.exist_predicate(predicate)

    def add(self, predicate: Predicate) -> bool:
        with self.log.profile("add_predicate"):
            return self.client.add_predicate(predicate)

    def remove(self, predicate: Predicate) -> bool:
        with self.log.profile("remove_predicate"):
            return self.client.remove_predicate(predicate)

    def get_function(self, function: Function) -> Optional[Function]:
        with self.log.profile("get_function"):
            return self.client.get_function(str(function))

    def update_function(self, function: Function) -> bool:
        with self.log.profile("update_function"):
            return self.client.update_function(function)

    def get_instances(self) -> List[Instance]:
        with self.log.profile("get_instances"):
            return list(self.client.get_instances())

    def call_counts(self) -> Dict[str, int]:
        return self.log.counts()

    def print_log(self) -> None:
        print("[plantree.accessor.RemoteAccessor]", "Service calls:")
        self.log.print()

    def snapshot(self) -> LocalState:
        """Copies the remote state into a `LocalState` for lookahead."""
        return LocalState.from_client(self.client)


class LocalAccessor(StateAccessor):
    """Reads and writes caller-owned predicate and function lists in place."""

    def __init__(self, predicates: List[Predicate], functions: List[Function]):
        self.predicates = predicates
        self.functions = functions

    @staticmethod
    def from_state(state: LocalState) -> "LocalAccessor":
        return LocalAccessor(state.predicates, state.functions)

    def exists(self, predicate: Predicate) -> bool:
        return predicate in self.predicates

    def add(self, predicate: Predicate) -> bool:
        if predicate not in self.predicates:
            self.predicates.append(Predicate(predicate.name, predicate.parameters))
        return True

    def remove(self, predicate: Predicate) -> bool:
        if predicate in self.predicates:
            self.predicates.remove(predicate)
        return True

    def get_function(self, function: Function) -> Optional[Function]:
        for state_function in self.functions:
            if state_function == function:
                return state_function
        return None

    def update_function(self, function: Function) -> bool:
        state_function = self.get_function(function)
        if state_function is None:
            return False
        state_function.value = function.value
        return True

    def get_instances(self) -> List[Instance]:
        return list(collect_instances(self.predicates))
