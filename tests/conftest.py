"""
Shared fixtures for plantree tests.
"""

from typing import List, Optional

import pytest

from plantree.accessor import LocalAccessor, ProblemClient, RemoteAccessor
from plantree.object import Function, Instance, Predicate
from plantree.state import LocalState


class FakeProblemClient(ProblemClient):
    """In-memory problem service that can be told to fail its writes."""

    def __init__(
        self,
        predicates: Optional[List[Predicate]] = None,
        functions: Optional[List[Function]] = None,
        instances: Optional[List[Instance]] = None,
        fail_writes: bool = False,
    ):
        self.predicates = list(predicates or [])
        self.functions = list(functions or [])
        self.instances = list(instances or [])
        self.fail_writes = fail_writes
        self.function_queries: List[str] = []

    def exist_predicate(self, predicate: Predicate) -> bool:
        return predicate in self.predicates

    def add_predicate(self, predicate: Predicate) -> bool:
        if self.fail_writes:
            return False
        if predicate not in self.predicates:
            self.predicates.append(predicate)
        return True

    def remove_predicate(self, predicate: Predicate) -> bool:
        if self.fail_writes or predicate not in self.predicates:
            return False
        self.predicates.remove(predicate)
        return True

    def get_function(self, name: str) -> Optional[Function]:
        self.function_queries.append(name)
        for function in self.functions:
            if str(function) == name:
                return function.copy()
        return None

    def update_function(self, function: Function) -> bool:
        if self.fail_writes:
            return False
        for state_function in self.functions:
            if state_function == function:
                state_function.value = function.value
                return True
        return False

    def get_instances(self) -> List[Instance]:
        return list(self.instances)

    def get_predicates(self) -> List[Predicate]:
        return list(self.predicates)

    def get_functions(self) -> List[Function]:
        return [function.copy() for function in self.functions]


@pytest.fixture
def robot_state() -> LocalState:
    """A robot in room1 with a half-charged battery."""
    return LocalState(
        [Predicate("at", ["robot", "room1"]), Predicate("connected", ["room1", "room2"])],
        [Function("battery", ["robot"], 50.0)],
    )


@pytest.fixture
def local_accessor(robot_state: LocalState) -> LocalAccessor:
    return LocalAccessor.from_state(robot_state)


@pytest.fixture
def fake_client() -> FakeProblemClient:
    return FakeProblemClient(
        predicates=[Predicate("at", ["robot2", "room1"])],
        functions=[Function("battery", ["robot1"], 50.0)],
        instances=[
            Instance("robot1", "robot"),
            Instance("robot2", "robot"),
            Instance("room1", "room"),
        ],
    )


@pytest.fixture
def remote_accessor(fake_client: FakeProblemClient) -> RemoteAccessor:
    return RemoteAccessor(fake_client)


@pytest.fixture
def client_factory():
    """Builds fresh `FakeProblemClient`s with custom contents."""
    return FakeProblemClient
