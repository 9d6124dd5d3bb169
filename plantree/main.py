from typing import List, Optional, Union

from plantree.accessor import LocalAccessor, ProblemClient, RemoteAccessor, StateAccessor
from plantree.evaluator import Evaluator, Result
from plantree.object import Function, Predicate
from plantree.state import LocalState
from plantree.tree import Tree

State = Union[StateAccessor, ProblemClient, LocalState]


def as_accessor(state: State) -> StateAccessor:
    if isinstance(state, StateAccessor):
        return state
    if isinstance(state, ProblemClient):
        return RemoteAccessor(state)
    if isinstance(state, LocalState):
        return LocalAccessor.from_state(state)
    raise TypeError(f"Cannot evaluate against {type(state).__name__}")


def evaluate(
    tree: Tree,
    state: State,
    node_id: int = 0,
    apply: bool = False,
    negate: bool = False,
    verbose: bool = False,
) -> Result:
    """Evaluates the subtree rooted at `node_id`.

    Args:
        tree: Formula tree.
        state: Accessor, problem client or local state to read and write.
        node_id: Root of the subtree to evaluate.
        apply: Apply the formula's effects to the state.
        negate: Evaluate the negation of the formula.
        verbose: Print every evaluated node.

    Returns:
        (success, truth, value) result.
    """
    evaluator = Evaluator(as_accessor(state), apply=apply, verbose=verbose)
    return evaluator.evaluate(tree, node_id, negate)


def check(tree: Tree, state: State, node_id: int = 0, verbose: bool = False) -> bool:
    """Returns whether the formula holds, without modifying the state."""
    return evaluate(tree, state, node_id, apply=False, verbose=verbose).truth


def apply(tree: Tree, state: State, node_id: int = 0, verbose: bool = False) -> bool:
    """Applies the formula's effects and returns whether every one succeeded."""
    return evaluate(tree, state, node_id, apply=True, verbose=verbose).success


def check_local(
    tree: Tree,
    predicates: List[Predicate],
    functions: List[Function],
    node_id: int = 0,
    verbose: bool = False,
) -> bool:
    return check(tree, LocalAccessor(predicates, functions), node_id, verbose)


def apply_local(
    tree: Tree,
    predicates: List[Predicate],
    functions: List[Function],
    node_id: int = 0,
    verbose: bool = False,
) -> bool:
    return apply(tree, LocalAccessor(predicates, functions), node_id, verbose)


def get_function_value(tree: Tree, state: State, node_id: int = 0) -> Optional[float]:
    """Computes a numeric expression, or returns None if it cannot be evaluated."""
    result = evaluate(tree, state, node_id)
    if not result.success:
        return None
    return result.value
