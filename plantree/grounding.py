import itertools
from typing import Iterator, List, Mapping, Sequence

from plantree.tree import Param, Tree


def cart_product(values: Sequence[Sequence[str]]) -> List[List[str]]:
    """Enumerates every combination of one value per position.

    The first position varies slowest. An empty input list yields no
    combinations, while no lists at all yields a single empty combination.
    """
    return [list(combination) for combination in itertools.product(*values)]


def replace_children_param(
    tree: Tree, node_id: int, replace: Mapping[str, str]
) -> Tree:
    """Grounds the parameters of the subtree rooted at `node_id`.

    Children are substituted first, each pass returning a new tree that the next
    one builds on. `tree` itself is left untouched.
    """
    new_tree = tree
    for child_id in tree.nodes[node_id].children:
        new_tree = replace_children_param(new_tree, child_id, replace)

    node = new_tree.nodes[node_id]
    if not any(param.name in replace for param in node.parameters):
        return new_tree

    parameters = tuple(
        Param(replace[param.name], param.type)
        if param.name in replace
        else param
        for param in node.parameters
    )
    return new_tree.with_node(node_id, node.replace(parameters=parameters))


def ground_exists(
    tree: Tree, node_id: int, instances: Sequence[str]
) -> Iterator[Tree]:
    """Yields one grounded copy of `tree` per binding of the quantifier at `node_id`."""
    params = tree.nodes[node_id].parameters
    for values in cart_product([list(instances) for _ in params]):
        replace = {param.name: value for param, value in zip(params, values)}
        yield replace_children_param(tree, node_id, replace)
