from typing import Any, Dict, Iterable, Optional

from .errors import NoRecipeFound

RECIPE_TYPE = "Recipe"


def is_recipe_node(value: Any) -> bool:
    if not isinstance(value, dict):
        return False
    node_type = value.get("@type")
    if isinstance(node_type, str):
        return node_type == RECIPE_TYPE
    if isinstance(node_type, list):
        return RECIPE_TYPE in node_type
    return False


def find_recipe(value: Any) -> Optional[Dict[str, Any]]:
    """Depth-first search for the first Recipe node, in declaration order.

    Objects are only descended into through their ``@graph`` array. The walk
    keeps its own stack, so nesting depth is not bounded by the interpreter.
    """
    stack = [value]
    while stack:
        current = stack.pop()
        if isinstance(current, dict):
            if is_recipe_node(current):
                return current
            graph = current.get("@graph")
            if isinstance(graph, list):
                stack.append(graph)
        elif isinstance(current, list):
            stack.extend(reversed(current))
    return None


def locate_recipe(documents: Iterable[Any]) -> Dict[str, Any]:
    for document in documents:
        found = find_recipe(document)
        if found is not None:
            return found
    raise NoRecipeFound()
