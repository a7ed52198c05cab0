"""
Argument shaping for modeling operations.

A build-tree node declares ``(type, props)`` uniformly, but the wrapped
operations use three calling conventions:

- CHILDREN: the operation takes the child geometries only
  (``union(g1, g2, g3)``); props are ignored.
- SIMPLE: the operation takes one value extracted from props, then the
  children (``translate(props['offset'], g)``).
- OPTIONS: the operation takes the whole props mapping, then the children
  (``cube(props)``).

An operation with exactly one declared positional parameter is SIMPLE when
its name appears in ``SIMPLE_ARGUMENTS`` and OPTIONS otherwise; any other
arity (including purely variadic operations) is CHILDREN.
"""

from enum import Enum
import inspect
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple


class ArgumentPolicy(Enum):
    """How an operation's arguments are built from a node."""
    CHILDREN = "children"
    SIMPLE = "simple"
    OPTIONS = "options"


# type name -> the single prop passed as the leading argument
SIMPLE_ARGUMENTS: Dict[str, str] = {
    "colorize": "color",
    "rotate": "angles",
    "rotateX": "angle",
    "rotateY": "angle",
    "rotateZ": "angle",
    "translate": "offset",
    "translateX": "offset",
    "translateY": "offset",
    "translateZ": "offset",
    "scale": "factors",
    "scaleX": "factor",
    "scaleY": "factor",
    "scaleZ": "factor",
    "transform": "matrix",
}


def declared_arity(fn: Callable[..., Any]) -> int:
    """Count the declared positional parameters of ``fn``, ignoring ``*args``."""

    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    return sum(1 for p in inspect.signature(fn).parameters.values() if p.kind in positional)


def classify(type_name: str, arity: int) -> Tuple[ArgumentPolicy, Optional[str]]:
    """Return the argument policy and, for SIMPLE, the prop key to extract."""

    if arity != 1:
        return ArgumentPolicy.CHILDREN, None
    key = SIMPLE_ARGUMENTS.get(type_name)
    if key is not None:
        return ArgumentPolicy.SIMPLE, key
    return ArgumentPolicy.OPTIONS, None


def adapt_arguments(policy: ArgumentPolicy, key: Optional[str],
                    props: Mapping[str, Any], children: Sequence[Any]) -> Tuple[Any, ...]:
    """Build the positional arguments for one operation call.

    Raises ``KeyError`` when a SIMPLE operation's prop is missing.
    """

    if policy is ArgumentPolicy.CHILDREN:
        return tuple(children)
    if policy is ArgumentPolicy.SIMPLE:
        return (props[key], *children)
    return (props, *children)


__all__ = [
    'ArgumentPolicy', 'SIMPLE_ARGUMENTS', 'declared_arity', 'classify', 'adapt_arguments',
]
