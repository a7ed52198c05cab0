"""
Bottom-up evaluation of an instance tree into one geometry value.

Children are evaluated first, in order, then the node's operation is
called with arguments shaped by :mod:`landau.adapter`. Each result is
stamped with the originating instance's ``id`` and the list of child
geometries, forming a shadow tree parallel to the instance tree.
Nothing is cached; every call re-invokes every operation.
"""

import logging
from typing import Any

from .adapter import adapt_arguments
from .errors import OperationInvocationError
from .instance import ArenaView, Instance

logger = logging.getLogger(__name__)


def evaluate(view: ArenaView, instance: Instance) -> Any:
    """Evaluate ``instance`` and its subtree.

    Raises OperationInvocationError if any operation fails; no partial
    geometry is produced.
    """
    children = [evaluate(view, child) for child in view.children_of(instance)]

    entry = instance.operation
    try:
        args = adapt_arguments(entry.policy, entry.key, instance.props, children)
        geometry = instance.fn(*args)
    except Exception as exc:
        raise OperationInvocationError(instance.type, instance.id, exc) from exc

    geometry.id = instance.id
    geometry.children = children
    logger.debug("evaluated %s %s (%d children)", instance.type, instance.id, len(children))
    return geometry


__all__ = ['evaluate']
