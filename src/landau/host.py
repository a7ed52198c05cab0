"""
Host backend that turns committed instance trees into solids.

The reconciler creates instances through :class:`SolidHostConfig` and
hands the top-level instance to ``append_child_to_container`` at commit.
That call is the only place evaluation happens: the whole tree is
evaluated from scratch, stored on the container as ``csg`` and, when the
container has a ``path``, written out as binary STL.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Mapping, Optional

from .evaluator import evaluate
from .instance import Instance, InstanceArena
from .output import emit
from .reconciler import Fiber, HostConfig
from .registry import OperationRegistry, default_registry

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = ".render_cache"


@dataclass(eq=False)
class Container:
    """
    A render target.

    ``path`` is the STL output location (optional). ``cache_dir`` is
    accepted for configuration compatibility and not used by evaluation.
    After a commit, ``csg`` holds the rendered geometry and ``fiber_tree``
    a debug view of the element tree that produced it.
    """
    path: Optional[str] = None
    cache_dir: Optional[str] = None
    csg: Any = field(default=None, init=False, repr=False)
    fiber_tree: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False)
    arena: Optional[InstanceArena] = field(default=None, init=False, repr=False)


@dataclass
class HostContext:
    """Per-node host context; only the root context carries configuration."""
    marker: str
    output_path: Optional[str] = None
    cache_dir: Optional[str] = None


def build_fiber_tree(handle: Fiber) -> Dict[str, Any]:
    """Describe the whole element tree ``handle`` belongs to.

    Each node is ``{'display_name', 'instance_id', 'children'}``;
    ``instance_id`` is set for host nodes only.
    """
    root = handle
    while root.parent is not None:
        root = root.parent

    def _build(fiber: Fiber) -> Dict[str, Any]:
        state = fiber.state_node
        return {
            'display_name': fiber.display_name,
            'instance_id': state.id if isinstance(state, Instance) else None,
            'children': [_build(child) for child in fiber.children],
        }

    return _build(root)


class SolidHostConfig(HostConfig):
    """Reconciler backend producing trimesh/shapely geometry."""

    supports_mutation = True

    def __init__(self, registry: Optional[OperationRegistry] = None):
        self.registry = registry if registry is not None else default_registry()

    def get_root_host_context(self, container: Container) -> HostContext:
        logger.debug("get_root_host_context %r", container)
        return HostContext(
            marker="HOST CONTEXT",
            output_path=container.path,
            cache_dir=container.cache_dir or DEFAULT_CACHE_DIR,
        )

    def get_child_host_context(self, parent_context: HostContext, element_type: str,
                               container: Container) -> HostContext:
        # not inherited from parent_context; configuration lives on the root
        return HostContext(marker="CHILD HOST CONTEXT")

    def create_instance(self, element_type: str, props: Mapping[str, Any],
                        container: Container, host_context: HostContext,
                        handle: Fiber) -> Instance:
        logger.debug("create_instance %s %r", element_type, props)
        if container.arena is None:
            container.arena = InstanceArena(self.registry)
        return container.arena.create(element_type, props, handle)

    def create_text_instance(self, text: str, container: Container,
                             host_context: HostContext, handle: Fiber) -> None:
        logger.debug("create_text_instance %r ignored", text)
        return None

    def append_initial_child(self, parent: Instance, child: Instance) -> None:
        logger.debug("append_initial_child %s -> %s", child.type, parent.type)
        parent.arena.append_child(parent, child)

    def append_child_to_container(self, container: Container, child: Instance) -> None:
        logger.debug("rendering %s into %r", child.type, container)
        geometry = evaluate(child.arena.view(), child)
        container.csg = geometry
        container.fiber_tree = build_fiber_tree(child.handle)
        if container.path:
            emit(geometry, container.path)

    def clear_container(self, container: Container) -> None:
        container.csg = None
        container.fiber_tree = None

    def reset_after_commit(self, container: Container) -> None:
        container.arena = None


__all__ = ['Container', 'HostContext', 'SolidHostConfig', 'build_fiber_tree', 'DEFAULT_CACHE_DIR']
