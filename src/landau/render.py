"""
Render entry point.

Roots are kept per container, keyed by container identity, for as long as
the :class:`Renderer` lives. They are never evicted automatically: callers
that render into many short-lived containers should call
:meth:`Renderer.unmount` when done with each one.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from .host import SolidHostConfig
from .reconciler import FiberRoot, Reconciler
from .registry import OperationRegistry

logger = logging.getLogger(__name__)


class RootRegistry:
    """Container -> fiber root mapping keyed by ``id(container)``."""

    def __init__(self, reconciler: Reconciler):
        self._reconciler = reconciler
        # the container is held alongside its root so its id is not reused
        self._roots: Dict[int, Tuple[Any, FiberRoot]] = {}

    def get_or_create(self, container: Any) -> FiberRoot:
        entry = self._roots.get(id(container))
        if entry is None:
            root = self._reconciler.create_container(container, is_async=False)
            self._roots[id(container)] = (container, root)
            logger.debug("created root for %r", container)
            return root
        return entry[1]

    def drop(self, container: Any) -> Optional[FiberRoot]:
        entry = self._roots.pop(id(container), None)
        return None if entry is None else entry[1]

    def __contains__(self, container: Any) -> bool:
        return id(container) in self._roots

    def __len__(self) -> int:
        return len(self._roots)


class Renderer:
    """Renders element trees into containers."""

    def __init__(self, registry: Optional[OperationRegistry] = None):
        self.host = SolidHostConfig(registry)
        self.reconciler = Reconciler(self.host)
        self.roots = RootRegistry(self.reconciler)

    def render(self, element: Any, container: Any,
               callback: Optional[Callable[[], Any]] = None) -> None:
        """Render ``element`` into ``container`` synchronously.

        ``callback`` runs after a successful commit. Errors propagate to the
        caller.
        """
        root = self.roots.get_or_create(container)
        self.reconciler.update_container(element, root, None, callback)

    def unmount(self, container: Any) -> bool:
        """Forget ``container``'s root and clear its rendered geometry."""
        root = self.roots.drop(container)
        if root is None:
            return False
        self.host.clear_container(container)
        return True


_default_renderer: Optional[Renderer] = None


def get_renderer() -> Renderer:
    """The process-wide renderer over the default operation registry."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = Renderer()
    return _default_renderer


def render(element: Any, container: Any, callback: Optional[Callable[[], Any]] = None) -> None:
    get_renderer().render(element, container, callback)


def unmount(container: Any) -> bool:
    return get_renderer().unmount(container)


__all__ = ['RootRegistry', 'Renderer', 'get_renderer', 'render', 'unmount']
