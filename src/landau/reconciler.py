"""
Minimal synchronous reconciler.

Turns an element tree into host instances by driving a :class:`HostConfig`
backend through two phases:

- render: function components are called, host elements are turned into
  host instances (children first), and children are attached with
  ``append_initial_child``;
- commit: on the first mount the container is cleared of whatever it held
  before; then each top-level host instance is handed to
  ``append_child_to_container``, which replaces the previous content.

Every update re-renders the whole element tree; there is no diffing and no
asynchronous scheduling.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

logger = logging.getLogger(__name__)

ElementType = Union[str, Callable[..., Any]]


@dataclass(eq=False)
class Element:
    """A declared node: a host type name or a component, plus props."""
    type: ElementType
    props: Dict[str, Any]
    children: Sequence[Any] = ()

    def __repr__(self) -> str:
        return f"Element({display_name(self.type)!r}, {self.props!r}, children={len(self.children)})"


def h(type: ElementType, props: Optional[Dict[str, Any]] = None, *children: Any) -> Element:
    """Create an element. ``props`` is kept by reference."""
    if props is None:
        props = {}
    return Element(type, props, tuple(children))


def display_name(element_type: Optional[ElementType]) -> str:
    if element_type is None:
        return "Root"
    if isinstance(element_type, str):
        return element_type
    return getattr(element_type, '__name__', type(element_type).__name__)


@dataclass(eq=False)
class Fiber:
    """One node of the rendered element tree."""
    element_type: Optional[ElementType]
    props: Mapping[str, Any]
    parent: Optional["Fiber"] = field(default=None, repr=False)
    children: List["Fiber"] = field(default_factory=list, repr=False)
    state_node: Any = field(default=None, repr=False)

    @property
    def is_host(self) -> bool:
        return isinstance(self.element_type, str)

    @property
    def display_name(self) -> str:
        return display_name(self.element_type)


@dataclass(eq=False)
class FiberRoot:
    """Persistent per-container root."""
    container: Any
    current: Optional[Fiber] = None
    mounted: bool = False


class HostConfig(ABC):
    """Backend callbacks invoked by the reconciler."""

    supports_mutation = True

    @abstractmethod
    def get_root_host_context(self, container: Any) -> Any:
        ...

    @abstractmethod
    def get_child_host_context(self, parent_context: Any, element_type: str, container: Any) -> Any:
        ...

    @abstractmethod
    def create_instance(self, element_type: str, props: Mapping[str, Any],
                        container: Any, host_context: Any, handle: Fiber) -> Any:
        ...

    @abstractmethod
    def create_text_instance(self, text: str, container: Any,
                             host_context: Any, handle: Fiber) -> Any:
        ...

    @abstractmethod
    def append_initial_child(self, parent: Any, child: Any) -> None:
        ...

    @abstractmethod
    def append_child_to_container(self, container: Any, child: Any) -> None:
        ...

    @abstractmethod
    def clear_container(self, container: Any) -> None:
        ...

    def should_set_text_content(self, element_type: str, props: Mapping[str, Any]) -> bool:
        return False

    def finalize_initial_children(self, instance: Any, element_type: str, props: Mapping[str, Any],
                                  container: Any, host_context: Any) -> bool:
        return False

    def get_public_instance(self, instance: Any) -> Any:
        return instance

    def prepare_for_commit(self, container: Any) -> None:
        pass

    def reset_after_commit(self, container: Any) -> None:
        pass


class Reconciler:
    """Drives a :class:`HostConfig` from element trees."""

    def __init__(self, host: HostConfig):
        if not host.supports_mutation:
            raise ValueError("host config must support mutation")
        self.host = host

    def create_container(self, container: Any, is_async: bool = False) -> FiberRoot:
        if is_async:
            raise NotImplementedError("asynchronous rendering is not supported")
        return FiberRoot(container=container)

    def update_container(self, element: Any, root: FiberRoot,
                         parent_component: Any = None,
                         callback: Optional[Callable[[], Any]] = None) -> None:
        """Render ``element`` into ``root`` and commit the result."""
        container = root.container
        host_root = Fiber(element_type=None, props={}, state_node=container)
        context = self.host.get_root_host_context(container)

        try:
            top_level = self._render_children(host_root, [element], container, context)
        except Exception:
            # drop host state built for the abandoned tree
            self.host.reset_after_commit(container)
            raise

        self.host.prepare_for_commit(container)
        try:
            if not root.mounted:
                self.host.clear_container(container)
            for instance in top_level:
                self.host.append_child_to_container(container, instance)
        finally:
            self.host.reset_after_commit(container)

        root.current = host_root
        root.mounted = True
        logger.debug("committed %d top-level instance(s)", len(top_level))

        if callback is not None:
            callback()

    # --- render phase ---

    def _render_children(self, parent: Fiber, children: Sequence[Any],
                         container: Any, context: Any) -> List[Any]:
        """Render ``children`` under ``parent``; return their host instances in order."""
        instances: List[Any] = []
        for child in children:
            instances.extend(self._render_node(parent, child, container, context))
        return instances

    def _render_node(self, parent: Fiber, node: Any, container: Any, context: Any) -> List[Any]:
        if node is None or isinstance(node, bool):
            return []
        if isinstance(node, (list, tuple)):
            return self._render_children(parent, node, container, context)
        if isinstance(node, (str, int, float)):
            return self._render_text(parent, str(node), container, context)
        if not isinstance(node, Element):
            raise TypeError(f"cannot render {type(node).__name__} as an element")

        fiber = Fiber(element_type=node.type, props=node.props, parent=parent)
        parent.children.append(fiber)

        if not isinstance(node.type, str):
            props = dict(node.props)
            props['children'] = list(node.children)
            rendered = node.type(props)
            return self._render_node(fiber, rendered, container, context)

        child_context = self.host.get_child_host_context(context, node.type, container)
        child_instances: List[Any] = []
        if not self.host.should_set_text_content(node.type, node.props):
            child_instances = self._render_children(fiber, node.children, container, child_context)

        instance = self.host.create_instance(node.type, node.props, container, context, fiber)
        fiber.state_node = instance
        for child in child_instances:
            self.host.append_initial_child(instance, child)
        self.host.finalize_initial_children(instance, node.type, node.props, container, context)
        return [instance]

    def _render_text(self, parent: Fiber, text: str, container: Any, context: Any) -> List[Any]:
        fiber = Fiber(element_type="#text", props={'text': text}, parent=parent)
        parent.children.append(fiber)
        instance = self.host.create_text_instance(text, container, context, fiber)
        fiber.state_node = instance
        return [] if instance is None else [instance]


__all__ = [
    'Element', 'h', 'display_name', 'Fiber', 'FiberRoot', 'HostConfig', 'Reconciler',
]
