"""
Operation registry.

Maps node type names to modeling operations. The table is flat and built
once from an ordered list of ``(category, namespace)`` pairs; when a name
appears in several categories, the first category wins.
"""

from dataclasses import dataclass
from functools import lru_cache
import logging
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .adapter import ArgumentPolicy, classify, declared_arity

logger = logging.getLogger(__name__)

Namespace = Union[ModuleType, Mapping[str, Callable[..., Any]]]


@dataclass(frozen=True)
class OperationEntry:
    """A named modeling operation and the way its arguments are shaped."""
    name: str
    category: str
    arity: int
    policy: ArgumentPolicy
    invoke: Callable[..., Any]
    key: Optional[str] = None  # prop extracted for SIMPLE operations

    def describe(self) -> str:
        if self.policy is ArgumentPolicy.SIMPLE:
            return f"{self.name}({self.key}, *children)"
        if self.policy is ArgumentPolicy.OPTIONS:
            return f"{self.name}(props, *children)"
        return f"{self.name}(*children)"


def _namespace_items(namespace: Namespace) -> Iterator[Tuple[str, Callable[..., Any]]]:
    if isinstance(namespace, Mapping):
        yield from namespace.items()
        return
    names = getattr(namespace, '__all__', None)
    if names is None:
        names = [n for n in vars(namespace) if not n.startswith('_')]
    for name in names:
        obj = getattr(namespace, name)
        if callable(obj):
            yield name, obj


class OperationRegistry:
    """
    Registry of modeling operations, keyed by node type name.
    """

    def __init__(self):
        self._entries: Dict[str, OperationEntry] = {}
        self._categories: List[str] = []

    @classmethod
    def from_namespaces(cls, categories: Iterable[Tuple[str, Namespace]]) -> "OperationRegistry":
        registry = cls()
        for category, namespace in categories:
            registry.register_namespace(category, namespace)
        return registry

    def register_namespace(self, category: str, namespace: Namespace) -> None:
        """Add every operation of ``namespace`` not already registered."""
        self._categories.append(category)
        for name, fn in _namespace_items(namespace):
            if name in self._entries:
                logger.debug("%s.%s shadowed by %s.%s", category, name,
                             self._entries[name].category, name)
                continue
            arity = declared_arity(fn)
            policy, key = classify(name, arity)
            self._entries[name] = OperationEntry(name, category, arity, policy, fn, key)

    def resolve(self, type_name: str) -> Optional[OperationEntry]:
        """Look up an operation by exact name; ``None`` when unknown."""
        return self._entries.get(type_name)

    def __contains__(self, type_name: str) -> bool:
        return type_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    def names(self, category: Optional[str] = None) -> List[str]:
        """Registered type names, optionally restricted to one category."""
        return [e.name for e in self._entries.values()
                if category is None or e.category == category]

    def entries(self) -> List[OperationEntry]:
        return list(self._entries.values())


@lru_cache(maxsize=None)
def default_registry() -> OperationRegistry:
    """The registry over :mod:`landau.modeling`, built on first use."""
    from .modeling import CATEGORIES
    return OperationRegistry.from_namespaces(CATEGORIES)


__all__ = ['OperationEntry', 'OperationRegistry', 'default_registry']
