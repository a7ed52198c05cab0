"""
Resolved build-tree nodes.

Instances live in an :class:`InstanceArena` and refer to their children by
arena index. The arena is mutable while the tree is being built; the
evaluator only ever sees an :class:`ArenaView`, which has no mutators.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Callable, Iterator, List, Mapping, Optional, Tuple
import uuid

from .errors import UnrecognizedTypeError
from .registry import OperationEntry, OperationRegistry

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Instance:
    """One build-tree node matched against the operation registry."""
    index: int
    id: str
    type: str
    props: Mapping[str, Any]
    operation: OperationEntry
    children: List[int] = field(default_factory=list)
    handle: Any = field(default=None, repr=False)
    arena: Optional["InstanceArena"] = field(default=None, repr=False)

    @property
    def fn(self) -> Callable[..., Any]:
        return self.operation.invoke


class InstanceArena:
    """Owns every instance created while building one tree."""

    def __init__(self, registry: OperationRegistry):
        self.registry = registry
        self._instances: List[Instance] = []

    def create(self, type_name: str, props: Mapping[str, Any], handle: Any = None) -> Instance:
        """Resolve ``type_name`` and allocate a new, childless instance.

        ``props`` is kept by reference. Raises UnrecognizedTypeError when no
        operation matches.
        """
        entry = self.registry.resolve(type_name)
        if entry is None:
            raise UnrecognizedTypeError(type_name)
        instance = Instance(
            index=len(self._instances),
            id=str(uuid.uuid4()),
            type=type_name,
            props=props,
            operation=entry,
            handle=handle,
            arena=self,
        )
        self._instances.append(instance)
        logger.debug("created instance %s %s", instance.type, instance.id)
        return instance

    def append_child(self, parent: Instance, child: Instance) -> None:
        """Append ``child`` to ``parent``'s children; no dedup, no reordering."""
        for inst in (parent, child):
            if not self._owns(inst):
                raise ValueError(f"instance {inst.id} does not belong to this arena")
        parent.children.append(child.index)

    def _owns(self, instance: Instance) -> bool:
        return (0 <= instance.index < len(self._instances)
                and self._instances[instance.index] is instance)

    def __len__(self) -> int:
        return len(self._instances)

    def view(self) -> "ArenaView":
        return ArenaView(self)


class ArenaView:
    """Read-only access to an arena's instances."""

    def __init__(self, arena: InstanceArena):
        self._instances = arena._instances

    def __getitem__(self, index: int) -> Instance:
        return self._instances[index]

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[Instance]:
        return iter(tuple(self._instances))

    def children_of(self, instance: Instance) -> Tuple[Instance, ...]:
        return tuple(self._instances[i] for i in instance.children)


__all__ = ['Instance', 'InstanceArena', 'ArenaView']
