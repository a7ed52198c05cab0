"""Build-tree documents in YAML (or JSON).

A node is a mapping::

    type: translate
    props: {offset: [1, 0, 0]}
    children:
      - type: sphere
        props: {radius: 2}

A document is either a single node or a wrapper that also carries
container configuration::

    output: part.stl
    cache_dir: .render_cache
    tree: {type: cube, props: {size: 10}}
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Union

import yaml

from .errors import TreeFormatError
from .reconciler import Element, h

_NODE_KEYS = {'type', 'props', 'children'}
_DOCUMENT_KEYS = {'tree', 'output', 'cache_dir'}


@dataclass
class Document:
    """A parsed build-tree document."""
    tree: Element
    output: Optional[str] = None
    cache_dir: Optional[str] = None


def element_from_data(data: Any, location: str = "tree") -> Element:
    """Convert a plain node mapping (and its children) into elements."""

    if not isinstance(data, Mapping):
        raise TreeFormatError(f"expected a mapping, got {type(data).__name__}", location)
    unknown = set(data) - _NODE_KEYS
    if unknown:
        raise TreeFormatError(f"unknown node keys {sorted(unknown)}", location)

    type_name = data.get('type')
    if not isinstance(type_name, str) or not type_name:
        raise TreeFormatError("node 'type' must be a non-empty string", location)

    props = data.get('props')
    if props is None:
        props = {}
    if not isinstance(props, Mapping):
        raise TreeFormatError("node 'props' must be a mapping", location)

    children = data.get('children')
    if children is None:
        children = []
    if not isinstance(children, list):
        raise TreeFormatError("node 'children' must be a list", location)

    return h(type_name, dict(props), *[
        element_from_data(child, f"{location}.children[{i}]")
        for i, child in enumerate(children)
    ])


def parse_document(data: Any) -> Document:
    if isinstance(data, Mapping) and 'tree' in data:
        unknown = set(data) - _DOCUMENT_KEYS
        if unknown:
            raise TreeFormatError(f"unknown document keys {sorted(unknown)}")
        for key in ('output', 'cache_dir'):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise TreeFormatError(
                    f"document '{key}' must be a string, got {type(value).__name__}", key)
        return Document(
            tree=element_from_data(data['tree']),
            output=data.get('output'),
            cache_dir=data.get('cache_dir'),
        )
    return Document(tree=element_from_data(data))


def load_document(path: Union[str, Path]) -> Document:
    """Read and parse a build-tree document from ``path``."""

    try:
        source = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        raise TreeFormatError(f"cannot read document: {exc}", str(path)) from exc
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as exc:
        raise TreeFormatError(f"invalid YAML: {exc}", str(path)) from exc
    if data is None:
        raise TreeFormatError("document is empty", str(path))
    return parse_document(data)


def iter_types(element: Element) -> Iterator[str]:
    """Yield every host type name in ``element``'s tree, depth first."""

    if isinstance(element.type, str):
        yield element.type
    for child in element.children:
        if isinstance(child, Element):
            yield from iter_types(child)


__all__ = ['Document', 'element_from_data', 'parse_document', 'load_document', 'iter_types']
