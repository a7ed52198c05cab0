# -*- coding: utf-8 -*-
"""
Declarative solid modeling.

Build trees of modeling operations are declared as elements, reconciled
into instances, evaluated bottom-up into a single solid and written as
binary STL:

    from landau import Container, h, render

    part = h("translate", {"offset": [1, 0, 0]},
             h("sphere", {"radius": 2}))
    container = Container(path="part.stl")
    render(part, container)
    container.csg   # the trimesh.Trimesh that was written
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("landau")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from .errors import (
    RendererError,
    UnrecognizedTypeError,
    OperationInvocationError,
    EmissionError,
    TreeFormatError,
)
from .reconciler import Element, h
from .host import Container, SolidHostConfig
from .registry import OperationEntry, OperationRegistry, default_registry
from .render import Renderer, render, unmount

__all__ = [
    '__version__',
    'RendererError', 'UnrecognizedTypeError', 'OperationInvocationError',
    'EmissionError', 'TreeFormatError',
    'Element', 'h', 'Container', 'SolidHostConfig',
    'OperationEntry', 'OperationRegistry', 'default_registry',
    'Renderer', 'render', 'unmount',
]
