"""Modeling operations grouped by category.

Each category module lists its operations in ``__all__``. Operations come
in two calling conventions: a leading value or options mapping followed by
the objects to act on (``translate(offset, *objects)``, ``cube(options)``),
or the objects alone (``union(*geometries)``).
"""

from . import (
    booleans,
    colors,
    expansions,
    extrusions,
    hulls,
    modifiers,
    primitives,
    transforms,
)
from .geometry import Geom2, Geometries

# search order used when resolving a type name; the first hit wins
CATEGORIES = (
    ('colors', colors),
    ('primitives', primitives),
    ('booleans', booleans),
    ('expansions', expansions),
    ('extrusions', extrusions),
    ('hulls', hulls),
    ('modifiers', modifiers),
    ('transforms', transforms),
)

__all__ = [
    'CATEGORIES', 'Geom2', 'Geometries',
    'booleans', 'colors', 'expansions', 'extrusions',
    'hulls', 'modifiers', 'primitives', 'transforms',
]
