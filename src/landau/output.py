"""Binary STL emission of rendered geometry."""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Union

import trimesh
from trimesh.exchange.stl import export_stl as _encode_stl

from .errors import EmissionError
from .modeling.geometry import flatten, is_geom2, is_geom3

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _as_mesh(geometry: Any) -> trimesh.Trimesh:
    items = flatten([geometry])
    for item in items:
        if is_geom2(item):
            raise EmissionError("2D geometry cannot be exported as STL")
        if not is_geom3(item):
            raise EmissionError(f"cannot export {type(item).__name__} as STL")
    if not items:
        raise EmissionError("nothing to export")
    if len(items) == 1:
        return items[0]
    return trimesh.util.concatenate(items)


def export_stl(geometry: Any) -> bytes:
    """Encode ``geometry`` (a solid or a list of solids) as binary STL."""

    return _encode_stl(_as_mesh(geometry))


def emit(geometry: Any, output_path: Optional[PathLike]) -> Optional[int]:
    """Write ``geometry`` to ``output_path`` as binary STL.

    Does nothing when no path is given. Returns the number of bytes
    written. File-system failures raise EmissionError.
    """

    if not output_path:
        return None

    data = export_stl(geometry)
    try:
        with open(output_path, 'wb') as stream:
            stream.write(data)
    except OSError as exc:
        raise EmissionError(f"failed to write STL: {exc.strerror or exc}", os.fspath(output_path)) from exc

    logger.info("wrote %d bytes to %s", len(data), output_path)
    return len(data)


__all__ = ['emit', 'export_stl']
