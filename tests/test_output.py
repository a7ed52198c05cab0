import struct

import pytest
import trimesh

from landau.errors import EmissionError
from landau.modeling import Geometries, primitives
from landau.output import emit, export_stl


def test_export_stl_is_binary():
    mesh = primitives.cube({'size': 2})
    data = export_stl(mesh)
    count = struct.unpack('<I', data[80:84])[0]
    assert count == len(mesh.faces) == 12
    assert len(data) == 84 + 50 * count


def test_export_concatenates_lists():
    parts = Geometries([primitives.cube({}), primitives.cube({'center': [5, 0, 0]})])
    data = export_stl(parts)
    assert struct.unpack('<I', data[80:84])[0] == 24


def test_export_rejects_regions():
    with pytest.raises(EmissionError):
        export_stl(primitives.square({}))


def test_emit_without_path():
    assert emit(primitives.cube({}), None) is None
    assert emit(primitives.cube({}), '') is None


def test_emit_writes_file(tmp_path):
    path = tmp_path / 'cube.stl'
    mesh = primitives.cube({'size': 3})
    written = emit(mesh, path)
    assert written == path.stat().st_size
    loaded = trimesh.load_mesh(str(path))
    assert loaded.volume == pytest.approx(27.0)


def test_emit_overwrites(tmp_path):
    path = tmp_path / 'part.stl'
    path.write_bytes(b'x' * 5000)
    emit(primitives.cube({}), path)
    assert path.stat().st_size == 84 + 50 * 12


def test_emit_failure(tmp_path):
    path = tmp_path / 'no' / 'such' / 'dir.stl'
    with pytest.raises(EmissionError) as info:
        emit(primitives.cube({}), path)
    assert info.value.path == str(path)
    assert isinstance(info.value.__cause__, OSError)
