"""
End-to-end rendering: element tree -> container.csg -> STL file.
"""

import math

import numpy as np
import pytest
import trimesh

from landau import (
    Container, EmissionError, OperationInvocationError, Renderer,
    UnrecognizedTypeError, h,
)
from landau.host import DEFAULT_CACHE_DIR, HostContext, SolidHostConfig
from landau.modeling import Geom2


def test_cube_without_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    container = Container()
    Renderer().render(h('cube', {'size': 10}), container)

    csg = container.csg
    assert isinstance(csg, trimesh.Trimesh)
    assert csg.volume == pytest.approx(1000.0)
    assert csg.extents.tolist() == pytest.approx([10.0, 10.0, 10.0])
    assert list(tmp_path.iterdir()) == []


def test_translate_passes_offset(recording_registry, recorder):
    container = Container()
    Renderer(recording_registry).render(
        h('translate', {'offset': [1, 0, 0]}, h('sphere', {'radius': 2})),
        container,
    )
    op, args = recorder.calls[-1]
    assert op == 'translate'
    assert args[0] == [1, 0, 0]
    assert args[1] is container.csg.children[0]
    assert args[1].op == 'sphere'


def test_translated_sphere_geometry():
    container = Container()
    Renderer().render(
        h('translate', {'offset': [1, 0, 0]}, h('sphere', {'radius': 2})),
        container,
    )
    center = container.csg.bounds.mean(axis=0)
    assert center.tolist() == pytest.approx([1.0, 0.0, 0.0], abs=1e-9)
    assert container.csg.extents[0] == pytest.approx(4.0, rel=1e-2)


def test_union_of_three_children(recording_registry, recorder):
    container = Container()
    Renderer(recording_registry).render(
        h('union', {'ignored': True},
          h('cube', {'size': 1}), h('cube', {'size': 2}), h('sphere', {})),
        container,
    )
    op, args = recorder.calls[-1]
    assert op == 'union'
    assert len(args) == 3
    assert [a.op for a in args] == ['cube', 'cube', 'sphere']
    assert list(args) == container.csg.children


def test_unknown_type_at_depth(recording_registry, recorder):
    container = Container()
    tree = h('union', {},
             h('cube', {}),
             h('translate', {'offset': [0, 0, 1]}, h('frobnicate', {})),
             h('sphere', {}))
    with pytest.raises(UnrecognizedTypeError) as info:
        Renderer(recording_registry).render(tree, container)
    assert info.value.type_name == 'frobnicate'
    assert recorder.calls == []
    assert container.csg is None


def test_writes_binary_stl(tmp_path):
    out = tmp_path / 'out.stl'
    container = Container(path=str(out))
    Renderer().render(h('cube', {'size': 10}), container)

    data = out.read_bytes()
    assert len(data) == 84 + 50 * len(container.csg.faces)
    mesh = trimesh.load_mesh(str(out))
    assert mesh.volume == pytest.approx(container.csg.volume)
    np.testing.assert_allclose(mesh.bounds, container.csg.bounds, atol=1e-6)


def test_failed_commit_keeps_previous_geometry():
    renderer = Renderer()
    container = Container()
    renderer.render(h('cube', {'size': 2}), container)
    previous = container.csg

    with pytest.raises(OperationInvocationError) as info:
        renderer.render(h('cube', {'size': -1}), container)
    assert info.value.type_name == 'cube'
    assert container.csg is previous


def test_emission_failure_keeps_geometry(tmp_path):
    container = Container(path=str(tmp_path / 'missing' / 'out.stl'))
    with pytest.raises(EmissionError):
        Renderer().render(h('cube', {'size': 1}), container)
    assert container.csg is not None
    assert container.csg.volume == pytest.approx(1.0)


def test_rerender_rebuilds_geometry():
    renderer = Renderer()
    container = Container()
    tree = h('cube', {'size': 3})
    renderer.render(tree, container)
    first = container.csg
    renderer.render(tree, container)
    second = container.csg

    assert len(renderer.roots) == 1
    assert first is not second
    assert first.id != second.id
    assert first.volume == pytest.approx(second.volume)


def test_roots_keyed_by_identity():
    renderer = Renderer()
    a, b = Container(), Container()
    renderer.render(h('cube', {'size': 1}), a)
    renderer.render(h('cube', {'size': 2}), b)
    assert len(renderer.roots) == 2
    assert a in renderer.roots and b in renderer.roots
    assert a.csg.volume == pytest.approx(1.0)
    assert b.csg.volume == pytest.approx(8.0)


def test_unmount():
    renderer = Renderer()
    container = Container()
    renderer.render(h('cube', {'size': 1}), container)
    assert renderer.unmount(container) is True
    assert container.csg is None
    assert container not in renderer.roots
    assert renderer.unmount(container) is False


def test_callback():
    seen = []
    container = Container()
    Renderer().render(h('cube', {'size': 1}), container, lambda: seen.append(container.csg))
    assert len(seen) == 1
    assert seen[0] is container.csg


def test_fiber_tree():
    def Plate(props):
        return h('cube', {'size': props['size']})

    container = Container()
    Renderer().render(h('union', {}, h(Plate, {'size': 2}), h('sphere', {})), container)

    tree = container.fiber_tree
    assert tree['display_name'] == 'Root'
    assert tree['instance_id'] is None
    union = tree['children'][0]
    assert union['display_name'] == 'union'
    assert union['instance_id'] == container.csg.id
    plate, sphere = union['children']
    assert plate['display_name'] == 'Plate'
    assert plate['instance_id'] is None
    assert plate['children'][0]['display_name'] == 'cube'
    assert plate['children'][0]['instance_id'] == container.csg.children[0].id
    assert sphere['instance_id'] == container.csg.children[1].id


def test_host_contexts():
    host = SolidHostConfig()
    root_ctx = host.get_root_host_context(Container(path='a.stl'))
    assert root_ctx.output_path == 'a.stl'
    assert root_ctx.cache_dir == DEFAULT_CACHE_DIR
    assert host.get_root_host_context(Container(cache_dir='cache')).cache_dir == 'cache'

    child_ctx = host.get_child_host_context(root_ctx, 'cube', Container(path='a.stl'))
    assert isinstance(child_ctx, HostContext)
    assert child_ctx.output_path is None
    assert child_ctx.cache_dir is None


def test_arena_released_after_commit():
    container = Container()
    Renderer().render(h('union', {}, h('cube', {}), h('cube', {'center': [3, 0, 0]})), container)
    assert container.arena is None


def test_colored_rotated_part(tmp_path):
    out = tmp_path / 'part.stl'
    container = Container(path=str(out))
    tree = h('colorize', {'color': [1, 0, 0]},
             h('rotateZ', {'angle': math.pi / 2},
               h('cuboid', {'size': [2, 4, 6]})))
    Renderer().render(tree, container)
    assert container.csg.extents.tolist() == pytest.approx([4.0, 2.0, 6.0])
    assert (container.csg.visual.face_colors[:, :3] == [255, 0, 0]).all()
    assert out.exists()


def test_arena_released_after_failed_render():
    renderer = Renderer()
    container = Container()
    with pytest.raises(UnrecognizedTypeError):
        renderer.render(h('union', {}, h('cube', {}), h('frobnicate', {})), container)
    assert container.arena is None

    renderer.render(h('cube', {'size': 2}), container)
    assert container.arena is None
    assert container.csg.volume == pytest.approx(8.0)
    assert container.fiber_tree['children'][0]['display_name'] == 'cube'


def test_matrix_transform_and_projection():
    container = Container()
    shift = [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 4], [0, 0, 0, 1]]
    tree = h('extrudeLinear', {'height': 1},
             h('project', {},
               h('transform', {'matrix': shift},
                 h('polyhedron', {
                     'points': [[0, 0, 0], [2, 0, 0], [0, 2, 0], [0, 0, 2]],
                     'faces': [[0, 2, 1], [0, 1, 3], [0, 3, 2], [1, 2, 3]],
                 }))))
    Renderer().render(tree, container)
    assert container.csg.volume == pytest.approx(2.0)
    (shadow,) = container.csg.children
    assert isinstance(shadow, Geom2)
    assert shadow.area == pytest.approx(2.0)
