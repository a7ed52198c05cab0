"""
Tests for bottom-up tree evaluation.
"""

import numpy as np
import pytest

from landau.errors import OperationInvocationError
from landau.evaluator import evaluate
from landau.instance import InstanceArena
from landau.registry import default_registry


def _tree(arena, node):
    """Build instances from nested ``(type, props, [children])`` tuples."""
    type_name, props, children = node
    inst = arena.create(type_name, props)
    for child in children:
        arena.append_child(inst, _tree(arena, child))
    return inst


class TestWithRecorder:

    def test_children_first_and_in_order(self, recording_registry, recorder):
        arena = InstanceArena(recording_registry)
        root = _tree(arena, ('union', {}, [
            ('cube', {'size': 1}, []),
            ('sphere', {'radius': 2}, []),
            ('cube', {'size': 3}, []),
        ]))
        result = evaluate(arena.view(), root)

        assert [op for op, _ in recorder.calls] == ['cube', 'sphere', 'cube', 'union']
        assert result.op == 'union'
        assert result.args == tuple(result.children)
        assert [c.args[0] for c in result.children] == [{'size': 1}, {'radius': 2}, {'size': 3}]

    def test_stamps_id_and_children(self, recording_registry):
        arena = InstanceArena(recording_registry)
        root = _tree(arena, ('translate', {'offset': [1, 0, 0]}, [
            ('union', {}, [('cube', {}, []), ('cube', {}, [])]),
        ]))
        view = arena.view()
        result = evaluate(view, root)

        assert result.id == root.id
        assert len(result.children) == len(root.children) == 1
        inner = result.children[0]
        inner_instance = view.children_of(root)[0]
        assert inner.id == inner_instance.id
        assert [c.id for c in inner.children] == [c.id for c in view.children_of(inner_instance)]

    def test_simple_argument_call(self, recording_registry, recorder):
        arena = InstanceArena(recording_registry)
        root = _tree(arena, ('translate', {'offset': [1, 0, 0]}, [('sphere', {}, [])]))
        result = evaluate(arena.view(), root)

        op, args = recorder.calls[-1]
        assert op == 'translate'
        assert args[0] == [1, 0, 0]
        assert args[1] is result.children[0]
        assert len(args) == 2

    def test_operation_failure(self, recording_registry, recorder):
        arena = InstanceArena(recording_registry)
        root = _tree(arena, ('union', {}, [('cube', {}, []), ('explode', {}, [])]))
        with pytest.raises(OperationInvocationError) as info:
            evaluate(arena.view(), root)
        err = info.value
        assert err.type_name == 'explode'
        assert isinstance(err.cause, ValueError)
        assert isinstance(err.__cause__, ValueError)
        # the parent never ran
        assert 'union' not in [op for op, _ in recorder.calls]

    def test_missing_simple_prop(self, recording_registry):
        arena = InstanceArena(recording_registry)
        root = _tree(arena, ('translate', {'ofset': [1, 0, 0]}, [('cube', {}, [])]))
        with pytest.raises(OperationInvocationError) as info:
            evaluate(arena.view(), root)
        assert info.value.type_name == 'translate'
        assert isinstance(info.value.cause, KeyError)

    def test_no_memoization(self, recording_registry, recorder):
        arena = InstanceArena(recording_registry)
        root = _tree(arena, ('cube', {'size': 1}, []))
        first = evaluate(arena.view(), root)
        second = evaluate(arena.view(), root)
        assert first is not second
        assert len(recorder.calls) == 2


class TestWithTrimesh:

    def test_re_evaluation_is_value_equal(self):
        arena = InstanceArena(default_registry())
        root = _tree(arena, ('translate', {'offset': [0, 0, 5]}, [
            ('cube', {'size': 4}, []),
        ]))
        first = evaluate(arena.view(), root)
        second = evaluate(arena.view(), root)
        assert first is not second
        assert first.volume == pytest.approx(second.volume)
        np.testing.assert_allclose(first.bounds, second.bounds)
        assert first.id == second.id == root.id

    def test_stamping_keeps_geometry(self):
        arena = InstanceArena(default_registry())
        root = _tree(arena, ('cube', {'size': 10}, []))
        result = evaluate(arena.view(), root)
        assert result.volume == pytest.approx(1000.0)
        assert result.children == []
        assert result.is_watertight
