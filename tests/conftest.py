import pytest

from landau.registry import OperationRegistry


class FakeSolid:
    """Stand-in geometry recording the call that produced it."""

    def __init__(self, op, args):
        self.op = op
        self.args = args

    def __repr__(self):
        return f"FakeSolid({self.op})"


class Recorder:
    """A tiny modeling library with one operation per calling convention."""

    def __init__(self):
        self.calls = []

    def _record(self, op, args):
        self.calls.append((op, args))
        return FakeSolid(op, args)

    def namespaces(self):
        def cube(options):
            return self._record('cube', (options,))

        def sphere(options):
            return self._record('sphere', (options,))

        def union(*geometries):
            return self._record('union', geometries)

        def translate(offset, *objects):
            return self._record('translate', (offset,) + objects)

        def colorize(color, *objects):
            return self._record('colorize', (color,) + objects)

        def explode(options):
            raise ValueError("boom")

        return [
            ('colors', {'colorize': colorize}),
            ('primitives', {'cube': cube, 'sphere': sphere, 'explode': explode}),
            ('booleans', {'union': union}),
            ('transforms', {'translate': translate}),
        ]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def recording_registry(recorder):
    return OperationRegistry.from_namespaces(recorder.namespaces())
