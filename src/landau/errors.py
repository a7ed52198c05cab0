"""
Renderer exceptions.

Error code ranges:
- E1xx: tree construction (type resolution)
- E2xx: evaluation (operation invocation)
- E3xx: output emission
- E4xx: build-tree documents
"""

from typing import Optional


class RendererError(Exception):
    """Base exception for renderer errors."""

    code = "E000"

    def __str__(self) -> str:
        return f"[{self.code}] {super().__str__()}"


class UnrecognizedTypeError(RendererError):
    """A node's type matches no registered modeling operation (E100)."""

    code = "E100"

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unrecognized instance type {type_name!r}")


class OperationInvocationError(RendererError):
    """A modeling operation raised while evaluating the tree (E200)."""

    code = "E200"

    def __init__(self, type_name: str, instance_id: str, cause: Exception):
        self.type_name = type_name
        self.instance_id = instance_id
        self.cause = cause
        super().__init__(
            f"operation {type_name!r} failed for instance {instance_id}: "
            f"{type(cause).__name__}: {cause}"
        )


class EmissionError(RendererError):
    """The final geometry could not be encoded or written (E300)."""

    code = "E300"

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class TreeFormatError(RendererError):
    """A build-tree document is malformed (E400)."""

    code = "E400"

    def __init__(self, message: str, location: str = "<root>"):
        self.location = location
        super().__init__(f"{location}: {message}")


__all__ = [
    'RendererError', 'UnrecognizedTypeError', 'OperationInvocationError',
    'EmissionError', 'TreeFormatError',
]
