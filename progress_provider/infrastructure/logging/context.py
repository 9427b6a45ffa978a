"""Logging context management for progress operation correlation."""

from contextlib import contextmanager
from typing import Optional

from .structured_logger import operation_context, node_context


@contextmanager
def operation_scope(name: str, node_id: Optional[str] = None):
    """Tag every log message inside the scope with an operation name.

    Scopes nest; the previous values are restored on exit.

    Args:
        name: Operation name
        node_id: Optional node identifier

    Example:
        with operation_scope('import_files'):
            ...
    """
    operation_token = operation_context.set(name)
    node_token = node_context.set(node_id) if node_id is not None else None
    try:
        yield
    finally:
        if node_token is not None:
            node_context.reset(node_token)
        operation_context.reset(operation_token)


def current_operation() -> Optional[str]:
    """Return the operation name of the innermost active scope."""
    return operation_context.get()
