"""
Context manager for validation configuration (fail-fast, depth guard).
"""

from contextlib import contextmanager
from contextvars import ContextVar

DEFAULT_MAX_DEPTH = 64

_fail_fast: ContextVar[bool] = ContextVar("fail_fast", default=False)
_max_depth: ContextVar[int] = ContextVar("max_depth", default=DEFAULT_MAX_DEPTH)


def is_fail_fast() -> bool:
    """Check if validation should stop at the first failure."""
    return _fail_fast.get()


def get_max_depth() -> int:
    """Maximum nesting depth a single validation pass may reach."""
    return _max_depth.get()


@contextmanager
def validation_settings(*, fail_fast: bool = False, max_depth: int = DEFAULT_MAX_DEPTH):
    """
    Context manager for validation configuration.

    Args:
        fail_fast: If True, a Validator created without an explicit
                   ``fail_fast`` stops at the first failure instead of
                   collecting every error.
        max_depth: Nesting depth after which traversal raises
                   ``MaxDepthExceededError``.

    Example:
        from schema_validator import Validator, validation_settings

        v = Validator(SignupForm)

        # Normal: every failing field is reported
        result = v.validate(form)

        # Fail fast: only the first failure is reported
        with validation_settings(fail_fast=True):
            result = v.validate(form)
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be positive, got {max_depth}")

    fail_fast_token = _fail_fast.set(fail_fast)
    depth_token = _max_depth.set(max_depth)
    try:
        yield
    finally:
        _max_depth.reset(depth_token)
        _fail_fast.reset(fail_fast_token)
