"""Cheap contextual error wrapper for report parsers.

The context is meant to be a short static label naming where in a parser
the failure happened (e.g. ``"reading start line"``), never dynamic data.
"""

from __future__ import annotations


class ContextualError(Exception):
    """An error prefixed with a static context label."""

    def __init__(self, cause: BaseException, context: str) -> None:
        super().__init__(cause, context)
        self._cause = cause
        self._context = context
        self.__cause__ = cause

    @property
    def context(self) -> str:
        return self._context

    @property
    def cause(self) -> BaseException:
        return self._cause

    def unwrap(self) -> BaseException:
        return self._cause

    def __str__(self) -> str:
        return f"{self._context}: {self._cause}"


def root_cause(err: BaseException) -> BaseException:
    """Follow ``unwrap()`` links down to the innermost error."""
    while True:
        unwrap = getattr(err, "unwrap", None)
        inner = unwrap() if unwrap is not None else None
        if inner is None:
            return err
        err = inner


def caused_by(err: BaseException, kind: type[BaseException]) -> bool:
    """Check whether ``err`` or anything it wraps is an instance of ``kind``."""
    current: BaseException | None = err
    while current is not None:
        if isinstance(current, kind):
            return True
        unwrap = getattr(current, "unwrap", None)
        current = unwrap() if unwrap is not None else None
    return False
