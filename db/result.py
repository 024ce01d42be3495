from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Empty:
    """A failed read; carries the error that was logged."""

    error: Exception


QueryResult = Union[Ok[T], Empty]
