# outcome of a typed fetch: exactly one of a value or an error, never both

from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: BaseException

    @property
    def is_success(self) -> bool:
        return False


Result = Union[Success[T], Failure]
