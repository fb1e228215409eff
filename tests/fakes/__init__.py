"""Sample classes used as stub targets across the test suite.

Each class has real behaviour so tests can tell a stubbed answer from a call
that reached the original implementation.
"""

from __future__ import annotations

import abc
from typing import NamedTuple, Protocol


class ObjectToStub:
    """Smallest useful target: one method that must never run, one that does."""

    def __init__(self) -> None:
        self.bar_val = -1

    def foo(self) -> None:
        raise RuntimeError("Should not be called")

    def bar(self) -> int:
        return self.bar_val


class Calculator:
    """Target with positional, keyword, static and class methods."""

    def __init__(self, offset: int = 0) -> None:
        self.offset = offset

    def add(self, a: int, b: int) -> int:
        return a + b + self.offset

    def total(self, *values: int, scale: int = 1) -> int:
        return sum(values) * scale

    def double_sum(self, a: int, b: int) -> int:
        return self.add(a, b) * 2

    def lookup(self, key: object) -> str:
        return f"original:{key}"

    @staticmethod
    def version() -> str:
        return "1.0"

    @classmethod
    def kind(cls) -> str:
        return cls.__name__

    @property
    def label(self) -> str:
        return f"calc+{self.offset}"


class NeedsResource:
    """Target whose constructor cannot run without a real resource."""

    def __init__(self, path: str) -> None:
        self.handle = open(path)  # noqa: SIM115

    def read(self) -> str:
        return self.handle.read()

    def status(self) -> str:
        return "open"


class Point(NamedTuple):
    """Target whose __new__ requires the field values."""

    x: int
    y: int

    def manhattan(self) -> int:
        return abs(self.x) + abs(self.y)


class Token:
    """Target with a __new__ that needs an argument and no __init__."""

    value: str

    def __new__(cls, value: str) -> Token:
        instance = super().__new__(cls)
        instance.value = value
        return instance

    def upper(self) -> str:
        return self.value.upper()


class Repository(abc.ABC):
    @abc.abstractmethod
    def get(self, key: str) -> str: ...

    @abc.abstractmethod
    def put(self, key: str, value: str) -> None: ...


class Clock(Protocol):
    def now(self) -> float: ...


class Mailer:
    """Target replaced by name in global override tests."""

    def __init__(self, host: str = "localhost") -> None:
        self.host = host

    def send(self, to: str, body: str) -> str:
        raise ConnectionError(f"cannot reach {self.host}")

    def ping(self) -> bool:
        return False


def notify(address: str) -> str:
    """Code under test: instantiates Mailer through this module's globals."""
    return Mailer("smtp.example.com").send(address, "hello")
