"""Scoped replacement of bindings in shared namespaces.

A global override scope is a process-wide window during which names bound in
modules, classes, objects or namespace dicts may be swapped for instrumented
substitutes. Every replaced binding is restored (newest first) when the scope
exits, whether the scoped block returned or raised.

Only one scope may be open at a time. Replacing a binding outside a scope
fails loudly with InvalidStateError.

Key components:
- GlobalOverride: scope lifecycle plus replace()
- ReplacedBinding: (container, name, original) triple restored on exit
- GlobalStub: a Stub whose substitute is also reachable through a name

Usage:
    with GlobalOverride.scope():
        clock = GlobalStub("Clock", myapp.services)
        clock.stubs(lambda c: c.now()).and_returns(0)
        myapp.run()  # myapp.services.Clock() forwards to clock.object
    # myapp.services.Clock is the original class again
"""

from __future__ import annotations

import builtins
import logging
from collections.abc import MutableMapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from teddymocks.core.expectation import CallArguments
from teddymocks.engine import synthesize_class
from teddymocks.errors import InvalidArgumentError, InvalidStateError
from teddymocks.stub import Stub

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from teddymocks.config import TeddyMocksConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class _Missing:
    """Marker for a name that was not bound before replacement."""

    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


def get_binding(container: Any, name: str) -> Any:  # noqa: ANN401
    """Read a binding from a mapping or an attribute namespace, or MISSING."""
    if isinstance(container, MutableMapping):
        return container.get(name, MISSING)
    return getattr(container, name, MISSING)


def _set_binding(container: Any, name: str, value: Any) -> None:  # noqa: ANN401
    if isinstance(container, MutableMapping):
        container[name] = value
    else:
        setattr(container, name, value)


def _delete_binding(container: Any, name: str) -> None:  # noqa: ANN401
    if isinstance(container, MutableMapping):
        container.pop(name, None)
    elif hasattr(container, name):
        delattr(container, name)


@dataclass(frozen=True)
class ReplacedBinding:
    """A binding replaced during the current scope.

    Attributes:
        container: The module, class, object or mapping holding the name.
        name: The replaced name.
        original: The value bound before replacement, or MISSING.
    """

    container: Any
    name: str
    original: Any

    def restore(self) -> None:
        if self.original is MISSING:
            _delete_binding(self.container, self.name)
        else:
            _set_binding(self.container, self.name, self.original)


class GlobalOverride:
    """Process-wide global override scope.

    All state is class-level; the class is used directly rather than
    instantiated.
    """

    _active: ClassVar[bool] = False
    _replaced: ClassVar[list[ReplacedBinding]] = []

    @classmethod
    def is_active(cls) -> bool:
        return cls._active

    @classmethod
    @contextmanager
    def scope(cls) -> Iterator[type[GlobalOverride]]:
        """Open the scope for the duration of a with-block.

        Raises:
            InvalidStateError: If a scope is already open.
        """
        if cls._active:
            raise InvalidStateError("A global override scope is already open")
        cls._active = True
        cls._replaced = []
        logger.debug("Global override scope opened")
        try:
            yield cls
        finally:
            try:
                cls._restore_all()
            finally:
                cls._active = False
                logger.debug("Global override scope closed")

    @classmethod
    def create_scope(cls, body: Callable[[], R]) -> R:
        """Run body inside a scope and return its result.

        Every binding replaced while body runs is restored before this
        returns or re-raises.
        """
        with cls.scope():
            return body()

    @classmethod
    def replace(
        cls, name: str, container: Any, replacement: Any  # noqa: ANN401
    ) -> None:
        """Bind name in container to replacement until the scope exits.

        Args:
            name: The name to replace.
            container: Module, class, object or mutable mapping holding name.
            replacement: The value to bind.

        Raises:
            InvalidStateError: If no scope is open.
        """
        if not cls._active:
            raise InvalidStateError(
                f"Cannot replace {name!r} outside a global override scope"
            )
        original = get_binding(container, name)
        _set_binding(container, name, replacement)
        cls._replaced.append(ReplacedBinding(container, name, original))
        logger.debug("Replaced global binding %r in %r", name, container)

    @classmethod
    def _restore_all(cls) -> None:
        first_error: Exception | None = None
        while cls._replaced:
            binding = cls._replaced.pop()
            try:
                binding.restore()
            except Exception as e:
                logger.warning(
                    "Failed to restore global binding %r: %s", binding.name, e
                )
                if first_error is None:
                    first_error = e
            else:
                logger.debug("Restored global binding %r", binding.name)
        if first_error is not None:
            raise first_error


class ForwardingMethod:
    """Descriptor resolving a method name on the wrapped substitute instance."""

    def __init__(self, name: str, target: object) -> None:
        self.name = name
        self.target = target

    def __get__(self, instance: Any, owner: type | None = None) -> Any:  # noqa: ANN401
        return getattr(self.target, self.name)


def _build_forwarding_type(stub: GlobalStub[Any], original: type) -> type:
    target = stub.object

    def __init__(self: object, *args: Any, **kwargs: Any) -> None:
        stub.instantiations.append(CallArguments(args, kwargs))

    def __getattr__(self: object, name: str) -> Any:  # noqa: ANN401
        return getattr(target, name)

    namespace: dict[str, Any] = {
        name: ForwardingMethod(name, target) for name in stub.state.interceptors
    }
    namespace.update(
        __init__=__init__,
        __getattr__=__getattr__,
        __qualname__=original.__qualname__,
        __doc__=original.__doc__,
    )
    return synthesize_class(original.__name__, original, namespace)


class GlobalStub(Stub[T]):
    """A Stub for a class bound to a name in a shared namespace.

    The name is rebound, for the rest of the open scope, to a synthesized
    class of the same name. Instances of that class forward every method call
    to this stub's substitute instance, so code that instantiates the name
    directly reaches the same recording and stubbing state.

    Args:
        name: The name of the class in container.
        container: Module, class, object or mutable mapping holding the name.
            Defaults to the builtins module.
        *args: Passed to the original __init__ when building the substitute.
        config: See Stub.
        **kwargs: Passed to the original __init__ when building the substitute.

    Raises:
        InvalidStateError: If no global override scope is open.
        InvalidArgumentError: If name is unbound or not bound to a class.
    """

    def __init__(
        self,
        name: str,
        container: Any = None,  # noqa: ANN401
        *args: Any,
        config: TeddyMocksConfig | None = None,
        **kwargs: Any,
    ) -> None:
        if not GlobalOverride.is_active():
            raise InvalidStateError(
                f"GlobalStub({name!r}) requires an open global override scope"
            )
        if container is None:
            container = builtins
        original = get_binding(container, name)
        if original is MISSING:
            raise InvalidArgumentError(f"{name!r} is not bound in {container!r}")

        super().__init__(original, *args, config=config, **kwargs)
        self.name = name
        self.container = container
        self.original = original
        self.instantiations: list[CallArguments] = []
        self.forwarding_type = _build_forwarding_type(self, original)
        GlobalOverride.replace(name, container, self.forwarding_type)

    def __repr__(self) -> str:
        return f"GlobalStub({self.name!r})"
