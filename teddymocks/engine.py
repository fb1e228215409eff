"""Interception engine: builds substitute instances for arbitrary classes.

A substitute is an instance of a class synthesized per Stub. The synthesized
class derives from the original type (when the type allows subclassing) and
replaces every discovered method with a MethodInterceptor. All interceptors of
one substitute share a SubstituteState, which owns the interception mode and
the method name -> Expectation table.

Key components:
- discover_methods(): enumerate the interceptable methods of a type
- MethodInterceptor: descriptor routing calls into SubstituteState.intercept
- SubstituteState: mode, expectations and the interceptor registry
- build_substitute(): synthesize the class and construct the instance
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from teddymocks.core.expectation import CallArguments, Expectation
from teddymocks.core.modes import Mode, ModeState
from teddymocks.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from teddymocks.config import TeddyMocksConfig

logger = logging.getLogger(__name__)

_FUNCTION_TYPES = (types.FunctionType, types.MethodDescriptorType)


class MethodKind(Enum):
    """How a discovered method binds its first argument."""

    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"


@dataclass(frozen=True)
class DiscoveredMethod:
    """A method found on the original type.

    Attributes:
        name: Attribute name on the type.
        kind: Binding kind (instance, static or class method).
        function: The underlying function, unbound.
    """

    name: str
    kind: MethodKind
    function: Callable[..., Any]

    def invoke(self, receiver: Any, arguments: CallArguments) -> Any:  # noqa: ANN401
        """Run the original method body with the given receiver."""
        if self.kind is MethodKind.STATIC:
            return self.function(*arguments, **arguments.kwargs)
        if self.kind is MethodKind.CLASS and not isinstance(receiver, type):
            receiver = type(receiver)
        return self.function(receiver, *arguments, **arguments.kwargs)


def discover_methods(type_: type) -> tuple[DiscoveredMethod, ...]:
    """List the interceptable methods of a type.

    Names are fully enumerated before any classification so the result is a
    fixed sequence independent of later mutation of the type. Dunder methods,
    properties and data attributes are skipped.

    Args:
        type_: The class to inspect.

    Returns:
        Discovered methods in name order.
    """
    names = tuple(sorted(dir(type_)))
    methods: list[DiscoveredMethod] = []
    for name in names:
        if name.startswith("__") and name.endswith("__"):
            continue
        try:
            raw = inspect.getattr_static(type_, name)
        except AttributeError:
            continue
        if isinstance(raw, staticmethod):
            methods.append(DiscoveredMethod(name, MethodKind.STATIC, raw.__func__))
        elif isinstance(raw, classmethod):
            methods.append(DiscoveredMethod(name, MethodKind.CLASS, raw.__func__))
        elif isinstance(raw, _FUNCTION_TYPES):
            methods.append(DiscoveredMethod(name, MethodKind.INSTANCE, raw))
    return tuple(methods)


class MethodInterceptor:
    """Descriptor installed in place of one original method.

    Holds the discovered method and a reference to the owning substitute's
    state; every call is routed through SubstituteState.intercept().
    """

    def __init__(self, method: DiscoveredMethod, state: SubstituteState) -> None:
        self.method = method
        self.state = state

    @property
    def name(self) -> str:
        return self.method.name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:  # noqa: ANN401
        if self.method.kind is MethodKind.STATIC:
            return functools.partial(self, None)
        if self.method.kind is MethodKind.CLASS:
            receiver = owner if owner is not None else type(instance)
            return types.MethodType(self, receiver)
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __call__(self, receiver: Any, *args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
        return self.state.intercept(
            self.method, receiver, CallArguments(args, kwargs)
        )

    def __repr__(self) -> str:
        return f"<MethodInterceptor {self.state.type_name}.{self.name}>"


class SubstituteState:
    """Shared state of one substitute instance.

    Attributes:
        type_name: Name of the original type, for logs and reprs.
        mode: Current interception mode and validation flag.
        expectations: Method name -> Expectation, created lazily.
        last_expectation: Expectation touched by the most recent
            configuration or assertion call, or None.
        interceptors: Method name -> installed MethodInterceptor.
    """

    def __init__(self, type_name: str, config: TeddyMocksConfig) -> None:
        self.type_name = type_name
        self.config = config
        self.mode = ModeState()
        self.expectations: dict[str, Expectation] = {}
        self.last_expectation: Expectation | None = None
        self.interceptors: dict[str, MethodInterceptor] = {}

    def register(self, method: DiscoveredMethod) -> MethodInterceptor:
        interceptor = MethodInterceptor(method, self)
        self.interceptors[method.name] = interceptor
        return interceptor

    def expectation_for(self, name: str) -> Expectation:
        expectation = self.expectations.get(name)
        if expectation is None:
            expectation = Expectation(
                method_name=name, comparison=self.config.argument_comparison
            )
            self.expectations[name] = expectation
        return expectation

    def intercept(
        self, method: DiscoveredMethod, receiver: Any, arguments: CallArguments
    ) -> Any:  # noqa: ANN401
        """Dispatch one intercepted call according to the current mode."""
        name = method.name
        mode = self.mode.mode

        if mode is Mode.CONFIGURING_STUB:
            expectation = self.expectation_for(name)
            expectation.configure(arguments, self.mode.validate_arguments)
            self.last_expectation = expectation
            logger.debug(
                "Stub configured: %s.%s %r validate_arguments=%s",
                self.type_name,
                name,
                arguments,
                self.mode.validate_arguments,
            )
            return None

        if mode is Mode.ASSERTING:
            expectation = self.expectations.get(name)
            self.last_expectation = expectation
            if expectation is not None:
                expectation.match(
                    arguments, validate_arguments=self.mode.validate_arguments
                )
            return None

        expectation = self.expectation_for(name)
        expectation.record(arguments)
        if expectation.answers(arguments):
            logger.debug("Stubbed answer: %s.%s %r", self.type_name, name, arguments)
            return expectation.get_return_value(arguments)
        return method.invoke(receiver, arguments)

    def clear_stubbing(self) -> None:
        for expectation in self.expectations.values():
            expectation.clear_stubbing()

    def clear_recorded(self) -> None:
        for expectation in self.expectations.values():
            expectation.clear_recorded()


def synthesize_class(
    name: str, base: type, namespace: Mapping[str, Any]
) -> type:
    """Create a class deriving from base, or from object if base refuses.

    Abstract members are cleared so the class is always instantiable.
    """
    ns = dict(namespace)
    ns.setdefault("__module__", base.__module__)
    try:
        cls = type(base)(name, (base,), ns)
    except TypeError as e:
        logger.debug("Cannot subclass %s (%s); using a structural class", base, e)
        cls = type(name, (object,), ns)
    if getattr(cls, "__abstractmethods__", None):
        cls.__abstractmethods__ = frozenset()
    return cls


def _allocate(
    cls: type,
    type_: type,
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    *,
    swallow_errors: bool,
) -> Any:  # noqa: ANN401
    """Create the bare substitute instance.

    If the original __new__ rejects the arguments, fall back to the nearest
    base whose __new__ accepts none (tuple.__new__ for a namedtuple).
    """
    if cls.__new__ is object.__new__:
        return object.__new__(cls)
    try:
        return cls.__new__(cls, *args, **kwargs)
    except TypeError as e:
        if not swallow_errors:
            raise
        logger.debug("Original %s.__new__ failed on substitute: %r", type_.__name__, e)

    for base in cls.__mro__[1:]:
        new = base.__dict__.get("__new__")
        if new is None:
            continue
        try:
            return new(cls)
        except TypeError:
            continue
    raise InvalidArgumentError(
        f"Cannot build a substitute for {type_.__qualname__}: "
        "no __new__ in its hierarchy accepts zero arguments"
    )


def _construct(
    cls: type,
    type_: type,
    args: tuple[Any, ...],
    kwargs: Mapping[str, Any],
    *,
    swallow_errors: bool,
) -> Any:  # noqa: ANN401
    instance = _allocate(cls, type_, args, kwargs, swallow_errors=swallow_errors)

    init = type_.__init__
    if init is object.__init__:
        return instance
    try:
        init(instance, *args, **kwargs)
    except Exception as e:
        if not swallow_errors:
            raise
        # Constructors needing arguments or resources are best-effort here.
        logger.debug("Original %s.__init__ failed on substitute: %r", type_.__name__, e)
    return instance


def build_substitute(
    type_: object,
    config: TeddyMocksConfig,
    args: tuple[Any, ...] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> tuple[Any, SubstituteState]:
    """Build a substitute instance for a class.

    Args:
        type_: The class to substitute.
        config: Comparison policy and constructor error handling.
        args: Positional arguments for the original __init__.
        kwargs: Keyword arguments for the original __init__.

    Returns:
        Tuple of (substitute instance, its SubstituteState).

    Raises:
        InvalidArgumentError: If type_ is not a class, or no instance of the
            synthesized class can be allocated.
    """
    if not isinstance(type_, type):
        raise InvalidArgumentError(
            f"Stub requires a class, got {type(type_).__name__}: {type_!r}"
        )

    state = SubstituteState(type_.__name__, config)
    methods = discover_methods(type_)
    namespace: dict[str, Any] = {
        method.name: state.register(method) for method in methods
    }
    cls = synthesize_class(f"{type_.__name__}Substitute", type_, namespace)
    instance = _construct(
        cls,
        type_,
        args,
        kwargs or {},
        swallow_errors=config.swallow_constructor_errors,
    )
    logger.debug(
        "Built substitute for %s with %d intercepted methods",
        type_.__qualname__,
        len(methods),
    )
    return instance, state
