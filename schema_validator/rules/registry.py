"""
Rule registry: binds rule names to check functions with typed parameters.

A check function takes the validation context first and its parameters
after it. Parameter types are read once from the function's annotations,
and raw parameters (usually strings from a tag) are coerced to them when a
rule is built:

    registry = default_registry().extend()

    @registry.rule("divisible_by")
    def divisible_by(ctx, n: int):
        value = ctx.value()
        if value.is_nil():
            return None
        return value.to_int(default=0) % n == 0

    registry.new_rule("divisible_by", "3")   # Rule(name='divisible_by', params=(3,))

Result protocol of a check function:
    None / True            -> pass
    False                  -> fail with ValidationError(path, name, params)
    str                    -> fail, the string becomes the message
    Exception instance     -> fail, the exception becomes the cause
    ValidationError        -> used as is
"""

from __future__ import annotations

import inspect
import logging
import types
import typing
from collections import ChainMap
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator, Union

from ..errors import SchemaError, ValidationError

if TYPE_CHECKING:
    from ..schema.context import Context

logger = logging.getLogger(__name__)

RuleFunc = Callable[..., Any]

PRIMITIVES = (str, int, float, bool)

_TRUE_STRINGS = frozenset({"1", "t", "T", "true", "TRUE", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "false", "FALSE", "False"})


# Parameter coercion


def _coerce_primitive(raw: Any, target: type) -> Any:
    if target is bool:
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
        raise ValueError(f"invalid bool {raw!r}")

    if isinstance(raw, bool):
        # bool is an int subclass; never let it pass as a number
        raise ValueError(f"expected {target.__name__}, got bool")

    if target is int:
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float):
            if raw.is_integer():
                return int(raw)
            raise ValueError(f"invalid int {raw!r}")
        return int(str(raw).strip(), 10)

    if target is float:
        if isinstance(raw, (int, float)):
            return float(raw)
        return float(str(raw).strip())

    return raw if isinstance(raw, str) else str(raw)


def coerce_param(raw: Any, annotation: Any) -> Any:
    """Convert one raw parameter to ``annotation``; raises ValueError."""
    if annotation is Any:
        return raw
    if annotation in PRIMITIVES:
        return _coerce_primitive(raw, annotation)

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = typing.get_args(annotation)
        # Non-string values of a member type are kept; strings are parsed in member order
        if not isinstance(raw, str):
            for member in members:
                if isinstance(raw, member) and not (isinstance(raw, bool) and member is not bool):
                    return raw
        for member in members:
            try:
                return _coerce_primitive(raw, member)
            except ValueError:
                continue
        raise ValueError(f"{raw!r} matches none of {[m.__name__ for m in members]}")

    raise ValueError(f"unsupported parameter type {annotation!r}")


def _is_supported(annotation: Any) -> bool:
    if annotation is Any or annotation in PRIMITIVES:
        return True
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        return all(arg in PRIMITIVES for arg in typing.get_args(annotation))
    return False


# Parameter specs


@dataclass(frozen=True)
class ParamSpec:
    """
    One declared parameter of a check function.

    ``collect`` parameters are ``list[T]`` / ``tuple[T, ...]`` and take every
    remaining raw parameter; ``variadic`` is a ``*args: T`` parameter.
    """

    name: str
    annotation: Any = Any
    required: bool = True
    collect: type | None = None  # list or tuple
    variadic: bool = False

    @property
    def greedy(self) -> bool:
        return self.variadic or self.collect is not None


def _param_spec(param: inspect.Parameter, hints: dict[str, Any]) -> ParamSpec:
    annotation = hints.get(param.name, Any)
    if annotation is inspect.Parameter.empty:
        annotation = Any

    if param.kind is inspect.Parameter.VAR_POSITIONAL:
        if not _is_supported(annotation):
            raise SchemaError(f"Unsupported type {annotation!r} for *{param.name}")
        return ParamSpec(param.name, annotation, required=False, variadic=True)

    origin = typing.get_origin(annotation)
    if origin in (list, tuple):
        args = typing.get_args(annotation)
        if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
            raise SchemaError(f"Parameter {param.name!r}: only tuple[T, ...] is supported")
        element = args[0] if args else Any
        if not _is_supported(element):
            raise SchemaError(f"Unsupported element type {element!r} for {param.name!r}")
        return ParamSpec(param.name, element, required=False, collect=origin)

    if not _is_supported(annotation):
        raise SchemaError(f"Unsupported type {annotation!r} for parameter {param.name!r}")
    return ParamSpec(param.name, annotation, required=param.default is inspect.Parameter.empty)


def _type_hints(fn: RuleFunc, signature: inspect.Signature) -> dict[str, Any]:
    # Rule modules import Context for type checking only
    from ..schema.context import Context

    try:
        return typing.get_type_hints(fn, localns={"Context": Context})
    except NameError as e:
        raise SchemaError(f"Cannot resolve annotations of rule function {fn!r}: {e}") from e
    except TypeError:
        # Partials and callable instances: only the signature carries annotations
        return {
            name: param.annotation
            for name, param in signature.parameters.items()
            if not isinstance(param.annotation, str)
        }


def introspect(fn: RuleFunc) -> tuple[ParamSpec, ...]:
    """Read the parameter specs of ``fn``, skipping the leading context parameter."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError) as e:
        raise SchemaError(f"Cannot inspect rule function {fn!r}: {e}") from e

    hints = _type_hints(fn, signature)

    positional = [
        p
        for p in signature.parameters.values()
        if p.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.VAR_POSITIONAL,
        )
    ]
    if not positional or positional[0].kind is inspect.Parameter.VAR_POSITIONAL:
        raise SchemaError(f"Rule function {fn!r} must take the context as its first parameter")

    specs = tuple(_param_spec(p, hints) for p in positional[1:])
    greedy = [s for s in specs if s.greedy]
    if len(greedy) > 1 or (greedy and specs[-1] is not greedy[0]):
        raise SchemaError(f"Rule function {fn!r}: a collecting parameter must come last")
    return specs


# Rules


@dataclass(frozen=True)
class Rule:
    """A rule bound to concrete parameter values, ready to run."""

    name: str
    params: tuple[Any, ...] = ()
    fn: RuleFunc = field(default=None, compare=False, repr=False)
    args: tuple[Any, ...] = field(default=(), compare=False, repr=False)

    def validate(self, ctx: Context) -> ValidationError | None:
        """Run the check and translate its result into an error or None."""
        result = self.fn(ctx, *self.args)
        if result is None or result is True:
            return None
        if isinstance(result, ValidationError):
            return result
        if result is False:
            return ValidationError(path=ctx.path, code=self.name, params=self.params)
        if isinstance(result, str):
            return ValidationError(path=ctx.path, code=self.name, params=self.params, message=result)
        if isinstance(result, BaseException):
            return ValidationError(
                path=ctx.path,
                code=self.name,
                params=self.params,
                message=str(result) or None,
                cause=result,
            )
        raise TypeError(
            f"Rule {self.name!r} returned unsupported result {type(result).__name__}"
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.params:
            result["params"] = list(self.params)
        return result


@dataclass(frozen=True)
class RuleFactory:
    """A registered check function plus its parameter specs."""

    name: str
    fn: RuleFunc
    params: tuple[ParamSpec, ...] = ()

    @property
    def min_params(self) -> int:
        return sum(1 for p in self.params if p.required)

    @property
    def max_params(self) -> int | None:
        if any(p.greedy for p in self.params):
            return None
        return len(self.params)

    def bind(self, *raw_params: Any) -> Rule:
        count = len(raw_params)
        if count < self.min_params or (self.max_params is not None and count > self.max_params):
            expected = (
                f"at least {self.min_params}"
                if self.max_params is None
                else str(self.min_params)
                if self.min_params == self.max_params
                else f"{self.min_params} to {self.max_params}"
            )
            raise SchemaError(
                f"Rule {self.name!r} expects {expected} parameter(s), got {count}"
            )

        params: list[Any] = []
        args: list[Any] = []
        remaining = list(raw_params)
        for spec in self.params:
            if spec.greedy:
                values = [self._coerce(raw, spec) for raw in remaining]
                params.extend(values)
                if spec.variadic:
                    args.extend(values)
                else:
                    args.append(spec.collect(values))
                remaining = []
                break
            if not remaining:
                break
            value = self._coerce(remaining.pop(0), spec)
            params.append(value)
            args.append(value)

        return Rule(self.name, tuple(params), self.fn, tuple(args))

    def _coerce(self, raw: Any, spec: ParamSpec) -> Any:
        try:
            return coerce_param(raw, spec.annotation)
        except ValueError as e:
            raise SchemaError(
                f"Rule {self.name!r}: invalid value {raw!r} for parameter {spec.name!r}: {e}"
            ) from e


# Registry


class Registry:
    """
    Name -> RuleFactory table.

    ``extend()`` returns a child registry that sees every rule of its parent
    (including rules registered on the parent later) and can add or override
    rules without affecting the parent.
    """

    def __init__(self, parent: Registry | None = None):
        self._parent = parent
        if parent is None:
            self._factories: ChainMap[str, RuleFactory] = ChainMap({})
        else:
            self._factories = parent._factories.new_child()

    def register(self, name: str, fn: RuleFunc) -> RuleFunc:
        """Register ``fn`` under ``name``; a previous rule of that name is replaced."""
        if not name:
            raise SchemaError("Rule name must not be empty")
        factory = RuleFactory(name, fn, introspect(fn))
        if name in self._factories.maps[0]:
            logger.warning("Rule %r is already registered; replacing it", name)
        self._factories[name] = factory
        return fn

    def rule(self, name: str | None = None) -> Callable[[RuleFunc], RuleFunc]:
        """Decorator form of ``register``; the name defaults to the function's."""

        def decorator(fn: RuleFunc) -> RuleFunc:
            return self.register(name or fn.__name__, fn)

        return decorator

    def get(self, name: str) -> RuleFactory:
        try:
            return self._factories[name]
        except KeyError:
            raise SchemaError(f"Unknown rule {name!r}") from None

    def new_rule(self, name: str, *raw_params: Any) -> Rule:
        """Build a Rule, coercing ``raw_params`` to the declared parameter types."""
        return self.get(name).bind(*raw_params)

    def param_types(self, name: str) -> tuple[Any, ...]:
        return tuple(spec.annotation for spec in self.get(name).params)

    def names(self) -> list[str]:
        return sorted(self._factories)

    def extend(self) -> Registry:
        return Registry(parent=self)

    @property
    def parent(self) -> Registry | None:
        return self._parent

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._factories)

    def __repr__(self) -> str:
        return f"Registry({len(self)} rules)"


_default: Registry | None = None


def default_registry() -> Registry:
    """The standard registry, loaded with the built-in rules on first use."""
    global _default
    if _default is None:
        from .builtin import register_builtins

        registry = Registry()
        register_builtins(registry)
        _default = registry
    return _default


def register(name: str, fn: RuleFunc) -> RuleFunc:
    """Register a rule on the standard registry."""
    return default_registry().register(name, fn)
