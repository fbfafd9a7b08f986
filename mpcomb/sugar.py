# mpcomb/sugar.py
"""Sequencing sugar: named bindings instead of nested `bind` closures.

    pair = (Do()
            .bind("a", item())
            .bind("b", item())
            .returns(lambda a, b: (a, b)))

is exactly

    bind(item(), lambda a: bind(item(), lambda b: result((a, b))))

A step whose parser depends on earlier values is declared with
`bind_from` (or `bind(name, using(factory))`); the factory and the body
receive the earlier values as keyword arguments, selected by their
parameter names. Binding to `IGNORE` ("_") runs the parser and drops its
value. Any other name that nothing downstream reads triggers an
`UnusedBindingWarning` when the chain is closed.
"""

from __future__ import annotations
import inspect
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from .core import Parser, Reply, bind, result
from .errors import UnusedBindingWarning
from .inputs import Input

IGNORE = "_"


class using:
    """Marks a binding as a factory of the earlier bound values."""

    __slots__ = ("factory",)

    def __init__(self, factory: Callable[..., Parser]):
        self.factory = factory


def _wanted(fn: Callable[..., Any]) -> Tuple[Optional[FrozenSet[str]], FrozenSet[str]]:
    """(accepted names or None for **kwargs, required names) of `fn`."""
    accepted = set()
    required = set()
    takes_all = False
    for prm in inspect.signature(fn).parameters.values():
        if prm.kind is prm.VAR_KEYWORD:
            takes_all = True
        elif prm.kind in (prm.POSITIONAL_OR_KEYWORD, prm.KEYWORD_ONLY):
            accepted.add(prm.name)
            if prm.default is prm.empty:
                required.add(prm.name)
        elif prm.kind is prm.POSITIONAL_ONLY:
            raise TypeError(f"{fn!r}: positional-only parameter {prm.name!r} cannot be bound by name")
    return (None if takes_all else frozenset(accepted)), frozenset(required)


def _call(fn: Callable[..., Any], accepted: Optional[FrozenSet[str]], env: Dict[str, Any]) -> Any:
    if accepted is None:
        return fn(**env)
    return fn(**{k: v for k, v in env.items() if k in accepted})


@dataclass(frozen=True)
class _Step:
    name: str
    parser: Optional[Parser]
    factory: Optional[Callable[..., Parser]]
    accepted: Optional[FrozenSet[str]]
    required: FrozenSet[str]

    def make(self, env: Dict[str, Any]) -> Parser:
        if self.factory is None:
            return self.parser  # type: ignore[return-value]
        return _call(self.factory, self.accepted, env)


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name.isidentifier():
        raise ValueError(f"binding name must be an identifier, got {name!r}")


class Do:
    """Immutable builder; every `bind` returns a new `Do`."""

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[_Step] = ()):
        self._steps: Tuple[_Step, ...] = tuple(steps)

    def __len__(self) -> int:
        return len(self._steps)

    def bind(self, name: str, parser: Union[Parser, using]) -> "Do":
        _check_name(name)
        if isinstance(parser, using):
            return self.bind_from(name, parser.factory)
        step = _Step(name, parser, None, frozenset(), frozenset())
        return Do(self._steps + (step,))

    def bind_from(self, name: str, factory: Callable[..., Parser]) -> "Do":
        _check_name(name)
        accepted, required = _wanted(factory)
        step = _Step(name, None, factory, accepted, required)
        return Do(self._steps + (step,))

    # ---- closing the chain ----

    def body(self, factory: Callable[..., Parser]) -> Parser:
        """Close the chain with a parser built from the bound values."""
        accepted, required = _wanted(factory)
        self._validate(accepted, required)
        steps = self._steps

        def final(env: Dict[str, Any]) -> Parser:
            return _call(factory, accepted, env)

        def _do(inp: Input) -> List[Reply]:
            return _expand(steps, final, {})(inp)
        return _do

    def returns(self, fn: Callable[..., Any]) -> Parser:
        """Close the chain with `result(fn(...))`."""
        accepted, required = _wanted(fn)
        self._validate(accepted, required)
        steps = self._steps

        def final(env: Dict[str, Any]) -> Parser:
            return result(_call(fn, accepted, env))

        def _do(inp: Input) -> List[Reply]:
            return _expand(steps, final, {})(inp)
        return _do

    # ---- build-time checks ----

    def _validate(self, body_accepts: Optional[FrozenSet[str]], body_requires: FrozenSet[str]) -> None:
        bound: List[str] = []
        for step in self._steps:
            missing = step.required - set(bound)
            if missing:
                raise NameError(f"binding {step.name!r} reads unbound name(s): {', '.join(sorted(missing))}")
            if step.name != IGNORE:
                bound.append(step.name)
        missing = body_requires - set(bound)
        if missing:
            raise NameError(f"body reads unbound name(s): {', '.join(sorted(missing))}")

        consumers = [s.accepted for s in self._steps] + [body_accepts]
        for i, step in enumerate(self._steps):
            if step.name == IGNORE:
                continue
            later = consumers[i + 1:]
            if not any(acc is None or step.name in acc for acc in later):
                warnings.warn(
                    f"value bound to {step.name!r} is never used; bind it to {IGNORE!r} instead",
                    UnusedBindingWarning,
                    stacklevel=3,
                )


def _expand(steps: Tuple[_Step, ...], final: Callable[[Dict[str, Any]], Parser], env: Dict[str, Any]) -> Parser:
    if not steps:
        return final(env)
    step, more = steps[0], steps[1:]
    p = step.make(env)
    if step.name == IGNORE:
        return bind(p, lambda _: _expand(more, final, env))
    return bind(p, lambda v: _expand(more, final, {**env, step.name: v}))


def do(bindings: Iterable[Tuple[str, Union[Parser, using]]], body: Callable[..., Parser]) -> Parser:
    """Functional form of `Do`: `do([(name, parser), ...], body)`."""
    chain = Do()
    for name, parser in bindings:
        chain = chain.bind(name, parser)
    return chain.body(body)
