from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Union

from .base import Matcher

PredicateFn = Callable[[Mapping], Any]


@dataclass(frozen=True)
class PredicateMatcher(Matcher):
    """
    Envuelve un callable arbitrario `fn(ctx)` como Matcher.
    El resultado se evalúa por truthiness; las excepciones del callable se propagan.
    """
    fn: PredicateFn

    @property
    def name(self) -> str:
        return "PREDICATE"

    def __call__(self, ctx: Mapping) -> bool:
        return bool(self.fn(ctx))

    def __str__(self) -> str:
        return f"PREDICATE(fn={getattr(self.fn, '__qualname__', self.fn)!s})"


def as_matcher(predicate: Union[Matcher, PredicateFn]) -> Matcher:
    if isinstance(predicate, Matcher):
        return predicate
    if not callable(predicate):
        raise TypeError(f"predicate debe ser callable, recibido: {type(predicate).__name__}")
    return PredicateMatcher(predicate)
