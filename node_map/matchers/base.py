from __future__ import annotations
from collections.abc import Mapping
from typing import Protocol, Callable, Dict, Any, Tuple, runtime_checkable


@runtime_checkable
class Matcher(Protocol):
    """Guarda evaluable contra un contexto de nodo."""
    def __call__(self, ctx: Mapping[str, Any]) -> bool: ...
    @property
    def name(self) -> str: ...
    def __str__(self) -> str: ...


MatcherFactory = Callable[[dict], Matcher]

# (type, impl) -> factory(cond) -> Matcher
MATCHER_FACTORIES: Dict[Tuple[str, str], MatcherFactory] = {}


def register_matcher(type_: str, impl: str = "v1"):
    def deco(factory: MatcherFactory):
        key = (type_, impl)
        if key in MATCHER_FACTORIES:
            raise ValueError(f"Matcher duplicado: {key}")
        MATCHER_FACTORIES[key] = factory
        return factory
    return deco


def build_matcher(cond: dict) -> Matcher:
    """
    Construye un matcher a partir de su condición:
    {"type": "BLACK_WHITE_LIST", "field": "platform", "tokens": [...]}.
    `impl` es opcional (default "v1").
    """
    t = cond["type"]
    impl = cond.get("impl", "v1")
    try:
        factory = MATCHER_FACTORIES[(t, impl)]
    except KeyError:
        raise KeyError(f"Matcher no registrado: {t}:{impl}")
    return factory(cond)  # valida y devuelve instancia inmutable
