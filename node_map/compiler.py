from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, List, Tuple, Union

from node_map.dtos import MatcherFilters
from node_map.matchers.base import Matcher, build_matcher
from node_map.matchers.predicate import PredicateFn, as_matcher
from node_map.utils.enumerators import FilterAttribute

# Registra las factories de los matchers de filtros
import node_map.matchers.black_white_list  # noqa: F401
import node_map.matchers.version_in  # noqa: F401

# --- Constante útil (evita ifs en runtime) ---

@dataclass(frozen=True)
class ConstTrue(Matcher):
    @property
    def name(self) -> str: return "CONST_TRUE"
    def __call__(self, ctx: Mapping[str, Any]) -> bool: return True
    def __str__(self) -> str: return "CONST_TRUE"

CONST_TRUE = ConstTrue()

# --- Combinador ---

@dataclass(frozen=True)
class All(Matcher):
    """AND con short-circuit."""
    children: Tuple[Matcher, ...]
    @property
    def name(self) -> str: return "ALL"
    def __call__(self, ctx: Mapping[str, Any]) -> bool:
        for ch in self.children:
            if not ch(ctx):  # short-circuit
                return False
        return True
    def __str__(self) -> str:
        return f"ALL({', '.join(str(ch) for ch in self.children)})"

# --- Helpers de compilación ---

def _fold_constants_for_all(children: List[Matcher]) -> Matcher:
    # Eliminar True; sin hijos → True; un único hijo se usa directo
    kept = [ch for ch in children if ch is not CONST_TRUE]
    if not kept:
        return CONST_TRUE
    if len(kept) == 1:
        return kept[0]
    return All(tuple(kept))

def _filter_condition(filters: MatcherFilters, attribute: FilterAttribute) -> dict:
    values = getattr(filters, attribute.value)
    if attribute is FilterAttribute.PLATFORM_VERSION:
        return {"type": "VERSION_IN", "field": attribute.value, "constraints": list(values)}
    return {"type": "BLACK_WHITE_LIST", "field": attribute.value, "tokens": list(values)}

# --- Compilador de entries ---

def compile_entry(filters: MatcherFilters,
                  predicate: Optional[Union[Matcher, PredicateFn]] = None) -> Matcher:
    """
    Compila los filtros (y el predicate opcional) de una entry a un único
    Matcher ejecutable. Orden de evaluación:
      os → platform_family → platform → platform_version → predicate.
    Los atributos ausentes no generan matcher; sin nada que evaluar
    el resultado es CONST_TRUE.
    """
    children: List[Matcher] = [build_matcher(_filter_condition(filters, a)) for a in filters.supplied()]
    if predicate is not None:
        children.append(as_matcher(predicate))
    return _fold_constants_for_all(children)
