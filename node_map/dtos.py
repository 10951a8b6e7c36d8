from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator

from node_map.utils.constants import ALL_TOKEN, NEGATION_PREFIX
from node_map.utils.enumerators import FilterAttribute


def _as_sequence(raw: Any) -> Any:
    # Un escalar se normaliza a lista de un elemento
    if raw is None:
        return None
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [raw]


class FilterToken(BaseModel):
    """
    Token de un filtro black/white list, ya clasificado al construirse.

    - "!ubuntu"  → FilterToken(negated=True, value="ubuntu")
    - ":all"     → comodín (no negado)
    - "ubuntu"   → FilterToken(negated=False, value="ubuntu")

    Solo los strings con prefijo "!" se consideran negados; cualquier otro
    valor se compara por igualdad tal cual.
    """
    model_config = ConfigDict(frozen=True)
    negated: bool = False
    value: Any

    @classmethod
    def parse(cls, raw: Any) -> "FilterToken":
        if isinstance(raw, FilterToken):
            return raw
        if isinstance(raw, str) and raw.startswith(NEGATION_PREFIX):
            return cls(negated=True, value=raw[len(NEGATION_PREFIX):])
        return cls(negated=False, value=raw)

    @property
    def is_wildcard(self) -> bool:
        return not self.negated and self.value == ALL_TOKEN

    def __str__(self) -> str:
        return f"{NEGATION_PREFIX}{self.value}" if self.negated else str(self.value)


class MatcherFilters(BaseModel):
    """
    Filtros de atributos de una entry del NodeMap.

    Un atributo en None significa "no restringido". Los atributos presentes
    se guardan siempre como tuplas (un escalar se normaliza a tupla de uno).
    Nombres de filtro desconocidos se rechazan al construir.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    os: Optional[Tuple[FilterToken, ...]] = None
    platform_family: Optional[Tuple[FilterToken, ...]] = None
    platform: Optional[Tuple[FilterToken, ...]] = None
    platform_version: Optional[Tuple[str, ...]] = None

    @field_validator("os", "platform_family", "platform", mode="before")
    @classmethod
    def _parse_tokens(cls, raw: Any) -> Any:
        values = _as_sequence(raw)
        if values is None:
            return None
        return tuple(FilterToken.parse(v) for v in values)

    @field_validator("platform_version", mode="before")
    @classmethod
    def _parse_versions(cls, raw: Any) -> Any:
        values = _as_sequence(raw)
        if values is None:
            return None
        return tuple(str(v) for v in values)

    def supplied(self) -> Tuple[FilterAttribute, ...]:
        """Atributos efectivamente presentes, en orden de evaluación."""
        return tuple(a for a in FilterAttribute.evaluation_order() if getattr(self, a.value) is not None)

    def has(self, attribute: FilterAttribute) -> bool:
        return getattr(self, attribute.value) is not None

    def to_json(self):
        return self.model_dump_json(exclude_none=True)

    def __str__(self) -> str:
        parts = []
        for attribute in self.supplied():
            values = getattr(self, attribute.value)
            parts.append(f"{attribute.value}=[{', '.join(str(v) for v in values)}]")
        return "{" + ", ".join(parts) + "}"
