from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterator, List, Optional, Tuple, Union

from node_map.compiler import compile_entry
from node_map.context import ensure_ctx
from node_map.diagnostics import DiagnosticSink, LoggerSink
from node_map.dtos import MatcherFilters
from node_map.matchers.base import Matcher
from node_map.matchers.predicate import PredicateFn
from node_map.matchers.trace import EntryTrace
from node_map.utils.constants import DEBUG_MATCHERS, PREDICATE_BONUS, SPECIFICITY_TIERS
from node_map.utils.errors import ConflictingFilterOptions

# ---------------------------------------------------------
# Entries
# ---------------------------------------------------------

@dataclass(frozen=True)
class MapEntry:
    """
    Una registración (key, value): filtros, predicate opcional, valor y flag canonical.
    `matcher` es la versión compilada de filtros + predicate, lista para el hot path.
    """
    filters: MatcherFilters
    predicate: Optional[Union[Matcher, PredicateFn]]
    value: Any
    canonical: Optional[bool]
    matcher: Matcher = field(compare=False, repr=False)

    @property
    def has_predicate(self) -> bool:
        return self.predicate is not None


def specificity(entry: MapEntry) -> int:
    """
    Qué tan específica es una entry: platform_version (8) > platform (6) >
    platform_family (4) > os (2) > nada (0). Un predicate suma 1.
    """
    return _score(entry.filters, entry.has_predicate)


def _score(filters: MatcherFilters, has_predicate: bool) -> int:
    score = 0
    for attribute, base in SPECIFICITY_TIERS:
        if filters.has(attribute):
            score = base
            break
    if has_predicate:
        score += PREDICATE_BONUS
    return score


def _as_list(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]

# ---------------------------------------------------------
# NodeMap
# ---------------------------------------------------------

class NodeMap:
    """
    Registro de valores por key, cada uno custodiado por filtros de nodo
    (os, platform_family, platform, platform_version) y un predicate opcional.

    Para cada key las entries se guardan de la más específica a la menos
    específica; entre iguales gana la más nueva. `get` devuelve la primera
    entry que matchea el nodo, `list` todas en ese orden.

    Contrato de concurrencia: se construye con `set` desde un único hilo
    (típicamente al arrancar) y luego solo se lee. Lecturas concurrentes son
    seguras mientras nadie llame a `set` o `delete_canonical`.
    """

    def __init__(
        self,
        *,
        sink: Optional[DiagnosticSink] = None,
        debug: Optional[bool] = None,
        log: Optional[Callable[[str], None]] = None,
    ):
        self._map: Dict[Hashable, List[MapEntry]] = {}
        self._sink: DiagnosticSink = sink if sink is not None else LoggerSink()
        self._debug = DEBUG_MATCHERS if debug is None else debug
        self._log = log
        self._registrations: Dict[Hashable, int] = {}

    # --- Inserción ---

    def set(
        self,
        key: Hashable,
        value: Any,
        filters: Optional[MatcherFilters] = None,
        *,
        predicate: Optional[Union[Matcher, PredicateFn]] = None,
        canonical: Optional[bool] = None,
        override: bool = False,
        on_platform: Any = None,
        on_platforms: Any = None,
        **filter_options: Any,
    ) -> "NodeMap":
        """
        Registra `value` bajo `key`, custodiado por filtros de nodo.

        Los filtros se pasan como un MatcherFilters o como keywords sueltos
        (platform=, platform_version=, platform_family=, os=), no ambos.
        `on_platform`/`on_platforms` son sinónimos deprecados de `platform`.

        La entry nueva se inserta antes de la primera existente con
        especificidad menor o igual. Si esa entry tiene los mismos filtros,
        misma presencia de predicate y otro valor, y no se pidió `override`,
        se emite un aviso (la inserción se hace igual). Una llamada rechazada
        no emite deprecaciones ni deja la key creada.

        Returns:
            El propio NodeMap, para encadenar llamadas.
        """
        if filters is not None and (filter_options or on_platform is not None or on_platforms is not None):
            raise ConflictingFilterOptions(key=key)
        if filters is None:
            if filter_options.get("platform") is None:
                legacy = on_platform if on_platform is not None else on_platforms
                if legacy is not None:
                    filter_options["platform"] = legacy
            filters = MatcherFilters.model_validate(
                {k: v for k, v in filter_options.items() if v is not None}
            )

        # El registro no se toca hasta tener la entry compilada
        new_score = _score(filters, predicate is not None)
        matcher = compile_entry(filters, predicate)
        if self._debug:
            seq = self._registrations.get(key, 0)
            matcher = EntryTrace(matcher, key, seq, value, new_score, canonical, self._log)
        new_entry = MapEntry(filters=filters, predicate=predicate, value=value, canonical=canonical, matcher=matcher)

        if on_platform is not None:
            self._sink.deprecation("The on_platform option to node_map has been deprecated", key=key, option="on_platform")
        if on_platforms is not None:
            self._sink.deprecation("The on_platforms option to node_map has been deprecated", key=key, option="on_platforms")

        entries = self._map.setdefault(key, [])
        self._registrations[key] = self._registrations.get(key, 0) + 1

        # Inserción posicional: antes de la primera entry con especificidad
        # <= a la nueva (más nueva gana entre iguales); si no hay, al final.
        insert_at: Optional[int] = None
        for index, existing in enumerate(entries):
            if new_score >= specificity(existing):
                if self._is_conflicting(new_entry, existing) and not override:
                    self._sink.warn(
                        f"You are overriding {key} {filters} with {value!r}: used to be {existing.value!r}. "
                        "Use override: true if this is what you intended.",
                        key=key,
                        filters=filters,
                        value=value,
                        previous_value=existing.value,
                    )
                insert_at = index
                break

        if insert_at is None:
            entries.append(new_entry)
        else:
            entries.insert(insert_at, new_entry)
        return self

    @staticmethod
    def _is_conflicting(new_entry: MapEntry, existing: MapEntry) -> bool:
        return (
            new_entry.filters == existing.filters
            and new_entry.has_predicate == existing.has_predicate
            and new_entry.value != existing.value
        )

    # --- Lectura ---

    def get(self, node: Optional[Mapping], key: Hashable, canonical: Optional[bool] = None, default: Any = None) -> Any:
        """
        Valor de la entry de mayor prioridad que matchea `node` (y `canonical`
        si se indica). `node=None` ignora todos los filtros. Si nada matchea
        o la key no existe devuelve `default`.

        Un valor guardado como None es indistinguible de "no encontrado";
        para distinguirlos usar `list`, que devuelve [] solo si nada matchea.
        """
        ensure_ctx(node, key)
        for entry in self._map.get(key, ()):
            if self.node_matches(node, entry) and self.canonical_matches(canonical, entry):
                return entry.value
        return default

    def list(self, node: Optional[Mapping], key: Hashable, canonical: Optional[bool] = None) -> List[Any]:
        """Todos los valores que matchean, de mayor a menor prioridad ([] si no hay)."""
        ensure_ctx(node, key)
        return [
            entry.value
            for entry in self._map.get(key, ())
            if self.node_matches(node, entry) and self.canonical_matches(canonical, entry)
        ]

    @staticmethod
    def node_matches(node: Optional[Mapping], entry: MapEntry) -> bool:
        if node is None:
            return True
        return entry.matcher(node)

    @staticmethod
    def canonical_matches(canonical: Optional[bool], entry: MapEntry) -> bool:
        if canonical is None:
            return True
        return bool(canonical) == bool(entry.canonical)

    # --- Mantenimiento ---

    def delete_canonical(self, key: Hashable, value: Any) -> Optional[List[MapEntry]]:
        """
        Quita las entries canonical de `key` cuyo valor (como lista) es igual a
        `value` (como lista). Si la key queda vacía se elimina y devuelve None;
        si no, devuelve las entries restantes.

        Uso interno: esta API puede cambiar sin aviso.
        """
        remaining = self._map.get(key)
        if remaining is None:
            return None
        target = _as_list(value)
        remaining[:] = [e for e in remaining if not (e.canonical and _as_list(e.value) == target)]
        if not remaining:
            del self._map[key]
            return None
        return list(remaining)

    # --- Accesores ---

    def entries(self, key: Hashable) -> Tuple[MapEntry, ...]:
        return tuple(self._map.get(key, ()))

    def keys(self) -> List[Hashable]:
        return list(self._map.keys())

    def __contains__(self, key: Hashable) -> bool:
        return key in self._map

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.keys())
