from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

from node_map.matchers.base import Matcher
from node_map.utils.enumerators import FilterAttribute
from node_map.utils.logs import get_logger

logger = get_logger("matchers.trace")

TraceFn = Callable[[str], None]


def _node_attributes(ctx: Mapping) -> Dict[str, Any]:
    # Solo los atributos que leen los filtros, nunca el nodo completo
    return {a.value: ctx.get(a.value) for a in FilterAttribute.evaluation_order()}


@dataclass(frozen=True)
class EntryTrace(Matcher):
    """
    Matcher de una entry registrada en NodeMap que deja rastro de cada
    evaluación: key, número de registración, valor, especificidad, flag
    canonical, los atributos del nodo evaluado y si la entry matcheó.

    Se activa con NodeMap(debug=True) o NODE_MAP_DEBUG_MATCHERS=1.
    """
    inner: Matcher
    key: Hashable
    seq: int                         # n-ésimo `set` sobre esta key
    value: Any
    specificity: int
    canonical: Optional[bool] = None
    log: Optional[TraceFn] = None    # sin log va al logger del paquete

    @property
    def name(self) -> str:
        return f"TRACE({self.inner.name})"

    def __call__(self, ctx: Mapping[str, Any]) -> bool:
        matched = self.inner(ctx)
        node = _node_attributes(ctx)
        if self.log:
            self.log(
                f"[node-map-trace] key={self.key} seq={self.seq} value={self.value!r} "
                f"specificity={self.specificity} canonical={self.canonical} "
                f"node={node} matched={matched}"
            )
        else:
            logger.debug(
                f"entry {self.key}#{self.seq} matched={matched}",
                extra={
                    "key": self.key,
                    "seq": self.seq,
                    "value": repr(self.value),
                    "specificity": self.specificity,
                    "canonical": self.canonical,
                    "node": node,
                    "matched": matched,
                },
            )
        return matched

    def __str__(self) -> str:
        return f"TRACE(key={self.key}, seq={self.seq}, inner={self.inner})"
