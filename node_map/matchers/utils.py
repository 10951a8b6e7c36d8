from collections.abc import Mapping
from typing import Any


def _get_field(ctx: Mapping, path: str) -> Any:
    # Soporta paths simples "platform" o anidados "extra.kernel.machine"
    cur: Any = ctx
    for part in path.split("."):
        if isinstance(cur, Mapping) and part in cur:
            cur = cur[part]
        else:
            return None
    return cur
