from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Tuple

from node_map.dtos import FilterToken
from .utils import _get_field
from .base import Matcher, register_matcher

@dataclass(frozen=True)
class BlackWhiteList(Matcher):
    """
    Matcher que valida un atributo del contexto (`ctx`) contra una blacklist
    (tokens negados "!valor") y una whitelist (tokens planos y/o ":all").

    Reglas:
    - Si el valor del ctx está en la blacklist → False, sin importar el resto.
    - Si la whitelist está vacía, o contiene ":all", o contiene el valor → True.
    - En otro caso → False.

    Ejemplo de configuración:
    -------------------------
    {
      "type": "BLACK_WHITE_LIST",
      "field": "platform",
      "tokens": [":all", "!windows"]
    }

    Ejemplo de uso:
    ---------------
    ctx = {"platform": "ubuntu"}  → True
    ctx = {"platform": "windows"} → False
    """

    # Atributo del ctx a validar
    field: str

    # Valores excluidos (ya sin el prefijo "!")
    blacklist: Tuple[Any, ...]

    # Valores permitidos explícitamente (sin ":all")
    whitelist: Tuple[Any, ...]

    # True si la whitelist incluía el comodín ":all"
    match_all: bool = False

    @property
    def name(self) -> str: return "BLACK_WHITE_LIST"

    def __call__(self, ctx: Mapping) -> bool:
        # Tuplas y no frozensets: los valores del ctx pueden no ser hashables
        v = _get_field(ctx, self.field)
        if v in self.blacklist:
            return False
        if self.match_all or not self.whitelist:
            return True
        return v in self.whitelist

    def __str__(self) -> str:
        return f"BLACK_WHITE_LIST(field={self.field}, blacklist={self.blacklist}, whitelist={self.whitelist}, match_all={self.match_all})"

@register_matcher("BLACK_WHITE_LIST", "v1")
def make_black_white_list(cond: dict) -> Matcher:
    field = cond.get("field")
    tokens = cond.get("tokens", [])
    if not isinstance(field, str) or not isinstance(tokens, (list, tuple)):
        raise ValueError("BLACK_WHITE_LIST: field str y tokens list requeridos")
    parsed = [FilterToken.parse(t) for t in tokens]
    blacklist = tuple(t.value for t in parsed if t.negated)
    whitelist = tuple(t.value for t in parsed if not t.negated and not t.is_wildcard)
    match_all = any(t.is_wildcard for t in parsed)
    return BlackWhiteList(field=field, blacklist=blacklist, whitelist=whitelist, match_all=match_all)
