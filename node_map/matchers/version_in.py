from collections.abc import Mapping
from dataclasses import dataclass
from typing import Tuple

from node_map.version_constraint import version_includes

from .utils import _get_field

from .base import Matcher, register_matcher

@dataclass(frozen=True)
class VersionIn(Matcher):
    """
    Matcher que valida que la versión de plataforma del contexto (`ctx`)
    caiga dentro de al menos uno de los rangos configurados.

    Características:
    - Sin constraints (tupla vacía) siempre matchea.
    - Los constraints se parsean al evaluar (con cache), de modo que un
      constraint o una versión inválidos fallan en el lookup, no al registrar.
    - Un ctx sin versión falla con InvalidPlatformVersion si hay constraints.

    Ejemplos de configuración:
    --------------------------
    1) Ubuntu 14.04 en adelante:
        {
          "type": "VERSION_IN",
          "field": "platform_version",
          "constraints": [">= 14.04"]
        }

    2) Cualquier 6.x o exactamente 7.0:
        {
          "type": "VERSION_IN",
          "field": "platform_version",
          "constraints": ["~> 6.0", "7.0"]
        }
    """
    # Nombre del campo en el ctx del que se obtiene la versión
    field: str

    # Rangos como strings ("<op> x.y.z" o "x.y.z")
    constraints: Tuple[str, ...]

    @property
    def name(self) -> str:
        return "VERSION_IN"

    def __call__(self, ctx: Mapping) -> bool:
        if not self.constraints:
            return True
        value = _get_field(ctx, self.field)
        return any(version_includes(c, value) for c in self.constraints)

    def __str__(self) -> str:
        return f"VERSION_IN(field={self.field}, constraints={self.constraints})"

@register_matcher("VERSION_IN", "v1")
def make_version_in(cond: dict) -> Matcher:
    field = cond.get("field", "platform_version")
    if not isinstance(field, str):
        raise ValueError("VERSION_IN.field debe ser string.")

    constraints = cond.get("constraints", [])
    if isinstance(constraints, str):
        constraints = [constraints]
    if not isinstance(constraints, (list, tuple)):
        raise ValueError("VERSION_IN.constraints debe ser lista de strings.")

    return VersionIn(field=field, constraints=tuple(str(c) for c in constraints))
