import os

from .enumerators import FilterAttribute

LOG_SOURCE = "node_map"

# Nivel de los loggers del paquete (DEBUG/INFO/WARNING/ERROR/CRITICAL)
LOG_LEVEL: str = os.getenv("NODE_MAP_LOG_LEVEL", "INFO").upper()

# Si está activo, cada entry registrada deja un rastro (EntryTrace) al evaluarse
DEBUG_MATCHERS: bool = os.getenv("NODE_MAP_DEBUG_MATCHERS", "").strip().lower() in ("1", "true", "yes")

# Tokens especiales de los filtros black/white list
ALL_TOKEN = ":all"
NEGATION_PREFIX = "!"

# (atributo, puntaje base) en orden de prioridad: gana el primero presente
SPECIFICITY_TIERS = (
    (FilterAttribute.PLATFORM_VERSION, 8),
    (FilterAttribute.PLATFORM, 6),
    (FilterAttribute.PLATFORM_FAMILY, 4),
    (FilterAttribute.OS, 2),
)
PREDICATE_BONUS = 1
