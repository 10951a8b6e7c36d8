from enum import Enum
from typing import Tuple


class FilterAttribute(str, Enum):
    OS = "os"
    PLATFORM_FAMILY = "platform_family"
    PLATFORM = "platform"
    PLATFORM_VERSION = "platform_version"

    @classmethod
    def black_white_list(cls) -> Tuple["FilterAttribute", ...]:
        """Atributos con semántica blacklist/whitelist, en orden de evaluación."""
        return (cls.OS, cls.PLATFORM_FAMILY, cls.PLATFORM)

    @classmethod
    def evaluation_order(cls) -> Tuple["FilterAttribute", ...]:
        return cls.black_white_list() + (cls.PLATFORM_VERSION,)


class VersionOperator(str, Enum):
    LT = "<"
    GT = ">"
    EQ = "="
    LE = "<="
    GE = ">="
    PESSIMISTIC = "~>"

    @classmethod
    def from_string(cls, value: str) -> "VersionOperator":
        for member in cls:
            if member.value == value:
                return member
        raise ValueError(f"Operador de versión desconocido: {value!r}")


class DiagnosticEvent(str, Enum):
    DEPRECATION = "deprecation"
    OVERRIDE = "override"
