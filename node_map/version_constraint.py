from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache, total_ordering
from typing import Any, Tuple

from node_map.utils.enumerators import VersionOperator
from node_map.utils.errors import InvalidPlatformVersion, InvalidVersionConstraint

# ---------------------------
# Versiones de plataforma
# ---------------------------

_FULL = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
_MAJOR_MINOR = re.compile(r"^(\d+)\.(\d+)$")
_MAJOR = re.compile(r"^(\d+)$")
# FreeBSD ("10.3-RELEASE-p4") y Windows ("6.3R2", "2012.R2") solo aportan major.minor
_SUFFIXED = re.compile(r"^(\d+)\.(\d+)[.-]?[A-Za-z]+[\w.-]*$")

_CONSTRAINT = re.compile(r"^(<=|>=|~>|<|>|=) *([0-9].*)$")


@total_ordering
@dataclass(frozen=True)
class PlatformVersion:
    """Versión x.y.z comparable por componentes enteros (no lexicográfico)."""
    major: int
    minor: int = 0
    patch: int = 0

    @classmethod
    def parse(cls, raw: Any) -> "PlatformVersion":
        if raw is None:
            raise InvalidPlatformVersion(raw, "El contexto no define platform_version")
        return _parse_version(str(raw).strip())

    @property
    def parts(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __lt__(self, other: "PlatformVersion") -> bool:
        return self.parts < other.parts

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@lru_cache(maxsize=256)
def _parse_version(text: str) -> PlatformVersion:
    for pattern in (_FULL, _MAJOR_MINOR, _MAJOR):
        m = pattern.match(text)
        if m:
            return PlatformVersion(*(int(g) for g in m.groups()))
    m = _SUFFIXED.match(text)
    if m:
        return PlatformVersion(int(m.group(1)), int(m.group(2)))
    raise InvalidPlatformVersion(text)


# ---------------------------
# Constraints
# ---------------------------

@dataclass(frozen=True)
class PlatformVersionConstraint:
    """
    Rango de versiones de plataforma, p.ej. ">= 14.04", "~> 7.2", "16.04".

    - Una versión sola implica "=".
    - "~>" es pesimista: con dos componentes o menos ("~> 7", "~> 7.2") exige
      mismo major y minor >= al del constraint; con tres ("~> 7.2.1") exige
      mismo major.minor y patch >= al del constraint.
    """
    op: VersionOperator
    version: PlatformVersion
    missing_patch_level: bool = False

    @classmethod
    def parse(cls, raw: str) -> "PlatformVersionConstraint":
        return _parse_constraint(str(raw).strip())

    def includes(self, value: Any) -> bool:
        other = PlatformVersion.parse(value)
        if self.op is VersionOperator.PESSIMISTIC:
            if self.missing_patch_level:
                return other.major == self.version.major and other.minor >= self.version.minor
            return (other.major, other.minor) == (self.version.major, self.version.minor) \
                and other.patch >= self.version.patch
        if self.op is VersionOperator.EQ:
            return other == self.version
        if self.op is VersionOperator.LT:
            return other < self.version
        if self.op is VersionOperator.GT:
            return other > self.version
        if self.op is VersionOperator.LE:
            return other <= self.version
        return other >= self.version

    def __str__(self) -> str:
        return f"{self.op.value} {self.version}"


@lru_cache(maxsize=256)
def _parse_constraint(text: str) -> PlatformVersionConstraint:
    if " " not in text and text[:1].isdigit():
        return PlatformVersionConstraint(VersionOperator.EQ, _parse_version(text))
    m = _CONSTRAINT.match(text)
    if not m:
        raise InvalidVersionConstraint(text)
    raw_version = m.group(2).strip()
    return PlatformVersionConstraint(
        op=VersionOperator.from_string(m.group(1)),
        version=_parse_version(raw_version),
        missing_patch_level=len(raw_version.split(".")) <= 2,
    )


def version_includes(constraint: str, value: Any) -> bool:
    """True si `value` cae dentro de `constraint`. Errores de parseo se propagan."""
    return PlatformVersionConstraint.parse(constraint).includes(value)
