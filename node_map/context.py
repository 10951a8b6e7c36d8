from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, TypedDict
from typing_extensions import NotRequired # Not available in 'typing' module for Python < 3.11

from node_map.utils.errors import InvalidNodeContext


class NodeCtx(TypedDict, total=False):
    """
    Contexto tipado del nodo que consumen los matchers y el NodeMap.
    Todos los campos son opcionales; un atributo ausente se lee como None.
    Cualquier Mapping sirve como contexto, este TypedDict es la forma usual.
    """
    os: NotRequired[str]                  # "linux", "windows", "darwin", ...
    platform_family: NotRequired[str]     # "debian", "rhel", ...
    platform: NotRequired[str]            # "ubuntu", "centos", ...
    platform_version: NotRequired[str]    # "16.04", "7.4.1708", ...
    # libre para extensiones (los predicates pueden leer "extra.<campo>")
    extra: NotRequired[Dict[str, Any]]


def make_ctx(
    *,
    os: Optional[str] = None,
    platform_family: Optional[str] = None,
    platform: Optional[str] = None,
    platform_version: Optional[str] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> NodeCtx:
    ctx: NodeCtx = {}
    if os is not None: ctx["os"] = os
    if platform_family is not None: ctx["platform_family"] = platform_family
    if platform is not None: ctx["platform"] = platform
    if platform_version is not None: ctx["platform_version"] = str(platform_version)
    if extra is not None: ctx["extra"] = extra
    return ctx


def is_node_ctx(node: Any) -> bool:
    return isinstance(node, Mapping)


def ensure_ctx(node: Any, key: Any = None) -> Optional[Mapping]:
    """Devuelve el nodo si es None o un Mapping; si no, InvalidNodeContext."""
    if node is None or is_node_ctx(node):
        return node
    raise InvalidNodeContext(node, key)
