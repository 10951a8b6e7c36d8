__version__ = "0.1.0"

from node_map.context import NodeCtx, make_ctx
from node_map.diagnostics import DiagnosticSink, LoggerSink
from node_map.dtos import FilterToken, MatcherFilters
from node_map.node_map import MapEntry, NodeMap, specificity
from node_map.utils.errors import (
    ConflictingFilterOptions,
    InvalidNodeContext,
    InvalidPlatformVersion,
    InvalidVersionConstraint,
    NodeMapException,
)

__all__ = [
    "__version__",
    "NodeMap",
    "MapEntry",
    "specificity",
    "MatcherFilters",
    "FilterToken",
    "NodeCtx",
    "make_ctx",
    "DiagnosticSink",
    "LoggerSink",
    "NodeMapException",
    "InvalidNodeContext",
    "ConflictingFilterOptions",
    "InvalidVersionConstraint",
    "InvalidPlatformVersion",
]
