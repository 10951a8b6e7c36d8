from typing import Any, Dict, List, Tuple

import pytest

from node_map import NodeMap


class RecordingSink:
    """Diagnostic sink that keeps every event in memory."""

    def __init__(self):
        self.events: List[Tuple[str, str, Dict[str, Any]]] = []

    def deprecation(self, message: str, **fields: Any) -> None:
        self.events.append(("deprecation", message, fields))

    def warn(self, message: str, **fields: Any) -> None:
        self.events.append(("warn", message, fields))

    def of_kind(self, kind: str) -> List[Tuple[str, str, Dict[str, Any]]]:
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def node_map(sink):
    return NodeMap(sink=sink, debug=False)
