"""Chained environments binding identifier nodes to value nodes."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from tyke.ast_nodes import Node, NodeType, compare

log = logging.getLogger(__name__)


class SetResult(Enum):
    FAILED = auto()
    CREATED = auto()
    OVERWROTE = auto()


@dataclass
class Binding:
    id: Node
    value: Node


class Environment:
    """An ordered list of bindings with an optional parent environment.

    Newest bindings sit at the front. Identifiers are unique within one
    environment, so the first match is the only match.
    """

    def __init__(self, parent: Environment | None = None) -> None:
        self.parent = parent
        self.bindings: list[Binding] = []

    def __len__(self) -> int:
        return len(self.bindings)

    def __iter__(self) -> Iterator[Binding]:
        return iter(self.bindings)

    def child(self) -> Environment:
        return Environment(parent=self)

    def set(self, id: Node, value: Node) -> SetResult:
        """Bind ``id`` to ``value``, overwriting an existing binding of ``id``."""
        if id.node_type == NodeType.NONE and value.node_type == NodeType.NONE:
            return SetResult.FAILED
        for binding in self.bindings:
            if compare(binding.id, id):
                log.debug("overwriting binding for %s", id.label())
                binding.value = value
                return SetResult.OVERWROTE
        self.bindings.insert(0, Binding(id, value))
        return SetResult.CREATED

    def get(self, id: Node) -> Node | None:
        """Look up ``id`` in this environment only (not parents)."""
        for binding in self.bindings:
            if compare(binding.id, id):
                return binding.value
        return None

    def lookup(self, id: Node) -> Node | None:
        """Look up ``id`` in this environment and all parent environments."""
        value = self.get(id)
        if value is not None:
            return value
        if self.parent is not None:
            return self.parent.lookup(id)
        return None
