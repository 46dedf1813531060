"""Environments that persist across one parse."""

from __future__ import annotations

from tyke.ast_nodes import Integer, Node, Symbol
from tyke.environment import Environment, SetResult
from tyke.errors import ErrorKind, error

# Builtin type names and the placeholder node carrying each type's tag.
BUILTIN_TYPES = {
    "integer": Integer,
}


class ParsingContext:
    """Owns the ``types`` registry and the ``variables`` scope."""

    def __init__(self) -> None:
        self.types = Environment()
        self.variables = Environment()
        for name, node_class in BUILTIN_TYPES.items():
            if self.types.set(Symbol(name), node_class()) is SetResult.FAILED:
                raise error(
                    ErrorKind.GENERIC,
                    f"failed to register builtin type '{name}'",
                )

    def resolve_type(self, name: str) -> Node | None:
        """The placeholder node for type ``name``, or None."""
        return self.types.get(Symbol(name))

    def declared_type(self, name: str) -> Node | None:
        """The type node recorded for variable ``name``, or None."""
        return self.variables.get(Symbol(name))

    def type_name(self, type_node: Node) -> str | None:
        """The registered name of the type whose tag ``type_node`` carries."""
        for binding in self.types:
            if binding.value.node_type == type_node.node_type and isinstance(binding.id, Symbol):
                return binding.id.name
        return None
