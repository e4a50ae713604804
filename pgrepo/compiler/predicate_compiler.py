from typing import Any

from pgrepo.abstract_syntax_tree.models import (
    ArrayContains,
    Equals,
    In,
    NotIn,
    TextSearch,
)
from pgrepo.compiler.parameters import ParameterBinder
from pgrepo.errors import CompilationError, UnsupportedPredicateError
from pgrepo.traversal.visitor_pattern import Visitor

# ==================================================
# Predicate Compiler
# ==================================================

class PredicateCompiler(Visitor):
    """
    Compiles a single predicate into a SQL boolean fragment.
    Literal values are bound through the shared ParameterBinder.
    """

    def __init__(self, binder: ParameterBinder) -> None:
        self.binder = binder

    def compile(self, predicate: Any) -> str:
        return self.visit(predicate)

    def generic_visit(self, node: Any) -> str:
        raise UnsupportedPredicateError(node)

    def visit_Equals(self, node: Equals) -> str:
        if node.value is None:
            return f"{node.column} IS NULL"
        return f"{node.column} = {self.binder.bind(node.value)}"

    def visit_In(self, node: In) -> str:
        # An empty list stays as `IN ()` so it still matches nothing.
        placeholders = [self.binder.bind(v) for v in node.values]
        return f"{node.column} IN ({', '.join(placeholders)})"

    def visit_NotIn(self, node: NotIn) -> str:
        placeholders = [self.binder.bind(v) for v in node.values]
        return f"{node.column} NOT IN ({', '.join(placeholders)})"

    def visit_ArrayContains(self, node: ArrayContains) -> str:
        return f"{self.binder.bind(node.value)} = ANY({node.column})"

    def visit_TextSearch(self, node: TextSearch) -> str:
        if not node.columns:
            raise CompilationError("TextSearch requires at least one column.")

        placeholder = self.binder.bind(f"%{node.value}%")
        conditions = [f"{column} ILIKE {placeholder}" for column in node.columns]
        if len(conditions) > 1:
            return f"({' OR '.join(conditions)})"
        return conditions[0]
