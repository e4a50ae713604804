from typing import Any, Mapping, Sequence

from pgrepo.abstract_syntax_tree.models import (
    ASTNode,
    ColumnOrder,
    CountStatementNode,
    DeleteStatementNode,
    Equals,
    PredicateNode,
    SearchSpec,
    SelectStatementNode,
    UpdateStatementNode,
    UpsertStatementNode,
)
from pgrepo.compiler.compiled_query import CompiledQuery
from pgrepo.compiler.parameters import ParameterBinder
from pgrepo.compiler.predicate_compiler import PredicateCompiler
from pgrepo.errors import CompilationError
from pgrepo.traversal.visitor_pattern import Visitor

# ==================================================
# PostgreSQL Compiler
# ==================================================

class PostgresCompiler(Visitor):
    """
    A visitor that compiles a statement node into a PostgreSQL query string and a list of parameters.
    """

    def __init__(self) -> None:
        self._binder = ParameterBinder()
        self._predicates = PredicateCompiler(self._binder)

    def compile(self, node: ASTNode) -> CompiledQuery:
        """
        The main entry point for compiling a statement node.
        """
        # Fresh binder per statement so placeholders start at $1
        self._binder = ParameterBinder()
        self._predicates = PredicateCompiler(self._binder)
        sql = self.visit(node)
        return CompiledQuery(sql=sql, params=self._binder.params)

    # --------------------------------------------------
    # Statement Nodes
    # --------------------------------------------------

    def visit_SelectStatementNode(self, node: SelectStatementNode) -> str:
        """
        Compiles a SELECT statement, ensuring clauses are in the correct order.
        """
        parts: list[str] = ["SELECT * FROM", node.table]

        where_sql = self._where(node.where)
        if where_sql:
            parts.append(where_sql)

        if node.order:
            parts.append(f"ORDER BY {', '.join(self.visit(item) for item in node.order)}")

        if node.single_row:
            parts.append("LIMIT 1")
            return " ".join(parts)

        if node.offset is not None:
            parts.append(f"OFFSET {self._binder.bind(node.offset)}")
        if node.limit is not None:
            parts.append(f"LIMIT {self._binder.bind(node.limit)}")

        return " ".join(parts)

    def visit_CountStatementNode(self, node: CountStatementNode) -> str:
        parts = ["SELECT COUNT(*) AS cnt FROM", node.table]
        where_sql = self._where(node.where)
        if where_sql:
            parts.append(where_sql)
        return " ".join(parts)

    def visit_UpsertStatementNode(self, node: UpsertStatementNode) -> str:
        """
        Compiles a full-row upsert keyed on the conflict column.
        Columns keep the record's own key order.
        """
        if not node.record:
            raise CompilationError(f"Cannot save an empty record into {node.table}.")

        columns = list(node.record.keys())
        values = [self._binder.bind(node.record[column]) for column in columns]
        excluded = ", ".join(f"{column} = EXCLUDED.{column}" for column in columns)
        return (
            f"INSERT INTO {node.table} ({', '.join(columns)}) VALUES ({', '.join(values)}) "
            f"ON CONFLICT ({node.conflict_column}) DO UPDATE SET {excluded}"
        )

    def visit_UpdateStatementNode(self, node: UpdateStatementNode) -> str:
        """
        Compiles an UPDATE statement. SET entries are sorted by column name.
        """
        if not node.update:
            raise CompilationError(f"Cannot update {node.table} without any columns.")

        sets = ", ".join(
            f"{column} = {self._binder.bind(value)}"
            for column, value in sorted(node.update.items(), key=lambda item: item[0])
        )
        parts = [f"UPDATE {node.table} SET {sets}"]
        where_sql = self._where(node.where)
        if where_sql:
            parts.append(where_sql)
        return " ".join(parts)

    def visit_DeleteStatementNode(self, node: DeleteStatementNode) -> str:
        parts = ["DELETE FROM", node.table]
        where_sql = self._where(node.where)
        if where_sql:
            parts.append(where_sql)
        return " ".join(parts)

    # --------------------------------------------------
    # Clause Nodes
    # --------------------------------------------------

    def visit_ColumnOrder(self, node: ColumnOrder) -> str:
        return f"{node.column} {node.direction.upper()}"

    def _where(self, predicates: Sequence[PredicateNode] | None) -> str:
        fragments = [self._predicates.compile(predicate) for predicate in predicates or ()]
        if not fragments:
            return ""
        return f"WHERE {' AND '.join(fragments)}"


# ==================================================
# Statement Helpers
# ==================================================

def find_one_query(table: str, where: Sequence[PredicateNode] | None = None) -> CompiledQuery:
    return PostgresCompiler().compile(
        SelectStatementNode(table=table, where=tuple(where or ()), single_row=True)
    )

def find_by_id_query(table: str, id: Any) -> CompiledQuery:
    return find_one_query(table, [Equals(column="id", value=id)])

def search_query(table: str, spec: SearchSpec | None = None) -> CompiledQuery:
    spec = spec or SearchSpec()
    return PostgresCompiler().compile(
        SelectStatementNode(
            table=table,
            where=tuple(spec.where or ()),
            order=tuple(spec.order or ()),
            offset=spec.offset,
            limit=spec.limit,
        )
    )

def count_query(table: str, where: Sequence[PredicateNode] | None = None) -> CompiledQuery:
    return PostgresCompiler().compile(CountStatementNode(table=table, where=tuple(where or ())))

def save_query(table: str, record: Mapping[str, Any]) -> CompiledQuery:
    return PostgresCompiler().compile(UpsertStatementNode(table=table, record=record))

def update_query(
    table: str,
    update: Mapping[str, Any],
    where: Sequence[PredicateNode] | None = None,
) -> CompiledQuery:
    return PostgresCompiler().compile(
        UpdateStatementNode(table=table, update=update, where=tuple(where or ()))
    )

def delete_query(table: str, where: Sequence[PredicateNode] | None = None) -> CompiledQuery:
    return PostgresCompiler().compile(DeleteStatementNode(table=table, where=tuple(where or ())))
