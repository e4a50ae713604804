from pgrepo.abstract_syntax_tree.models import ColumnOrder, Equals, SearchSpec, TextSearch
from pgrepo.compiler.postgres.postgres_compiler import search_query

def main():
    """
    Example usage of the query builder.
    """
    query = search_query(
        "users",
        SearchSpec(
            where=[Equals(column="status", value="active"), TextSearch(columns=["name", "email"], value="doe")],
            order=[ColumnOrder(column="id", direction="asc")],
            limit=10,
        ),
    )
    print(query)

if __name__ == "__main__":
    main()
