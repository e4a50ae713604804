from dataclasses import asdict, dataclass
from typing import Any, Mapping

from pgrepo.abstract_syntax_tree.models import ColumnOrder, Equals, SearchSpec, TextSearch
from pgrepo.client.database_client import DatabaseClient

USERS_TABLE = "users"

# ==================================================
# Domain Records
# ==================================================


@dataclass(frozen=True)
class User:
    id: str
    name: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(id=row["id"], name=row["name"])

    def to_record(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Page:
    """
    One page of results plus the number of rows matching the same filter.
    """

    items: tuple[User, ...]
    total_count: int


def _name_filter(name: str) -> list[TextSearch]:
    return [TextSearch(columns=("name",), value=name)]


def _name_search(name: str) -> SearchSpec:
    return SearchSpec(where=_name_filter(name), order=[ColumnOrder(column="id", direction="asc")])


# ==================================================
# User Repository
# ==================================================


class UserRepository:
    """
    Repository for CRUD operations on the users table.
    """

    def __init__(self, table: str, client: DatabaseClient) -> None:
        self.table = table
        self.client = client

    @classmethod
    def create(cls) -> "UserRepository":
        return cls(table=USERS_TABLE, client=DatabaseClient.create())

    @classmethod
    def create_null(
        cls,
        find_by_id: Mapping[str, User] | None = None,
        search_by_name: Mapping[str, Page] | None = None,
    ) -> "UserRepository":
        """
        Builds a repository whose client answers only the given lookups.
        """
        table = USERS_TABLE
        search_by_name = search_by_name or {}
        client = DatabaseClient.create_null(
            find_by_id={table: {id: user.to_record() for id, user in (find_by_id or {}).items()}},
            search={
                table: [
                    {"spec": _name_search(name), "result": [user.to_record() for user in page.items]}
                    for name, page in search_by_name.items()
                ]
            },
            count={
                table: [
                    {"where": _name_filter(name), "result": page.total_count}
                    for name, page in search_by_name.items()
                ]
            },
        )
        return cls(table=table, client=client)

    def find_by_id(self, id: str) -> User | None:
        row = self.client.find_by_id(self.table, id)
        return User.from_row(row) if row is not None else None

    def search_by_name(self, name: str) -> Page:
        rows = self.client.search(self.table, _name_search(name))
        total_count = self.client.count(self.table, _name_filter(name))
        return Page(items=tuple(User.from_row(row) for row in rows), total_count=total_count)

    def save(self, user: User) -> None:
        self.client.save(self.table, user.to_record())

    def delete_by_id(self, id: str) -> None:
        self.client.delete(self.table, where=[Equals(column="id", value=id)])
