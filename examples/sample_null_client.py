from pgrepo.client.database_client import DatabaseClient
from pgrepo.repositories.user_repository import Page, User, UserRepository
from pgrepo.services.user_service import UserService


def main() -> None:
    # Raw registry entries: normalized SQL text + params -> canned rows.
    client = DatabaseClient.create_null(
        queries=[
            {
                "query": """
                    SELECT * FROM users
                    WHERE id = $1
                    LIMIT 1
                """,
                "params": ["1"],
                "result": {"rows": [{"id": "1", "name": "Alice"}]},
            }
        ]
    )
    print("stubbed:", client.find_by_id("users", "1"))
    print("unstubbed:", client.find_by_id("users", "2"))

    # Repository-level null construction.
    repo = UserRepository.create_null(
        find_by_id={"1": User(id="1", name="John Doe")},
        search_by_name={"doe": Page(items=(User(id="1", name="John Doe"),), total_count=1)},
    )
    service = UserService(repo=repo)
    print("service:", service.get_user_by_id("1"))
    print("search:", repo.search_by_name("doe"))


if __name__ == "__main__":
    main()
