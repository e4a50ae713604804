from pgrepo.abstract_syntax_tree.models import Equals
from pgrepo.client.database_client import DatabaseClient
from pgrepo.execution.observability import InMemoryChangeRecorder
from pgrepo.repositories.user_repository import Page, User, UserRepository
from pgrepo.services.user_service import UserService


def test_user_row_mapping():
    user = User.from_row({"id": "1", "name": "John Doe", "email": "ignored"})
    assert user == User(id="1", name="John Doe")
    assert user.to_record() == {"id": "1", "name": "John Doe"}


def test_find_by_id_with_null_client():
    user = User(id="1", name="John Doe")
    repo = UserRepository(
        table="users",
        client=DatabaseClient.create_null(find_by_id={"users": {user.id: user.to_record()}}),
    )

    assert repo.find_by_id("1") == user
    assert repo.find_by_id("2") is None


def test_create_null_find_by_id():
    repo = UserRepository.create_null(find_by_id={"1": User(id="1", name="John Doe")})
    assert repo.find_by_id("1") == User(id="1", name="John Doe")


def test_create_null_search_by_name():
    page = Page(items=(User(id="1", name="John Doe"), User(id="2", name="Jane Doe")), total_count=7)
    repo = UserRepository.create_null(search_by_name={"doe": page})

    assert repo.search_by_name("doe") == page
    assert repo.search_by_name("smith") == Page(items=(), total_count=0)


def test_search_by_name_counts_with_the_same_filter():
    client = DatabaseClient.create_null()
    repo = UserRepository(table="users", client=client)

    repo.search_by_name("doe")

    calls = client.provider.calls
    assert [(c.sql, c.params) for c in calls] == [
        ("SELECT * FROM users WHERE name ILIKE $1 ORDER BY id ASC", ("%doe%",)),
        ("SELECT COUNT(*) AS cnt FROM users WHERE name ILIKE $1", ("%doe%",)),
    ]


def test_save_and_delete_go_through_the_client():
    client = DatabaseClient.create_null()
    recorder = InMemoryChangeRecorder()
    client.subscribe(recorder)
    repo = UserRepository(table="accounts", client=client)

    repo.save(User(id="1", name="John Doe"))
    repo.delete_by_id("1")

    assert [c.sql for c in client.provider.calls] == [
        "INSERT INTO accounts (id, name) VALUES ($1, $2) "
        "ON CONFLICT (id) DO UPDATE SET id = EXCLUDED.id, name = EXCLUDED.name",
        "DELETE FROM accounts WHERE id = $1",
    ]
    saved, deleted = recorder.events
    assert saved.payload == {"id": "1", "name": "John Doe"}
    assert deleted.payload == {"where": (Equals(column="id", value="1"),)}


def test_user_service_get_user_by_id():
    repo = UserRepository.create_null(find_by_id={"1": User(id="1", name="John Doe")})
    service = UserService(repo=repo)

    assert service.get_user_by_id("1") == User(id="1", name="John Doe")
    assert service.get_user_by_id("2") is None
