from dotenv import load_dotenv
import logging

from pgrepo.abstract_syntax_tree.models import ArrayContains, ColumnOrder, SearchSpec
from pgrepo.client.database_client import DatabaseClient
from pgrepo.config import DatabaseSettings

def main():
    # Load environment variables from .env file
    load_dotenv()
    logging.basicConfig(level=logging.DEBUG)

    # DATABASE_URL, or DB_HOST / DB_PORT / DB_NAME / DB_USER / DB_PASSWORD
    client = DatabaseClient.create(settings=DatabaseSettings.from_env(load_dotenv_file=False))

    print("Saving users into 'sample_users'...")
    client.save("sample_users", {"id": "1", "name": "Alice", "roles": ["admin", "user"]})
    client.save("sample_users", {"id": "2", "name": "Bob", "roles": ["user"]})

    admins = client.search(
        "sample_users",
        SearchSpec(
            where=[ArrayContains(column="roles", value="admin")],
            order=[ColumnOrder(column="id", direction="asc")],
        ),
    )
    print("Admins:", admins)
    print("Total users:", client.count("sample_users"))

if __name__ == "__main__":
    main()
