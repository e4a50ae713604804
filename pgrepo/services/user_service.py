from pgrepo.repositories.user_repository import User, UserRepository


class UserService:
    def __init__(self, repo: UserRepository) -> None:
        self.repo = repo

    def get_user_by_id(self, id: str) -> User | None:
        return self.repo.find_by_id(id)
