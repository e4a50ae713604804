from pgrepo.repositories.user_repository import USERS_TABLE, Page, User, UserRepository

__all__ = ["USERS_TABLE", "Page", "User", "UserRepository"]
