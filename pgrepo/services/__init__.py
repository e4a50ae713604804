from pgrepo.services.user_service import UserService

__all__ = ["UserService"]
