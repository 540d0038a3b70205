from app.services.auth.user_directory import DEMO_USERS, UserDirectory

__all__ = ["DEMO_USERS", "UserDirectory"]
