"""Identity collaborator interface."""
from .identity import AuthState, Identity, User

__all__ = ["AuthState", "Identity", "User"]
