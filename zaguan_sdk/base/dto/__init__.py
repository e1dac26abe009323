"""DTO validation package for outbound requests."""

from .chat import Role, MessageDTO, ChatRequestDTO

__all__ = [
    "Role",
    "MessageDTO",
    "ChatRequestDTO",
]
