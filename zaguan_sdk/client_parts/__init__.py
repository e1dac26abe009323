"""Endpoint mixins composed into :class:`zaguan_sdk.client.ZaguanClient`."""

from .helpers import ZaguanCommonMixin
from .chat_helpers import ZaguanChatMixin
from .account_helpers import ZaguanAccountMixin
from .media_helpers import ZaguanMediaMixin
from .assistant_helpers import ZaguanAssistantMixin
from .job_helpers import ZaguanJobMixin

__all__ = [
    "ZaguanCommonMixin",
    "ZaguanChatMixin",
    "ZaguanAccountMixin",
    "ZaguanMediaMixin",
    "ZaguanAssistantMixin",
    "ZaguanJobMixin",
]
