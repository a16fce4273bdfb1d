"""Services for the group blueprint."""

from . import roles
from .group_service import GroupService
from .messages import GroupMessageService

__all__ = ["GroupService", "GroupMessageService", "roles"]
