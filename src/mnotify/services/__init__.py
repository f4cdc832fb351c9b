"""Resource services built on the shared request pipeline."""

from .account import AccountService
from .base import ResourceService
from .contacts import ContactService
from .groups import GroupService
from .sms import SMSService
from .templates import TemplateService

__all__ = [
    "AccountService",
    "ContactService",
    "GroupService",
    "ResourceService",
    "SMSService",
    "TemplateService",
]
