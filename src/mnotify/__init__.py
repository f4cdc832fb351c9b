"""Python client for the mNotify bulk messaging API."""

import importlib.metadata
import logging

from mnotify.client import HttpClient
from mnotify.config import FrozenConfig, ResolvedConfig, resolve_config
from mnotify.core.exceptions import (
    ConfigurationError,
    ErrorContext,
    FieldValidationError,
    MNotifyError,
    UnwrapError,
    annotate_result_error,
)
from mnotify.core.models import (
    BalanceResponse,
    Contact,
    CreateContactInput,
    DeliveryReport,
    DeliveryReportEntry,
    Group,
    SenderId,
    SendSMSOptions,
    SendSMSResponse,
    SendSMSSummary,
    StatusResponse,
    Template,
)
from mnotify.core.types import (
    Failure,
    RequestDescriptor,
    Result,
    Success,
    combine,
    err,
    ok,
    try_catch,
    try_catch_async,
)
from mnotify.sdk import MNotify, create_client
from mnotify.telemetry import MemoryReporter, TelemetryContext, TelemetryReporter

# Version handling
try:
    __version__ = importlib.metadata.version("mnotify-sdk")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Set up a null handler for the library's root logger.
# This prevents 'No handler found' errors if the consuming app has no logging configured.
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Public API
__all__ = [  # noqa: RUF022
    # Client
    "MNotify",
    "create_client",
    "HttpClient",
    # Configuration
    "resolve_config",
    "FrozenConfig",
    "ResolvedConfig",
    # Telemetry (extension points)
    "TelemetryContext",
    "TelemetryReporter",
    "MemoryReporter",
    # Result type
    "Result",
    "Success",
    "Failure",
    "ok",
    "err",
    "try_catch",
    "try_catch_async",
    "combine",
    "RequestDescriptor",
    # Domain records
    "SendSMSOptions",
    "SendSMSResponse",
    "SendSMSSummary",
    "DeliveryReport",
    "DeliveryReportEntry",
    "Contact",
    "CreateContactInput",
    "Group",
    "Template",
    "SenderId",
    "BalanceResponse",
    "StatusResponse",
    # Exceptions
    "MNotifyError",
    "ErrorContext",
    "annotate_result_error",
    "ConfigurationError",
    "FieldValidationError",
    "UnwrapError",
]
