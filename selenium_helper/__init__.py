"""Selenium helpers for end-to-end testing."""

from .browser_factory import BrowserFactory
from .config import HelperConfig, Timeouts
from .exceptions import (
    AnnotatedError,
    BrowserSetupError,
    HelperError,
    TransientConditionError,
    WaitTimeoutError,
    annotate,
)
from .helper import SeleniumHelper
from .waiter import BoundedWaiter

__all__ = [
    "SeleniumHelper",
    "BoundedWaiter",
    "BrowserFactory",
    "HelperConfig",
    "Timeouts",
    "HelperError",
    "AnnotatedError",
    "WaitTimeoutError",
    "TransientConditionError",
    "BrowserSetupError",
    "annotate",
]
