"""Bounded polling of conditions against the browser."""

import logging
import time
from typing import Any, Callable, Optional, Tuple, Type

from selenium.common.exceptions import ElementClickInterceptedException, NoSuchElementException, TimeoutException
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.support.ui import WebDriverWait

from .config import Timeouts
from .exceptions import TransientConditionError, WaitTimeoutError

logger = logging.getLogger(__name__)

# Raised while the page is still settling: the element isn't there yet, or
# something (usually the loading screen) sits in front of it.
TRANSIENT_EXCEPTIONS: Tuple[Type[BaseException], ...] = (
    TransientConditionError,
    NoSuchElementException,
    ElementClickInterceptedException,
)


class BoundedWaiter:
    """Poll a condition through WebDriverWait until it produces a truthy value."""

    def __init__(
        self,
        timeout: float = Timeouts.DEFAULT_WAIT,
        poll_interval: float = Timeouts.POLL_INTERVAL,
        transient_exceptions: Tuple[Type[BaseException], ...] = TRANSIENT_EXCEPTIONS,
    ):
        """
        Initialize waiter.

        Args:
            timeout: Default deadline in seconds for each wait
            poll_interval: Pause between evaluations in seconds
            transient_exceptions: Exceptions that mean "not ready yet".
                WebDriverWait always adds NoSuchElementException.
        """
        if timeout < 0:
            raise ValueError(f"timeout must not be negative: {timeout}")
        if poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive: {poll_interval}")
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.transient_exceptions = (NoSuchElementException, *transient_exceptions)

    def wait(self, condition: Callable[[], Any], timeout: Optional[float] = None, description: str = "for condition") -> Any:
        """
        Evaluate condition until it returns a truthy value.

        The condition is always evaluated at least once. Transient exceptions
        count as a pending result; any other exception propagates at once.

        Args:
            condition: Zero-argument callable to poll
            timeout: Deadline in seconds (default: the waiter's timeout)
            description: What is being waited for, used in the timeout message

        Returns:
            The first truthy value produced by condition

        Raises:
            WaitTimeoutError: If no truthy value was produced in time
        """
        return self._poll(None, lambda _: condition(), timeout, description)

    def until(
        self,
        driver: WebDriver,
        expected_condition: Callable[[WebDriver], Any],
        timeout: Optional[float] = None,
        description: str = "for condition",
    ) -> Any:
        """Wait on a selenium expected condition, which takes the driver as argument."""
        return self._poll(driver, expected_condition, timeout, description)

    def _poll(self, driver: Optional[WebDriver], method: Callable[[Any], Any], timeout: Optional[float], description: str) -> Any:
        if timeout is None:
            timeout = self.timeout
        if timeout < 0:
            raise ValueError(f"timeout must not be negative: {timeout}")

        last_error: Optional[BaseException] = None
        attempt = 0

        def evaluate(d):
            nonlocal last_error, attempt
            attempt += 1
            try:
                return method(d)
            except self.transient_exceptions as e:
                logger.debug(f"Attempt {attempt} waiting {description} not ready: {type(e).__name__}")
                last_error = e
                raise

        start = time.monotonic()
        wait = WebDriverWait(driver, timeout, poll_frequency=self.poll_interval, ignored_exceptions=self.transient_exceptions)
        try:
            return wait.until(evaluate)
        except TimeoutException as e:
            elapsed = time.monotonic() - start
            raise WaitTimeoutError(description, elapsed, timeout) from (last_error or e)
