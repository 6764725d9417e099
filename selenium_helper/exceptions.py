"""Custom exceptions for the selenium helper."""

from contextlib import contextmanager
from typing import Iterator, Optional


class HelperError(Exception):
    """Base exception for all helper failures."""

    pass


class BrowserSetupError(HelperError):
    """Browser initialization failed."""

    pass


class TransientConditionError(HelperError):
    """Condition is not ready yet; the waiter keeps polling."""

    pass


class WaitTimeoutError(HelperError, TimeoutError):
    """Condition was not satisfied before the deadline."""

    def __init__(self, description: str, elapsed: float, timeout: float):
        self.description = description
        self.elapsed = elapsed
        self.timeout = timeout
        super().__init__(f"Wait timed out after {elapsed:.3f} seconds (limit {timeout} seconds) waiting {description}")

    def __reduce__(self):
        return (self.__class__, (self.description, self.elapsed, self.timeout))


class AnnotatedError(HelperError):
    """
    Failure of a high-level operation with the lower-level error embedded.

    The description names the operation and its arguments. The cause is kept
    as a field and also chained as ``__cause__``; the two are only joined into
    one message when the error is rendered.
    """

    def __init__(self, description: str, cause: Optional[BaseException] = None):
        self.description = description
        self.cause = cause
        super().__init__(description)

    def __str__(self) -> str:
        return format_cause_chain(self.description, self.cause)


def format_cause_chain(description: str, cause: Optional[BaseException]) -> str:
    """
    Append the cause's message to a description.

    Each line of the cause's message is indented under a ``Cause:`` header,
    so nested annotations read as an indented tree.
    """
    message = str(cause).rstrip() if cause is not None else ""
    if not message:
        return f"{description}\nCause: unknown"
    return description + "\n" + "\n    ".join(["Cause:", *message.split("\n")])


def describe_operation(operation: str, **arguments: object) -> str:
    """Build the ``<operation> failed with arguments:`` header."""
    if not arguments:
        return f"{operation} failed"
    lines = [f"{operation} failed with arguments:"]
    lines.extend(f"\t{name}: {value}" for name, value in arguments.items())
    return "\n".join(lines)


@contextmanager
def annotate(operation: str, **arguments: object) -> Iterator[None]:
    """
    Re-raise any failure in the block as an AnnotatedError.

    Args:
        operation: Name of the high-level operation
        **arguments: Literal arguments to show in the message

    Raises:
        AnnotatedError: Wrapping whatever the block raised
    """
    description = describe_operation(operation, **arguments)
    try:
        yield
    except Exception as e:
        raise AnnotatedError(description, e) from e
