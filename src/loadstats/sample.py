"""The sample record consumed by every aggregation path."""

from __future__ import annotations

from dataclasses import dataclass

ASSERTION_FAILED = "Assertion failed"

# Response messages written by transaction controllers.
GROUP_MESSAGE_PREFIX = "Number of samples in transaction"
EMPTY_GROUP_MESSAGE_PREFIX = "Number of samples in transaction : 0"


@dataclass(frozen=True)
class Sample:
    """Outcome of one recorded load-test operation.

    Samples are produced once by a load generator or a results file reader
    and never mutated by loadstats.

    Attributes:
        name: Logical operation name (e.g., "Login"), the default grouping key.
        success: Whether the operation passed, assertions included.
        response_code: Protocol status code. Not necessarily numeric.
        response_message: Protocol status message.
        failure_message: First assertion failure message, if any.
        is_group: The sample is a group marker (transaction controller)
            rather than a leaf request.
        is_empty_group: Group marker that wrapped no children. Ignored by
            every consumer.
        elapsed_ms: Response time in milliseconds.
        timestamp_ms: Epoch milliseconds when the operation started.
        bytes_received: Response size in bytes.
        thread_group: Name of the thread group that produced the sample.
    """

    name: str
    success: bool
    response_code: str = ""
    response_message: str = ""
    failure_message: str | None = None
    is_group: bool = False
    is_empty_group: bool = False
    elapsed_ms: int = 0
    timestamp_ms: int = 0
    bytes_received: int = 0
    thread_group: str = ""

    def label(self, include_group: bool = False) -> str:
        """Return the grouping label, optionally prefixed by the thread group."""
        if include_group and self.thread_group:
            return f"{self.thread_group}:{self.name}"
        return self.name


def is_success_code(code: str) -> bool:
    """Return True if *code* is a numeric status in the 200-399 range.

    Non-numeric codes (``"Non HTTP response code: ..."``) are never a success.
    """
    if not code.isdigit():
        return False
    try:
        value = int(code)
    except ValueError:
        return False
    return 200 <= value <= 399


_SHORT_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "/": "\\/",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape(text: str) -> str:
    """Escape *text* as a strict, ASCII-only JSON string body.

    Quotes, backslashes and slashes are backslash-escaped, the usual control
    characters get their short form, and anything else outside printable
    ASCII becomes uppercase ``\\uXXXX`` UTF-16 code units.
    """
    parts: list[str] = []
    for char in text:
        escaped = _SHORT_ESCAPES.get(char)
        if escaped is not None:
            parts.append(escaped)
        elif " " <= char <= "\x7f":
            parts.append(char)
        else:
            units = char.encode("utf-16-be")
            for i in range(0, len(units), 2):
                parts.append(f"\\u{int.from_bytes(units[i : i + 2], 'big'):04X}")
    return "".join(parts)


def error_signature(sample: Sample, *, use_assertion_message: bool = True) -> str:
    """Classify a failed sample into an error signature.

    A failure with a successful status code can only come from an assertion,
    so it is keyed by the assertion failure message (or ``ASSERTION_FAILED``
    when there is none or the option is off). Any other failure is keyed
    ``"<code>/<message>"``, dropping the message segment when it is empty.

    Args:
        sample: The sample to classify.
        use_assertion_message: Key assertion failures by their message.

    Returns:
        The error signature string.
    """
    if is_success_code(sample.response_code):
        if use_assertion_message and sample.failure_message:
            return _escape(sample.failure_message)
        return ASSERTION_FAILED

    if sample.response_message:
        return f"{sample.response_code}/{_escape(sample.response_message)}"
    return sample.response_code
