"""
Human-readable descriptions of transport failures.

Classification is a case-sensitive substring test on the failure description.
The categories only pick a display message; nothing should branch on them.
"""

from typing import Tuple

TIMEOUT_MESSAGE = "⏱️  Request timeout - server took too long to respond"
CONNECTION_REFUSED_MESSAGE = "🚫 Connection refused - is the server running?"
DNS_MESSAGE = "🌐 DNS error - could not resolve hostname"
UNREACHABLE_MESSAGE = "📡 Network unreachable - check your connection"

# Recorded when the whole exchange outlasts the configured timeout.
DEADLINE_EXCEEDED = "request timeout exceeded"

# Checked in order; the first category with a matching pattern wins.
ERROR_PATTERNS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("timeout", "timed out", "Timeout"), TIMEOUT_MESSAGE),
    (("connection refused", "Connection refused"), CONNECTION_REFUSED_MESSAGE),
    (("no such host", "Name or service not known", "nodename nor servname",
      "getaddrinfo failed"), DNS_MESSAGE),
    (("network unreachable", "Network is unreachable"), UNREACHABLE_MESSAGE),
)


def classify_error(description: str) -> str:
    """
    Map a failure description to a display message.

    Args:
        description: Text describing the failure

    Returns:
        str: A friendly message, or ``description`` unchanged when no pattern matches
    """
    for patterns, message in ERROR_PATTERNS:
        if any(pattern in description for pattern in patterns):
            return message
    return description
