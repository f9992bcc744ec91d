"""Input event exceptions."""

from typing import Any

from .base import ChainDeckError


class MalformedEventError(ChainDeckError):
    """An input event payload could not be normalized."""

    def __init__(self, what: str, payload: Any):
        """
        Initialize malformed event error.

        Args:
            what: What was being extracted (e.g. "button index", "dial id")
            payload: The raw payload received from the transport
        """
        super().__init__(
            user_message=f"Malformed input event: cannot read {what}",
            technical_message=f"Cannot normalize {what} from payload {payload!r}",
            recoverable=True,
        )
        self.what = what
        self.payload = payload
