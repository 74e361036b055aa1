"""
Response sink.

Everything a cycle does to the visitor's response goes through a
``ResponseSink``: status, headers and body are recorded here and only turned
into a real HTTP response by the caller that owns the response lifecycle.
"""

from typing import List, Optional, Tuple


class ResponseSink:
    """Buffered, observable record of the response a cycle produces."""

    def __init__(self):
        self.status_code: int = 200
        self.media_type: Optional[str] = None
        self._headers: List[Tuple[str, str]] = []
        self._chunks: List[str] = []
        self.committed = False

    @property
    def headers(self) -> List[Tuple[str, str]]:
        return list(self._headers)

    @property
    def body(self) -> str:
        return "".join(self._chunks)

    @property
    def has_output(self) -> bool:
        return bool(self._chunks)

    def get_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key, value in reversed(self._headers):
            if key.lower() == lowered:
                return value
        return None

    def set_header(self, name: str, value: str) -> None:
        """Set ``name``, replacing any earlier value."""
        lowered = name.lower()
        self._headers = [(k, v) for k, v in self._headers if k.lower() != lowered]
        self._headers.append((name, value))

    def set_status(self, status_code: int) -> None:
        self.status_code = status_code

    def write(self, text: str, media_type: Optional[str] = None) -> None:
        if media_type is not None:
            self.media_type = media_type
        self._chunks.append(text)

    def redirect(self, url: str, status_code: int) -> None:
        self.set_status(status_code)
        self.set_header("Location", url)

    def reset(self) -> None:
        """Discard buffered output. Has no effect once committed."""
        if self.committed:
            return
        self.status_code = 200
        self.media_type = None
        self._headers = []
        self._chunks = []

    def commit(self) -> None:
        """Mark the output as sent to the visitor."""
        self.committed = True
