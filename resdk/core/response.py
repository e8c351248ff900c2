"""In-memory response sink bridging serializers and the ASGI transport."""

from __future__ import annotations

from dataclasses import dataclass, field

from starlette.responses import Response


@dataclass
class ResponseBuffer:
    """``ResponseWriter`` that buffers one response until it is sent.

    Attributes:
        status_code: HTTP status, 200 until a serializer sets it.
        headers: Response headers keyed by their lower-cased name.
        body: Accumulated body bytes.
    """

    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)
    body: bytearray = field(default_factory=bytearray)

    def set_status(self, status_code: int) -> None:
        self.status_code = int(status_code)

    def set_header(self, name: str, value: str) -> None:
        self.headers[name.lower()] = value

    def write(self, data: bytes) -> None:
        self.body.extend(data)

    def to_response(self) -> Response:
        """Build the Starlette response for the buffered state."""
        headers = dict(self.headers)
        media_type = headers.pop("content-type", None)
        return Response(
            content=bytes(self.body),
            status_code=self.status_code,
            headers=headers,
            media_type=media_type,
        )
