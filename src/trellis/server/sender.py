"""ASGI response sending — translates a finished Context into ASGI messages."""

from trellis._internal.asgi import Send
from trellis.context import Context


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(ctx: Context, send: Send) -> None:
    """Send the response accumulated on *ctx* through ASGI ``send()``."""
    status = ctx.status or 200
    raw_headers: list[tuple[bytes, bytes]] = [
        (b"content-type", ctx.content_type.encode("latin-1")),
    ]
    for name, value in ctx.response_headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = ctx.body.encode("utf-8") if isinstance(ctx.body, str) else ctx.body
    if not _body_allowed(status):
        body = b""

    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": body,
        }
    )
