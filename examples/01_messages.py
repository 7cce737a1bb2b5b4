"""
Building and sending messages

Shows the immutable value objects in use: a request is derived step by step,
a response is built with a helper and then streamed to an AnyIO byte stream.

Run:
  uv run python examples/01_messages.py
"""

from __future__ import annotations

import anyio
from anyio.abc import ByteSendStream

from httpmsg import Request, Response, ServerRequest, Uri, send_message, to_bytes


class PrintingSink(ByteSendStream):
    async def send(self, item: bytes) -> None:
        print(item.decode("iso-8859-1"), end="")

    async def aclose(self) -> None:
        print()


async def main() -> None:
    request = Request.build("GET", "https://api.example.com/v1/items?page=1")
    mirrored = request.with_uri(Uri.parse("https://mirror.example.net:8443/v1/items"))
    pinned = request.with_uri(Uri.parse("https://10.0.0.7/v1/items"), preserve_host=True)

    print(to_bytes(request).decode())
    print(to_bytes(mirrored).decode())
    print(to_bytes(pinned).decode())

    incoming = (
        ServerRequest.build("POST", "http://localhost/echo", {"REMOTE_ADDR": "127.0.0.1"})
        .with_query_params({"verbose": "1"})
        .with_attribute("route", "echo")
    )
    response = Response.json({
        "route": incoming.get_attribute("route"),
        "client": incoming.server_params["REMOTE_ADDR"],
        "query": dict(incoming.query_params),
    })

    async with PrintingSink() as sink:
        await send_message(response, sink)


if __name__ == "__main__":
    anyio.run(main)
