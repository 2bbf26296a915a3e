"""
ScanGate — Open CORS Middleware
=================================

What:  CORSMiddleware that also stamps `Access-Control-Allow-Origin: *` on
       responses to requests that carry no Origin header.
Why:   Starlette only adds CORS headers when the request names an Origin.
       With an allow-all policy, every response (200, 404, 405, 500)
       advertises the wildcard, whoever asked.
How:   Requests without Origin get the middleware's simple headers added on
       http.response.start; everything else (preflight, explicit origins)
       goes through the stock CORSMiddleware.
"""

import functools

from fastapi.middleware.cors import CORSMiddleware
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import Message, Receive, Scope, Send


class OpenCORSMiddleware(CORSMiddleware):
    """CORSMiddleware whose wildcard policy applies to every response."""

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if (
            scope["type"] == "http"
            and self.allow_all_origins
            and "origin" not in Headers(scope=scope)
        ):
            await self.app(scope, receive, functools.partial(self._send_open, send=send))
            return
        await super().__call__(scope, receive, send)

    async def _send_open(self, message: Message, send: Send) -> None:
        if message["type"] == "http.response.start":
            message.setdefault("headers", [])
            MutableHeaders(scope=message).update(self.simple_headers)
        await send(message)
