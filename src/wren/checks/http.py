"""HTTP duplicate checker — asks a remote endpoint via httpx.

The endpoint is called as ``GET {url}?{param}={value}`` and must answer
with a JSON object carrying a boolean under ``result_key``::

    {"exists": true}

``httpx`` is an optional dependency (``pip install wren[remote]``).
"""

from typing import Any

from wren.errors import CheckerNotInstalledError, RemoteCheckError


def _get_httpx() -> Any:
    """Import httpx or raise a clear error."""
    try:
        import httpx

        return httpx
    except ImportError:
        msg = (
            "HttpDuplicateChecker requires 'httpx'. "
            "Install it with: pip install wren[remote]"
        )
        raise CheckerNotInstalledError(msg) from None


class HttpDuplicateChecker:
    """Remote uniqueness probe.

    Pass an existing ``httpx.AsyncClient`` to share connection pooling
    (and to inject a ``MockTransport`` in tests); otherwise a client is
    created per call.
    """

    __slots__ = ("_client", "param", "result_key", "timeout", "url")

    def __init__(
        self,
        url: str,
        *,
        param: str = "value",
        result_key: str = "exists",
        timeout: float = 5.0,
        client: Any | None = None,
    ) -> None:
        self.url = url
        self.param = param
        self.result_key = result_key
        self.timeout = timeout
        self._client = client

    async def exists(self, value: Any) -> bool:
        httpx = _get_httpx()
        params = {self.param: str(value)}

        if self._client is not None:
            response = await self._client.get(self.url, params=params, timeout=self.timeout)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.get(self.url, params=params, timeout=self.timeout)

        if response.status_code != 200:
            raise RemoteCheckError(self.url, response.status_code, response.text)

        data = response.json()
        result = data.get(self.result_key) if isinstance(data, dict) else None
        if not isinstance(result, bool):
            raise RemoteCheckError(
                self.url,
                response.status_code,
                f"expected a boolean {self.result_key!r} in the response body",
            )
        return result
