"""InfluxDB v2 HTTP sink.

Each write opens its own ``httpx.AsyncClient`` session, posts one line of
line protocol to ``/api/v2/write`` and closes the session before returning.
"""

from collections.abc import Callable

import httpx

from botmetrics.core.encoding.line_protocol import encode_point
from botmetrics.core.errors import SinkWriteError
from botmetrics.core.models import MetricPoint, SinkConnection

WRITE_PATH = "/api/v2/write"
DEFAULT_TIMEOUT = 10.0


class InfluxDBSink:
    """PointSinkPort implementation writing to the InfluxDB v2 HTTP API.

    Args:
        connection: Endpoint URL and API token.
        timeout: Seconds before a hanging write fails.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        connection: SinkConnection,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.connection = connection
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.connection.endpoint.rstrip("/"),
            headers={
                "Authorization": f"Token {self.connection.credential}",
                "Content-Type": "text/plain; charset=utf-8",
            },
            timeout=self._timeout,
            transport=self._transport,
        )

    async def write(
        self, point: MetricPoint, *, organization: str, bucket: str
    ) -> None:
        """Write a point with nanosecond precision.

        Raises:
            SinkWriteError: If the request fails or InfluxDB rejects the point.
        """
        body = encode_point(point)
        params = {"org": organization, "bucket": bucket, "precision": "ns"}
        try:
            async with self._client() as client:
                response = await client.post(WRITE_PATH, params=params, content=body)
        except httpx.HTTPError as exc:
            raise SinkWriteError(f"InfluxDB write failed: {exc}") from exc
        if response.is_error:
            raise SinkWriteError(
                f"InfluxDB rejected point {point.name!r}: "
                f"{response.status_code} {response.text}",
                status_code=response.status_code,
            )


def influxdb_sink_factory(
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Callable[[SinkConnection], InfluxDBSink]:
    """Return a SinkFactory building InfluxDBSink instances for PointWriter."""

    def factory(connection: SinkConnection) -> InfluxDBSink:
        return InfluxDBSink(connection, timeout=timeout, transport=transport)

    return factory
