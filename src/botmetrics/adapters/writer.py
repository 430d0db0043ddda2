"""Point writer owning the hot-reloadable sink connection."""

import logging
import threading
from dataclasses import dataclass

from botmetrics.core.models import Fields, MetricPoint, SinkConnection, Tags
from botmetrics.core.points import build_point
from botmetrics.core.ports import PointSinkPort, SettingsSourcePort, SinkFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SinkHandle:
    """Immutable pairing of a connection and the sink built from it.

    A reload never mutates a handle; it installs a new one with a higher
    version.
    """

    connection: SinkConnection
    sink: PointSinkPort
    version: int


@dataclass(frozen=True)
class WriteOutcome:
    """Result of a single write.

    Attributes:
        name: Measurement name.
        point: The point that was built, or None if nothing was built.
        error: The failure, or None on success.
    """

    name: str
    point: MetricPoint | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class PointWriter:
    """Builds points and submits them to the current sink.

    Writes are best-effort: failures are logged and returned, never raised,
    so a broken sink cannot disturb the conversation that triggered the
    event.
    """

    def __init__(
        self, settings: SettingsSourcePort, sink_factory: SinkFactory
    ) -> None:
        """Initialize the writer.

        Args:
            settings: Source of the current settings.
            sink_factory: Builds a sink for a connection.
        """
        self._settings = settings
        self._sink_factory = sink_factory
        self._handle: SinkHandle | None = None
        self._reload_lock = threading.Lock()

    @property
    def handle(self) -> SinkHandle | None:
        """The handle writes currently start from."""
        return self._handle

    @property
    def active(self) -> bool:
        return self._handle is not None

    def _install(self, connection: SinkConnection) -> SinkHandle:
        with self._reload_lock:
            version = self._handle.version + 1 if self._handle else 1
            handle = SinkHandle(
                connection=connection,
                sink=self._sink_factory(connection),
                version=version,
            )
            self._handle = handle
        return handle

    def start(self) -> SinkHandle:
        """Create the sink from the current settings."""
        handle = self._install(self._settings.get_settings().connection)
        logger.info("Sink connected to %s", handle.connection.endpoint)
        return handle

    def reload(
        self,
        *,
        endpoint: str | None = None,
        credential: str | None = None,
    ) -> SinkHandle:
        """Replace the sink after an endpoint or credential change.

        Values not given are read from the current settings. In-flight
        writes keep using the handle they started with.
        """
        current = self._settings.get_settings().connection
        connection = SinkConnection(
            endpoint=endpoint if endpoint is not None else current.endpoint,
            credential=credential if credential is not None else current.credential,
        )
        handle = self._install(connection)
        logger.info(
            "Sink reloaded (version %d) for %s", handle.version, connection.endpoint
        )
        return handle

    async def write(
        self,
        name: str,
        value: float,
        tags: Tags,
        fields: Fields,
    ) -> WriteOutcome:
        """Build a point and write it to the sink.

        Args:
            name: Measurement name.
            value: Primary value, 1 for counted events.
            tags: Tags for aggregation; falsy values are dropped.
            fields: Extra typed fields; falsy values are dropped.

        Returns:
            WriteOutcome carrying the emitted point and any failure.
        """
        handle = self._handle
        if handle is None:
            logger.warning("Sink not started, dropping event %s", name)
            return WriteOutcome(name=name, error=RuntimeError("sink not started"))

        settings = self._settings.get_settings()
        point = build_point(name, value, tags, fields)
        try:
            await handle.sink.write(
                point, organization=settings.organization, bucket=settings.bucket
            )
        except Exception as exc:
            logger.error("Error sending analytic event %s", name, exc_info=True)
            return WriteOutcome(name=name, point=point, error=exc)
        logger.debug("Successfully logged: %s", name)
        return WriteOutcome(name=name, point=point)
