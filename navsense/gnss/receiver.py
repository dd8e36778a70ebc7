"""GNSSReceiver: serial NMEA reader for GGA and VTG navigation data.

Opens the receiver's serial port with pyserial, sends the startup
configuration commands once, and then polls: each poll is a single blocking
read bounded by the port timeout, followed by one ``NavigationPipeline`` pass
over the bytes received.

Reading strategy:
    A read that times out with no bytes is not an error; it only means no
    fresh data this cycle. A failing port ends ``read()`` and iteration
    with ``EOFError``; ``process_read()`` only logs it. Sentences cut in
    half by the read boundary are completed on the next read because the
    frame extractor keeps its state.
"""

import contextlib
import logging
import time
from collections.abc import Iterator, Sequence
from types import TracebackType

import serial

from navsense.gnss.commands import DEFAULT_STARTUP_COMMANDS
from navsense.gnss.pipeline import NavigationPipeline
from navsense.gnss.store import NavigationStore
from navsense.gnss.types import NavigationRecord
from navsense.nmea.framing import DEFAULT_CAPACITY, DiagnosticHook

__all__ = ["GNSSReceiver"]

logger = logging.getLogger(__name__)

# --- serial defaults ----------------------------------------------------------

_PORT = "/dev/serial0"
_BAUDRATE = 9600
_TIMEOUT = 5.0  # seconds per read; determines maximum cancel() latency
_READ_SIZE = 500  # bytes requested per read
_COMMAND_DELAY = 0.3  # seconds between startup commands


class GNSSReceiver:
    """Context manager for reading navigation records from an NMEA serial port.

    Two consumption patterns are supported:

    Continuous iteration (recommended for server backends)::

        with GNSSReceiver() as receiver:
            for record in receiver:
                process(record)

    Polling (one bounded read per call)::

        with GNSSReceiver() as receiver:
            while running:
                receiver.process_read()
                if receiver.consume_new_data():
                    record = receiver.snapshot()

    Args:
        port: Serial device path (default: ``"/dev/serial0"``).
        baudrate: Serial baud rate (default: ``9600``).
        timeout: Seconds a single read may block (default: ``5.0``).
        read_size: Bytes requested per read (default: ``500``).
        commands: Configuration sentences written once on entry.
        command_delay: Seconds to wait after each command.
        capacity: Frame accumulation buffer size.
        store: ``NavigationStore`` to publish into; one is created if omitted.
        on_diagnostic: Optional callback for checksum, decode and overflow
            diagnostics.
    """

    def __init__(
        self,
        port: str = _PORT,
        baudrate: int = _BAUDRATE,
        timeout: float = _TIMEOUT,
        read_size: int = _READ_SIZE,
        commands: Sequence[bytes] = DEFAULT_STARTUP_COMMANDS,
        command_delay: float = _COMMAND_DELAY,
        capacity: int = DEFAULT_CAPACITY,
        store: NavigationStore | None = None,
        on_diagnostic: DiagnosticHook | None = None,
    ) -> None:
        """Store port parameters; the port is opened in ``__enter__``."""
        self._port = port
        self._baudrate = baudrate
        self._timeout = timeout
        self._read_size = read_size
        self._commands = tuple(commands)
        self._command_delay = command_delay
        self._pipeline = NavigationPipeline(
            store=store, capacity=capacity, on_diagnostic=on_diagnostic
        )
        self._serial: serial.Serial | None = None
        self._cancelled: bool = False

    @property
    def pipeline(self) -> NavigationPipeline:
        return self._pipeline

    def __enter__(self) -> "GNSSReceiver":
        """Open the serial port and send the startup commands."""
        self._serial = serial.Serial(
            self._port, self._baudrate, timeout=self._timeout
        )
        self._cancelled = False
        try:
            self._configure(self._serial)
        except serial.SerialException:
            self._serial.close()
            self._serial = None
            raise
        logger.info(f"Opened GNSS receiver on {self._port} at {self._baudrate} baud")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the serial port."""
        if self._serial is not None:
            self._serial.close()
            self._serial = None

    def _configure(self, port: serial.Serial) -> None:
        for command in self._commands:
            port.write(command)
            time.sleep(self._command_delay)

    def cancel(self) -> None:
        """Cancel pending blocking reads gracefully.

        Sets the cancellation flag and interrupts any read in progress so that
        ``read()`` and iteration raise ``EOFError`` without waiting for the
        next timeout.
        """
        self._cancelled = True
        if self._serial is not None:
            with contextlib.suppress(OSError, AttributeError):
                self._serial.cancel_read()

    def snapshot(self) -> NavigationRecord:
        """Return the latest navigation record by value."""
        return self._pipeline.snapshot()

    def consume_new_data(self) -> bool:
        """Return True once per record update, then False until the next one."""
        return self._pipeline.consume_new_data()

    def _read_block(self) -> bytes:
        """Read one block from the port; ``b""`` on timeout."""
        if self._serial is None:
            raise RuntimeError("GNSSReceiver must be used as a context manager.")
        return self._serial.read(self._read_size)

    def process_read(self) -> bool:
        """Perform one bounded read and one processing pass.

        A ``SerialException`` is logged and reported as no fresh data, so a
        polling caller can decide for itself whether to retry.

        Returns:
            True if a sentence from this read updated the record.

        Raises:
            RuntimeError: If called outside a ``with`` block.
        """
        try:
            block = self._read_block()
        except serial.SerialException as e:
            logger.error(f"Serial read on {self._port} failed: {e}")
            return False
        if not block:
            return False
        return self._pipeline.process(block)

    def read(self) -> NavigationRecord:
        """Block until the record changes and return a snapshot of it.

        Raises:
            RuntimeError: If called outside a ``with`` block.
            EOFError: If the read is cancelled or the serial port fails.
        """
        while True:
            if self._cancelled:
                raise EOFError("GNSS read cancelled.")
            try:
                block = self._read_block()
            except serial.SerialException as e:
                logger.error(f"Serial read on {self._port} failed, stopping: {e}")
                raise EOFError(f"serial port {self._port} closed.") from e
            if block:
                self._pipeline.process(block)
            if self.consume_new_data():
                return self.snapshot()

    def __iter__(self) -> Iterator[NavigationRecord]:
        """Yield navigation records indefinitely, one per record update.

        Iteration continues until the caller breaks the loop or an exception
        propagates out (e.g. ``EOFError`` on cancellation). ``StopIteration``
        is never raised.

        Yields:
            ``NavigationRecord`` snapshots.
        """
        while True:
            yield self.read()
