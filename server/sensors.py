"""Background navigation reading loop."""

import asyncio
import logging

import serial

from navsense.gnss import GNSSReceiver
from server.broadcaster import NavigationBroadcaster
from server.formatters import format_navigation_message

__all__ = ["run_gnss_loop", "run_gnss_receiver"]

logger = logging.getLogger(__name__)


def run_gnss_loop(
    loop: asyncio.AbstractEventLoop,
    receiver: GNSSReceiver,
    broadcaster: NavigationBroadcaster,
) -> None:
    """Read navigation records continuously and broadcast them to the event loop.

    The caller owns *receiver* and must use it as an open context manager. The
    loop exits when ``receiver.cancel()`` is called, which causes the
    underlying ``GNSSReceiver.read()`` to raise ``EOFError``.

    Args:
        loop: Running asyncio event loop to broadcast messages on.
        receiver: An open ``GNSSReceiver`` instance managed by the caller.
        broadcaster: Destination of the formatted messages.
    """
    try:
        for record in receiver:
            message = format_navigation_message(record)
            broadcaster.publish(message, loop)
    except EOFError:
        return


def run_gnss_receiver(
    loop: asyncio.AbstractEventLoop,
    receiver: GNSSReceiver,
    broadcaster: NavigationBroadcaster,
) -> None:
    """Open *receiver* and run ``run_gnss_loop`` until it is cancelled.

    Opening the port blocks while the startup commands are sent, so this runs
    on a worker thread. A port that cannot be opened is logged and ends the
    thread; the server keeps serving without navigation data. A port that
    fails later ends the loop the same way as cancellation.
    """
    try:
        with receiver:
            run_gnss_loop(loop, receiver, broadcaster)
    except serial.SerialException as e:
        logger.error(f"GNSS receiver unavailable: {e}")
