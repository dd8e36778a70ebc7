"""Pytest fixtures for server module testing."""

import queue
from collections.abc import Iterator
from unittest.mock import patch

import pytest

from navsense.gnss import NavigationRecord


class ControlledGNSSReceiver:
    def __init__(self) -> None:
        self.message_queue: queue.Queue[NavigationRecord | None] = queue.Queue()
        self.entered = False
        self.cancelled = False

    def __enter__(self) -> "ControlledGNSSReceiver":
        self.entered = True
        return self

    def __exit__(self, *_: object) -> None:
        pass

    def cancel(self) -> None:
        self.cancelled = True
        self.message_queue.put(None)

    def __iter__(self) -> Iterator[NavigationRecord]:
        while True:
            item = self.message_queue.get()
            if item is None:
                raise EOFError("cancelled")
            yield item


@pytest.fixture(autouse=True)
def gnss_controller() -> Iterator[ControlledGNSSReceiver]:
    controller = ControlledGNSSReceiver()
    with patch("server.main.GNSSReceiver", return_value=controller):
        yield controller
    controller.message_queue.put(None)
