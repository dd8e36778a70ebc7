"""Tests for the GNSS serial receiver."""

import time
from types import SimpleNamespace
from unittest.mock import MagicMock, call

import pytest
import serial

from navsense.gnss import GNSSReceiver, NavigationRecord, NavigationStore
from navsense.gnss.commands import (
    DEFAULT_STARTUP_COMMANDS,
    PUBX_CONFIG_NMEA,
    PUBX_SET_GGA,
    UBX_CFG_NMEA,
)

GGA = b"$GNGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*59\r\n"
VTG = b"$GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B\r\n"


# ---------------------------------------------------------------------------
# Fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_serial(monkeypatch):
    """Replace serial.Serial and time.sleep with mocks for the duration of a test.

    Returns a SimpleNamespace with attributes:
        port   -- the Serial instance mock
        open   -- the Serial class mock (to verify constructor args)
        sleep  -- the time.sleep mock

    Configure ``port.read.side_effect`` with a list of byte blocks to control
    what the receiver sees. ``b""`` simulates a read timeout.
    """
    mock_port = MagicMock()
    mock_open = MagicMock(return_value=mock_port)
    mock_sleep = MagicMock()
    monkeypatch.setattr(serial, "Serial", mock_open)
    monkeypatch.setattr(time, "sleep", mock_sleep)
    return SimpleNamespace(port=mock_port, open=mock_open, sleep=mock_sleep)


# ---------------------------------------------------------------------------
# Setup and teardown
# ---------------------------------------------------------------------------


class TestGNSSReceiverSetup:
    def test_opens_default_port(self, mock_serial):
        with GNSSReceiver():
            pass
        mock_serial.open.assert_called_once_with("/dev/serial0", 9600, timeout=5.0)

    def test_custom_port_settings_are_forwarded(self, mock_serial):
        with GNSSReceiver(port="/dev/ttyUSB0", baudrate=57600, timeout=1.0):
            pass
        mock_serial.open.assert_called_once_with("/dev/ttyUSB0", 57600, timeout=1.0)

    def test_startup_commands_written_in_order(self, mock_serial):
        with GNSSReceiver():
            pass
        assert mock_serial.port.write.call_args_list == [
            call(command) for command in DEFAULT_STARTUP_COMMANDS
        ]
        assert mock_serial.sleep.call_count == len(DEFAULT_STARTUP_COMMANDS)

    def test_binary_nmea_configuration_sent_first(self, mock_serial):
        with GNSSReceiver():
            pass
        written = [c.args[0] for c in mock_serial.port.write.call_args_list]
        assert written[0] == UBX_CFG_NMEA
        assert written[1] == PUBX_CONFIG_NMEA
        assert len(UBX_CFG_NMEA) == 16
        assert UBX_CFG_NMEA[:4] == b"\x17\x20\x18\x40"
        mock_serial.sleep.assert_called_with(0.3)

    def test_custom_commands(self, mock_serial):
        with GNSSReceiver(commands=[PUBX_SET_GGA], command_delay=0.0):
            pass
        mock_serial.port.write.assert_called_once_with(PUBX_SET_GGA)
        mock_serial.sleep.assert_called_once_with(0.0)

    def test_port_closed_on_exit(self, mock_serial):
        with GNSSReceiver(commands=()):
            pass
        mock_serial.port.close.assert_called_once()

    def test_port_closed_if_configuration_fails(self, mock_serial):
        mock_serial.port.write.side_effect = serial.SerialException("unplugged")
        with pytest.raises(serial.SerialException):
            with GNSSReceiver():
                pass
        mock_serial.port.close.assert_called_once()


# ---------------------------------------------------------------------------
# Error conditions
# ---------------------------------------------------------------------------


class TestGNSSReceiverErrors:
    def test_process_read_outside_context(self):
        with pytest.raises(RuntimeError, match="context manager"):
            GNSSReceiver().process_read()

    def test_read_outside_context(self):
        with pytest.raises(RuntimeError, match="context manager"):
            GNSSReceiver().read()

    def test_serial_error_is_not_fatal(self, mock_serial):
        mock_serial.port.read.side_effect = [serial.SerialException("glitch"), GGA]
        with GNSSReceiver(commands=()) as receiver:
            assert receiver.process_read() is False
            assert receiver.process_read() is True


# ---------------------------------------------------------------------------
# Polling
# ---------------------------------------------------------------------------


class TestGNSSReceiverPolling:
    def test_reads_requested_block_size(self, mock_serial):
        mock_serial.port.read.side_effect = [b""]
        with GNSSReceiver(commands=(), read_size=200) as receiver:
            receiver.process_read()
        mock_serial.port.read.assert_called_once_with(200)

    def test_timeout_yields_no_data(self, mock_serial):
        mock_serial.port.read.side_effect = [b""]
        with GNSSReceiver(commands=()) as receiver:
            assert receiver.process_read() is False
            assert receiver.consume_new_data() is False
            assert receiver.snapshot() == NavigationRecord()

    def test_process_read_updates_snapshot(self, mock_serial):
        mock_serial.port.read.side_effect = [GGA + VTG]
        with GNSSReceiver(commands=()) as receiver:
            assert receiver.process_read() is True
            assert receiver.consume_new_data() is True
            assert receiver.consume_new_data() is False
            record = receiver.snapshot()
        assert record.altitude == 545
        assert record.heading == 54

    def test_publishes_into_given_store(self, mock_serial):
        store = NavigationStore()
        mock_serial.port.read.side_effect = [VTG]
        with GNSSReceiver(commands=(), store=store) as receiver:
            receiver.process_read()
        assert store.snapshot().ground_speed == pytest.approx(10.2)


# ---------------------------------------------------------------------------
# Blocking read and iteration
# ---------------------------------------------------------------------------


class TestGNSSReceiverRead:
    def test_read_skips_timeouts_and_partial_sentences(self, mock_serial):
        mock_serial.port.read.side_effect = [b"", GGA[:25], b"", GGA[25:]]
        with GNSSReceiver(commands=()) as receiver:
            record = receiver.read()
        assert record.latitude == pytest.approx(48.1173, rel=1e-5)
        assert mock_serial.port.read.call_count == 4

    def test_iteration_yields_one_record_per_update(self, mock_serial):
        mock_serial.port.read.side_effect = [GGA, VTG]
        with GNSSReceiver(commands=()) as receiver:
            iterator = iter(receiver)
            first = next(iterator)
            second = next(iterator)
        assert first.heading is None
        assert second.heading == 54
        assert second.altitude == 545

    def test_cancel_raises_eof(self, mock_serial):
        with GNSSReceiver(commands=()) as receiver:
            receiver.cancel()
            with pytest.raises(EOFError):
                receiver.read()
        mock_serial.port.cancel_read.assert_called_once()

    def test_cancel_during_read_raises_eof(self, mock_serial):
        with GNSSReceiver(commands=()) as receiver:

            def _cancelled_read(_size):
                receiver.cancel()
                return b""

            mock_serial.port.read.side_effect = _cancelled_read
            with pytest.raises(EOFError):
                receiver.read()

    def test_failing_port_ends_read(self, mock_serial):
        mock_serial.port.read.side_effect = serial.SerialException("device unplugged")
        with GNSSReceiver(commands=()) as receiver:
            with pytest.raises(EOFError) as exc_info:
                receiver.read()
        assert isinstance(exc_info.value.__cause__, serial.SerialException)
        mock_serial.port.read.assert_called_once()

    def test_failing_port_ends_iteration(self, mock_serial):
        mock_serial.port.read.side_effect = [GGA, serial.SerialException("device unplugged")]
        with GNSSReceiver(commands=()) as receiver:
            records = []
            with pytest.raises(EOFError):
                for record in receiver:
                    records.append(record)
        assert len(records) == 1
        assert records[0].altitude == 545
