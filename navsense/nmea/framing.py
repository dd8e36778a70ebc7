"""Sentence framing for a raw NMEA byte stream.

Receivers emit sentences back to back over the serial link, separated by
<CR><LF> and occasionally by line noise:

    ...noise$GNGGA,...*59<CR><LF>$GNVTG,...*3B<CR><LF>$GNGSA,...

``FrameExtractor`` scans raw blocks byte by byte. A '$' starts a new frame
(dropping any partial one), bytes are accumulated in a fixed-capacity buffer,
and <CR> closes the frame. Closed frames of a recognized type are copied into
that type's staging slot until the caller drains them; all other bytes are
ignored.

The extractor keeps its state between ``feed`` calls, so a sentence split
across two serial reads is reassembled.
"""

import logging
from collections.abc import Callable

from navsense.nmea.fields import VALID_TALKER_IDS
from navsense.nmea.types import Diagnostic, SentenceType

__all__ = ["DEFAULT_CAPACITY", "DiagnosticHook", "FrameExtractor", "classify_sentence"]

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[Diagnostic, bytes], None]

_START_MARKER = ord("$")
_END_MARKER = ord("\r")

# Talker ID (2 bytes) + sentence type (3 bytes)
_PREFIX_LENGTH = 5

# Larger than the 82-character NMEA 0183 sentence limit
DEFAULT_CAPACITY = 128

# Drain order: position before velocity
_SENTENCE_TYPES = (SentenceType.POSITION, SentenceType.VELOCITY)


def classify_sentence(body: bytes) -> SentenceType | None:
    """Return the sentence type for a body, or None if it is not consumed.

    Example:
        >>> classify_sentence(b"GNGGA,123519,...")
        <SentenceType.POSITION: 'GGA'>
        >>> classify_sentence(b"GPGSV,3,1,11,...")  # not decoded
        None
    """
    if len(body) < _PREFIX_LENGTH or body[:2] not in VALID_TALKER_IDS:
        return None
    sentence_type = body[2:_PREFIX_LENGTH]
    for candidate in _SENTENCE_TYPES:
        if sentence_type == candidate.value.encode("ascii"):
            return candidate
    return None


class FrameExtractor:
    """Byte-stream state machine that stages complete GGA and VTG sentences.

    Typical use, one raw read at a time::

        extractor = FrameExtractor()
        extractor.feed(block)
        for sentence_type, body in extractor.drain():
            ...

    Staged bodies start right after '$' and end right before <CR>. Only the
    latest sentence of each type is kept between drains.

    Args:
        capacity: Size of the accumulation buffer. A frame that does not fit
            is dropped and reported as ``Diagnostic.FRAME_OVERFLOW``.
        on_diagnostic: Optional callback receiving diagnostics and the
            offending bytes.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        on_diagnostic: DiagnosticHook | None = None,
    ) -> None:
        if capacity < _PREFIX_LENGTH:
            raise ValueError(f"capacity must be at least {_PREFIX_LENGTH} bytes")
        self._capacity = capacity
        self._on_diagnostic = on_diagnostic
        self._buffer = bytearray(capacity)
        self._cursor = 0
        self._capturing = False
        self._staged: dict[SentenceType, bytes] = {}

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def capturing(self) -> bool:
        """True while a frame has started but not yet ended."""
        return self._capturing

    def reset(self) -> None:
        """Drop any partial frame and all staged sentences."""
        self._cursor = 0
        self._capturing = False
        self._staged.clear()

    def feed(self, block: bytes) -> None:
        """Scan one raw block and stage every complete recognized sentence."""
        for byte in block:
            if byte == _START_MARKER:
                self._capturing = True
                self._cursor = 0
            elif not self._capturing:
                continue
            elif byte == _END_MARKER:
                self._close_frame()
            elif self._cursor == self._capacity:
                self._overflow()
            else:
                self._buffer[self._cursor] = byte
                self._cursor += 1

    def drain(self) -> list[tuple[SentenceType, bytes]]:
        """Return staged sentences, position first, and clear their flags."""
        return [
            (sentence_type, self._staged.pop(sentence_type))
            for sentence_type in _SENTENCE_TYPES
            if sentence_type in self._staged
        ]

    def _close_frame(self) -> None:
        self._capturing = False
        body = bytes(self._buffer[: self._cursor])
        sentence_type = classify_sentence(body)
        if sentence_type is None:
            logger.debug(f"Ignoring unconsumed sentence {body[:_PREFIX_LENGTH]!r}")
            return
        self._staged[sentence_type] = body

    def _overflow(self) -> None:
        self._capturing = False
        prefix = bytes(self._buffer[:_PREFIX_LENGTH])
        logger.warning(
            f"Dropped {prefix!r} frame longer than {self._capacity} bytes"
        )
        if self._on_diagnostic is not None:
            self._on_diagnostic(Diagnostic.FRAME_OVERFLOW, bytes(self._buffer))
