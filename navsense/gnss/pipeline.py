"""NavigationPipeline: one processing pass from raw bytes to the store.

    raw block -> FrameExtractor -> validate_checksum -> decode_gga / decode_vtg
              -> NavigationStore

The pipeline has no I/O of its own; ``GNSSReceiver`` feeds it the bytes of
each serial read, and tests feed it byte strings directly.
"""

import logging

from navsense.gnss.store import NavigationStore
from navsense.gnss.types import NavigationRecord
from navsense.nmea.checksum import validate_checksum
from navsense.nmea.framing import DEFAULT_CAPACITY, DiagnosticHook, FrameExtractor
from navsense.nmea.gga import decode_gga
from navsense.nmea.types import Diagnostic, SentenceType
from navsense.nmea.vtg import decode_vtg

__all__ = ["NavigationPipeline"]

logger = logging.getLogger(__name__)


class NavigationPipeline:
    """Frame, validate and decode raw NMEA blocks into a ``NavigationStore``.

    Checksum failures and malformed sentences never touch the store; they are
    logged and passed to ``on_diagnostic`` if one is given.

    Args:
        store: Store to publish into. A new one is created if omitted.
        capacity: Accumulation buffer size of the frame extractor.
        on_diagnostic: Optional callback receiving ``Diagnostic`` values and
            the offending sentence bytes.
    """

    def __init__(
        self,
        store: NavigationStore | None = None,
        capacity: int = DEFAULT_CAPACITY,
        on_diagnostic: DiagnosticHook | None = None,
    ) -> None:
        self.store = store if store is not None else NavigationStore()
        self._on_diagnostic = on_diagnostic
        self._extractor = FrameExtractor(capacity, on_diagnostic=on_diagnostic)

    @property
    def extractor(self) -> FrameExtractor:
        return self._extractor

    def snapshot(self) -> NavigationRecord:
        return self.store.snapshot()

    def consume_new_data(self) -> bool:
        return self.store.consume_new_data()

    def process(self, block: bytes) -> bool:
        """Run one pass over a raw block.

        Returns:
            True if at least one sentence changed the record. A valid
            sentence whose fields are all empty, or repeat the published
            values, does not count.
        """
        self._extractor.feed(block)
        updated = False
        for sentence_type, body in self._extractor.drain():
            updated |= self._process_sentence(sentence_type, body)
        return updated

    def _process_sentence(self, sentence_type: SentenceType, body: bytes) -> bool:
        if not validate_checksum(body, limit=self._extractor.capacity):
            logger.warning(f"Failed checksum on {sentence_type.name.lower()} sentence: {body!r}")
            self._report(Diagnostic.CHECKSUM_MISMATCH, body)
            return False

        if sentence_type is SentenceType.POSITION:
            position = decode_gga(body)
            if position is not None:
                return self.store.apply_position(position)
        else:
            velocity = decode_vtg(body)
            if velocity is not None:
                return self.store.apply_velocity(velocity)

        logger.debug(f"Could not decode {sentence_type.name.lower()} sentence: {body!r}")
        self._report(Diagnostic.DECODE_FAILURE, body)
        return False

    def _report(self, diagnostic: Diagnostic, body: bytes) -> None:
        if self._on_diagnostic is not None:
            self._on_diagnostic(diagnostic, body)
