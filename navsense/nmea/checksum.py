"""NMEA checksum validation.

NMEA 0183 sentences use a simple XOR checksum for data integrity verification.
The checksum is calculated over all bytes between '$' and '*' (exclusive),
then represented as a two-digit hexadecimal number after the '*'.

The validator works on a staged sentence *body*: the bytes captured after the
'$' start marker and before the <CR> end marker.

Example body structure:
    GNGGA,123519.00,4807.038,N,01131.000,E,1,08,0.9,545.4,M,47.0,M,,*7F
    ^                      checksum content                        ^^
    first payload byte                                  checksum (0x7F = 127)
"""

_CHECKSUM_SEPARATOR = ord("*")

# Longest body the validator scans for the separator. NMEA 0183 caps a
# sentence at 82 characters including '$' and <CR><LF>.
_DEFAULT_SCAN_LIMIT = 128


def _nibble(character: int) -> int | None:
    """Convert one ASCII hex digit to its 4-bit value, or None if not hex."""
    if 0x30 <= character <= 0x39:  # '0'-'9'
        return character - 0x30
    if 0x41 <= character <= 0x46:  # 'A'-'F'
        return character - 0x37
    if 0x61 <= character <= 0x66:  # 'a'-'f'
        return character - 0x57
    return None


def calculate_checksum(payload: bytes) -> int:
    """Calculate the XOR checksum of a payload.

    Args:
        payload: The bytes between '$' and '*' (exclusive)

    Returns:
        Integer checksum value (0-255)

    Example:
        >>> calculate_checksum(b"GNGGA")
        72
    """
    result = 0
    for byte in payload:
        result ^= byte
    return result


def validate_checksum(body: bytes, limit: int = _DEFAULT_SCAN_LIMIT) -> bool:
    """Validate the checksum of a staged NMEA sentence body.

    Performs end-to-end validation by:
    1. Locating the '*' separator within the first ``limit`` bytes
    2. Computing the XOR of every byte before it
    3. Comparing against the two hex digits that follow, nibble by nibble

    Args:
        body: Sentence bytes starting right after '$'. Trailing <CR>/<LF>
              must already be removed.
        limit: Maximum number of bytes scanned for the separator.

    Returns:
        True if the checksum is valid, False if:
        - The '*' separator is missing within ``limit`` bytes
        - The checksum suffix is not exactly two hex digits
        - Calculated checksum doesn't match provided checksum

    Example:
        >>> validate_checksum(b"GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*3B")
        True
        >>> validate_checksum(b"GNVTG,054.7,T,034.4,M,005.5,N,010.2,K,A*FF")
        False
    """
    separator = body.find(_CHECKSUM_SEPARATOR, 0, limit)
    if separator < 0:
        return False

    suffix = body[separator + 1 :]
    if len(suffix) != 2:
        return False

    high = _nibble(suffix[0])
    low = _nibble(suffix[1])
    if high is None or low is None:
        return False

    return calculate_checksum(body[:separator]) == (high << 4) | low
