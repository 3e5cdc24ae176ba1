"""Error taxonomy for the box quantization codecs."""


class QuantizeError(Exception):
    """Base error for all codec operations."""


class InvalidArgument(QuantizeError, ValueError):
    """Missing or out-of-range compression option."""


class FormatError(QuantizeError, ValueError):
    """Byte buffer is not a valid file for the codec (magic, version, length)."""


class EncodingLimitExceeded(QuantizeError, OverflowError):
    """Image does not fit in the fixed-width header fields."""
