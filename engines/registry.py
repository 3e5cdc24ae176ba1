"""Codec lookup by name, file extension or magic bytes."""

from pathlib import Path
from typing import Dict, Union

from engines.compressed_image import CompressedImage
from engines.gradimg import GradImg
from engines.gradrgb import GradRgb
from engines.qimg import QImg
from engines.protocol import MAGIC_SIZE
from models.errors import FormatError, InvalidArgument

CODECS: Dict[str, type] = {
    'qimg': QImg,
    'gradimg': GradImg,
    'gradrgb': GradRgb,
}


def get(name: str) -> type:
    """Get a codec class by name."""
    if name not in CODECS:
        raise InvalidArgument(f"Unknown codec: {name}. Available: {', '.join(sorted(CODECS))}")
    return CODECS[name]


def codec_for_path(path: Union[str, Path]) -> type:
    """Codec whose file extension matches the path."""
    ext = Path(path).suffix.lstrip('.').lower()
    for codec in CODECS.values():
        if ext in codec.FILE_EXTENSIONS:
            return codec
    raise InvalidArgument(f"No codec for file extension '.{ext}'")


def detect_codec(data: bytes) -> type:
    """Codec whose magic prefixes the buffer."""
    magic = bytes(data[:MAGIC_SIZE])
    for codec in CODECS.values():
        if magic == codec.MAGIC:
            return codec
    raise FormatError("Unrecognised file (no codec matches the header magic)")


def decode_bytes(data: bytes) -> CompressedImage:
    return detect_codec(data).decode(data)
