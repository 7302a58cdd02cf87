from contextlib import suppress
from typing import BinaryIO

from soappost.settings import POSTER_SETTINGS


def copy_stream(source: BinaryIO, sink: BinaryIO, chunk_size: int | None = None) -> int:
    """
    Drain `source` into `sink` chunk by chunk, then close both.

    Both streams are closed on every exit path, including a failed copy.
    Errors raised while closing are suppressed; errors raised while copying
    propagate.

    Args:
        source: Readable binary stream.
        sink: Writable binary stream.
        chunk_size: Bytes per read. Defaults to 8 KiB.

    Returns:
        int: Number of bytes copied.
    """
    chunk_size = chunk_size or POSTER_SETTINGS.chunk_size
    copied = 0
    try:
        while True:
            chunk = source.read(chunk_size)
            if not chunk:
                break
            sink.write(chunk)
            copied += len(chunk)
    finally:
        with suppress(Exception):
            source.close()
        with suppress(Exception):
            sink.close()
    return copied
