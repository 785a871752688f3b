"""
zlib compression of payloads, as expected by vtkZLibDataCompressor.
"""

import zlib

from ._common import info
from ._exceptions import CompressionError, DecodeError
from ._payload import Payload

NO_COMPRESSION = zlib.Z_NO_COMPRESSION
BEST_SPEED = zlib.Z_BEST_SPEED
BEST_COMPRESSION = zlib.Z_BEST_COMPRESSION
DEFAULT_COMPRESSION = zlib.Z_DEFAULT_COMPRESSION
# Not a zlib level; selects the default level with the Huffman-only strategy,
# which gives the smallest output for data without repeated sequences.
HUFFMAN_ONLY = -2

VTK_ZLIB_COMPRESSOR = "vtkZLibDataCompressor"


class NoCompressor:
    vtk_name = None

    def compress(self, payload):
        if not payload.header:
            payload.set_header_uncompressed()
        return payload

    def decompress(self, payload):
        return payload

    def __repr__(self):
        return "<NoCompressor>"


class ZlibCompressor:
    vtk_name = VTK_ZLIB_COMPRESSOR

    def __init__(self, level=DEFAULT_COMPRESSION):
        if level != HUFFMAN_ONLY and not (
            DEFAULT_COMPRESSION <= level <= BEST_COMPRESSION
        ):
            raise CompressionError(f"Invalid zlib compression level {level}.")
        self.level = level

    def _compressobj(self):
        if self.level == HUFFMAN_ONLY:
            return zlib.compressobj(DEFAULT_COMPRESSION, strategy=zlib.Z_HUFFMAN_ONLY)
        return zlib.compressobj(self.level)

    def compress(self, payload):
        """Return a new payload holding the deflated body of ``payload`` in a single
        block, with the four-item compressed header.
        """
        try:
            c = self._compressobj()
            body = c.compress(payload.body) + c.flush()
        except zlib.error as e:
            raise CompressionError(f"zlib compression failed: {e}") from e

        compressed = Payload(body=body)
        compressed.set_header_compressed(len(payload.body), len(body))
        return compressed

    def decompress(self, payload):
        d = zlib.decompressobj()
        try:
            body = d.decompress(payload.body) + d.flush()
        except zlib.error as e:
            raise DecodeError(f"Corrupt zlib stream: {e}") from e
        if not d.eof:
            raise DecodeError("Truncated zlib stream.")

        decompressed = Payload(body=body)
        decompressed.set_header_uncompressed()
        return decompressed

    def __repr__(self):
        return f"<ZlibCompressor, level {self.level}>"


def compressor_for(level):
    if level is None:
        return NoCompressor()
    if level == NO_COMPRESSION:
        info("Compression level 0 requested, data is written uncompressed.")
        return NoCompressor()
    return ZlibCompressor(level)
