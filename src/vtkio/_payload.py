import numpy as np

# Every header word is a little-endian UInt32, matching header_type="UInt32".
header_dtype = np.dtype("<u4")

NUM_UNCOMPRESSED_HEADER_BYTES = header_dtype.itemsize
NUM_COMPRESSED_HEADER_BYTES = 4 * header_dtype.itemsize


class Payload:
    """The data of a single DataArray before it is rendered to its output format.

    The body holds the (possibly compressed) data, the header describes it. For
    uncompressed payloads the header is a single UInt32, the number of bytes in the
    body. For compressed payloads the header has four UInt32 items:

      number of blocks (always 1)
      uncompressed block size
      uncompressed size of the last block (equal to the block size for one block)
      compressed block size
    """

    __slots__ = ("header", "body")

    def __init__(self, header=b"", body=b""):
        self.header = bytes(header)
        self.body = bytes(body)

    def set_header_uncompressed(self):
        self.header = np.array([len(self.body)], dtype=header_dtype).tobytes()

    def set_header_compressed(self, original_len, compressed_len):
        self.header = np.array(
            [1, original_len, original_len, compressed_len], dtype=header_dtype
        ).tobytes()

    def is_compressed(self):
        return len(self.header) == NUM_COMPRESSED_HEADER_BYTES

    def reset(self):
        self.header = b""
        self.body = b""

    def __repr__(self):
        state = "compressed" if self.is_compressed() else "uncompressed"
        return f"<Payload {state}, {len(self.header)}+{len(self.body)} bytes>"
