"""
Encoders turn typed data into a payload (binarise) and a finished payload into the
bytes that end up in the file (render).
"""

import base64

from ._common import format_floats, format_ints
from ._exceptions import OptionError
from ._payload import Payload
from ._types import as_typed

FORMAT_ASCII = "ascii"
FORMAT_BINARY = "binary"
FORMAT_RAW = "raw"
FORMAT_APPENDED = "appended"


def _binary_payload(data):
    typed = as_typed(data)
    payload = Payload(body=typed.values.tobytes())
    payload.set_header_uncompressed()
    return payload


class AsciiEncoder:
    format_name = FORMAT_ASCII

    def binarise(self, data):
        typed = as_typed(data)
        text = (format_ints if typed.is_integer else format_floats)(
            typed.values.tolist()
        )
        payload = Payload(body=text.encode())
        # not used for rendering, but keeps the header consistent with the body
        payload.set_header_uncompressed()
        return payload

    def render(self, payload):
        if payload.is_compressed():
            raise OptionError(f"Cannot compress data with format '{FORMAT_ASCII}'.")
        return payload.body


class Base64Encoder:
    format_name = FORMAT_BINARY

    def binarise(self, data):
        return _binary_payload(data)

    def render(self, payload):
        # The header of compressed data is read before the data is inflated, so it is
        # encoded on its own. Uncompressed data is encoded in one go.
        if payload.is_compressed():
            return base64.b64encode(payload.header) + base64.b64encode(payload.body)
        return base64.b64encode(payload.header + payload.body)


class RawEncoder:
    format_name = FORMAT_RAW

    def binarise(self, data):
        return _binary_payload(data)

    def render(self, payload):
        return payload.header + payload.body


_encoders = {
    FORMAT_ASCII: AsciiEncoder,
    FORMAT_BINARY: Base64Encoder,
    FORMAT_RAW: RawEncoder,
}


def encoder_for(fmt):
    try:
        return _encoders[fmt]()
    except KeyError:
        raise OptionError(
            f"Unknown data format '{fmt}'. Choose one of {', '.join(_encoders)}."
        ) from None
