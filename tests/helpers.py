import base64
import io

import numpy as np

# (values, ascii text, little-endian float64 hex, base64 of header + body)
float64_pairs = [
    ([1.0], b"1.000000", "000000000000f03f", b"CAAAAAAAAAAAAPA/"),
    (
        [-1.0, 1.0],
        b"-1.000000 1.000000",
        "000000000000f0bf000000000000f03f",
        b"EAAAAAAAAAAAAPC/AAAAAAAA8D8=",
    ),
    (
        [1.0, -1.0],
        b"1.000000 -1.000000",
        "000000000000f03f000000000000f0bf",
        b"EAAAAAAAAAAAAPA/AAAAAAAA8L8=",
    ),
    (
        [1.0, 2.0, 3.0],
        b"1.000000 2.000000 3.000000",
        "000000000000f03f00000000000000400000000000000840",
        b"GAAAAAAAAAAAAPA/AAAAAAAAAEAAAAAAAAAIQA==",
    ),
    (
        [0.0, 0.0, 0.0],
        b"0.000000 0.000000 0.000000",
        "000000000000000000000000000000000000000000000000",
        b"GAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA==",
    ),
]

tetra_points = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0]
tetra_cells = [[0, 1, 2, 3]]
VTK_TETRA = 10


def header_words(header):
    return np.frombuffer(header, dtype="<u4").tolist()


def b64_header(words):
    return base64.b64encode(np.array(words, dtype="<u4").tobytes())


def num_base64_chars(num_bytes):
    return -(-num_bytes // 3) * 4


def to_bytes(document):
    f = io.BytesIO()
    document.write(f)
    return f.getvalue()
