from . import pvd, vtkxml
from .__about__ import __version__
from ._compression import (
    BEST_COMPRESSION,
    BEST_SPEED,
    DEFAULT_COMPRESSION,
    HUFFMAN_ONLY,
    NO_COMPRESSION,
    NoCompressor,
    ZlibCompressor,
)
from ._data_array import Appended, AppendedData, DataArray, DataArrayGroup, Inline
from ._encoding import AsciiEncoder, Base64Encoder, RawEncoder
from ._exceptions import (
    CompressionError,
    DecodeError,
    OptionError,
    UnmappableTypeError,
    UnsupportedTypeError,
    WriteError,
)
from ._payload import Payload
from ._types import TypedData, as_typed, vtk_type
from .pvd import PvdFile
from .vtkxml import (
    VtkXmlFile,
    WriterConfig,
    image,
    rectilinear,
    structured,
    unstructured,
)

__all__ = [
    "pvd",
    "vtkxml",
    "__version__",
    "BEST_COMPRESSION",
    "BEST_SPEED",
    "DEFAULT_COMPRESSION",
    "HUFFMAN_ONLY",
    "NO_COMPRESSION",
    "NoCompressor",
    "ZlibCompressor",
    "Appended",
    "AppendedData",
    "DataArray",
    "DataArrayGroup",
    "Inline",
    "AsciiEncoder",
    "Base64Encoder",
    "RawEncoder",
    "CompressionError",
    "DecodeError",
    "OptionError",
    "UnmappableTypeError",
    "UnsupportedTypeError",
    "WriteError",
    "Payload",
    "TypedData",
    "as_typed",
    "vtk_type",
    "PvdFile",
    "VtkXmlFile",
    "WriterConfig",
    "image",
    "rectilinear",
    "structured",
    "unstructured",
]
