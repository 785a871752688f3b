"""
The four numeric kinds a VTK DataArray can be written with, and the resolution of
caller data into one of them.
"""

import numpy as np

from ._exceptions import UnmappableTypeError, UnsupportedTypeError

vtk_to_numpy_type = {
    "UInt32": np.dtype("<u4"),
    "UInt64": np.dtype("<u8"),
    "Float32": np.dtype("<f4"),
    "Float64": np.dtype("<f8"),
}
numpy_to_vtk_type = {v: k for k, v in vtk_to_numpy_type.items()}

# numpy kind/itemsize -> canonical dtype
_widening = {
    ("u", 1): "UInt32",
    ("u", 2): "UInt32",
    ("u", 4): "UInt32",
    ("u", 8): "UInt64",
    ("i", 1): "UInt32",
    ("i", 2): "UInt32",
    ("i", 4): "UInt32",
    ("i", 8): "UInt64",
    ("f", 4): "Float32",
    ("f", 8): "Float64",
}


class TypedData:
    """Flat, little-endian numeric data in one of the four supported kinds.

    Instances are created through :func:`as_typed`, never from raw values, so the
    dtype of ``values`` is always one of the keys of ``numpy_to_vtk_type``.
    """

    __slots__ = ("values",)

    def __init__(self, values):
        self.values = values

    @property
    def dtype(self):
        return self.values.dtype

    @property
    def is_integer(self):
        return self.values.dtype.kind == "u"

    def __len__(self):
        return len(self.values)

    def __repr__(self):
        return f"<TypedData {numpy_to_vtk_type.get(self.dtype)} ({len(self)})>"


def _from_python_sequence(data):
    flat = np.asarray(data, dtype=object).reshape(-1)
    if len(flat) == 0:
        return np.empty(0, dtype=vtk_to_numpy_type["Float64"])

    # bool is a subclass of int, reject it before the int check
    if any(isinstance(x, (bool, np.bool_)) for x in flat):
        raise UnsupportedTypeError("Boolean data cannot be written to a DataArray.")

    if all(isinstance(x, (int, np.integer)) for x in flat):
        if any(x < 0 for x in flat):
            raise UnsupportedTypeError(
                "Negative integers cannot be written as UInt32."
            )
        if any(x > np.iinfo(np.uint32).max for x in flat):
            raise UnsupportedTypeError("Integer value exceeds the UInt32 range.")
        return np.array(flat.tolist(), dtype=vtk_to_numpy_type["UInt32"])

    if all(isinstance(x, (int, float, np.integer, np.floating)) for x in flat):
        return np.array(flat.tolist(), dtype=vtk_to_numpy_type["Float64"])

    kinds = sorted({type(x).__name__ for x in flat})
    raise UnsupportedTypeError(f"Cannot write data of type(s) {', '.join(kinds)}.")


def as_typed(data):
    """Resolve ``data`` into :class:`TypedData`.

    numpy arrays keep their precision (narrow integers are widened to UInt32),
    plain Python sequences of ints become UInt32 and sequences of floats Float64.
    Scalars are treated as one-element sequences. Everything else raises
    :class:`UnsupportedTypeError`.
    """
    if isinstance(data, TypedData):
        return data

    if isinstance(data, (str, bytes)):
        raise UnsupportedTypeError(f"Cannot write {type(data).__name__} data.")

    if not isinstance(data, (np.ndarray, np.generic)):
        try:
            return TypedData(_from_python_sequence(data))
        except ValueError as e:
            # ragged nesting
            raise UnsupportedTypeError(str(e)) from e

    arr = np.atleast_1d(np.asarray(data)).reshape(-1)
    key = (arr.dtype.kind, arr.dtype.itemsize)
    try:
        vtk_type = _widening[key]
    except KeyError:
        raise UnsupportedTypeError(
            f"Cannot write data of dtype {arr.dtype}."
        ) from None

    if arr.dtype.kind == "i" and np.any(arr < 0):
        raise UnsupportedTypeError(
            f"Negative integers cannot be written as {vtk_type}."
        )

    return TypedData(arr.astype(vtk_to_numpy_type[vtk_type], copy=False))


def vtk_type(typed):
    """Return the VTK type string ("UInt32", ...) of ``typed``."""
    dtype = getattr(typed, "dtype", None)
    try:
        return numpy_to_vtk_type[dtype]
    except (KeyError, TypeError):
        raise UnmappableTypeError(
            f"Cannot map {typed!r} to a VTK data type."
        ) from None
