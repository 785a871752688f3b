"""
DataArray elements and the containers (PointData, CellData, FieldData, ...) that
encode, compress and store them.
"""

import threading
from typing import NamedTuple

from ._cxml import etree as ET
from ._encoding import FORMAT_APPENDED
from ._types import as_typed, vtk_type

APPENDED_MARKER = b"_"


class Inline(NamedTuple):
    data: bytes


class Appended(NamedTuple):
    offset: int


class DataArray:
    """A single ``<DataArray>`` element.

    Exactly one of ``number_of_components`` and ``number_of_tuples`` is set; the
    latter is used for field data only. ``storage`` is either :class:`Inline`, the
    rendered bytes written as element text, or :class:`Appended`, the offset of the
    rendered bytes in the document's appended data.
    """

    def __init__(
        self,
        name,
        type,
        format,
        number_of_components=None,
        number_of_tuples=None,
        storage=None,
    ):
        if number_of_components is not None and number_of_tuples is not None:
            raise ValueError(
                "Set either number_of_components or number_of_tuples, not both."
            )
        self.name = name
        self.type = type
        self.format = format
        self.number_of_components = number_of_components
        self.number_of_tuples = number_of_tuples
        self.storage = storage

    @property
    def offset(self):
        if isinstance(self.storage, Appended):
            return self.storage.offset
        return None

    @property
    def data(self):
        if isinstance(self.storage, Inline):
            return self.storage.data
        return None

    def to_xml(self, parent):
        da = ET.SubElement(parent, "DataArray", type=self.type, Name=self.name)
        da.set("format", self.format)
        if self.number_of_components is not None:
            da.set("NumberOfComponents", f"{self.number_of_components}")
        if self.number_of_tuples is not None:
            da.set("NumberOfTuples", f"{self.number_of_tuples}")

        if isinstance(self.storage, Appended):
            da.set("offset", f"{self.storage.offset}")
        elif isinstance(self.storage, Inline):
            da.text = self.storage.data
        return da

    def __repr__(self):
        return f"<DataArray {self.name!r} {self.type} {self.format} {self.storage!r}>"


class AppendedData:
    """The appended data section shared by all arrays of one document.

    The buffer starts with an underscore, inserted with the first array. Offsets
    count from the first byte after it.
    """

    def __init__(self, encoding):
        self.encoding = encoding
        self._data = bytearray()
        self._lock = threading.Lock()

    @property
    def data(self):
        return bytes(self._data)

    def append(self, rendered):
        """Append rendered bytes and return their offset."""
        with self._lock:
            if not self._data:
                self._data += APPENDED_MARKER
            offset = len(self._data) - 1
            self._data += rendered
        return offset

    def __len__(self):
        return len(self._data)

    def to_xml(self, parent):
        if not self._data:
            return None
        ad = ET.SubElement(parent, "AppendedData", encoding=self.encoding)
        ad.text_writer = lambda f: f.write(self._data)
        return ad


class DataArrayGroup:
    """A container of DataArrays sharing one encoder and compressor.

    When ``appended`` is given, rendered data goes to that shared buffer and the
    arrays only store offsets. Field data containers record tuple counts instead
    of component counts.
    """

    def __init__(self, tag, encoder, compressor, field_data=False, appended=None):
        self.tag = tag
        self.encoder = encoder
        self.compressor = compressor
        self.field_data = field_data
        self.appended = appended
        self.arrays = []

    def add(self, name, n, data):
        """Encode ``data`` and add it as an array called ``name``.

        ``n`` is the number of tuples for field data and the number of components
        otherwise. Nothing is stored if any step fails.
        """
        typed = as_typed(data)
        payload = self.encoder.binarise(typed)
        payload = self.compressor.compress(payload)
        rendered = self.encoder.render(payload)
        dtype = vtk_type(typed)

        fmt = FORMAT_APPENDED if self.appended is not None else self.encoder.format_name
        if self.field_data:
            arr = DataArray(name, dtype, fmt, number_of_tuples=n)
        else:
            arr = DataArray(name, dtype, fmt, number_of_components=n)

        if self.appended is None:
            arr.storage = Inline(rendered)
        else:
            arr.storage = Appended(self.appended.append(rendered))

        self.arrays.append(arr)
        return arr

    def names(self):
        return [arr.name for arr in self.arrays]

    def __len__(self):
        return len(self.arrays)

    def __iter__(self):
        return iter(self.arrays)

    def __getitem__(self, name):
        for arr in self.arrays:
            if arr.name == name:
                return arr
        raise KeyError(name)

    def to_xml(self, parent):
        if not self.arrays:
            return None
        group = ET.SubElement(parent, self.tag)
        for arr in self.arrays:
            arr.to_xml(group)
        return group
