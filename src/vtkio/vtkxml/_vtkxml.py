"""
Writer for the VTK XML formats (ImageData, RectilinearGrid, StructuredGrid,
UnstructuredGrid).
<https://vtk.org/Wiki/VTK_XML_Formats>
<https://vtk.org/wp-content/uploads/2015/04/file-formats.pdf>
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..__about__ import __version__
from .._common import format_floats, format_ints, warn
from .._compression import (
    BEST_COMPRESSION,
    HUFFMAN_ONLY,
    NO_COMPRESSION,
    compressor_for,
)
from .._cxml import etree as ET
from .._data_array import AppendedData, DataArrayGroup
from .._encoding import FORMAT_ASCII, FORMAT_BINARY, FORMAT_RAW, encoder_for
from .._exceptions import OptionError, WriteError
from .._types import as_typed

IMAGE_DATA = "ImageData"
RECTILINEAR_GRID = "RectilinearGrid"
STRUCTURED_GRID = "StructuredGrid"
UNSTRUCTURED_GRID = "UnstructuredGrid"

file_extensions = {
    IMAGE_DATA: "vti",
    RECTILINEAR_GRID: "vtr",
    STRUCTURED_GRID: "vts",
    UNSTRUCTURED_GRID: "vtu",
}
structured_types = (IMAGE_DATA, RECTILINEAR_GRID, STRUCTURED_GRID)

ENCODING_RAW = "raw"
ENCODING_BASE64 = "base64"


@dataclass(frozen=True)
class WriterConfig:
    """How the arrays of a document are encoded.

    ``fmt`` is one of "ascii", "binary" (base64) or "raw". Raw data cannot be
    embedded in XML and is therefore always appended. ``compression`` is a zlib
    level, or None for no compression.
    """

    fmt: str = FORMAT_BINARY
    appended: bool = False
    compression: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.fmt not in (FORMAT_ASCII, FORMAT_BINARY, FORMAT_RAW):
            raise OptionError(f"Unknown data format '{self.fmt}'.")
        if self.fmt == FORMAT_ASCII and self.appended:
            raise OptionError(
                f"Cannot use appended data with format '{FORMAT_ASCII}'."
            )
        if self.fmt == FORMAT_ASCII and self.compression not in (None, NO_COMPRESSION):
            raise OptionError(
                f"Cannot compress data with format '{FORMAT_ASCII}'."
            )
        if self.compression is not None and not (
            HUFFMAN_ONLY <= self.compression <= BEST_COMPRESSION
        ):
            raise OptionError(f"Invalid compression level {self.compression}.")

    @property
    def is_appended(self):
        return self.appended or self.fmt == FORMAT_RAW

    @property
    def appended_encoding(self):
        return ENCODING_RAW if self.fmt == FORMAT_RAW else ENCODING_BASE64


def _validate_extent(extent):
    if len(extent) != 6:
        raise OptionError(f"Extent needs 6 values, got {len(extent)}.")
    extent = [int(e) for e in extent]
    lows, highs = extent[0::2], extent[1::2]
    for axis, low, high in zip("xyz", lows, highs):
        if low > high:
            raise OptionError(f"Extent low value exceeds high value along {axis}.")
    if sum(high > low for low, high in zip(lows, highs)) < 2:
        raise OptionError(
            f"Extent {format_ints(extent)} spans fewer than two dimensions."
        )
    return extent


def _extent_counts(extent):
    # a degenerate axis (low == high) still holds one layer of points and cells
    lows, highs = extent[0::2], extent[1::2]
    num_points = int(np.prod([high - low + 1 for low, high in zip(lows, highs)]))
    num_cells = int(np.prod([max(high - low, 1) for low, high in zip(lows, highs)]))
    return num_points, num_cells


class Piece:
    """A partition of the grid: its size and the data living on it."""

    def __init__(self, extent=None, num_points=0, num_cells=0):
        self.extent = extent
        self.num_points = num_points
        self.num_cells = num_cells
        self.points = None
        self.cells = None
        self.coordinates = None
        self.point_data = None
        self.cell_data = None

    def to_xml(self, parent):
        piece = ET.SubElement(parent, "Piece")
        if self.extent is not None:
            piece.set("Extent", format_ints(self.extent))
        piece.set("NumberOfPoints", f"{self.num_points}")
        piece.set("NumberOfCells", f"{self.num_cells}")
        for group in (
            self.point_data,
            self.cell_data,
            self.points,
            self.coordinates,
            self.cells,
        ):
            if group is not None:
                group.to_xml(piece)
        return piece


class VtkXmlFile:
    def __init__(
        self,
        grid_type,
        config=None,
        whole_extent=None,
        origin=None,
        spacing=None,
    ):
        if grid_type not in file_extensions:
            raise OptionError(f"Unknown grid type '{grid_type}'.")
        self.grid_type = grid_type
        self.config = WriterConfig() if config is None else config

        self.whole_extent = None
        if whole_extent is not None:
            self.whole_extent = _validate_extent(whole_extent)
        self.origin = None if origin is None else [float(o) for o in origin]
        self.spacing = None if spacing is None else [float(s) for s in spacing]

        self.encoder = encoder_for(self.config.fmt)
        self.compressor = compressor_for(self.config.compression)
        self.appended = None
        if self.config.is_appended:
            self.appended = AppendedData(self.config.appended_encoding)

        self.field_arrays = self._new_group("FieldData", field_data=True)
        self.pieces = []

    @property
    def file_extension(self):
        return file_extensions[self.grid_type]

    def _new_group(self, tag, field_data=False):
        return DataArrayGroup(
            tag,
            self.encoder,
            self.compressor,
            field_data=field_data,
            appended=self.appended,
        )

    def piece(self, extent=None):
        """Start a new piece; subsequent data is added to it."""
        if extent is not None:
            extent = _validate_extent(extent)
            num_points, num_cells = _extent_counts(extent)
            p = Piece(extent, num_points, num_cells)
        else:
            p = Piece()
        self.pieces.append(p)
        return p

    def current_piece(self):
        if not self.pieces:
            if self.grid_type in structured_types:
                if self.whole_extent is None:
                    raise WriteError(
                        f"{self.grid_type} needs a whole extent to create a piece."
                    )
                self.piece(self.whole_extent)
            else:
                self.piece()
        return self.pieces[-1]

    def points(self, data):
        """Set the points of the current piece, given as a flat xyz sequence or as
        an (n, 3) array.
        """
        p = self.current_piece()
        if p.points is not None:
            raise WriteError("Points already set.")

        typed = as_typed(data)
        if len(typed) % 3 != 0:
            raise WriteError(
                f"Points need 3 components, got {len(typed)} values."
            )
        group = self._new_group("Points")
        group.add("Points", 3, typed)
        p.points = group
        if p.extent is None:
            p.num_points = len(typed) // 3
        return self

    def cells(self, connectivity, types):
        """Set the cells of the current piece.

        ``connectivity`` holds the point indices of each cell; ``types`` is a single
        VTK cell type for all cells or one per cell.
        """
        p = self.current_piece()
        if p.cells is not None:
            raise WriteError("Connectivity already set.")

        connectivity = [list(c) for c in connectivity]
        num_cells = len(connectivity)
        types = np.atleast_1d(np.asarray(types))
        if len(types) == 1:
            types = np.full(num_cells, types[0])
        if len(types) != num_cells:
            raise WriteError(
                f"Got {len(types)} cell types for {num_cells} cells."
            )

        # offsets point to the first element of the next cell
        offsets = np.cumsum([len(c) for c in connectivity], dtype=np.uint32)
        flat = np.array([i for c in connectivity for i in c], dtype=np.int64)
        if np.any(flat < 0):
            raise WriteError("Negative point index in connectivity.")
        flat = flat.astype(np.uint32)

        group = self._new_group("Cells")
        group.add("connectivity", 1, flat)
        group.add("offsets", 1, offsets)
        group.add("types", 1, types.astype(np.uint32))
        p.cells = group
        p.num_cells = num_cells
        return self

    def coordinates(self, x, y, z):
        """Set the axis coordinates of the current piece (RectilinearGrid)."""
        p = self.current_piece()
        if p.coordinates is not None:
            raise WriteError("Coordinates already set.")

        group = self._new_group("Coordinates")
        group.add("x_coordinates", 1, x)
        group.add("y_coordinates", 1, y)
        group.add("z_coordinates", 1, z)
        p.coordinates = group
        if p.extent is None:
            p.num_points = len(x) * len(y) * len(z)
        return self

    def _distributed(self, name, data, attr, count, what):
        p = self.current_piece()
        typed = as_typed(data)
        total = getattr(p, count)
        if total == 0 or len(typed) % total != 0:
            raise WriteError(
                f"Data '{name}' with {len(typed)} values does not distribute "
                f"over {total} {what}."
            )
        group = getattr(p, attr)
        if group is None:
            group = self._new_group("PointData" if attr == "point_data" else "CellData")
            setattr(p, attr, group)
        group.add(name, len(typed) // total, typed)
        return self

    def point_data(self, name, data):
        return self._distributed(name, data, "point_data", "num_points", "points")

    def cell_data(self, name, data):
        return self._distributed(name, data, "cell_data", "num_cells", "cells")

    def data(self, name, data):
        """Add data to points or cells, depending on which of the two its length
        fits.
        """
        p = self.current_piece()
        if p.num_points == p.num_cells:
            raise WriteError(
                "Number of points equals number of cells, "
                "use point_data or cell_data instead."
            )
        n = len(as_typed(data))
        if p.num_points and n % p.num_points == 0:
            return self.point_data(name, data)
        if p.num_cells and n % p.num_cells == 0:
            return self.cell_data(name, data)
        raise WriteError(
            f"Data '{name}' with {n} values fits neither "
            f"{p.num_points} points nor {p.num_cells} cells."
        )

    def field_data(self, name, data):
        """Add document-global data, e.g., the time of a time step."""
        typed = as_typed(data)
        self.field_arrays.add(name, len(typed), typed)
        return self

    def _to_xml(self):
        vtk_file = ET.Element(
            "VTKFile",
            type=self.grid_type,
            version="1.0",
            byte_order="LittleEndian",
        )
        if self.config.fmt != FORMAT_ASCII:
            vtk_file.set("header_type", "UInt32")
        if self.compressor.vtk_name is not None:
            vtk_file.set("compressor", self.compressor.vtk_name)

        comment = ET.Comment(f"This file was created by vtkio v{__version__}")
        vtk_file.insert(0, comment)

        grid = ET.SubElement(vtk_file, self.grid_type)
        if self.whole_extent is not None:
            grid.set("WholeExtent", format_ints(self.whole_extent))
        if self.origin is not None:
            grid.set("Origin", format_floats(self.origin))
        if self.spacing is not None:
            grid.set("Spacing", format_floats(self.spacing))

        self.field_arrays.to_xml(grid)
        if not self.pieces:
            self.current_piece()
        for p in self.pieces:
            p.to_xml(grid)

        if self.appended is not None:
            self.appended.to_xml(vtk_file)
        return vtk_file

    def write(self, f):
        """Write the document to the binary stream ``f``."""
        if self.config.fmt == FORMAT_ASCII:
            warn("VTK XML ASCII files are only meant for debugging.")
        tree = ET.ElementTree(self._to_xml())
        # raw appended data is not valid XML, do not claim otherwise
        tree.write(f, xml_declaration=self.config.fmt != FORMAT_RAW)

    def save(self, filename):
        with open(filename, "wb") as f:
            self.write(f)


def _new_file(grid_type, fmt, appended, compression, **kwargs):
    config = WriterConfig(fmt=fmt, appended=appended, compression=compression)
    return VtkXmlFile(grid_type, config, **kwargs)


def image(
    whole_extent,
    origin=(0.0, 0.0, 0.0),
    spacing=(1.0, 1.0, 1.0),
    fmt=FORMAT_BINARY,
    appended=False,
    compression=None,
):
    return _new_file(
        IMAGE_DATA,
        fmt,
        appended,
        compression,
        whole_extent=whole_extent,
        origin=origin,
        spacing=spacing,
    )


def rectilinear(whole_extent, fmt=FORMAT_BINARY, appended=False, compression=None):
    return _new_file(
        RECTILINEAR_GRID, fmt, appended, compression, whole_extent=whole_extent
    )


def structured(whole_extent, fmt=FORMAT_BINARY, appended=False, compression=None):
    return _new_file(
        STRUCTURED_GRID, fmt, appended, compression, whole_extent=whole_extent
    )


def unstructured(fmt=FORMAT_BINARY, appended=False, compression=None):
    return _new_file(UNSTRUCTURED_GRID, fmt, appended, compression)
