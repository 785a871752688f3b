"""
ParaView data (PVD) collections: an XML index of VTK XML files, each tagged with a
time step, part and group.
"""

import pathlib
from typing import NamedTuple, Optional

from .._cxml import etree as ET
from .._exceptions import OptionError


class DataSet(NamedTuple):
    timestep: float
    part: int
    file: str
    group: Optional[str] = None


class PvdFile:
    """Write a series of documents and the collection file referencing them.

    Args:
        directory: Where the documents are written; created if missing.
        file_format: Format string for default file names, filled with the entry
            index and the document's file extension.
        absolute: Store absolute file names in the collection.
    """

    def __init__(self, directory=".", file_format="file_{:03d}.{}", absolute=False):
        self.directory = pathlib.Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.file_format = file_format
        self.absolute = absolute
        self.collection = []

    def __len__(self):
        return len(self.collection)

    def add(self, document, time=None, part=0, group=None, filename=None, writer=None):
        """Add ``document`` to the collection and write it.

        It is written to ``writer`` when given (which must then end up at
        ``directory / filename``), and to ``directory / filename`` otherwise. Returns
        the new :class:`DataSet` entry.
        """
        if part < 0:
            raise OptionError(f"Part cannot be negative: {part}")

        index = len(self.collection)
        if time is None:
            time = float(index)
        if filename is None:
            filename = self.file_format.format(index, document.file_extension)
        filename = pathlib.Path(filename)
        if filename.suffix == "":
            filename = filename.with_suffix(f".{document.file_extension}")

        path = self.directory / filename
        if writer is not None:
            document.write(writer)
        else:
            document.save(path)

        file = path.resolve().as_posix() if self.absolute else filename.as_posix()
        entry = DataSet(float(time), part, file, group)
        self.collection.append(entry)
        return entry

    def _to_xml(self):
        vtk_file = ET.Element(
            "VTKFile", type="Collection", version="0.1", byte_order="LittleEndian"
        )
        collection = ET.SubElement(vtk_file, "Collection")
        for entry in self.collection:
            ds = ET.SubElement(collection, "DataSet", timestep=f"{entry.timestep}")
            if entry.group is not None:
                ds.set("group", entry.group)
            ds.set("part", f"{entry.part}")
            ds.set("file", entry.file)
        return vtk_file

    def write(self, f):
        ET.ElementTree(self._to_xml()).write(f)

    def save(self, filename=None):
        """Write the collection, by default to ``collection.pvd`` in the directory
        holding the documents, so relative file names resolve.
        """
        if filename is None:
            filename = self.directory / "collection.pvd"
        with open(filename, "wb") as f:
            self.write(f)
        return pathlib.Path(filename)
