from ._vtkxml import (
    IMAGE_DATA,
    RECTILINEAR_GRID,
    STRUCTURED_GRID,
    UNSTRUCTURED_GRID,
    Piece,
    VtkXmlFile,
    WriterConfig,
    image,
    rectilinear,
    structured,
    unstructured,
)

__all__ = [
    "IMAGE_DATA",
    "RECTILINEAR_GRID",
    "STRUCTURED_GRID",
    "UNSTRUCTURED_GRID",
    "Piece",
    "VtkXmlFile",
    "WriterConfig",
    "image",
    "rectilinear",
    "structured",
    "unstructured",
]
