from importlib import metadata

try:
    __version__ = metadata.version("vtkio")
except Exception:
    __version__ = "unknown"
