from ._pvd import DataSet, PvdFile

__all__ = ["DataSet", "PvdFile"]
