import base64
import io
import threading

import numpy as np
import pytest

import vtkio

from . import helpers


def _group(encoder=None, compressor=None, field_data=False, appended=None):
    return vtkio.DataArrayGroup(
        "PointData",
        encoder or vtkio.Base64Encoder(),
        compressor or vtkio.NoCompressor(),
        field_data=field_data,
        appended=appended,
    )


def test_new_data_array():
    arr = vtkio.DataArray("name", "Float64", "binary")
    assert arr.name == "name"
    assert arr.type == "Float64"
    assert arr.format == "binary"
    assert arr.number_of_components is None
    assert arr.number_of_tuples is None
    assert arr.storage is None
    assert arr.offset is None
    assert arr.data is None


def test_counts_are_exclusive():
    with pytest.raises(ValueError):
        vtkio.DataArray(
            "name", "Float64", "binary", number_of_components=1, number_of_tuples=1
        )


def test_add_inline():
    group = _group()
    arr = group.add("p", 1, [1.0])
    assert len(group) == 1
    assert arr.type == "Float64"
    assert arr.format == "binary"
    assert arr.number_of_components == 1
    assert arr.number_of_tuples is None
    assert arr.storage == vtkio.Inline(b"CAAAAAAAAAAAAPA/")
    assert arr.data == b"CAAAAAAAAAAAAPA/"
    assert arr.offset is None


@pytest.mark.parametrize(
    "encoder, fmt",
    [
        (vtkio.AsciiEncoder(), "ascii"),
        (vtkio.Base64Encoder(), "binary"),
        (vtkio.RawEncoder(), "raw"),
    ],
)
def test_inline_format_label(encoder, fmt):
    arr = _group(encoder=encoder).add("p", 1, [1.0])
    assert arr.format == fmt


@pytest.mark.parametrize(
    "data, ref",
    [
        ([1, 2], "UInt32"),
        (np.array([1, 2], dtype=np.uint64), "UInt64"),
        (np.array([1.0], dtype=np.float32), "Float32"),
        ([1.0], "Float64"),
    ],
)
def test_add_type(data, ref):
    assert _group().add("p", 1, data).type == ref


def test_field_data_records_tuples():
    group = _group(field_data=True)
    group.add("F", 1, [1.0])
    group.add("G", 3, [1.0, 2.0, 3.0])
    assert all(arr.number_of_components is None for arr in group)
    assert [arr.number_of_tuples for arr in group] == [1, 3]


def test_component_data_records_components():
    group = _group()
    group.add("v", 3, [1.0, 2.0, 3.0])
    group.add("s", 1, [1.0, 2.0, 3.0])
    assert all(arr.number_of_tuples is None for arr in group)
    assert [arr.number_of_components for arr in group] == [3, 1]


def test_appended_offsets():
    appended = vtkio.AppendedData("base64")
    group = _group(appended=appended)
    assert len(appended) == 0

    a = group.add("A", 1, [1.0])
    assert a.format == "appended"
    assert a.storage == vtkio.Appended(0)
    assert a.offset == 0
    assert a.data is None
    assert appended.data == b"_CAAAAAAAAAAAAPA/"

    b = group.add("B", 1, [-1.0, 1.0])
    assert b.offset == len(b"CAAAAAAAAAAAAPA/")
    assert appended.data == b"_CAAAAAAAAAAAAPA/EAAAAAAAAAAAAPC/AAAAAAAA8D8="


def test_appended_shared_between_groups():
    appended = vtkio.AppendedData("raw")
    field = _group(vtkio.RawEncoder(), field_data=True, appended=appended)
    points = _group(vtkio.RawEncoder(), appended=appended)

    f = field.add("F", 1, [1.0])
    p = points.add("P", 3, [0.0, 0.0, 0.0])
    assert f.offset == 0
    assert p.offset == 12
    assert len(appended) == 1 + 12 + 28

    # every offset points at a block header describing the data that follows
    data = appended.data[1:]
    for arr, n in [(f, 8), (p, 24)]:
        assert helpers.header_words(data[arr.offset : arr.offset + 4]) == [n]


def test_appended_compressed():
    appended = vtkio.AppendedData("base64")
    group = _group(compressor=vtkio.ZlibCompressor(), appended=appended)
    a = group.add("A", 1, [1.0, 2.0, 3.0])
    b = group.add("B", 1, [4.0])
    rendered_a = appended.data[1 : 1 + b.offset]
    assert a.offset == 0
    assert rendered_a.startswith(helpers.b64_header([1, 24, 24])[:16])
    assert helpers.header_words(base64.b64decode(rendered_a[:24]))[:3] == [1, 24, 24]


def test_appended_is_thread_safe():
    appended = vtkio.AppendedData("raw")
    offsets = []

    def work():
        for _ in range(100):
            offsets.append(appended.append(b"abcd"))

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(offsets) == list(range(0, 1600, 4))
    assert len(appended) == 1 + 1600


@pytest.mark.parametrize("appended", [None, vtkio.AppendedData("base64")])
def test_failed_add_leaves_group_untouched(appended):
    group = _group(appended=appended)
    group.add("ok", 1, [1.0])
    before = None if appended is None else appended.data

    with pytest.raises(vtkio.UnsupportedTypeError):
        group.add("bad", 1, ["a", "b"])

    assert group.names() == ["ok"]
    if appended is not None:
        assert appended.data == before


def test_failed_compression_leaves_group_untouched():
    class Failing:
        def compress(self, payload):
            raise vtkio.CompressionError("boom")

    appended = vtkio.AppendedData("base64")
    group = _group(compressor=Failing(), appended=appended)
    with pytest.raises(vtkio.CompressionError):
        group.add("x", 1, [1.0])
    assert len(group) == 0
    assert len(appended) == 0


def test_compressed_ascii_rejected():
    group = _group(encoder=vtkio.AsciiEncoder(), compressor=vtkio.ZlibCompressor())
    with pytest.raises(vtkio.OptionError):
        group.add("p", 1, [1.0])
    assert len(group) == 0


def test_getitem():
    group = _group()
    arr = group.add("p", 1, [1.0])
    assert group["p"] is arr
    with pytest.raises(KeyError):
        group["q"]


def _xml(element):
    f = io.BytesIO()
    element.write(f)
    return f.getvalue()


def test_inline_to_xml():
    from vtkio._cxml import etree as ET

    root = ET.Element("Piece")
    group = _group()
    group.add("p", 1, [1.0])
    group.to_xml(root)
    out = _xml(root)
    assert b'<DataArray type="Float64" Name="p" format="binary"' in out
    assert b'NumberOfComponents="1"' in out
    assert b"CAAAAAAAAAAAAPA/" in out
    assert b"offset" not in out


def test_appended_to_xml():
    from vtkio._cxml import etree as ET

    root = ET.Element("VTKFile")
    appended = vtkio.AppendedData("raw")
    group = _group(vtkio.RawEncoder(), field_data=True, appended=appended)
    group.add("F", 1, [1.0])
    group.to_xml(root)
    appended.to_xml(root)
    out = _xml(root)
    assert b'format="appended"' in out
    assert b'NumberOfTuples="1"' in out
    assert b'offset="0"' in out
    assert b'<AppendedData encoding="raw">\n_' in out
    assert b"_\x08\x00\x00\x00" in out


def test_empty_group_writes_nothing():
    from vtkio._cxml import etree as ET

    root = ET.Element("Piece")
    assert _group().to_xml(root) is None
    assert vtkio.AppendedData("raw").to_xml(root) is None
    assert len(root) == 0
