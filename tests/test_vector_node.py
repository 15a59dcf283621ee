import io
import xml.etree.ElementTree as ET

import pytest

from e57nodes.errors import E57Exception, ErrorCode
from e57nodes.string_node import StringNode
from e57nodes.structure import ImageFile, NodeType, StructureNode
from e57nodes.vector_node import VectorNode


@pytest.fixture
def imf():
    return ImageFile("vectors.e57")


def test_type_and_flag(imf):
    homo = VectorNode(imf, False)
    hetero = VectorNode(imf, True)
    assert homo.type is NodeType.VECTOR
    assert homo.allow_hetero_children() is False
    assert hetero.allow_hetero_children() is True


def test_append_names_children_by_position(imf):
    vec = VectorNode(imf)
    imf.root.set("v", vec)
    first = StringNode(imf, "a")
    second = StringNode(imf, "b")
    vec.append(first)
    vec.append(second)
    assert len(vec) == 2
    assert vec.get(0) is first
    assert vec.get("1") is second
    assert second.path_name() == "/v/1"
    assert list(vec) == [first, second]


def test_homogeneous_rejects_different_type(imf):
    vec = VectorNode(imf, False)
    vec.append(StringNode(imf, "a"))
    with pytest.raises(E57Exception) as info:
        vec.append(StructureNode(imf))
    assert info.value.error_code is ErrorCode.HOMOGENEOUS_VIOLATION
    assert vec.child_count() == 1


def test_heterogeneous_accepts_different_types(imf):
    vec = VectorNode(imf, True)
    vec.append(StringNode(imf, "a"))
    vec.append(StructureNode(imf))
    assert vec.child_count() == 2
    assert vec.get(1).type is NodeType.STRUCTURE


def test_set_index_must_append(imf):
    vec = VectorNode(imf, True)
    vec.append(StringNode(imf, "a"))
    with pytest.raises(E57Exception) as info:
        vec.set(0, StringNode(imf, "b"))
    assert info.value.error_code is ErrorCode.SET_TWICE
    with pytest.raises(E57Exception) as info:
        vec.set(5, StringNode(imf, "b"))
    assert info.value.error_code is ErrorCode.CHILD_INDEX_OUT_OF_BOUNDS


def test_homogeneous_children_are_type_constrained(imf):
    vec = VectorNode(imf, False)
    first = StructureNode(imf)
    vec.append(first)
    vec.append(StructureNode(imf))
    with pytest.raises(E57Exception) as info:
        first.set("x", StringNode(imf, "v"))
    assert info.value.error_code is ErrorCode.HOMOGENEOUS_VIOLATION


def test_different_image_file_rejected(imf):
    other = ImageFile("other.e57")
    vec = VectorNode(imf, True)
    with pytest.raises(E57Exception) as info:
        vec.append(StringNode(other, "a"))
    assert info.value.error_code is ErrorCode.DIFFERENT_DEST_IMAGEFILE


def test_type_equivalence(imf):
    a = VectorNode(imf, False)
    b = VectorNode(imf, False)
    a.append(StringNode(imf, "x"))
    b.append(StringNode(imf, "y"))
    assert a.is_type_equivalent(b)

    c = VectorNode(imf, True)
    c.append(StringNode(imf, "x"))
    assert not a.is_type_equivalent(c)

    d = VectorNode(imf, False)
    assert not a.is_type_equivalent(d)

    e = VectorNode(imf, False)
    e.append(StructureNode(imf))
    assert not a.is_type_equivalent(e)

    assert not a.is_type_equivalent(StructureNode(imf))


def test_type_equivalence_order_matters(imf):
    a = VectorNode(imf, True)
    a.append(StringNode(imf, "x"))
    a.append(StructureNode(imf))
    b = VectorNode(imf, True)
    b.append(StructureNode(imf))
    b.append(StringNode(imf, "x"))
    assert not a.is_type_equivalent(b)


def test_write_xml_structure(imf):
    vec = VectorNode(imf, True)
    imf.root.set("v", vec)
    vec.append(StringNode(imf, "hello"))
    vec.append(StringNode(imf))
    out = io.StringIO()
    vec.write_xml(imf, out, 0)
    element = ET.fromstring(out.getvalue())
    assert element.tag == "v"
    assert element.attrib["type"] == "Vector"
    assert element.attrib["allowHeterogeneousChildren"] == "1"
    children = list(element)
    assert [child.tag for child in children] == ["vectorChild", "vectorChild"]
    assert children[0].text == "hello"


def test_write_xml_homogeneous_flag_and_empty(imf):
    vec = VectorNode(imf, False)
    imf.root.set("v", vec)
    out = io.StringIO()
    vec.write_xml(imf, out, 2, "forced")
    text = out.getvalue()
    assert text.startswith("  <forced ")
    element = ET.fromstring(text.strip())
    assert element.tag == "forced"
    assert element.attrib["allowHeterogeneousChildren"] == "0"
    assert list(element) == []


def test_closed_file_blocks_operations(imf):
    vec = VectorNode(imf, True)
    imf.close()
    with pytest.raises(E57Exception) as info:
        vec.allow_hetero_children()
    assert info.value.error_code is ErrorCode.IMAGEFILE_NOT_OPEN