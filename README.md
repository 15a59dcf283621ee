# e57nodes

A pure-Python library for the element tree of ASTM E57 3D imaging data:
structure, vector and string elements, their path names and XML
serialisation, and the buffers that move values between user sequences
and file fields with range checking, conversion and scaling.

It has no dependencies beyond the standard library.

## Modules

- `e57nodes.errors` – `ErrorCode`, `E57Exception`, `error_code_to_string`,
  `get_versions`.
- `e57nodes.representation` – `MemoryRepresentation`, the element types of
  user buffers, with their limits (`minimum`, `maximum`, `in_range`).
- `e57nodes.structure` – `ImageFile`, `NodeType`, the `Node` base class and
  `StructureNode`.
- `e57nodes.string_node` – `StringNode`.
- `e57nodes.vector_node` – `VectorNode`.
- `e57nodes.conversions` – `store_int64`, `store_scaled_int64`,
  `store_real`: convert a value into a buffer's element type.
- `e57nodes.buffers` – `SourceDestBuffer`.

## Building a tree

```python
import io

from e57nodes.structure import ImageFile
from e57nodes.string_node import StringNode
from e57nodes.vector_node import VectorNode

imf = ImageFile("scan.e57")
root = imf.root

root.set("formatName", StringNode(imf, "ASTM E57 3D Imaging Data File"))
root.set("coordinates/system", StringNode(imf, "local"), True)  # creates "coordinates"

names = VectorNode(imf, False)
names.append(StringNode(imf, "first"))
names.append(StringNode(imf, "second"))
root.set("names", names)

print(root.get("/names/1").value())           # second
print(root.is_defined("coordinates/system"))  # True

out = io.StringIO()
root.write_xml(imf, out, 0, "e57Root")
print(out.getvalue())
```

Paths are relative (`"a/b"`) or absolute (`"/a/b"`); a malformed path
raises `E57Exception` with `ErrorCode.BAD_PATH_NAME`. `get` accepts either
a child index or a path; `lookup` returns `None` where `get` raises
`ErrorCode.PATH_UNDEFINED`.

Children are set once: assigning an existing name, or an index other than
the next free one, raises `E57Exception` with `ErrorCode.SET_TWICE`.
A vector that does not allow heterogeneous children refuses a child whose
type differs from the ones it already holds (`ErrorCode.HOMOGENEOUS_VIOLATION`).
A node can only be placed into a tree of the same `ImageFile`
(`ErrorCode.DIFFERENT_DEST_IMAGEFILE`) and only once
(`ErrorCode.ALREADY_HAS_PARENT`).

When the image file's root is written, its declared extension namespaces
(`ImageFile.extensions_add`) are written as `xmlns` attributes, with the
E57 1.0 namespace as the default if no default namespace was declared.
String values are written as CDATA, split wherever they contain `]]>`.

After `ImageFile.close()`, operations on its nodes raise
`ErrorCode.IMAGEFILE_NOT_OPEN`.

## Moving values

```python
from e57nodes.buffers import SourceDestBuffer
from e57nodes.representation import MemoryRepresentation

xs = [0.0] * 3
buf = SourceDestBuffer(imf, "cartesianX", xs, MemoryRepresentation.REAL64,
                       True, True, 1)
for raw in (100, 200, 300):
    buf.set_next_int64(raw, 0.5, 10.0)   # stores raw * scale + offset
print(xs)  # [60.0, 110.0, 160.0]

buf.rewind()
print(buf.get_next_int64(0.5, 10.0))  # 100
```

Element `i` of a buffer lives at `data[i * stride]`. String buffers are made
with `SourceDestBuffer.for_strings`. Values that do not fit the target
representation raise `ErrorCode.VALUE_NOT_REPRESENTABLE` or
`ErrorCode.SCALED_VALUE_NOT_REPRESENTABLE`; a conversion between integer and
floating point forms that was not requested raises
`ErrorCode.CONVERSION_REQUIRED`; reading or writing past the end raises
`ErrorCode.INTERNAL`. `check_compatible` raises
`ErrorCode.BUFFERS_NOT_COMPATIBLE` when two buffers differ in path name,
representation, capacity, conversion or stride.

## Errors

Every failure is an `e57nodes.errors.E57Exception`, carrying an
`error_code` (an `ErrorCode`) and a `context` string. `error_code_to_string`
gives the description of a code, for example
`"a numerical index identifying a child was out of bounds (E57_ERROR_CHILD_INDEX_OUT_OF_BOUNDS)"`.
`get_versions()` returns a named tuple of the supported ASTM major and minor
version and the library identifier: `(1, 0, "e57nodes-1.0")`.

## What it does not do

The package works on the element tree in memory only. `ImageFile` holds the
tree, its extension namespaces and path syntax; it does not read or write
`.e57` files on disk, and `close()` only marks it closed. There are no
integer, scaled integer, float, blob or compressed-vector elements, and no
reader or writer of scans and images: buffers convert values element by
element but nothing streams them into a file.