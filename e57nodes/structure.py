"""The E57 element tree: image files, the node base class and structures."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar, Iterator, TextIO

from .errors import E57Exception, ErrorCode

E57_V1_0_URI = "http://www.astm.org/COMMIT/E57/2010-e57-v1.0"

_ASCII_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_ASCII_DIGITS = frozenset("0123456789")
_NAME_START = _ASCII_LETTERS | {"_"}
_NAME_REST = _ASCII_LETTERS | _ASCII_DIGITS | {"_", ":", "-", "."}


class NodeType(Enum):
    """Kinds of element in an E57 tree."""

    STRUCTURE = 1
    VECTOR = 2
    COMPRESSED_VECTOR = 3
    INTEGER = 4
    SCALED_INTEGER = 5
    FLOAT = 6
    STRING = 7
    BLOB = 8

    @property
    def xml_name(self) -> str:
        """The value of the ``type`` attribute used in the XML section."""
        return _XML_NAMES[self]


_XML_NAMES = {
    NodeType.STRUCTURE: "Structure",
    NodeType.VECTOR: "Vector",
    NodeType.COMPRESSED_VECTOR: "CompressedVector",
    NodeType.INTEGER: "Integer",
    NodeType.SCALED_INTEGER: "ScaledInteger",
    NodeType.FLOAT: "Float",
    NodeType.STRING: "String",
    NodeType.BLOB: "Blob",
}


def _is_element_name_legal(name: str) -> bool:
    if not name:
        return False
    if name[0] in _ASCII_DIGITS:
        return all(c in _ASCII_DIGITS for c in name)
    if name[0] not in _NAME_START:
        return False
    if any(c not in _NAME_REST for c in name[1:]):
        return False
    if ":" in name:
        prefix, _, local = name.partition(":")
        if ":" in local or not prefix or not local:
            return False
    return True


class ImageFile:
    """An open E57 image file: namespaces, path syntax and the root structure."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        self.is_open = True
        self._extensions: list[tuple[str, str]] = []
        self.root = StructureNode(self)
        self.root.set_attached_recursive()

    def close(self) -> None:
        """Mark the file closed; nodes of it can no longer be used."""
        self.is_open = False

    def _check_open(self) -> None:
        if not self.is_open:
            raise E57Exception(ErrorCode.IMAGEFILE_NOT_OPEN, f"fileName={self.file_name}")

    def extensions_add(self, prefix: str, uri: str) -> None:
        """Declare an extension namespace; prefixes and URIs must be unique."""
        self._check_open()
        if self.extensions_lookup_prefix(prefix) is not None:
            raise E57Exception(
                ErrorCode.DUPLICATE_NAMESPACE_PREFIX, f"prefix={prefix} uri={uri}"
            )
        if any(known_uri == uri for _, known_uri in self._extensions):
            raise E57Exception(
                ErrorCode.DUPLICATE_NAMESPACE_URI, f"prefix={prefix} uri={uri}"
            )
        self._extensions.append((prefix, uri))

    def extensions_lookup_prefix(self, prefix: str) -> str | None:
        """Return the URI declared for ``prefix``, or None."""
        return next((uri for p, uri in self._extensions if p == prefix), None)

    def extensions_count(self) -> int:
        """Number of declared extension namespaces."""
        return len(self._extensions)

    def _extension_at(self, index: int) -> tuple[str, str]:
        if not 0 <= index < len(self._extensions):
            raise IndexError(f"extension index {index} out of range")
        return self._extensions[index]

    def extensions_prefix(self, index: int) -> str:
        """Prefix of the extension declared at position ``index``."""
        return self._extension_at(index)[0]

    def extensions_uri(self, index: int) -> str:
        """URI of the extension declared at position ``index``."""
        return self._extension_at(index)[1]

    def _iter_extensions(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._extensions))

    def path_name_parse(self, path_name: str) -> tuple[bool, list[str]]:
        """Split a path into ``(is_relative, fields)``; raise on a malformed path."""
        is_relative = not path_name.startswith("/")
        body = path_name if is_relative else path_name[1:]
        fields: list[str] = []
        if body:
            for element_name in body.split("/"):
                if not _is_element_name_legal(element_name):
                    raise E57Exception(
                        ErrorCode.BAD_PATH_NAME,
                        f"pathName={path_name} elementName={element_name}",
                    )
                fields.append(element_name)
        if is_relative and not fields:
            raise E57Exception(ErrorCode.BAD_PATH_NAME, f"pathName={path_name}")
        return is_relative, fields

    def path_name_unparse(self, is_relative: bool, fields: list[str]) -> str:
        """Join fields back into a path string."""
        joined = "/".join(fields)
        return joined if is_relative else "/" + joined

    def path_name_check_well_formed(self, path_name: str) -> None:
        """Raise if ``path_name`` is not a well formed path."""
        self.path_name_parse(path_name)


class Node:
    """Base of every element in an E57 tree."""

    node_type: ClassVar[NodeType | None] = None

    def __init__(self, dest_image_file: ImageFile) -> None:
        if type(self).node_type is None:
            raise TypeError(f"{type(self).__name__} does not define a node type")
        self.dest_image_file = dest_image_file
        self.parent: StructureNode | None = None
        self.element_name = ""
        self.is_attached = False
        self.check_image_file_open()

    @property
    def type(self) -> NodeType:
        """The kind of this node."""
        return self.node_type  # type: ignore[return-value]

    def check_image_file_open(self) -> None:
        """Raise if the destination image file has been closed."""
        imf = self.dest_image_file
        if not imf.is_open:
            raise E57Exception(ErrorCode.IMAGEFILE_NOT_OPEN, f"fileName={imf.file_name}")

    def path_name(self) -> str:
        """Absolute path of this node from the root of its tree."""
        names: list[str] = []
        node: Node = self
        while node.parent is not None:
            names.append(node.element_name)
            node = node.parent
        return "/" + "/".join(reversed(names))

    def relative_path_name(self, origin: Node) -> str:
        """Path of this node relative to its ancestor ``origin``."""
        names: list[str] = []
        node: Node = self
        while node is not origin:
            if node.parent is None:
                raise E57Exception(
                    ErrorCode.INTERNAL,
                    f"elementName={node.element_name} childPathName={'/'.join(reversed(names))}",
                )
            names.append(node.element_name)
            node = node.parent
        return "/".join(reversed(names))

    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self.parent is None

    def get_root(self) -> Node:
        """The topmost ancestor of this node."""
        node: Node = self
        while node.parent is not None:
            node = node.parent
        return node

    def set_parent(self, parent: StructureNode, element_name: str) -> None:
        """Attach this node under ``parent`` with the given element name."""
        if self.parent is not None or self.is_attached:
            raise E57Exception(
                ErrorCode.ALREADY_HAS_PARENT,
                f"pathName={self.path_name()} newParent->pathName={parent.path_name()}",
            )
        self.parent = parent
        self.element_name = element_name
        if parent.is_attached:
            self.set_attached_recursive()

    def is_type_constrained(self) -> bool:
        """True if an ancestor restricts what type this node may have."""
        node: Node = self
        while node.parent is not None:
            node = node.parent
            if node.type is NodeType.VECTOR:
                if not node.allow_hetero_children() and node.child_count() > 1:  # type: ignore[attr-defined]
                    return True
            elif node.type is NodeType.COMPRESSED_VECTOR:
                return True
        return False

    def set_attached_recursive(self) -> None:
        """Mark this node as part of an image file's tree."""
        self.is_attached = True

    def is_type_equivalent(self, ni: Node) -> bool:
        """True if ``ni`` has the same node type."""
        return ni.type is self.type

    def is_defined(self, path_name: str) -> bool:
        """A leaf defines only the empty path."""
        return path_name == ""

    def lookup(self, path_name: str) -> Node | None:
        """Find a node by path; a leaf has no descendants."""
        is_relative, _ = self.dest_image_file.path_name_parse(path_name)
        if not is_relative and not self.is_root():
            return self.get_root().lookup(path_name)
        return None

    def check_leaves_in_set(self, path_names: set[str] | frozenset[str], origin: Node) -> None:
        """Raise unless this leaf's path relative to ``origin`` is listed."""
        if self.relative_path_name(origin) not in path_names:
            raise E57Exception(
                ErrorCode.NO_BUFFER_FOR_ELEMENT, f"pathName={self.path_name()}"
            )

    def write_xml(
        self,
        imf: ImageFile,
        out: TextIO,
        indent: int = 0,
        forced_field_name: str | None = None,
    ) -> None:
        """Write this node as an empty XML element."""
        field_name = self.element_name if forced_field_name is None else forced_field_name
        out.write(f'{" " * indent}<{field_name} type="{self.type.xml_name}"/>\n')


class StructureNode(Node):
    """A node holding named children in insertion order."""

    node_type = NodeType.STRUCTURE

    def __init__(self, dest_image_file: ImageFile) -> None:
        super().__init__(dest_image_file)
        self._children: list[Node] = []

    def is_type_equivalent(self, ni: Node) -> bool:
        """True if ``ni`` is a structure with equivalent children by name."""
        if ni.type is not NodeType.STRUCTURE or not isinstance(ni, StructureNode):
            return False
        if self.child_count() != ni.child_count():
            return False
        for mine, theirs in zip(self._children, ni._children):
            name = mine.element_name
            if name == theirs.element_name:
                if not mine.is_type_equivalent(theirs):
                    return False
            else:
                other = ni.lookup(name)
                if other is None or not mine.is_type_equivalent(other):
                    return False
        return True

    def is_defined(self, path_name: str) -> bool:
        """True if a node exists at ``path_name``."""
        self.check_image_file_open()
        return self.lookup(path_name) is not None

    def set_attached_recursive(self) -> None:
        """Mark this node and all its descendants as attached."""
        self.is_attached = True
        for child in self._children:
            child.set_attached_recursive()

    def child_count(self) -> int:
        """Number of direct children."""
        self.check_image_file_open()
        return len(self._children)

    def get(self, key: int | str) -> Node:
        """Return a child by position or a descendant by path."""
        self.check_image_file_open()
        if isinstance(key, int):
            if not 0 <= key < len(self._children):
                raise E57Exception(
                    ErrorCode.CHILD_INDEX_OUT_OF_BOUNDS,
                    f"pathName={self.path_name()} index={key} size={len(self._children)}",
                )
            return self._children[key]
        ni = self.lookup(key)
        if ni is None:
            raise E57Exception(
                ErrorCode.PATH_UNDEFINED, f"pathName={self.path_name()} pathName={key}"
            )
        return ni

    def lookup(self, path_name: str) -> Node | None:
        """Find a node by relative or absolute path, or return None."""
        imf = self.dest_image_file
        is_relative, fields = imf.path_name_parse(path_name)
        if not (is_relative or self.is_root()):
            return self.get_root().lookup(path_name)
        if not fields:
            return None if is_relative else self.get_root()
        child = next((c for c in self._children if c.element_name == fields[0]), None)
        if child is None or len(fields) == 1:
            return child
        return child.lookup(imf.path_name_unparse(True, fields[1:]))

    def set(self, key: int | str, ni: Node, auto_path_create: bool = False) -> None:
        """Add ``ni`` at an index (append only) or at a path."""
        self.check_image_file_open()
        if isinstance(key, int):
            self._set_index(key, ni)
            return
        is_relative, fields = self.dest_image_file.path_name_parse(key)
        target = self if is_relative else self.get_root()
        if not isinstance(target, StructureNode):
            raise E57Exception(ErrorCode.BAD_PATH_NAME, f"pathName={key}")
        target.set_fields(fields, 0, ni, auto_path_create)

    def _set_index(self, index: int, ni: Node) -> None:
        size = len(self._children)
        if index < 0 or index > size:
            raise E57Exception(
                ErrorCode.CHILD_INDEX_OUT_OF_BOUNDS,
                f"pathName={self.path_name()} index={index} size={size}",
            )
        if index != size:
            raise E57Exception(
                ErrorCode.SET_TWICE, f"pathName={self.path_name()} index={index}"
            )
        if self.dest_image_file is not ni.dest_image_file:
            raise E57Exception(
                ErrorCode.DIFFERENT_DEST_IMAGEFILE,
                f"this->destImageFile{self.dest_image_file.file_name} "
                f"ni->destImageFile{ni.dest_image_file.file_name}",
            )
        if self.is_type_constrained():
            raise E57Exception(ErrorCode.HOMOGENEOUS_VIOLATION, f"pathName={self.path_name()}")
        ni.set_parent(self, str(index))
        self._children.append(ni)

    def set_fields(
        self, fields: list[str], level: int, ni: Node, auto_path_create: bool = False
    ) -> None:
        """Add ``ni`` at the path given by ``fields[level:]`` below this node."""
        self.check_image_file_open()
        if level == 0 and not fields:
            raise E57Exception(ErrorCode.SET_TWICE, f"pathName={self.path_name()} element=/")
        name = fields[level]
        last = len(fields) - 1
        for child in self._children:
            if child.element_name != name:
                continue
            if level == last:
                raise E57Exception(
                    ErrorCode.SET_TWICE, f"pathName={self.path_name()} element={name}"
                )
            if not isinstance(child, StructureNode):
                raise E57Exception(
                    ErrorCode.BAD_PATH_NAME, f"pathName={child.path_name()} field={fields[level + 1]}"
                )
            child.set_fields(fields, level + 1, ni)
            return

        if self.is_type_constrained():
            raise E57Exception(ErrorCode.HOMOGENEOUS_VIOLATION, f"pathName={self.path_name()}")

        if level == last:
            ni.set_parent(self, name)
            self._children.append(ni)
            return

        if not auto_path_create:
            raise E57Exception(
                ErrorCode.PATH_UNDEFINED, f"pathName={self.path_name()} field={name}"
            )
        parent: StructureNode = self
        for field in fields[level:last]:
            child_struct = StructureNode(self.dest_image_file)
            parent.set(field, child_struct)
            parent = child_struct
        parent.set(fields[last], ni)

    def append(self, ni: Node) -> None:
        """Add ``ni`` as a new last child named by its position."""
        self.set(self.child_count(), ni)

    def check_leaves_in_set(self, path_names: set[str] | frozenset[str], origin: Node) -> None:
        """Check every leaf below this node is listed in ``path_names``."""
        for child in self._children:
            child.check_leaves_in_set(path_names, origin)

    def write_xml(
        self,
        imf: ImageFile,
        out: TextIO,
        indent: int = 0,
        forced_field_name: str | None = None,
    ) -> None:
        """Write this structure and its children as XML."""
        field_name = self.element_name if forced_field_name is None else forced_field_name
        pad = " " * indent
        out.write(f'{pad}<{field_name} type="Structure"')
        num_spaces = " " * (indent + len(field_name) + 2)

        if self.is_root() and self is imf.root:
            got_default_namespace = False
            for prefix, uri in imf._iter_extensions():
                if prefix:
                    attribute = f"xmlns:{prefix}"
                else:
                    got_default_namespace = True
                    attribute = "xmlns"
                out.write(f'\n{num_spaces}{attribute}="{uri}"')
            if not got_default_namespace:
                out.write(f'\n{num_spaces}xmlns="{E57_V1_0_URI}"')

        if self._children:
            out.write(">\n")
            for child in self._children:
                child.write_xml(imf, out, indent + 2)
            out.write(f"{pad}</{field_name}>\n")
        else:
            out.write("/>\n")

    def __len__(self) -> int:
        return self.child_count()

    def __iter__(self) -> Iterator[Node]:
        self.check_image_file_open()
        return iter(list(self._children))