"""Leaf nodes holding a text value."""

from __future__ import annotations

from typing import TextIO

from .errors import E57Exception, ErrorCode
from .structure import ImageFile, Node, NodeType

_CDATA_END = "]]>"


def _cdata_sections(value: str) -> str:
    """Wrap ``value`` in CDATA, splitting it wherever it contains ``]]>``."""
    pieces = value.split(_CDATA_END)
    # Each split point keeps "]]" in one section and starts the next with ">".
    body = "]]]]><![CDATA[>".join(pieces)
    return f"<![CDATA[{body}]]>"


class StringNode(Node):
    """A node holding a Unicode string."""

    node_type = NodeType.STRING

    def __init__(self, dest_image_file: ImageFile, value: str = "") -> None:
        super().__init__(dest_image_file)
        self._value = value

    def value(self) -> str:
        """The string held by this node."""
        self.check_image_file_open()
        return self._value

    def is_type_equivalent(self, ni: Node) -> bool:
        """True if ``ni`` is also a string node; values need not match."""
        return ni.type is NodeType.STRING

    def is_defined(self, path_name: str) -> bool:
        """A string has no sub-structure, so only the empty path is defined."""
        return path_name == ""

    def check_leaves_in_set(self, path_names: set[str] | frozenset[str], origin: Node) -> None:
        """Raise unless this node's path relative to ``origin`` is listed."""
        if self.relative_path_name(origin) not in path_names:
            raise E57Exception(
                ErrorCode.NO_BUFFER_FOR_ELEMENT, f"this->pathName={self.path_name()}"
            )

    def write_xml(
        self,
        imf: ImageFile,
        out: TextIO,
        indent: int = 0,
        forced_field_name: str | None = None,
    ) -> None:
        """Write this node as an XML element, its value as CDATA text."""
        field_name = self.element_name if forced_field_name is None else forced_field_name
        out.write(f'{" " * indent}<{field_name} type="String"')
        if not self._value:
            out.write("/>\n")
            return
        out.write(f">{_cdata_sections(self._value)}</{field_name}>\n")