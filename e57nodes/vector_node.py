"""Vector nodes: ordered children named by their position."""

from __future__ import annotations

from typing import TextIO

from .errors import E57Exception, ErrorCode
from .structure import ImageFile, Node, NodeType, StructureNode


class VectorNode(StructureNode):
    """An ordered list of children, optionally required to share one type."""

    node_type = NodeType.VECTOR

    def __init__(self, dest_image_file: ImageFile, allow_hetero_children: bool = False) -> None:
        super().__init__(dest_image_file)
        self._allow_hetero_children = bool(allow_hetero_children)

    def allow_hetero_children(self) -> bool:
        """True if children may have different types."""
        self.check_image_file_open()
        return self._allow_hetero_children

    def is_type_equivalent(self, ni: Node) -> bool:
        """True if ``ni`` is a vector with the same policy and equivalent children in order."""
        if ni.type is not NodeType.VECTOR or not isinstance(ni, VectorNode):
            return False
        if self._allow_hetero_children != ni._allow_hetero_children:
            return False
        if self.child_count() != ni.child_count():
            return False
        return all(
            mine.is_type_equivalent(theirs)
            for mine, theirs in zip(self._children, ni._children)
        )

    def set(self, key: int | str, ni: Node, auto_path_create: bool = False) -> None:
        """Add ``ni``; at an index, a homogeneous vector requires a matching type."""
        self.check_image_file_open()
        if isinstance(key, int) and not self._allow_hetero_children:
            if any(not child.is_type_equivalent(ni) for child in self._children):
                raise E57Exception(
                    ErrorCode.HOMOGENEOUS_VIOLATION, f"this->pathName={self.path_name()}"
                )
        super().set(key, ni, auto_path_create)

    def write_xml(
        self,
        imf: ImageFile,
        out: TextIO,
        indent: int = 0,
        forced_field_name: str | None = None,
    ) -> None:
        """Write this vector and its children as XML."""
        field_name = self.element_name if forced_field_name is None else forced_field_name
        pad = " " * indent
        out.write(
            f'{pad}<{field_name} type="Vector" '
            f'allowHeterogeneousChildren="{int(self._allow_hetero_children)}">\n'
        )
        for child in self._children:
            child.write_xml(imf, out, indent + 2, "vectorChild")
        out.write(f"{pad}</{field_name}>\n")