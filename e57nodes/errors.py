"""Error codes, the library exception and version information."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

E57_FORMAT_MAJOR = 1
E57_FORMAT_MINOR = 0

LIBRARY_ID = "e57nodes-1.0"


class ErrorCode(IntEnum):
    """Numeric error identifiers carried by :class:`E57Exception`."""

    SUCCESS = 0
    BAD_CV_HEADER = 1
    BAD_CV_PACKET = 2
    CHILD_INDEX_OUT_OF_BOUNDS = 3
    SET_TWICE = 4
    HOMOGENEOUS_VIOLATION = 5
    VALUE_NOT_REPRESENTABLE = 6
    SCALED_VALUE_NOT_REPRESENTABLE = 7
    REAL64_TOO_LARGE = 8
    EXPECTING_NUMERIC = 9
    EXPECTING_USTRING = 10
    INTERNAL = 11
    BAD_XML_FORMAT = 12
    XML_PARSER = 13
    BAD_API_ARGUMENT = 14
    FILE_IS_READ_ONLY = 15
    BAD_CHECKSUM = 16
    OPEN_FAILED = 17
    CLOSE_FAILED = 18
    READ_FAILED = 19
    WRITE_FAILED = 20
    LSEEK_FAILED = 21
    PATH_UNDEFINED = 22
    BAD_BUFFER = 23
    NO_BUFFER_FOR_ELEMENT = 24
    BUFFER_SIZE_MISMATCH = 25
    BUFFER_DUPLICATE_PATHNAME = 26
    BAD_FILE_SIGNATURE = 27
    UNKNOWN_FILE_VERSION = 28
    BAD_FILE_LENGTH = 29
    XML_PARSER_INIT = 30
    DUPLICATE_NAMESPACE_PREFIX = 31
    DUPLICATE_NAMESPACE_URI = 32
    BAD_PROTOTYPE = 33
    BAD_CODECS = 34
    VALUE_OUT_OF_BOUNDS = 35
    CONVERSION_REQUIRED = 36
    BAD_PATH_NAME = 37
    NOT_IMPLEMENTED = 38
    BAD_NODE_DOWNCAST = 39
    WRITER_NOT_OPEN = 40
    READER_NOT_OPEN = 41
    NODE_UNATTACHED = 42
    ALREADY_HAS_PARENT = 43
    DIFFERENT_DEST_IMAGEFILE = 44
    IMAGEFILE_NOT_OPEN = 45
    BUFFERS_NOT_COMPATIBLE = 46
    TOO_MANY_WRITERS = 47
    TOO_MANY_READERS = 48
    BAD_CONFIGURATION = 49
    INVARIANCE_VIOLATION = 50


_DESCRIPTIONS: dict[ErrorCode, str] = {
    ErrorCode.SUCCESS: "operation was successful",
    ErrorCode.BAD_CV_HEADER: "a CompressedVector binary header was bad",
    ErrorCode.BAD_CV_PACKET: "a CompressedVector binary packet was bad",
    ErrorCode.CHILD_INDEX_OUT_OF_BOUNDS: "a numerical index identifying a child was out of bounds",
    ErrorCode.SET_TWICE: "attempted to set an existing child element to a new value",
    ErrorCode.HOMOGENEOUS_VIOLATION: (
        "attempted to add an E57 Element that would have made the children "
        "of a homogenous Vector have different types"
    ),
    ErrorCode.VALUE_NOT_REPRESENTABLE: "a value could not be represented in the requested type",
    ErrorCode.SCALED_VALUE_NOT_REPRESENTABLE: (
        "after scaling the result could not be represented in the requested type"
    ),
    ErrorCode.REAL64_TOO_LARGE: (
        "a 64 bit IEEE float was too large to store in a 32 bit IEEE float"
    ),
    ErrorCode.EXPECTING_NUMERIC: "Expecting numeric representation in user's buffer, found ustring",
    ErrorCode.EXPECTING_USTRING: "Expecting string representation in user's buffer, found numeric",
    ErrorCode.INTERNAL: "An unrecoverable inconsistent internal state was detected",
    ErrorCode.BAD_XML_FORMAT: "E57 primitive not encoded in XML correctly",
    ErrorCode.XML_PARSER: "XML not well formed",
    ErrorCode.BAD_API_ARGUMENT: "bad API function argument provided by user",
    ErrorCode.FILE_IS_READ_ONLY: "can't modify read only file",
    ErrorCode.BAD_CHECKSUM: "checksum mismatch, file is corrupted",
    ErrorCode.OPEN_FAILED: "open() failed",
    ErrorCode.CLOSE_FAILED: "close() failed",
    ErrorCode.READ_FAILED: "read() failed",
    ErrorCode.WRITE_FAILED: "write() failed",
    ErrorCode.LSEEK_FAILED: "lseek() failed",
    ErrorCode.PATH_UNDEFINED: "E57 element path well formed but not defined",
    ErrorCode.BAD_BUFFER: "bad SourceDestBuffer",
    ErrorCode.NO_BUFFER_FOR_ELEMENT: (
        "no buffer specified for an element in CompressedVectorNode during write"
    ),
    ErrorCode.BUFFER_SIZE_MISMATCH: "SourceDestBuffers not all same size",
    ErrorCode.BUFFER_DUPLICATE_PATHNAME: "duplicate pathname in CompressedVectorNode read/write",
    ErrorCode.BAD_FILE_SIGNATURE: 'file signature not "ASTM-E57"',
    ErrorCode.UNKNOWN_FILE_VERSION: "incompatible file version",
    ErrorCode.BAD_FILE_LENGTH: "size in file header not same as actual",
    ErrorCode.XML_PARSER_INIT: "XML parser failed to initialize",
    ErrorCode.DUPLICATE_NAMESPACE_PREFIX: "namespace prefix already defined",
    ErrorCode.DUPLICATE_NAMESPACE_URI: "namespace URI already defined",
    ErrorCode.BAD_PROTOTYPE: "bad prototype in CompressedVectorNode",
    ErrorCode.BAD_CODECS: "bad codecs in CompressedVectorNode",
    ErrorCode.VALUE_OUT_OF_BOUNDS: "element value out of min/max bounds",
    ErrorCode.CONVERSION_REQUIRED: (
        "conversion required to assign element value, but not requested"
    ),
    ErrorCode.BAD_PATH_NAME: "E57 path name is not well formed",
    ErrorCode.NOT_IMPLEMENTED: "functionality not implemented",
    ErrorCode.BAD_NODE_DOWNCAST: "bad downcast from Node to specific node type",
    ErrorCode.WRITER_NOT_OPEN: "CompressedVectorWriter is no longer open",
    ErrorCode.READER_NOT_OPEN: "CompressedVectorReader is no longer open",
    ErrorCode.NODE_UNATTACHED: "node is not yet attached to tree of ImageFile",
    ErrorCode.ALREADY_HAS_PARENT: "node already has a parent",
    ErrorCode.DIFFERENT_DEST_IMAGEFILE: "nodes were constructed with different destImageFiles",
    ErrorCode.IMAGEFILE_NOT_OPEN: "destImageFile is no longer open",
    ErrorCode.BUFFERS_NOT_COMPATIBLE: "SourceDestBuffers not compatible with previously given ones",
    ErrorCode.TOO_MANY_WRITERS: "too many open CompressedVectorWriters of an ImageFile",
    ErrorCode.TOO_MANY_READERS: "too many open CompressedVectorReaders of an ImageFile",
    ErrorCode.BAD_CONFIGURATION: "bad configuration string",
    ErrorCode.INVARIANCE_VIOLATION: "class invariance constraint violation in debug mode",
}


def error_code_to_string(code: int) -> str:
    """Return the human readable description of an error code."""
    try:
        member = ErrorCode(code)
    except ValueError:
        return f"unknown error ({code})"
    return f"{_DESCRIPTIONS[member]} (E57_ERROR_{member.name})" if member else (
        f"{_DESCRIPTIONS[member]} (E57_SUCCESS)"
    )


class Versions(NamedTuple):
    """Supported ASTM standard version and the library identifier."""

    astm_major: int
    astm_minor: int
    library_id: str


def get_versions() -> Versions:
    """Return the latest supported ASTM E57 version and the library id."""
    return Versions(E57_FORMAT_MAJOR, E57_FORMAT_MINOR, LIBRARY_ID)


class E57Exception(Exception):
    """Raised for every error detected while building or using an E57 tree."""

    def __init__(
        self,
        error_code: ErrorCode,
        context: str = "",
        source_file_name: str = "",
        source_line_number: int = 0,
        source_function_name: str | None = None,
    ) -> None:
        super().__init__(error_code, context)
        self.error_code = ErrorCode(error_code)
        self.context = context
        self.source_file_name = source_file_name
        self.source_line_number = source_line_number
        self.source_function_name = source_function_name

    @property
    def description(self) -> str:
        """The description of this exception's error code."""
        return error_code_to_string(self.error_code)

    def __str__(self) -> str:
        if self.context:
            return f"{self.description}: {self.context}"
        return self.description