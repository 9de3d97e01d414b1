from .accessor import Accessor, Kind, is_sequence, is_struct, new_accessor
from .array import ArrayAccessor
from .object import MapAccessor, ObjectAccessor, StructAccessor
from .path import PathParser, PathSegment, PathSegmentType, parse_path, render_path
from .struct_info import FieldInfo, StructInfo, get_struct_info
from .value import Value

__all__ = [
    "Accessor",
    "Kind",
    "new_accessor",
    "is_struct",
    "is_sequence",
    "Value",
    "ObjectAccessor",
    "StructAccessor",
    "MapAccessor",
    "ArrayAccessor",
    "FieldInfo",
    "StructInfo",
    "get_struct_info",
    "PathParser",
    "PathSegment",
    "PathSegmentType",
    "parse_path",
    "render_path",
]
