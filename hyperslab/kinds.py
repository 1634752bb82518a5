"""Element kinds reported by datasets and the numeric kinds we read and write."""
import collections
import enum

import numpy as np

from hyperslab.errors import UnsupportedElementKindError

SIGNED = "signed"
UNSIGNED = "unsigned"
FLOAT = "float"
OTHER = "other"


class ElementKind(collections.namedtuple("ElementKind", ["category", "width"])):
    """Declared element representation of a dataset: category and byte width."""

    __slots__ = ()

    @classmethod
    def from_dtype(cls, dtype):
        """Describe a numpy dtype, ignoring its byte order."""
        dtype = np.dtype(dtype)
        category = {"i": SIGNED, "u": UNSIGNED, "f": FLOAT}.get(dtype.kind, OTHER)
        return cls(category, dtype.itemsize)

    def __str__(self):
        return f"{self.category}({self.width})"


class NumericKind(enum.Enum):
    """The closed set of element kinds a dataset can be read as."""

    INT32 = "i4"
    INT64 = "i8"
    UINT32 = "u4"
    UINT64 = "u8"
    FLOAT32 = "f4"
    FLOAT64 = "f8"

    @property
    def dtype(self):
        """Native-endian numpy dtype of this kind."""
        return np.dtype(self.value)

    @property
    def element_kind(self):
        return ElementKind.from_dtype(self.dtype)

    def cast(self, value):
        """Return `value` as a numpy scalar of this kind."""
        return self.dtype.type(value)


def dispatch(kind):
    """
    Map a declared element kind onto the numeric kind to read it as.

    This is the only place where element kinds are inspected; every reader
    and writer goes through it so that unsupported kinds fail the same way.

    :param kind: an :class:`ElementKind` or anything numpy accepts as a dtype
    :raises UnsupportedElementKindError: for any other category or width
    """
    if not isinstance(kind, ElementKind):
        kind = ElementKind.from_dtype(kind)
    category, width = kind
    if category == SIGNED:
        if width == 4:
            return NumericKind.INT32
        if width == 8:
            return NumericKind.INT64
    elif category == UNSIGNED:
        if width == 4:
            return NumericKind.UINT32
        if width == 8:
            return NumericKind.UINT64
    elif category == FLOAT:
        if width == 4:
            return NumericKind.FLOAT32
        if width == 8:
            return NumericKind.FLOAT64
    raise UnsupportedElementKindError(kind)


def kind_of(array):
    """Dispatched numeric kind of an array's dtype."""
    return dispatch(ElementKind.from_dtype(np.asarray(array).dtype))
