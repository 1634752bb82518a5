"""Typed reads: scalar or N-dimensional results for the dataset's own kind."""
import logging

import numpy as np

from hyperslab.errors import EmptyDatasetError, ScalarRegionError
from hyperslab.kinds import dispatch
from hyperslab.selection import build_selection
from hyperslab.storage import as_handle

logger = logging.getLogger(__name__)


class TypedResult:
    """Result of a typed read, tagged by its :class:`~hyperslab.kinds.NumericKind`."""

    is_scalar = False

    __slots__ = ("kind",)

    def __init__(self, kind):
        self.kind = kind

    @property
    def value(self):
        raise NotImplementedError

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.kind is other.kind and np.array_equal(self.value, other.value)

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.kind.name}, {self.value!r})"


class Scalar(TypedResult):
    """The sole element of a single-element dataset."""

    is_scalar = True

    __slots__ = ("_value",)

    def __init__(self, kind, value):
        super().__init__(kind)
        self._value = kind.cast(value)

    @property
    def value(self):
        return self._value


class Array(TypedResult):
    """An N-dimensional array of one numeric kind."""

    __slots__ = ("_data",)

    def __init__(self, kind, data):
        super().__init__(kind)
        self._data = np.asarray(data, dtype=kind.dtype)

    @property
    def value(self):
        return self._data

    data = value

    @property
    def shape(self):
        return self._data.shape

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data
        return self._data.astype(dtype)


def read(dataset, region=None):
    """
    Read a dataset, or a region of it, as a typed result.

    A dataset whose shape is exactly ``(1,)`` is read as a :class:`Scalar`;
    anything else comes back as an :class:`Array` of the dataset's numeric
    kind. The region is not validated here: validate it against the dataset
    shape first (:meth:`hyperslab.block.Block.validate`).

    :param dataset: a dataset handle, or anything :func:`~hyperslab.storage.as_handle` wraps
    :param region: optional validated block
    :returns: :class:`Scalar` or :class:`Array`
    :raises ScalarRegionError: if a region is given for a single-element dataset
    :raises UnsupportedElementKindError: if the element kind can't be dispatched
    :raises EmptyDatasetError: if a single-element dataset yields no element
    :raises NotValidatedError: if the region has not been validated
    """
    handle = as_handle(dataset)
    name = getattr(handle, "name", None)

    if handle.is_single():
        if region is not None:
            raise ScalarRegionError(name)
        kind = dispatch(handle.element_kind())
        values = handle.read_scalar(kind)
        if values.size == 0:
            raise EmptyDatasetError(name)
        logger.debug("Read scalar %s from %s", kind.name, name)
        return Scalar(kind, values[0])

    kind = dispatch(handle.element_kind())
    if region is None:
        data = handle.read_whole(kind)
    else:
        selection = build_selection(region)
        data = handle.read_region(selection, kind)
    logger.debug("Read %s array of shape %s from %s", kind.name, data.shape, name)
    return Array(kind, data)
