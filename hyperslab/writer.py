"""Typed writes of N-dimensional payloads to a dataset region."""
import logging

import numpy as np

from hyperslab.errors import KindMismatchError, ScalarRegionError, ShapeMismatchError
from hyperslab.kinds import dispatch, kind_of
from hyperslab.reader import Array
from hyperslab.selection import build_selection
from hyperslab.storage import as_handle

logger = logging.getLogger(__name__)


def write(dataset, payload, region):
    """
    Write `payload` to the region of `dataset` described by `region`.

    Every check runs before the storage is touched, so a rejected write
    leaves the dataset as it was.

    :param dataset: a dataset handle, or anything :func:`~hyperslab.storage.as_handle` wraps
    :param payload: numpy array (or :class:`~hyperslab.reader.Array`) whose
                    shape equals the region's element counts
    :param region: validated block
    :raises ScalarRegionError: if the dataset is a single-element dataset
    :raises NotValidatedError: if the region has not been validated
    :raises ShapeMismatchError: if the payload shape differs from the region
    :raises KindMismatchError: if the payload kind differs from the dataset's
    :raises UnsupportedElementKindError: if either kind can't be dispatched
    """
    handle = as_handle(dataset)
    name = getattr(handle, "name", None)

    if handle.is_single():
        raise ScalarRegionError(name)

    expected = region.element_counts()
    selection = build_selection(region)
    data = payload.value if isinstance(payload, Array) else np.asarray(payload)

    if tuple(data.shape) != expected:
        raise ShapeMismatchError(expected, data.shape)

    kind = dispatch(handle.element_kind())
    payload_kind = kind_of(data)
    if payload_kind is not kind:
        raise KindMismatchError(kind, payload_kind)

    logger.debug("Writing %s array of shape %s to %s", kind.name, expected, name)
    handle.write_region(selection, data)
