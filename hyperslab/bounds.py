"""Reconcile a raw block with the shape of the dataset it will address."""
import logging

from hyperslab.block import WHOLE_AXIS, RangeSpec, ValidatedBlock
from hyperslab.errors import OutOfBoundsError, RankMismatchError

logger = logging.getLogger(__name__)


def check_bound(axis, slot, length):
    """
    Return the concrete range for one axis.

    A ``WHOLE_AXIS`` slot becomes the range over every index of the axis;
    a given range is kept as long as its right bound fits in `length`.
    """
    if slot is WHOLE_AXIS:
        return RangeSpec.whole_axis(length)
    if slot.right_bound > length:
        raise OutOfBoundsError(axis, slot.right_bound, length)
    return slot


def validate_bounds(block, shape):
    """
    Validate `block` against a dataset `shape`.

    The block must describe exactly as many axes as `shape` has, and axis
    ``i`` is checked against ``shape[i]``. On success the block is marked as
    validated and the resulting :class:`~hyperslab.block.ValidatedBlock`
    is returned; validating an already validated block returns the same
    object without checking again. On failure the block is left untouched.

    :param block: a raw :class:`~hyperslab.block.Block`
    :param shape: sequence of non-negative axis lengths
    :returns: the validated block
    :raises RankMismatchError: if the block and shape lengths differ
    :raises OutOfBoundsError: if a range reaches past its axis
    """
    if block.validated:
        return block.as_validated()

    shape = tuple(int(n) for n in shape)
    if len(block) != len(shape):
        raise RankMismatchError(len(shape), len(block))

    ranges = [
        check_bound(axis, slot, length)
        for axis, (slot, length) in enumerate(zip(block.slots, shape))
    ]
    defaulted = [slot is WHOLE_AXIS for slot in block.slots]
    validated = ValidatedBlock(ranges, defaulted)
    block._mark_validated(validated)
    logger.debug("Validated %r against shape %s", validated, shape)
    return validated
