"""Translate validated blocks into native hyperslab selections."""
import collections
import logging

import numpy as np

from hyperslab.block import Block, ValidatedBlock

logger = logging.getLogger(__name__)


Hyperslab = collections.namedtuple("Hyperslab", ["start", "step", "count", "block"])
Hyperslab.__doc__ = "One axis of a selection, in HDF5 start/stride/count/block order."


class Selection(tuple):
    """
    Ordered per-axis :class:`Hyperslab` quadruples, axis 0 first.

    This is the storage-engine view of a validated block: one quadruple per
    axis, never reordered or coalesced. It knows how to apply itself to an
    HDF5 dataspace and how to express itself as numpy indices for backings
    that work on in-memory arrays.
    """

    def __new__(cls, slabs=()):
        return super().__new__(cls, (Hyperslab(*s) for s in slabs))

    def __repr__(self):
        return f"Selection({list(self)!r})"

    @property
    def rank(self):
        return len(self)

    @property
    def starts(self):
        return tuple(s.start for s in self)

    @property
    def steps(self):
        return tuple(s.step for s in self)

    @property
    def counts(self):
        return tuple(s.count for s in self)

    @property
    def blocks(self):
        return tuple(s.block for s in self)

    @property
    def shape(self):
        """Shape of the array the selection reads into or writes from."""
        return tuple(s.count * s.block for s in self)

    @property
    def size(self):
        return int(np.prod(self.shape, dtype=np.int64))

    def indices(self):
        """Per-axis ascending index arrays of the addressed positions."""
        out = []
        for s in self:
            starts = s.start + s.step * np.arange(s.count, dtype=np.intp)
            out.append(np.add.outer(starts, np.arange(s.block, dtype=np.intp)).ravel())
        return tuple(out)

    def bounding_slices(self):
        """Contiguous slices enclosing the selection on every axis."""
        return tuple(
            slice(s.start, s.start + s.step * (s.count - 1) + s.block)
            if s.count and s.block else slice(s.start, s.start)
            for s in self
        )

    def select(self, space):
        """
        Apply the selection to an h5py dataspace.

        :param space: a ``h5py.h5s.SpaceID`` of the same rank
        :returns: `space`, with its selection replaced
        """
        if not self:
            space.select_all()
        else:
            space.select_hyperslab(self.starts, self.counts,
                                   stride=self.steps, block=self.blocks)
        return space


def build_selection(block):
    """
    Build the native selection for a validated block.

    :param block: a :class:`~hyperslab.block.ValidatedBlock`, or a
                  :class:`~hyperslab.block.Block` that has been validated
    :returns: a :class:`Selection`
    :raises NotValidatedError: if `block` has not been validated
    """
    if isinstance(block, Block):
        block = block.as_validated("build_selection")
    elif not isinstance(block, ValidatedBlock):
        raise TypeError(f"Can't build a selection from {block!r}")
    selection = Selection(r.as_tuple() for r in block)
    logger.debug("Built %r", selection)
    return selection
