"""Hyperslab block data model.

A block describes, per dataset axis, which indices to address::

    start  ---- the first index of the first block
    stride ---- the distance between the starts of two blocks
    count  ---- the number of blocks
    block  ---- the number of contiguous indices in one block

An axis may also be left as ``WHOLE_AXIS`` (or ``None``), meaning "every index
of this axis once"; such slots are filled in from the dataset shape when the
block is validated (see :mod:`hyperslab.bounds`).

A :class:`Block` is the raw, caller-built descriptor. Validating it produces a
:class:`ValidatedBlock`, the only object that answers geometry queries.
"""
import operator

from dataclasses import dataclass

import numpy as np

from hyperslab.errors import InvalidRangeError, NotValidatedError


class _WholeAxis:
    """Sentinel for an axis that is selected in full."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "WHOLE_AXIS"

    def __reduce__(self):
        return (_WholeAxis, ())


WHOLE_AXIS = _WholeAxis()


@dataclass(frozen=True)
class RangeSpec:
    """Start, stride, count and block length along one axis."""

    start: int
    stride: int
    count: int
    block: int

    def __post_init__(self):
        values = (self.start, self.stride, self.count, self.block)
        try:
            values = tuple(operator.index(v) for v in values)
        except TypeError:
            raise InvalidRangeError(*values, reason="values must be integers")
        if any(v < 0 for v in values):
            raise InvalidRangeError(*values, reason="values must be non-negative")
        start, stride, count, block = values
        # stride == block == 1 is the contiguous "every index once" run
        if block >= stride and not (stride == 1 and block == 1):
            raise InvalidRangeError(*values)
        for name, value in zip(("start", "stride", "count", "block"), values):
            object.__setattr__(self, name, value)

    @classmethod
    def whole_axis(cls, length):
        """Return the range selecting every index of an axis of `length`."""
        return cls(0, 1, length, 1)

    @property
    def left_bound(self):
        return self.start

    @property
    def right_bound(self):
        """One past the last addressed index."""
        return self.start + self.stride * (self.count - 1) + self.block

    @property
    def element_count(self):
        return self.count * self.block

    def indices(self):
        """Return the addressed indices as an ascending integer array."""
        starts = self.start + self.stride * np.arange(self.count, dtype=np.intp)
        offsets = np.arange(self.block, dtype=np.intp)
        return np.add.outer(starts, offsets).ravel()

    def as_tuple(self):
        return (self.start, self.stride, self.count, self.block)


def _as_slot(value):
    if value is None or value is WHOLE_AXIS:
        return WHOLE_AXIS
    if isinstance(value, RangeSpec):
        return value
    if isinstance(value, (tuple, list)) and len(value) == 4:
        return RangeSpec(*value)
    raise TypeError(
        f"Block slots must be RangeSpec, a 4-sequence, None or WHOLE_AXIS. "
        f"Got {value!r}"
    )


class ValidatedBlock:
    """
    A block reconciled with a dataset shape.

    Every axis carries a concrete :class:`RangeSpec`; ``defaulted`` records
    which of them were synthesized from ``WHOLE_AXIS`` during validation.
    Instances are produced by :func:`hyperslab.bounds.validate_bounds`.
    """

    validated = True

    def __init__(self, ranges, defaulted):
        self._ranges = tuple(ranges)
        self._defaulted = tuple(bool(d) for d in defaulted)

    @property
    def ranges(self):
        return self._ranges

    @property
    def defaulted(self):
        return self._defaulted

    def __len__(self):
        return len(self._ranges)

    def __iter__(self):
        return iter(self._ranges)

    def __getitem__(self, axis):
        return self._ranges[axis]

    def __eq__(self, other):
        if not isinstance(other, ValidatedBlock):
            return NotImplemented
        return self._ranges == other._ranges

    def __hash__(self):
        return hash(self._ranges)

    def __repr__(self):
        return f"ValidatedBlock({list(self._ranges)!r})"

    def as_validated(self, operation="as_validated"):
        return self

    def rank(self):
        return len(self._ranges)

    def element_counts(self):
        """Number of addressed indices along each axis, axis 0 first."""
        return tuple(r.element_count for r in self._ranges)

    def selection(self):
        from hyperslab.selection import build_selection
        return build_selection(self)


class Block:
    """
    Raw hyperslab descriptor: one slot per dataset axis.

    Geometry (`rank`, `element_counts`, `selection`) is only available
    once :meth:`validate` has succeeded; before that those methods raise
    :class:`~hyperslab.errors.NotValidatedError`.
    """

    def __init__(self, slots):
        self._slots = tuple(_as_slot(s) for s in slots)
        self._validated = None

    def __len__(self):
        return len(self._slots)

    def __iter__(self):
        if self._validated is not None:
            return iter(self._validated)
        return iter(self._slots)

    def __getitem__(self, axis):
        if self._validated is not None:
            return self._validated[axis]
        return self._slots[axis]

    def __repr__(self):
        state = "validated" if self.validated else "raw"
        return f"Block({list(self)!r}, {state})"

    @property
    def slots(self):
        """The slots as given by the caller, before any filling in."""
        return self._slots

    @property
    def validated(self):
        return self._validated is not None

    def validate(self, shape):
        """Validate against `shape`; see :func:`hyperslab.bounds.validate_bounds`."""
        from hyperslab.bounds import validate_bounds
        return validate_bounds(self, shape)

    def _mark_validated(self, validated):
        self._validated = validated

    def as_validated(self, operation="as_validated"):
        if self._validated is None:
            raise NotValidatedError(operation)
        return self._validated

    def rank(self):
        return self.as_validated("rank").rank()

    def element_counts(self):
        return self.as_validated("element_counts").element_counts()

    def selection(self):
        return self.as_validated("selection").selection()


def whole(rank):
    """Return a raw block selecting every index of a `rank`-dimensional dataset."""
    return Block([WHOLE_AXIS] * rank)
