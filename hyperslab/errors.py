"""Exceptions raised by the hyperslab data-access layer."""


class HyperslabError(Exception):
    """Base exception for all hyperslab failures."""


class ConstructionError(HyperslabError):
    """A value object could not be built from the given fields."""


class InvalidRangeError(ConstructionError, ValueError):
    """Exception for a range whose block overlaps the next stride."""

    def __init__(self, start, stride, count, block, reason=None):
        self.start = start
        self.stride = stride
        self.count = count
        self.block = block
        if reason is None:
            reason = "stride should be higher than block"
        super(InvalidRangeError, self).__init__(
            f"Invalid range (start={start}, stride={stride}, count={count}, "
            f"block={block}): {reason}."
        )


class UsageError(HyperslabError):
    """An operation was called out of order."""


class NotValidatedError(UsageError):
    """Geometry was queried on a block that has not been validated."""

    def __init__(self, operation):
        self.operation = operation
        super(NotValidatedError, self).__init__(
            f"Block must be validated before use ({operation})."
        )


class ValidationError(HyperslabError):
    """A block does not fit the dataset it was validated against."""


class RankMismatchError(ValidationError, ValueError):
    """The block describes a different number of axes than the dataset has."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super(RankMismatchError, self).__init__(
            f"The length of hyperslab ({actual}) does not match the rank "
            f"of the dataset ({expected})."
        )


class OutOfBoundsError(ValidationError, IndexError):
    """A range reaches past the end of its axis."""

    def __init__(self, axis, right_bound, length):
        self.axis = axis
        self.right_bound = right_bound
        self.length = length
        super(OutOfBoundsError, self).__init__(
            f"Block exceeds bounds in dimension {axis}: right bound "
            f"{right_bound} > axis length {length}."
        )


class ReadError(HyperslabError):
    """A dataset could not be read as requested."""


class WriteError(HyperslabError):
    """A payload could not be written as requested."""


class ScalarRegionError(ReadError, WriteError):
    """A hyperslab was supplied for a single-element dataset."""

    def __init__(self, name=None):
        self.name = name
        where = f" '{name}'" if name else ""
        super(ScalarRegionError, self).__init__(
            f"Hyperslab should not be used on single-element dataset{where}."
        )


class UnsupportedElementKindError(ReadError, TypeError):
    """The dataset stores elements of a kind we cannot dispatch."""

    def __init__(self, kind):
        self.kind = kind
        super(UnsupportedElementKindError, self).__init__(
            f"Unsupported element kind: {kind}."
        )


class EmptyDatasetError(ReadError):
    """A single-element dataset yielded no element."""

    def __init__(self, name=None):
        self.name = name
        where = f" '{name}'" if name else ""
        super(EmptyDatasetError, self).__init__(f"Empty dataset{where}.")


class ShapeMismatchError(WriteError, ValueError):
    """The payload shape differs from the element counts of the region."""

    def __init__(self, expected, actual):
        self.expected = tuple(expected)
        self.actual = tuple(actual)
        super(ShapeMismatchError, self).__init__(
            f"Data shape {self.actual} does not match expected hyperslab "
            f"shape {self.expected}."
        )


class KindMismatchError(WriteError, TypeError):
    """The payload element kind differs from the dataset element kind."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super(KindMismatchError, self).__init__(
            f"Payload of kind {actual} cannot be written to a dataset of "
            f"kind {expected}."
        )
