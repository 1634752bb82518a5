import logging

from .block import WHOLE_AXIS, Block, RangeSpec, ValidatedBlock
from .bounds import validate_bounds
from .data import H5File, Variable
from .errors import (
    EmptyDatasetError,
    HyperslabError,
    InvalidRangeError,
    KindMismatchError,
    NotValidatedError,
    OutOfBoundsError,
    RankMismatchError,
    ScalarRegionError,
    ShapeMismatchError,
    UnsupportedElementKindError,
)
from .kinds import ElementKind, NumericKind
from .reader import Array, Scalar, TypedResult, read
from .selection import Hyperslab, Selection, build_selection
from .storage import H5Dataset, MemoryDataset, PyfiveDataset
from .writer import write

logging.getLogger(__name__).addHandler(logging.NullHandler())
