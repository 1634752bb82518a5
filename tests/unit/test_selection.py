import h5py
import numpy as np
import pytest

from hyperslab.block import Block, RangeSpec
from hyperslab.errors import NotValidatedError
from hyperslab.selection import Hyperslab, Selection, build_selection


def make_selection():
    block = Block([None, RangeSpec(2, 3, 2, 2)])
    return build_selection(block.validate((5, 10)))


def test_one_quadruple_per_axis():
    """Axis order is kept and every axis gets its own quadruple."""
    selection = make_selection()
    assert selection == Selection([(0, 1, 5, 1), (2, 3, 2, 2)])
    assert selection[1] == Hyperslab(start=2, step=3, count=2, block=2)
    assert selection.rank == 2
    assert selection.starts == (0, 2)
    assert selection.steps == (1, 3)
    assert selection.counts == (5, 2)
    assert selection.blocks == (1, 2)


def test_adjacent_whole_axes_not_coalesced():
    selection = build_selection(Block([None, None, None]).validate((2, 3, 4)))
    assert len(selection) == 3
    assert selection.shape == (2, 3, 4)


def test_selection_from_raw_block():
    block = Block([RangeSpec(0, 2, 2, 1)])
    with pytest.raises(NotValidatedError) as exc:
        build_selection(block)
    assert exc.value.operation == "build_selection"
    block.validate((4,))
    assert build_selection(block) == Selection([(0, 2, 2, 1)])
    assert block.selection() == build_selection(block)


def test_selection_of_something_else():
    with pytest.raises(TypeError):
        build_selection([(0, 2, 2, 1)])


def test_selection_geometry():
    selection = make_selection()
    assert selection.shape == (5, 4)
    assert selection.size == 20
    rows, cols = selection.indices()
    np.testing.assert_array_equal(rows, np.arange(5))
    np.testing.assert_array_equal(cols, [2, 3, 5, 6])
    assert selection.bounding_slices() == (slice(0, 5), slice(2, 7))


def test_selection_matches_numpy():
    data = np.arange(50).reshape(5, 10)
    selection = make_selection()
    expected = data[:, [2, 3, 5, 6]]
    np.testing.assert_array_equal(data[np.ix_(*selection.indices())], expected)


def test_empty_selection_geometry():
    selection = build_selection(Block([RangeSpec(3, 2, 0, 1), None]).validate((5, 2)))
    assert selection.shape == (0, 2)
    assert selection.size == 0
    assert selection.bounding_slices()[0] == slice(3, 3)


def test_select_on_dataspace():
    """The selection picks the same number of points in an HDF5 dataspace."""
    space = h5py.h5s.create_simple((5, 10))
    selection = make_selection()
    assert selection.select(space) is space
    assert space.get_select_npoints() == 20
    assert space.get_select_type() == h5py.h5s.SEL_HYPERSLABS
