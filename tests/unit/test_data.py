# NOTE: Since these are unit tests, we can't assume that an S3 object store or
# https server is available. Therefore, we mock out the remote loading and
# replace it with local file operations.

import numpy as np
import pytest
from unittest import mock

import hyperslab.data
from hyperslab.block import Block, RangeSpec
from hyperslab.config import S3_ACCESS_KEY, S3_SECRET_KEY, S3_URL
from hyperslab.data import H5File, Variable, return_storage_type
from hyperslab.dummy_data import make_h5data
from hyperslab.errors import OutOfBoundsError, ScalarRegionError
from hyperslab.kinds import NumericKind
from hyperslab.reader import Array, Scalar


@pytest.fixture
def h5file(tmp_path):
    filename = str(tmp_path / "kinds.h5")
    written = make_h5data(filename, n=10)
    return filename, written


@pytest.mark.parametrize(
    "uri, storage_type",
    (
        ("tests/test_data/file.h5", None),
        ("/abs/path/file.nc", None),
        ("s3://bucket/file.nc", "s3"),
        ("https://data.example.com/file.nc", "https"),
        ("http://localhost:8000/file.nc", "https"),
    )
)
def test_return_storage_type(uri, storage_type):
    assert return_storage_type(uri) == storage_type


def test_uri_none():
    with pytest.raises(ValueError) as exc:
        H5File(None)
    assert str(exc.value) == "Must use a valid file name for uri. Got None"


def test_uri_nonexistent():
    with pytest.raises(ValueError) as exc:
        H5File("cow.h5")
    assert str(exc.value) == "Must use existing file for uri. cow.h5 not found"


def test_bad_backend(h5file):
    filename, _ = h5file
    with pytest.raises(ValueError) as exc:
        H5File(filename, backend="netcdf")
    assert str(exc.value) == "Bad 'backend': netcdf. Choose from h5py/pyfive."


def test_pyfive_is_read_only(h5file):
    filename, _ = h5file
    with pytest.raises(ValueError):
        H5File(filename, mode="r+", backend="pyfive")


def test_remote_is_read_only():
    with pytest.raises(ValueError):
        H5File("s3://bucket/file.h5", mode="a")


def test_add_and_read(h5file):
    """Variables are read through their blocks."""
    filename, written = h5file
    with H5File(filename) as f:
        f.add_dataset("f8", Block([RangeSpec(0, 3, 4, 1), None]))
        f.add_dataset("i4")
        f.add_coordinate("dt")
        assert f.variables == ["f8", "i4"]
        assert f.coordinates == ["dt"]
        assert "dt" in f and "u8" not in f

        result = f.read("f8")
        assert isinstance(result, Array)
        assert result.kind is NumericKind.FLOAT64
        np.testing.assert_array_equal(result.value, written["f8"][[0, 3, 6, 9]])

        result = f.read("i4")
        assert result.kind is NumericKind.INT32
        np.testing.assert_array_equal(result.value, written["i4"])

        result = f.read("dt")
        assert isinstance(result, Scalar)
        assert result.value == 0.005


def test_block_as_list(h5file):
    filename, written = h5file
    with H5File(filename) as f:
        variable = f.add_dataset("u4", [None, (1, 2, 6, 1)])
        assert isinstance(variable, Variable)
        assert variable.block.validated is False
        np.testing.assert_array_equal(variable.read().value,
                                      written["u4"][:, 1::2])
        assert variable.block.validated


def test_unknown_names(h5file):
    filename, _ = h5file
    with H5File(filename) as f:
        with pytest.raises(KeyError):
            f.add_dataset("pressure")
        with pytest.raises(KeyError):
            f.read("f8")


def test_reregister_replaces(h5file):
    filename, written = h5file
    with H5File(filename) as f:
        f.add_dataset("f4", Block([RangeSpec(0, 2, 1, 1), None]))
        f.add_dataset("f4")
        assert f.variables == ["f4"]
        assert f.read("f4").shape == written["f4"].shape


def test_block_out_of_bounds(h5file):
    filename, _ = h5file
    with H5File(filename) as f:
        f.add_dataset("i8", Block([RangeSpec(2, 4, 3, 1), None]))
        with pytest.raises(OutOfBoundsError):
            f.read("i8")


def test_block_on_scalar(h5file):
    filename, _ = h5file
    with H5File(filename) as f:
        f.add_coordinate("nstep", Block([None]))
        with pytest.raises(ScalarRegionError):
            f.read("nstep")


def test_write(h5file):
    filename, written = h5file
    with H5File(filename, mode="r+") as f:
        f.add_dataset("i8", Block([RangeSpec(1, 2, 2, 1), RangeSpec(0, 3, 4, 2)]))
        f.add_dataset("f4")
        f.write("i8", np.full((2, 8), -1, dtype="i8"))
        f.write("f4", np.zeros((10, 12), dtype="f4"))

    expected = written["i8"].copy()
    expected[np.ix_([1, 3], [0, 1, 3, 4, 6, 7, 9, 10])] = -1
    with H5File(filename) as f:
        f.add_dataset("i8")
        f.add_dataset("f4")
        np.testing.assert_array_equal(f.read("i8").value, expected)
        assert not f.read("f4").value.any()


@mock.patch.object(hyperslab.data, "load_from_s3")
def test_s3(mock_load, h5file):
    """Files in S3 are opened through s3fs and read like local ones."""
    filename, written = h5file
    fileobj = open(filename, "rb")
    mock_load.return_value = fileobj

    uri = "s3://fake-bucket/fake-object.h5"
    storage_options = {"anon": True}
    with H5File(uri, storage_options=storage_options) as f:
        assert f.storage_type == "s3"
        f.add_dataset("f8", Block([None, RangeSpec(2, 5, 2, 1)]))
        np.testing.assert_array_equal(f.read("f8").value, written["f8"][:, [2, 7]])

    mock_load.assert_called_once_with(uri, storage_options)
    assert fileobj.closed


@mock.patch.object(hyperslab.data, "load_from_s3")
def test_s3_not_hdf5(mock_load, tmp_path):
    """A remote object the backend can't open is closed again."""
    filename = tmp_path / "not_hdf5.bin"
    filename.write_bytes(b"not an HDF5 file")
    fileobj = open(filename, "rb")
    mock_load.return_value = fileobj

    with pytest.raises(OSError):
        H5File("s3://fake-bucket/not_hdf5.bin")
    assert fileobj.closed


@mock.patch.object(hyperslab.data, "load_from_https")
def test_https(mock_load, h5file):
    filename, written = h5file
    mock_load.return_value = open(filename, "rb")

    uri = "https://data.example.com/kinds.h5"
    with H5File(uri) as f:
        assert f.storage_type == "https"
        f.add_coordinate("dt")
        assert f.read("dt").value == 0.005
    mock_load.assert_called_once_with(uri)


@mock.patch.object(hyperslab.data.s3fs, "S3FileSystem")
def test_load_from_s3_credentials(mock_fs):
    """Without storage options the configured credentials are used."""
    hyperslab.data.load_from_s3("bucket/file.h5")
    mock_fs.assert_called_once_with(key=S3_ACCESS_KEY,
                                    secret=S3_SECRET_KEY,
                                    client_kwargs={'endpoint_url': S3_URL})
    mock_fs.return_value.open.assert_called_once_with("bucket/file.h5", "rb")

    mock_fs.reset_mock()
    hyperslab.data.load_from_s3("bucket/file.h5", {"anon": True})
    mock_fs.assert_called_once_with(anon=True)


@mock.patch.object(hyperslab.data.fsspec, "filesystem")
def test_load_from_https(mock_fs):
    hyperslab.data.load_from_https("https://data.example.com/file.nc")
    mock_fs.assert_called_once_with("http")
    mock_fs.return_value.open.assert_called_once_with(
        "https://data.example.com/file.nc", "rb"
    )
