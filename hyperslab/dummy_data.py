import h5py
import numpy as np

from netCDF4 import Dataset


SUPPORTED_DTYPES = ("i4", "i8", "u4", "u8", "f4", "f8")


def _make_data(n=10):
    """
    Make the actual numpy arrays necessary to save to disk
    """
    data = np.ones((n, n, n))
    dd = np.arange(n)

    nsq = n * n
    for i in range(n):
        for j in range(n):
            for k in range(n):
                data[i, j, k] = i + j * n + k * nsq

    return dd, data


def make_vanilla_ncdata(filename='test_vanilla.nc', chunksize=(3, 3, 1), n=10):
    """
    Make a vanilla test dataset which is three dimensional with indices and values that
    aid in testing data extraction.
    """
    return make_ncdata(filename, chunksize, n)


def make_byte_order_ncdata(filename='test_vanilla.nc', chunksize=(3, 3, 1), n=10, byte_order='native'):
    """
    Make a vanilla dataset with the specified byte order (endianness) which is
    three dimensional with indices and values that aid in testing data
    extraction.
    """
    return make_ncdata(filename, chunksize, n, byte_order=byte_order)


def make_ncdata(filename, chunksize, n, byte_order='native', time_step=0.005):
    """
    Make a netCDF4 file laid out like simulation output: coordinate variables
    "x", "y" and "z", a three dimensional variable "data" whose value at
    [i, j, k] is i + j*n + k*n*n, and a single-element variable "dt" holding
    `time_step`.

    byte_order: Byte order (endianness) of the data. Must be 'big', 'little',
                or 'native'.

    Returns the numpy array written to "data".
    """
    assert n > 4

    ds = Dataset(filename, 'w', format="NETCDF4")
    dd, data = _make_data(n)

    ds.createDimension("xdim", n)
    ds.createDimension("ydim", n)
    ds.createDimension("zdim", n)
    ds.createDimension("one", 1)

    dtype_prefix = "<" if byte_order == "little" else ">" if byte_order == "big" else ""
    dim_dtype = dtype_prefix + "i4"
    var_dtype = dtype_prefix + "f8"

    x = ds.createVariable("x", dim_dtype, ("xdim",), endian=byte_order)
    y = ds.createVariable("y", dim_dtype, ("ydim",), endian=byte_order)
    z = ds.createVariable("z", dim_dtype, ("zdim",), endian=byte_order)

    for a, s in zip([x, y, z], [1, n, n * n]):
        a[:] = dd * s

    dvar = ds.createVariable("data", var_dtype, ("xdim", "ydim", "zdim"),
                             chunksizes=chunksize,
                             endian=byte_order)
    dvar[:] = data

    dt = ds.createVariable("dt", var_dtype, ("one",), endian=byte_order)
    dt[:] = time_step

    # all important close at the end!!
    ds.close()

    return data


def make_h5data(filename, n=10, chunks=None):
    """
    Make an HDF5 file with one (n, n+2) dataset per supported numeric kind
    (named after the dtype, e.g. "f8"), plus:

    - "dt" and "nstep", single-element float64 and int32 datasets;
    - "f2" and "i2", datasets of kinds we do not read;
    - "empty", a (0, n) float64 dataset;
    - "volume", an (n, n, n) float64 dataset.

    Returns a dict mapping dataset names to the arrays written.
    """
    written = {}
    with h5py.File(filename, 'w') as f:
        for dtype in SUPPORTED_DTYPES + ("f2", "i2"):
            data = np.arange(n * (n + 2)).reshape(n, n + 2).astype(dtype)
            f.create_dataset(dtype, data=data, chunks=chunks)
            written[dtype] = data

        written["dt"] = np.array([0.005])
        f.create_dataset("dt", data=written["dt"])
        written["nstep"] = np.array([1200], dtype="i4")
        f.create_dataset("nstep", data=written["nstep"])

        written["empty"] = np.zeros((0, n))
        f.create_dataset("empty", data=written["empty"])

        _, volume = _make_data(n)
        f.create_dataset("volume", data=volume, chunks=(3, 3, 1) if chunks else None)
        written["volume"] = volume

    return written


if __name__=="__main__":
    make_vanilla_ncdata()
    make_h5data('test_vanilla.h5')
