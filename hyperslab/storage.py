"""Dataset handles: the storage backings the typed reader and writer talk to."""
import logging

from abc import ABC, abstractmethod
from typing import Protocol, Tuple, runtime_checkable

import h5py
import numpy as np
import pyfive

from hyperslab.kinds import ElementKind

logger = logging.getLogger(__name__)


@runtime_checkable
class DatasetHandle(Protocol):
    """What the reader and writer need from a dataset."""

    @property
    def shape(self) -> Tuple[int, ...]: ...
    @property
    def dtype(self) -> np.dtype: ...

    def element_kind(self) -> ElementKind: ...
    def is_single(self) -> bool: ...
    def read_whole(self, kind) -> np.ndarray: ...
    def read_region(self, selection, kind) -> np.ndarray: ...
    def read_scalar(self, kind) -> np.ndarray: ...
    def write_region(self, selection, payload) -> None: ...


class BaseDataset(ABC):
    """Base class providing the shared parts of a dataset handle."""

    name = None

    @property
    @abstractmethod
    def shape(self) -> Tuple[int, ...]: ...

    @property
    @abstractmethod
    def dtype(self) -> np.dtype: ...

    def element_kind(self):
        return ElementKind.from_dtype(self.dtype)

    def is_single(self):
        """True if the dataset has the single-element shape ``(1,)``."""
        return tuple(self.shape) == (1,)

    @abstractmethod
    def read_whole(self, kind) -> np.ndarray:
        """Read the full dataset as an array of numeric `kind`."""

    @abstractmethod
    def read_region(self, selection, kind) -> np.ndarray:
        """Read the elements addressed by `selection` as numeric `kind`."""

    def read_scalar(self, kind):
        """
        Read a single-element dataset.

        Returns the raw elements as a flat array so the caller can tell an
        empty read apart from a value.
        """
        return self.read_whole(kind).ravel()

    def write_region(self, selection, payload):
        """Write `payload` to the elements addressed by `selection`."""
        raise NotImplementedError(f"{type(self).__name__} is read-only")

    def __repr__(self):
        return f"<{type(self).__name__} {self.name!r} shape={tuple(self.shape)} dtype={self.dtype}>"


class H5Dataset(BaseDataset):
    """
    Dataset handle over an ``h5py.Dataset``.

    Region reads and writes go through HDF5 hyperslab selections on the
    file dataspace, so only the addressed elements are transferred.
    """

    def __init__(self, dataset):
        if not isinstance(dataset, h5py.Dataset):
            raise TypeError(f"Expected h5py.Dataset, got {type(dataset).__name__}")
        self._dset = dataset
        self.name = dataset.name

    @property
    def dataset(self):
        return self._dset

    @property
    def shape(self):
        return tuple(self._dset.shape)

    @property
    def dtype(self):
        return self._dset.dtype

    def read_whole(self, kind):
        return np.asarray(self._dset[()], dtype=kind.dtype)

    def _spaces(self, selection):
        fspace = selection.select(self._dset.id.get_space())
        mspace = h5py.h5s.create_simple(selection.shape)
        return mspace, fspace

    def read_region(self, selection, kind):
        if not selection:
            return self.read_whole(kind)
        out = np.empty(selection.shape, dtype=kind.dtype)
        if out.size == 0:
            return out
        mspace, fspace = self._spaces(selection)
        logger.debug("Reading %s from %s", selection, self.name)
        self._dset.id.read(mspace, fspace, out)
        return out

    def write_region(self, selection, payload):
        payload = np.ascontiguousarray(payload)
        if not selection:
            self._dset[()] = payload
            return
        if payload.size == 0:
            return
        mspace, fspace = self._spaces(selection)
        logger.debug("Writing %s to %s", selection, self.name)
        self._dset.id.write(mspace, fspace, payload)


class PyfiveDataset(BaseDataset):
    """
    Read-only dataset handle over a ``pyfive.high_level.Dataset``.

    pyfive indexes with plain slices, so a region read fetches the slab
    enclosing the selection and picks the addressed elements from it.
    """

    def __init__(self, dataset):
        if not isinstance(dataset, pyfive.high_level.Dataset):
            raise TypeError(
                f"Expected pyfive.high_level.Dataset, got {type(dataset).__name__}"
            )
        self._ds = dataset
        self.name = dataset.name

    @property
    def shape(self):
        return tuple(self._ds.shape)

    @property
    def dtype(self):
        return np.dtype(self._ds.dtype)

    def read_whole(self, kind):
        index = tuple(slice(None) for _ in self.shape)
        return np.asarray(self._ds[index], dtype=kind.dtype)

    def read_region(self, selection, kind):
        if not selection:
            return self.read_whole(kind)
        if selection.size == 0:
            return np.empty(selection.shape, dtype=kind.dtype)
        enclosing = np.asarray(self._ds[selection.bounding_slices()])
        relative = [idx - s.start for idx, s in zip(selection.indices(), selection)]
        return np.asarray(enclosing[np.ix_(*relative)], dtype=kind.dtype)


class MemoryDataset(BaseDataset):
    """Dataset handle wrapping an in-memory numpy array."""

    def __init__(self, data, name=None):
        self._data = np.asarray(data)
        self.name = name

    @property
    def data(self):
        return self._data

    @property
    def shape(self):
        return self._data.shape

    @property
    def dtype(self):
        return self._data.dtype

    def read_whole(self, kind):
        return np.array(self._data, dtype=kind.dtype)

    def read_region(self, selection, kind):
        if not selection:
            return self.read_whole(kind)
        return np.asarray(self._data[np.ix_(*selection.indices())], dtype=kind.dtype)

    def write_region(self, selection, payload):
        if not selection:
            self._data[()] = payload
            return
        self._data[np.ix_(*selection.indices())] = payload


def as_handle(dataset):
    """
    Wrap `dataset` in the matching handle.

    Accepts an existing handle, an ``h5py.Dataset``, a
    ``pyfive.high_level.Dataset`` or a numpy array.
    """
    if isinstance(dataset, BaseDataset):
        return dataset
    if isinstance(dataset, h5py.Dataset):
        return H5Dataset(dataset)
    if isinstance(dataset, pyfive.high_level.Dataset):
        return PyfiveDataset(dataset)
    if isinstance(dataset, np.ndarray):
        return MemoryDataset(dataset)
    if isinstance(dataset, DatasetHandle):
        return dataset
    raise TypeError(f"Can't use {type(dataset).__name__} as a dataset handle")
