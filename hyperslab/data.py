"""
Files of named variables read and written through hyperslab blocks.

An :class:`H5File` keeps the variables and coordinates a caller registers,
each with an optional :class:`~hyperslab.block.Block`. Reading a variable
validates its block against the dataset shape and hands both to the typed
reader.
"""
import logging
import os
import urllib.parse

from pathlib import Path

import fsspec
import h5py
import pyfive
import s3fs

from hyperslab.block import Block, whole
from hyperslab.config import DEFAULT_BACKEND, S3_ACCESS_KEY, S3_SECRET_KEY, S3_URL
from hyperslab.reader import read
from hyperslab.storage import as_handle
from hyperslab.writer import write

logger = logging.getLogger(__name__)

BACKENDS = ("h5py", "pyfive")


def return_storage_type(uri):
    """
    Infer the type of storage from the scheme of `uri`.

    Returns ``"s3"``, ``"https"``, or None for a local file.
    """
    if isinstance(uri, Path):
        return None
    scheme = urllib.parse.urlparse(str(uri)).scheme
    if scheme == "s3":
        return "s3"
    if scheme in ("http", "https"):
        return "https"
    return None


def load_from_s3(uri, storage_options=None):
    """
    Open an object in S3 as a read-only file-like object.

    storage_options: kwarg dict passed straight to s3fs.S3FileSystem; when
    None the pre-configured credentials from :mod:`hyperslab.config` are used.
    """
    if storage_options is None:
        fs = s3fs.S3FileSystem(key=S3_ACCESS_KEY,
                               secret=S3_SECRET_KEY,
                               client_kwargs={'endpoint_url': S3_URL})
    else:
        fs = s3fs.S3FileSystem(**storage_options)
    s3file = fs.open(uri, 'rb')
    logger.info("Opened %s with s3fs", uri)
    return s3file


def load_from_https(uri):
    """Open a file on an https server as a read-only file-like object."""
    fs = fsspec.filesystem('http')
    http_file = fs.open(uri, 'rb')
    logger.info("Opened %s over https", uri)
    return http_file


class Variable:
    """A named dataset of a file together with the block to read it through."""

    def __init__(self, name, dataset, block=None):
        self.name = name
        self.handle = as_handle(dataset)
        if block is not None and not isinstance(block, Block):
            block = Block(block)
        self.block = block

    def __repr__(self):
        return f"<Variable {self.name!r} shape={self.shape} block={self.block!r}>"

    @property
    def shape(self):
        return tuple(self.handle.shape)

    def element_kind(self):
        return self.handle.element_kind()

    def region(self):
        """The block validated against the dataset shape, or None."""
        if self.block is None:
            return None
        return self.block.validate(self.shape)

    def read(self):
        return read(self.handle, self.region())

    def write(self, payload):
        region = self.region()
        if region is None:
            region = whole(len(self.shape)).validate(self.shape)
        write(self.handle, payload, region)


class H5File:
    """
    An HDF5 (or netCDF4) file with registered variables and coordinates.

    The file is opened with h5py (read/write) or pyfive (read-only) and may
    live locally, in S3 or on an https server; remote files are read-only.
    Use as a context manager to make sure the file is closed.
    """

    def __init__(
        self,
        uri,
        mode: str = "r",
        backend: str = None,
        storage_type: str = None,
        storage_options: dict = None,
    ) -> None:
        if uri is None:
            raise ValueError(f"Must use a valid file name for uri. Got {uri!r}")
        backend = backend or DEFAULT_BACKEND
        if backend not in BACKENDS:
            raise ValueError(f"Bad 'backend': {backend}. Choose from {'/'.join(BACKENDS)}.")
        if not storage_type:
            storage_type = return_storage_type(uri)
        if (storage_type or backend == "pyfive") and mode != "r":
            raise ValueError(
                f"Mode {mode!r} not supported for {backend} {storage_type or 'local'} files"
            )
        if not storage_type and mode in ("r", "r+") and not os.path.isfile(uri):
            raise ValueError(f"Must use existing file for uri. {uri} not found")

        self.uri = uri
        self.mode = mode
        self.backend = backend
        self.storage_type = storage_type
        self.storage_options = storage_options

        self._fileobj = None
        if storage_type == "s3":
            self._fileobj = load_from_s3(uri, storage_options)
        elif storage_type == "https":
            self._fileobj = load_from_https(uri)
        source = self._fileobj if self._fileobj is not None else str(uri)

        try:
            if backend == "h5py":
                self.file = h5py.File(source, mode)
            else:
                self.file = pyfive.File(source)
        except BaseException:
            if self._fileobj is not None:
                self._fileobj.close()
                self._fileobj = None
            raise
        logger.info("Opened %s (mode=%s, backend=%s)", uri, mode, backend)

        self._variables = {}
        self._coordinates = {}

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __repr__(self):
        return f"<H5File {str(self.uri)!r} mode={self.mode!r} backend={self.backend!r}>"

    def __contains__(self, name):
        return name in self._variables or name in self._coordinates

    def __getitem__(self, name):
        if name in self._variables:
            return self._variables[name]
        if name in self._coordinates:
            return self._coordinates[name]
        raise KeyError(f"{name!r} is neither a registered variable nor coordinate")

    @property
    def variables(self):
        """Names of the registered variables, in registration order."""
        return list(self._variables)

    @property
    def coordinates(self):
        """Names of the registered coordinates, in registration order."""
        return list(self._coordinates)

    def _variable(self, name, block):
        try:
            dataset = self.file[name]
        except KeyError:
            raise KeyError(f"No dataset {name!r} in {self.uri}") from None
        return Variable(name, dataset, block)

    def add_dataset(self, name, block=None):
        """Register dataset `name` as a variable read through `block`."""
        variable = self._variable(name, block)
        self._variables[name] = variable
        logger.debug("Added variable %r", variable)
        return variable

    def add_coordinate(self, name, block=None):
        """Register dataset `name` as a coordinate read through `block`."""
        variable = self._variable(name, block)
        self._coordinates[name] = variable
        logger.debug("Added coordinate %r", variable)
        return variable

    def read(self, name):
        return self[name].read()

    def write(self, name, payload):
        self[name].write(payload)

    def close(self):
        close = getattr(self.file, "close", None)
        if close is not None:
            close()
        if self._fileobj is not None:
            self._fileobj.close()
            self._fileobj = None
        logger.info("Closed %s", self.uri)
