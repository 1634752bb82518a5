# This file contains configuration for hyperslab.

# Backend used by H5File when none is given: "h5py" (read/write) or
# "pyfive" (read-only, pure Python).
DEFAULT_BACKEND = "h5py"

# Whether the test suite uploads generated files to an S3 object store.
USE_S3 = False

# URL of S3 object store.
S3_URL = "http://localhost:9000"

# S3 access key / username.
S3_ACCESS_KEY = "minioadmin"

# S3 secret key / password.
S3_SECRET_KEY = "minioadmin"

# S3 bucket.
S3_BUCKET = "hyperslab"
