from setuptools import setup

PACKAGES = [
    'hyperslab',
]

REQUIREMENTS = {
    # Installation script (this file) dependencies
    'setup': [
        'setuptools',
    ],
    # Installation dependencies
    # Use with pip install . to install from source
    'install': [
        'fsspec',
        'h5py',
        'netcdf4',  # dummy data
        'numpy!=1.24.3',  # severe masking bug
        'pyfive',
        's3fs',
    ],
    # Use with pip install .[test]
    'test': [
        'pytest',
        'pytest-cov>=2.10.1',
        'pytest-html!=2.1.0',
        'pytest-metadata>=1.5.1',
        'pytest-xdist',
    ],
}


setup(
    name='hyperslab',
    version='0.1.0',
    author="",
    description="Typed hyperslab reads and writes of HDF5 datasets",
    long_description="",
    long_description_content_type='text/markdown',
    url='',
    download_url='',
    license='',
    classifiers=[
        'Development Status :: 0 - Prototype',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'Natural Language :: English',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Scientific/Engineering',
        'Topic :: Scientific/Engineering :: Physics',
    ],
    packages=PACKAGES,
    # Include all version controlled files
    include_package_data=True,
    setup_requires=REQUIREMENTS['setup'],
    install_requires=REQUIREMENTS['install'],
    extras_require={'test': REQUIREMENTS['test']},
    python_requires='>=3.9',
    zip_safe=False,
)
