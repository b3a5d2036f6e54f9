import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open("varnum/version.py", "r") as fh:
    version = fh.read().strip().strip('"')

setuptools.setup(
    name="varnum",
    version=version,
    description="Integers of any width, as little-endian bytes, signed or unsigned, that grow instead of overflowing.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(),
    platforms=['any'],
    python_requires='>=3.6',
    extras_require={
        'test': ['pytest'],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries :: Python Modules",
            # big integers
            # fixed width integers
            # two's complement
    ],
)
