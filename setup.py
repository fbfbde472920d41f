import pathlib
import re
from setuptools import setup, find_packages

HERE = pathlib.Path(__file__).parent

with open(HERE / "corpusmi" / "__init__.py") as f:
    init = f.read()
    VERSION = re.search(r'__version__ = ["\']([^"\']+)["\']', init).group(1)
    AUTHOR = re.search(r'__author__ = ["\']([^"\']+)["\']', init).group(1)
    AUTHOR_EMAIL = re.search(r'__email__ = ["\']([^"\']+)["\']', init).group(1)

PACKAGE_NAME = "corpusmi"

LICENSE = "Apache License 2.0"
DESCRIPTION = "Pointwise mutual information and specific correlation \
      for tuples of corpus symbols"
LONG_DESCRIPTION = (HERE / "README.rst").read_text()
LONG_DESC_TYPE = "text/x-rst"

INSTALL_REQUIRES = [
    "numpy>=1.24.0",
    "polars>=1.30.0",
    "scipy>=1.10.0",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7.0",
        "hypothesis>=6.0",
    ],
}

setup(
    name=PACKAGE_NAME,
    version=VERSION,
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type=LONG_DESC_TYPE,
    author=AUTHOR,
    license=LICENSE,
    author_email=AUTHOR_EMAIL,
    python_requires=">=3.10",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "compute-mi=corpusmi.cli:compute_mi_main",
            "construct-vocab=corpusmi.cli:construct_vocab_main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "Topic :: Text Processing :: Linguistic",
    ],
)
