import re
from pathlib import Path

from setuptools import setup, find_packages

# Read the version without importing the package
version_file = Path(__file__).parent / "millerrabin" / "version.py"
__version__ = re.search(r'__version__ = "([^"]+)"', version_file.read_text()).group(1)

setup(
    name="millerrabin",
    version=__version__,
    description="Miller-Rabin primality testing with sequential and parallel execution strategies",
    packages=find_packages(include=["millerrabin", "millerrabin.*"]),
    install_requires=[
        "dask[bag]>=2023.1.0",
        "distributed>=2023.1.0",
        "numpy>=1.22",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    python_requires=">=3.9",
)
