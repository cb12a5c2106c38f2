"""Setup script for neighborgraph."""

from setuptools import find_packages, setup

setup(
    name="neighborgraph",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "kuzu>=0.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "people-you-might-know=neighborgraph.pipeline:main",
        ],
    },
)
