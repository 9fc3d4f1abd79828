"""
Setup configuration for the tinmesh package.

Version 0.1.0 - Greedy Delaunay triangulation of height grids with OBJ
export, matplotlib plotting and a typer command line.
"""

from setuptools import find_packages, setup

setup(
    name="tinmesh",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "matplotlib>=3.3.0",
        "pillow>=8.0.0",
        "typer>=0.9.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tinmesh-cli=tinmesh.cli.app:main",
        ],
    },
    author="Antoine Boucher",
    author_email="antoine@antoineboucher.info",
    description="Greedy Delaunay TIN generation from regular height grids",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: GIS",
    ],
    python_requires=">=3.8",
)
