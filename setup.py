"""
Setup script for actpdf.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="actpdf",
    version="1.0.0",
    description="Hand-written PDF 1.4 writer for single-page product assignment acts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="actpdf Contributors",
    author_email="",
    package_dir={"": "packages"},
    packages=find_packages(where="packages", exclude=["tests", "tests.*"]),
    install_requires=[
        "pypdf>=3.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
        "babel>=2.12.0",
    ],
    extras_require={
        "web": [
            "fastapi>=0.100.0",
            "pydantic>=2.0.0",
            "uvicorn>=0.22.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "fastapi>=0.100.0",
            "pydantic>=2.0.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "actpdf=actpdf.cli.main:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Printing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf writer xref assignment act inventory cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
