#!/usr/bin/env python3
"""
Setup script for calc3d - a calculator operated inside a 3D scene.
"""
from setuptools import setup, find_packages
import os

# Read README for long description
readme_path = os.path.join(os.path.dirname(__file__), "README.md")
if os.path.exists(readme_path):
    with open(readme_path, "r", encoding="utf-8") as f:
        long_description = f.read()
else:
    long_description = "calc3d - a calculator operated inside a 3D scene"

# Read requirements
requirements = [
    "pyyaml>=6.0",
    "rich>=13.0",
    "prompt_toolkit>=3.0",
    "pygame>=2.1",
]

# Optional requirements
extras_require = {
    "dev": [
        "pytest>=7.0",
        "pytest-cov>=4.0",
        "black>=23.0",
        "isort>=5.0",
        "mypy>=1.0",
    ],
}

# All extras
extras_require["all"] = list(set(
    dep for deps in extras_require.values() for dep in deps
))

setup(
    name="calc3d",
    version="0.1.0",
    author="calc3d Team",
    description="A four-function calculator you operate inside a 3D scene",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: X11 Applications",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require=extras_require,
    entry_points={
        "console_scripts": [
            "calc3d=calc_core.cli:main",
        ],
    },
    zip_safe=False,
)
