#!/usr/bin/env python3

from pathlib import Path

from setuptools import find_packages, setup

packages = find_packages(exclude=("tests*",))
package_data = {"quill": ["py.typed", "config/*.yml"]}
install_requires = Path("requirements.txt").read_text().splitlines()

setup(
    name="Quill",
    python_requires=">=3.8.2",
    version="0.1.0",
    description="Completion suggestion formatting for resolved syntax trees",
    long_description=Path("README.md").read_text(),
    long_description_content_type="text/markdown",
    packages=packages,
    package_data=package_data,
    install_requires=install_requires,
)
