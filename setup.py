from __future__ import annotations

import os

from setuptools import find_packages, setup


def read_version() -> str:
    """Read the version, preferring the environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "1.0.0"


setup(
    name="infbitset",
    version=read_version(),
    description="Growable bitset with finite and indefinite (infinite) sets.",
    long_description="Growable bitset with finite and indefinite (infinite) sets.",
    long_description_content_type="text/plain",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[],
)
