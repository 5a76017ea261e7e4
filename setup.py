"""Setup configuration for testwave."""

from setuptools import setup, find_packages

setup(
    name="testwave",
    version="0.1.0",
    description="Command-line test runner driven by option and test-case files",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "testwave=testwave.cli:main",
        ],
    },
)
