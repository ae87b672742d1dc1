"""Setup script for part_reconciler package."""

from setuptools import setup, find_packages

setup(
    name="part_reconciler",
    version="1.0.0",
    description="Part/drawing reconciliation and ERP custom property suggestions",
    author="Continental Machines Inc.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "openai>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "part-reconciler=part_reconciler.cli:main",
        ],
    },
)
