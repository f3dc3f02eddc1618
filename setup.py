"""
Setup script for the Visit Store package.

This package provides a bounded, recency-ranked history of visited
resources with deduplication, capacity eviction and a query engine,
plus persistence backends and catalog ownership lookups.
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="visit-store",
    version="1.0.0",
    author="Visit Store Team",
    description="Recently visited resources store with dedup, eviction and queries",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=[
        # AWS SDK
        "boto3>=1.28.85",
        "botocore>=1.31.85",

        # HTTP client
        "requests>=2.31.0",
    ],
    extras_require={
        "dev": [
            # Testing
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
            "pytest-asyncio>=0.21.0",
            "moto>=5.0.0",

            # Code quality
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.1",

            # Type stubs
            "boto3-stubs[dynamodb]>=1.28.85",
            "types-requests>=2.31.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
