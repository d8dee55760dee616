#!/usr/bin/env python3
"""
Setup script for the asal-content-i18n package
"""

from setuptools import setup, find_packages

setup(
    name="asal-content-i18n",
    version="1.0.0",
    description="Dynamic translation and caching of CMS content (EN/SO/AR)",
    package_dir={"": "backend"},
    packages=find_packages(where="backend", exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        # Web Framework
        "fastapi>=0.110",
        "uvicorn[standard]>=0.24.0",
        "httpx>=0.25.2",

        # Data Validation & Settings
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",

        # Caching
        "redis[hiredis]>=5.0.1",
        "aiosqlite>=0.19.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "content-i18n=content_i18n.main:main",
        ],
    },
)
