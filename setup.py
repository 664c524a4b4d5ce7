"""
AuroraWake Core - Alarm scheduling engine for the AuroraWake alarm clock.

This package provides the alarm models, recurrence calculation and the
schedule store that keeps stored alarms and platform reminders consistent.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Read version from __version__.py
version = {}
with open("aurorawake_core/__version__.py") as fp:
    exec(fp.read(), version)

setup(
    name="aurorawake-core",
    version=version["__version__"],
    author="AuroraWake",
    author_email="dev@aurorawake.app",
    description="Alarm scheduling engine for the AuroraWake alarm clock",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/aurorawake/aurorawake-core",
    project_urls={
        "Bug Tracker": "https://github.com/aurorawake/aurorawake-core/issues",
        "Source Code": "https://github.com/aurorawake/aurorawake-core",
    },
    packages=find_packages(exclude=["tests", "tests.*", "examples", "docs"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
        "Typing :: Typed",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0,<3.0.0",
        "typing-extensions>=4.1.0",
        "python-dotenv>=1.0.0",
        "structlog>=24.0.0",
        "PyYAML>=6.0",
        "tzlocal>=5.0",
        "tzdata",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
            "ruff>=0.1.0",
            "pre-commit>=3.0.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords=[
        "aurorawake",
        "alarm",
        "alarm-clock",
        "scheduling",
        "recurrence",
        "async",
    ],
)
