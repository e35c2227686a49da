#!/usr/bin/env python3
"""
pkgsettings - Settings management for a package manager's sources, features and API keys
"""

from setuptools import setup, find_packages
import os

# Read the README file
current_dir = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(current_dir, "README.md"), "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read requirements
with open(os.path.join(current_dir, "requirements.txt"), "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

test_requirements = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
]

setup(
    name="pkgsettings",
    version="1.0.0",
    author="pkgsettings Team",
    author_email="admin@pkgsettings.dev",
    description="Settings management for a package manager's sources, features and API keys",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/pkgsettings/pkgsettings",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Software Distribution",
        "Topic :: Utilities",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": test_requirements,
        "dev": test_requirements + [
            "black>=22.0.0",
            "flake8>=5.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pkgsettings=pkgsettings.cli:main",
            "pkgset=pkgsettings.cli:main",
        ],
    },
    project_urls={
        "Bug Reports": "https://github.com/pkgsettings/pkgsettings/issues",
        "Source": "https://github.com/pkgsettings/pkgsettings",
    },
    keywords="package manager configuration sources feature flags api keys",
    zip_safe=False,
)
