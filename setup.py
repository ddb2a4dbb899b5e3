#!/usr/bin/env python3
"""
Setup configuration for piano-client
A client library for an internet-radio service's encrypted XML-RPC protocol
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "pyyaml>=6.0.1",
    "pycryptodomex>=3.19.0",
    "defusedxml>=0.7.1",
]

setup(
    name="piano-client",
    version="0.1.0",
    author="piano-client Team",
    description="Client library for an internet-radio service's XML-RPC protocol",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["piano", "piano.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
        ],
    },
    keywords="internet radio xml-rpc client streaming",
)
