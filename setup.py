#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The NPUOPS Project Authors
#
from setuptools import setup, find_packages

setup(
    name="npuops",
    version="0.1.0",
    description="Operator schemas and type inference for NPU quantized elementwise operators",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24",
        "typing_extensions>=4.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "npuops-infer=npuops.cli.infer_type:main",
        ],
    },
)
