# SPDX-License-Identifier: FSFAP
# Copyright (C) 2026 The gradesync developers
#
# Copying and distribution of this file, with or without modification,
# are permitted in any medium without royalty provided the copyright
# notice and this notice are preserved.  This file is offered as-is,
# without any warranty.

import os
from setuptools import setup, find_packages

# This directory
dir_setup = os.path.dirname(os.path.realpath(__file__))

with open(os.path.join(dir_setup, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

with open(os.path.join(dir_setup, "gradesync", "version.py")) as f:
    # Defines __version__
    exec(f.read())

install_requires = [
    "arrow>=1.1.1",
    "platformdirs",
    "requests",
    "requests-toolbelt",
    'tomli>=2.0.1 ; python_version<"3.11"',
    "tomlkit>=0.11.4",
    "urllib3",
]

tests_require = [
    "packaging",
    "pytest",
]


setup(
    name="gradesync",
    version=__version__,  # noqa: F821
    description="Keep a local student-grade roster in step with a grade server",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="AGPLv3+",
    python_requires=">=3.10",
    packages=find_packages(include=["gradesync", "gradesync.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",
        "Development Status :: 3 - Alpha",
        "Operating System :: OS Independent",
        "Topic :: Education",
    ],
    entry_points={
        "console_scripts": [
            "gradesync-cli=gradesync.cli.__main__:main",
        ],
    },
    install_requires=install_requires,
    extras_require={"tests": tests_require},
)
