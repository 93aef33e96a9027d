#!/usr/bin/env python3
# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
#
# Copyright 2024 Canonical Ltd.
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 3 as
# published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from setuptools import find_packages, setup

# Common distribution data
name = "snaptarget"
version = "0.1.0"
description = "Build snap packages for desktop applications."
license_ = "GPL v3"
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
    "Natural Language :: English",
    "Programming Language :: Python",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3.10",
    "Topic :: Software Development :: Build Tools",
    "Topic :: System :: Software Distribution",
]

dev_requires = [
    "black",
    "codespell[toml]",
    "coverage[toml]",
    "mypy",
    "pytest",
    "pytest-cov",
    "pytest-mock",
    "pytest-subprocess",
    "ruff",
    "types-PyYAML",
]

install_requires = [
    "craft-cli",
    "pydantic>=2",
    "pyyaml",
]

extras_requires = {
    "dev": dev_requires,
}

setup(
    name=name,
    version=version,
    description=description,
    packages=find_packages(include=["snaptarget", "snaptarget.*"]),
    license=license_,
    classifiers=classifiers,
    entry_points=dict(
        console_scripts=[
            "snaptarget = snaptarget.cli:run",
        ]
    ),
    python_requires=">=3.10",
    install_requires=install_requires,
    extras_require=extras_requires,
    test_suite="tests.unit",
)
