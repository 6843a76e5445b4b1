#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Installation driver for varscan-cnv"""

import os
import sys

from setuptools import find_packages, setup

#: Root directory of the source tree
HERE = os.path.abspath(os.path.dirname(__file__))

#: Helper tools in ``varscan_cnv_wrappers.tools``, installed as ``varscan-cnv-<name>``
TOOLS = ("arm_split", "median_log_ratio")


def read_file(*parts):
    with open(os.path.join(HERE, *parts), "rt") as inputf:
        return inputf.read()


def parse_requirements(path):
    """Parse ``requirements.txt`` at ``path``, following ``-r`` includes."""
    requirements = []
    for line in read_file(path).splitlines():
        line = line.strip()
        if line.startswith("-r"):
            requirements += parse_requirements(os.path.join(os.path.dirname(path), line.split()[1]))
        elif line and not line.startswith("#"):
            requirements.append(line)
    return requirements


if sys.version_info < (3, 11):
    print("At least Python 3.11 is required.\n", file=sys.stderr)
    sys.exit(1)

version = {}
exec(read_file("varscan_cnv", "_version.py"), version)

install_requires = parse_requirements("requirements/base.txt")
test_requires = [
    req for req in parse_requirements("requirements/test.txt") if req not in install_requires
]

console_scripts = ["varscan-cnv-run = varscan_cnv.apps.varscan_cnv_run:main"] + [
    "varscan-cnv-{name} = varscan_cnv_wrappers.tools.{name}:main".format(name=name)
    for name in TOOLS
]

setup(
    name="varscan-cnv",
    version=version["__version__"],
    description="Resumable somatic copy number calling with VarScan 2",
    long_description=read_file("README.md") + "\n\n" + read_file("CHANGELOG.md"),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    entry_points={"console_scripts": console_scripts},
    install_requires=install_requires,
    extras_require={"test": test_requires},
    python_requires=">=3.11",
    license="MIT license",
    zip_safe=False,
    keywords="bioinformatics, copy number, varscan",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
)
