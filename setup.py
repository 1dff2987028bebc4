# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

import os
import setuptools


def project_path(*sub_paths):
    project_dirpath = os.path.abspath(os.path.dirname(__file__))
    return os.path.join(project_dirpath, *sub_paths)


def read(*sub_paths):
    with open(project_path(*sub_paths), mode="rb") as fobj:
        return fobj.read().decode("utf-8")


def read_requirements(*sub_paths):
    return [
        line.strip()
        for line in read(*sub_paths).splitlines()
        if line.strip() and not line.startswith("#")
    ]


install_requires = read_requirements("requirements", "pypi.txt")

tests_require = read_requirements("requirements", "test.txt")

dev_require = read_requirements("requirements", "dev.txt")


long_description = "\n\n".join((read("README.md"), read("CHANGELOG.md")))


setuptools.setup(
    name="orcrux",
    license="MIT",
    version="2026.1017b0",
    keywords="ssss shamir split share secret recompose gf256 threshold",
    description="Split secrets into shares with Shamir's Secret Sharing over GF(256).",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["orcrux"],
    package_dir={"": "src"},
    zip_safe=False,
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=install_requires,
    extras_require={'test': tests_require, 'dev': dev_require},
    entry_points="""
        [console_scripts]
        orcrux=orcrux.cli:cli
    """,

    # See https://pypi.python.org/pypi?%3Aaction=list_classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Environment :: Other Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Libraries",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
