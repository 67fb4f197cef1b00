#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Copyright 2023 Ocean Protocol Foundation
# SPDX-License-Identifier: Apache-2.0
#

"""The setup script."""

from setuptools import find_packages, setup

with open("README.md") as readme_file:
    readme = readme_file.read()

with open("CHANGELOG.md") as history_file:
    history = history_file.read()

install_requirements = [
    "click>=8.1.3",
    "coloredlogs==15.0.1",
    "Flask>=2.3.1",
    "Flask-Cors>=4.0.0",
    "flask-swagger==0.2.14",
    "flask-swagger-ui>=4.11.1",
    "requests>=2.21.0",
    "gunicorn>=21.2.0",
    "PyYAML>=6.0.1",
    "ocean-contracts>=1.1.14",
    "web3>=7.0.0",
    "eth-account>=0.13.0",
    "eth-utils>=4.0.0",
    "pyshacl>=0.22.2",
    "rdflib>=6.2.0",
    "python-slugify>=8.0.1",
]

setup_requirements = ["pytest-runner==6.0.0"]

dev_requirements = [
    "bumpversion==0.6.0",
    "pkginfo==1.9.6",
    "twine==4.0.2",
    "flake8",
    "isort",
    "black",
    "pre-commit",
    "licenseheaders",
]

test_requirements = [
    "coverage>=7.3.0",
    "pytest",
    "freezegun>=1.2.2",
]

setup(
    author="leucothia",
    author_email="devops@oceanprotocol.com",
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.11",
    ],
    description="🐳 Ocean publisher.",
    extras_require={
        "test": test_requirements,
        "dev": dev_requirements + test_requirements,
    },
    include_package_data=True,
    package_data={"ocean_publisher.ddo_checker": ["shacl_schemas/v4/*.ttl"]},
    install_requires=install_requirements,
    keywords="ocean-publisher",
    license="Apache Software License 2.0",
    long_description=readme + "\n\n" + history,
    long_description_content_type="text/markdown",
    name="ocean-publisher",
    packages=find_packages(include=["ocean_publisher", "ocean_publisher.*"]),
    setup_requires=setup_requirements,
    test_suite="tests",
    tests_require=test_requirements,
    url="https://github.com/oceanprotocol/ocean-publisher",
    # fmt: off
    # bumpversion needs single quotes
    version='0.1.0',
    # fmt: on
    zip_safe=False,
)
