# -*- coding: utf-8 -*-

from setuptools import setup, find_packages


setup_args = {
    "name" : "telemm",
    "version" : "1.0.0",
    "description" : "Hierarchical hidden Markov model specifications for animal telemetry",
    "long_description" : "State hierarchies, observation distribution maps and parameter "
                         "constraint matrices for multi-scale HMMs of animal movement data",
    "author" : "Antoine Passemiers",
    "license" : "GPLv2+",
    "classifiers" : [
        "License :: OSI Approved :: GNU General Public License v2 or later (GPLv2+)",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    "packages" : find_packages(include=["telemm", "telemm.*"]),
    "python_requires" : ">=3.8",
    "install_requires" : [
        "numpy",
        "scipy",
        "torch",
        "pandas",
    ],
    "extras_require" : {
        "test" : ["pytest"],
    },
}

setup(**setup_args)
