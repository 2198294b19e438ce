#!/usr/bin/env python

from os.path import abspath, dirname, join

from setuptools import find_packages, setup

with open(join(dirname(abspath(__file__)), 'dual_iso', 'version.py')) as version_file:
    exec(compile(version_file.read(), "version.py", 'exec'))

setup(name='dual-iso',
      version=version,
      description="Subgraph pattern matching by dual simulation and backtracking search",
      packages=find_packages(include=['dual_iso', 'dual_iso.*']),
      python_requires='>=3.8',
      install_requires=[
          "attrs>=19.2.0",
          "vistautils>=0.12.0",
          "immutablecollections>=0.8.0",
          "networkx>=2.4",
          "more-itertools>=7.2.0"
      ],
      extras_require={
          "test": [
              "pytest",
              "pytest-benchmark"
          ]
      },
      scripts=[
      ],
      classifiers=[
          "Programming Language :: Python :: 3",
          "License :: OSI Approved :: MIT License",
          "Operating System :: OS Independent",
      ]
      )
