#!/usr/bin/env python3

from setuptools import setup, find_packages

requires = []

extras = {
    'test': [
        'pytest (>=7.0)',
    ],
}

setup(name='Calculator',
      version='1.0.0',
      description='Interactive command line arithmetic calculator',
      install_requires=requires,
      extras_require=extras,
      python_requires='>=3.6',
      scripts=['calc.py'],
      packages=find_packages(exclude=['tests']))
