#!/usr/bin/env python
# -*- coding: utf-8 -*-

###############################################################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
###############################################################################

from setuptools import setup, find_packages

with open("README.md", "r") as fh:
    long_description = fh.read()

setup(name='oceanforce',
      version='0.1.0',
      description='Bias-corrected ocean temperature forcing for regional ' +
                  'ecosystem models',
      long_description=long_description,
      long_description_content_type='text/markdown',
      author='Andres Chang',
      author_email='andresdanielchang@gmail.com',
      license='MIT',
      packages=find_packages(exclude=['tests']),
      python_requires='>=3.8',
      install_requires=[
        'numpy', 'pandas', 'xarray', 'cf-units', 'netCDF4', 'zarr',
        'pyarrow', 'geopandas', 'regionmask>=0.11'],
      extras_require={
        'test': ['pytest', 'shapely']}
      )
