#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

from oceanforce.load import (
    decode_time, xr_load, standardize_coords, standardize_columns, load,
    read_table, load_polygons)
from oceanforce.organize import to_long, monthly_climatology
from oceanforce.layers import depth_layer, add_layers
from oceanforce.grid import round_coords, depth_heights, attach, grid_cells
from oceanforce.regions import rasterize_regions, region_table, assign_regions
from oceanforce.aggregate import (
    add_weights, weighted_mean, climatology, timeseries)
from oceanforce.correct import bias_correct, export
from oceanforce.stage import stage
from oceanforce.query import query

__version__ = '0.1.0'
