#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

# Depth thresholds (m) separating layers 1|2, 2|3 and 3|4
layer_bounds = [51, 101, 300]

# Climatology baseline (inclusive years), matches WOA 1981-2010
clim_period = (1981, 2010)

# Time decoding
calendar = 'proleptic_gregorian'

# Region id given to cells outside every polygon when they are kept
unassigned_region = -1

# Input column/coordinate aliases and their canonical names
column_names = {
    'vals': 'vals', 'value': 'vals',
    'latitude': 'lat', 'lat': 'lat',
    'longitude': 'lon', 'lon': 'lon',
    'depth': 'depth', 'depth_bin_m': 'depth', 'lev': 'depth',
    'month': 'month', 'time': 'time'}

# Join keys, in the order they appear in output tables
grid_keys = ['lat', 'lon', 'depth', 'month']
clim_keys = ['region_id', 'depth_layer', 'month']
ts_keys = ['region_id', 'depth_layer', 'date']

# Weighting modes (single-depth analyses use area)
weight_modes = {'area': ['area'], 'volume': ['height', 'area']}

# Default output column names
value_names = {'ts': 'temp_ts', 'model': 'temp_model', 'ref': 'temp_ref'}
