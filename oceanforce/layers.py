#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

import numpy as np
from oceanforce import params


def depth_layer(depth, bounds=params.layer_bounds, exclusive=False):
    """
    Maps depths (m) to the four model layers: < 51 is layer 1, 51 up to 101
    is layer 2, 101 to 300 is layer 3 and anything deeper is layer 4.
    Depths that fall in no layer (NaN, or a bound when exclusive) get 0

    Args:
    * depth (float or array-like)
    * bounds (list): the three layer thresholds
    * exclusive (bool): if True, reproduce the open intervals
      (depth > 51 & depth < 101) of the older regional runs, which leave the
      interior bounds out of every layer
    """

    if len(bounds) != 3 or list(bounds) != sorted(bounds):
        raise ValueError('bounds must be three increasing depths')

    b1, b2, b3 = bounds
    d = np.atleast_1d(np.asarray(depth, dtype=float))

    if exclusive:
        conditions = [d < b1, (d > b1) & (d < b2), (d > b2) & (d <= b3),
                      d > b3]
    else:
        conditions = [d < b1, d < b2, d <= b3, d > b3]

    layer = np.select(conditions, [1, 2, 3, 4], default=0)

    if np.ndim(depth) == 0:
        return(int(layer[0]))
    return(layer)


def add_layers(table, bounds=params.layer_bounds, exclusive=False,
               verbose=True):
    """
    Adds a depth_layer column to a table with a depth column. Rows that get
    no layer are dropped
    """

    if 'depth' not in table.columns:
        raise ValueError('table has no depth column')

    table = table.assign(depth_layer=depth_layer(
        table['depth'].values, bounds=bounds, exclusive=exclusive))
    outside = table['depth_layer'] == 0
    if outside.any():
        if verbose:
            print('\n[OCF] Dropped ' + str(int(outside.sum())) +
                  ' rows at depths outside every layer: ' + ', '.join(
                      [str(x) for x in sorted(table.loc[outside, 'depth']
                                               .unique())]))
        table = table[~outside].reset_index(drop=True)

    return(table)
