#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

import numpy as np
import pandas as pd
from oceanforce import params


def round_coords(table, decimals=4):
    """
    Rounds lat, lon and depth so that cell coordinates read from different
    files (float32 or float64) match exactly when joined
    """
    table = table.copy()
    for ci in ['lat', 'lon', 'depth']:
        if ci in table.columns:
            table[ci] = table[ci].astype(float).round(decimals)
    return(table)


def depth_heights(depths, bottom=None):
    """
    Returns the height of each depth bin, taking the bin edges halfway
    between neighbouring bin centres. The first bin starts at the surface

    Args:
    * depths (array-like): bin-centre depths (m)
    * bottom (float) [optional]: lower edge of the deepest bin. If not set,
      the deepest bin is as tall below its centre as it is above it
    """

    d = np.unique(np.asarray(depths, dtype=float))
    d = d[np.isfinite(d)]
    if len(d) == 0:
        raise ValueError('no depths given')

    mids = (d[1:] + d[:-1]) / 2.
    if bottom is None:
        upper = mids[-1] if len(mids) else 0.
        bottom = d[-1] + (d[-1] - upper)
    edges = np.concatenate([[0.], mids, [bottom]])
    heights = np.diff(edges)

    if np.any(heights <= 0):
        raise ValueError('depth bins need positive heights; set bottom ' +
                         'below the deepest bin')

    return(pd.DataFrame({'depth': d, 'height': heights}))


def attach(table, aux, how='inner', keys=params.grid_keys, decimals=4,
           verbose=False):
    """
    Joins an auxiliary table (area, height, region ...) onto a table of cell
    records using the key columns the two share

    Args:
    * table (pandas.DataFrame)
    * aux (pandas.DataFrame)
    * how (str): pandas merge type. With 'inner', rows with no match are
      dropped
    * keys (list): candidate join keys
    * decimals (int): lat/lon rounding applied before the join
    """

    on = [k for k in keys if k in table.columns and k in aux.columns]
    if not on:
        raise ValueError('tables share no key column among ' +
                         ', '.join(keys))

    left, right = round_coords(table, decimals), round_coords(aux, decimals)
    if right.duplicated(on).any():
        raise ValueError('auxiliary table has duplicate rows for keys ' +
                         ', '.join(on))

    joined = left.merge(right, on=on, how=how)
    if how == 'inner' and len(left) and joined.empty:
        raise ValueError('no rows match on ' + ', '.join(on) +
                         '; check that both tables use the same grid')
    if verbose and how == 'inner' and len(joined) < len(left):
        print('\n[OCF] ' + str(len(left) - len(joined)) + ' rows had no ' +
              'match on ' + ', '.join(on) + ' and were dropped')

    return(joined)


def grid_cells(area, heights=None):
    """
    Returns grid cell records (lat, lon, area[, depth, height])

    Args:
    * area (pandas.DataFrame): lat, lon, area
    * heights (pandas.DataFrame) [optional]: depth, height for bins shared
      by all cells, or lat, lon, depth, height for per-cell bins
    """

    cells = round_coords(area[['lat', 'lon', 'area']])
    if heights is None:
        return(cells)

    if 'lat' in heights.columns and 'lon' in heights.columns:
        cells = attach(cells, heights[['lat', 'lon', 'depth', 'height']])
    else:
        cells = cells.merge(heights[['depth', 'height']], how='cross')

    return(cells.sort_values(['lat', 'lon', 'depth']).reset_index(drop=True))
