#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

from oceanforce import params


def add_weights(table, mode='volume'):
    """
    Adds a weight column: cell area for single-depth analyses ('area') or
    depth-bin height times area for multi-layer analyses ('volume')
    """

    try:
        factors = params.weight_modes[mode]
    except KeyError:
        raise ValueError("mode must be one of " +
                         ', '.join(params.weight_modes))

    missing = [c for c in factors if c not in table.columns]
    if missing:
        raise ValueError(mode + ' weights need column(s) ' +
                         ', '.join(missing))

    weight = table[factors[0]]
    for ci in factors[1:]:
        weight = weight * table[ci]

    return(table.assign(weight=weight))


def weighted_mean(table, value, weight='weight', by=params.clim_keys,
                  name=None):
    """
    Returns sum(value * weight) / sum(weight) for each group. Rows with a
    missing value or a missing weight are left out of both sums, so they
    do not pull the mean towards zero

    Args:
    * table (pandas.DataFrame)
    * value (str): column to average
    * weight (str): weight column
    * by (list): grouping columns; those absent from the table are skipped
    * name (str) [optional]: name of the output column (default: value)
    """

    by = [k for k in by if k in table.columns]
    if not by:
        raise ValueError('table has none of the grouping columns')

    valid = table[value].notnull() & table[weight].notnull()
    t = table.loc[valid, by + [value, weight]]
    t = t.assign(wsum=t[value] * t[weight])

    sums = t.groupby(by)[['wsum', weight]].sum()
    out = (sums['wsum'] / sums[weight]).rename(name or value)

    return(out.reset_index())


def climatology(table, value, regions=True, name=None):
    """
    Weighted monthly climatology per (region_id, depth_layer, month)
    """

    by = [k for k in params.clim_keys if regions or k != 'region_id']
    return(weighted_mean(table, value, by=by, name=name))


def timeseries(table, value, regions=True, name=None):
    """
    Weighted mean per (region_id, depth_layer, date), keeping the month of
    each date for the join with the climatologies
    """

    by = [k for k in params.ts_keys + ['month']
          if regions or k != 'region_id']
    return(weighted_mean(table, value, by=by, name=name))
