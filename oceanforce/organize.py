#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

from oceanforce import params


def to_long(dataset, var=None, dropna=True):
    """
    Flattens the main variable of a dataset (time x depth x lat x lon) into a
    long table with one row per cell and time step, plus date and month
    columns derived from the time axis

    Args:
    * dataset (xarray.Dataset): output of load
    * var (str) [optional]: defaults to the main variable set by load
    * dropna (bool): if True, rows with missing values (land or cells below
      the sea floor) are dropped
    """

    if var is None:
        var = dataset.attrs.get('main_var', 'thetao')

    da = dataset[var]
    missing = [d for d in ['time', 'lat', 'lon'] if d not in da.dims]
    if missing:
        raise ValueError(var + ' has no dimension(s) ' + ', '.join(missing))

    order = [d for d in ['time', 'depth', 'lat', 'lon'] if d in da.dims]
    table = da.transpose(*order).to_series().rename(var).reset_index()

    if dropna:
        table = table.dropna(subset=[var]).reset_index(drop=True)

    table['date'] = table['time'].dt.normalize()
    table['month'] = table['time'].dt.month

    return(table)


def monthly_climatology(table, var, period=params.clim_period):
    """
    Returns the mean of each cell and calendar month over the climatology
    period, in the same layout as the climatology tables (lat, lon, depth,
    month, var)

    Args:
    * table (pandas.DataFrame): long table from to_long
    * var (str): column to average
    * period (tuple): first and last year (inclusive)
    """

    yr0, yrf = period
    years = table['time'].dt.year
    subset = table[(years >= yr0) & (years <= yrf)]
    if subset.empty:
        raise ValueError('no time steps between ' + str(yr0) + ' and ' +
                         str(yrf))

    by = [c for c in params.grid_keys if c in subset.columns]
    return(subset.groupby(by)[var].mean().reset_index())
