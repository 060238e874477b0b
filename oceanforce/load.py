#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

import os
import cf_units
import geopandas as gpd
import pandas as pd
import xarray as xr
from oceanforce import params


def is_zarr(path):
    return path.rstrip('/').endswith('.zarr') or os.path.isdir(path)


def decode_time(dataset, calendar=None):
    """
    Decodes a numeric time axis ("days since ..." units) with cf_units into
    datetime64 values

    Args:
    * dataset (xarray.Dataset)
    * calendar (str) [optional]: overrides the calendar attribute of the
      time variable. If neither is set, params.calendar is used
    """

    try:
        units = dataset.time.units
    except AttributeError:
        raise ValueError("time axis has no units attribute")

    if calendar is None:
        try:
            calendar = dataset.time.calendar
        except AttributeError:
            calendar = params.calendar

    t0 = cf_units.num2pydate(dataset.time.values, units, calendar)
    dataset.coords['time'] = pd.to_datetime(t0)

    return(dataset)


def xr_load(path, calendar=None, verbose=True):
    """
    Opens a chunked array store (zarr) or netCDF without decoding times,
    then decodes the time axis with decode_time

    Args:
    * path (str): path to data
    * calendar (str) [optional]: passed to decode_time
    """

    if is_zarr(path):
        d = xr.open_zarr(path, decode_times=False)
    else:
        d = xr.open_dataset(path, decode_times=False)

    d = decode_time(standardize_coords(d), calendar)

    if verbose:
        print('\n[OCF] OPENED ' + path)

    return(d)


def standardize_coords(dataset):
    """
    Standardize coordinates of an xarray dataset (i.e. make sure that the
    dimensions are named time, depth, lat and lon, renaming aliases such as
    depth_bin_m or latitude listed in params.column_names)

    Args:
    * dataset (xarray.Dataset)
    """

    names = list(dataset.coords) + list(dataset.dims)
    rename = {}
    for ci in names:
        new = params.column_names.get(str(ci).lower())
        if new is not None and new != ci and new not in names:
            rename[ci] = new

    if rename:
        dataset = dataset.rename(rename)

    return(dataset)


def standardize_columns(table):
    """
    Same as standardize_coords, for the columns of a pandas DataFrame
    """

    rename = {}
    for ci in table.columns:
        new = params.column_names.get(str(ci).lower())
        if new is not None and new != ci and new not in table.columns:
            rename[ci] = new

    return(table.rename(columns=rename))


def load(data, var='thetao', drop=True, verbose=True, **kwargs):
    """
    Return a dataset with standardized coordinate names, holding the
    main variable of a model run

    Args:
    * data (str or xarray.Dataset): either an xarray dataset or a path to a
      zarr store / netCDF that will be read in by xr_load function
    * var (str): name of main variable
    * drop (bool): if True, other data variables are removed from the dataset

    Kwargs:
    * calendar (str): passed to xr_load
    """

    # Load xarray dataset
    if isinstance(data, str):
        ds = xr_load(data, calendar=kwargs.get('calendar'), verbose=verbose)
    elif isinstance(data, xr.Dataset):
        ds = standardize_coords(data)
        if 'time' in ds.coords and ds.time.dtype.kind in 'iuf':
            ds = decode_time(ds.copy(), kwargs.get('calendar'))
    else:
        raise TypeError(
            "data argument must be a path to a zarr store, a netCDF or an " +
            "xarray dataset")

    if not isinstance(var, str):
        raise TypeError("var argument must be a string naming the main " +
                        "variable")
    if var not in ds.data_vars:
        raise ValueError(var + ' is not a data variable of the dataset; ' +
                         'found ' + ', '.join(ds.data_vars))

    ds.attrs['main_var'] = var

    if drop:
        ds = ds[[var]]

    if verbose:
        print('\n[OCF] Main variable: ' + var + ' ' + str(dict(ds[var].sizes)))

    return(ds)


def read_table(data, value_name=None, required=(), verbose=True):
    """
    Returns a columnar table (climatology, cell area, depth-bin height ...)
    with standardized column names

    Args:
    * data (str or pandas.DataFrame): table or path to a parquet file (a
      .csv suffix is read as csv)
    * value_name (str) [optional]: new name for the vals column
    * required (list or tuple) [optional]: columns that must be present after
      renaming
    """

    if isinstance(data, str):
        if os.path.splitext(data)[1].lower() == '.csv':
            table = pd.read_csv(data)
        else:
            table = pd.read_parquet(data)
        if verbose:
            print('\n[OCF] READ TABLE ' + data + ' (' + str(len(table)) +
                  ' rows)')
    elif isinstance(data, pd.DataFrame):
        table = data.copy()
    else:
        raise TypeError(
            "data argument must be a path to a parquet/csv file or a " +
            "pandas DataFrame")

    table = standardize_columns(table)
    if value_name is not None and 'vals' in table.columns:
        table = table.rename(columns={'vals': value_name})

    missing = [c for c in required if c not in table.columns]
    if missing:
        raise ValueError('table is missing column(s): ' + ', '.join(missing))

    return(table)


def load_polygons(data, attribute='box_id', verbose=True):
    """
    Returns the regional-model polygons as a GeoDataFrame

    Args:
    * data (str or geopandas.GeoDataFrame): polygons or path to any vector
      file geopandas can read (shapefile, geopackage, geojson)
    * attribute (str): integer attribute identifying each subregion
    """

    if isinstance(data, str):
        polygons = gpd.read_file(data)
        if verbose:
            print('\n[OCF] READ POLYGONS ' + data + ' (' +
                  str(len(polygons)) + ' features)')
    elif isinstance(data, gpd.GeoDataFrame):
        polygons = data
    else:
        raise TypeError(
            "data argument must be a path to a vector file or a " +
            "geopandas GeoDataFrame")

    if attribute not in polygons.columns:
        raise ValueError(attribute + ' is not an attribute of the polygons;' +
                         ' found ' + ', '.join(
                             [c for c in polygons.columns if c != 'geometry']))

    return(polygons)
