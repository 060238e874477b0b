#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

import numpy as np
import regionmask
import xarray as xr
from oceanforce.grid import round_coords


def rasterize_regions(polygons, lat, lon, attribute='box_id'):
    """
    Rasterizes regional-model polygons onto the model grid: each cell gets
    the attribute of the polygon containing its centre. Where polygons
    overlap, the largest attribute wins. Cells outside every polygon are NaN

    Args:
    * polygons (geopandas.GeoDataFrame)
    * lat (array-like): 1D cell-centre latitudes of the model grid
    * lon (array-like): 1D cell-centre longitudes of the model grid
    * attribute (str): integer attribute identifying each subregion
    """

    ids = polygons[attribute]
    if ids.isnull().any():
        raise ValueError('polygons have missing ' + attribute + ' values')

    if polygons.crs is not None and not polygons.crs.is_geographic:
        polygons = polygons.to_crs(4326)

    regions = regionmask.from_geopandas(
        polygons.reset_index(drop=True), name=attribute, overlap=True)
    grid = xr.Dataset(coords={'lat': np.asarray(lat, dtype=float),
                              'lon': np.asarray(lon, dtype=float)})
    mask = regions.mask_3D(grid, drop=False)

    values = xr.DataArray(ids.values.astype(float), dims='region',
                          coords={'region': mask.region.values})
    region_id = values.where(mask).max('region')
    region_id.name = 'region_id'

    return(region_id.transpose('lat', 'lon'))


def region_table(mask, decimals=4):
    """
    Returns (lat, lon, region_id) records for the cells of a rasterized mask
    that fall inside a polygon
    """

    table = mask.to_series().rename('region_id').dropna().reset_index()
    table['region_id'] = table['region_id'].astype(int)
    return(round_coords(table[['lat', 'lon', 'region_id']], decimals))


def assign_regions(table, mask, fill_value=None, decimals=4, verbose=True):
    """
    Adds a region_id column to a table of cell records. The join is total:
    cells outside every polygon are dropped, or kept under fill_value if
    it is given, so no row is left with a missing region_id

    Args:
    * table (pandas.DataFrame): records with lat and lon columns
    * mask (xarray.DataArray): output of rasterize_regions
    * fill_value (int) [optional]: explicit id for unassigned cells (ex.
      params.unassigned_region)
    """

    table = round_coords(table, decimals)
    if 'region_id' in table.columns:
        table = table.drop(columns='region_id')

    joined = table.merge(region_table(mask, decimals), on=['lat', 'lon'],
                         how='left')
    outside = joined['region_id'].isnull()

    if outside.any():
        ncells = len(joined.loc[outside, ['lat', 'lon']].drop_duplicates())
        if fill_value is None:
            joined = joined[~outside].reset_index(drop=True)
            action = 'dropped'
        else:
            joined.loc[outside, 'region_id'] = fill_value
            action = 'assigned to region ' + str(fill_value)
        if verbose:
            print('\n[OCF] ' + str(ncells) + ' cells outside every polygon ' +
                  action)

    joined['region_id'] = joined['region_id'].astype(int)
    return(joined)
