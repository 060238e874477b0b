#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

from oceanforce import params
from oceanforce.aggregate import add_weights, climatology, timeseries
from oceanforce.correct import bias_correct, export
from oceanforce.grid import attach, depth_heights, grid_cells
from oceanforce.layers import add_layers
from oceanforce.load import load, load_polygons, read_table
from oceanforce.organize import monthly_climatology, to_long
from oceanforce.regions import assign_regions, rasterize_regions
from oceanforce.stage import stage as staging

inputs = ['timeseries', 'model_clim', 'ref_clim', 'area', 'heights',
          'polygons']
options = ['mode', 'attribute', 'var', 'exclusive', 'fill_value',
           'clim_period', 'bottom', 'decimals', 'calendar']


class query(object):
    def __init__(self, stage=None, verbose=True, **kwargs):
        """
        Initializes a query, which runs the bias correction recipe for one
        region. Inputs are taken from the stage and can be overridden with
        set_params (as paths or as already loaded objects)

        Args:
        * stage (stage class object) [optional]: see stage.py for
          documentation. Defaults to the 'demo' preset
        * verbose (bool)

        Kwargs: passed to set_params
        """

        if stage is None:
            stage = staging('demo')

        self.stage = stage
        self.verbose = verbose
        self.inputs = {k: stage.path(k) for k in inputs}
        self.mode = stage.mode
        self.attribute = stage.attribute
        self.var = stage.var
        self.exclusive = False
        self.fill_value = None
        self.clim_period = params.clim_period
        self.bottom = None
        self.decimals = 4
        self.calendar = None
        self.loaded = {}
        self.cache = {}

        self.set_params(**kwargs)

    ## Primary functions  ##
    ########################

    def set_params(self, **kwargs):
        """
        Sets inputs and options of the query. Changing anything clears
        results computed so far

        Kwargs (inputs, paths or loaded objects; None means not staged):
        * timeseries (str or xarray.Dataset): model run
        * model_clim (str or pandas.DataFrame): model climatology. If None,
          it is derived from the model run over clim_period
        * ref_clim (str or pandas.DataFrame): reference climatology
        * area (str or pandas.DataFrame): cell areas
        * heights (str or pandas.DataFrame): depth-bin heights. If None,
          heights are derived from the depth bins of the model run (or of
          the table itself for a staged climatology)
        * polygons (str or geopandas.GeoDataFrame): regional-model boxes

        Kwargs (options):
        * mode (str): 'volume' or 'area'
        * attribute (str): polygon id attribute
        * var (str): main variable of the model run
        * exclusive (bool): legacy open depth-layer intervals
        * fill_value (int): keep cells outside the polygons under this id
          instead of dropping them
        * clim_period (tuple): first and last year of the climatology
        * bottom (float): lower edge of the deepest derived depth bin
        * decimals (int): lat/lon rounding for joins
        * calendar (str): overrides the calendar of the model run
        """

        for key, value in kwargs.items():
            if key in inputs:
                self.inputs[key] = value
            elif key in options:
                setattr(self, key, value)
            else:
                raise ValueError("Unknown query parameter '" + key + "'")

        if self.mode not in params.weight_modes:
            raise ValueError("mode must be one of " +
                             ', '.join(params.weight_modes))

        if kwargs:
            self.loaded, self.cache = {}, {}

    def load_inputs(self):
        """
        Reads every staged input once
        """

        if self.loaded:
            return(self.loaded)

        if self.verbose:
            print('\n[OCF] Loading inputs for region ' + self.stage.region +
                  ' (' + self.mode + ' weighted)')

        d = {}
        d['timeseries'] = load(self.inputs['timeseries'], var=self.var,
                               verbose=self.verbose, calendar=self.calendar)
        d['ref_clim'] = read_table(
            self.inputs['ref_clim'], required=['lat', 'lon', 'month', 'vals'],
            verbose=self.verbose)
        if self.inputs['model_clim'] is None:
            d['model_clim'] = None
        else:
            d['model_clim'] = read_table(
                self.inputs['model_clim'],
                required=['lat', 'lon', 'month', 'vals'], verbose=self.verbose)
        d['area'] = read_table(self.inputs['area'], value_name='area',
                               required=['lat', 'lon', 'area'],
                               verbose=self.verbose)
        if self.mode == 'volume' and self.inputs['heights'] is not None:
            d['heights'] = read_table(self.inputs['heights'],
                                      value_name='height',
                                      required=['depth', 'height'],
                                      verbose=self.verbose)
        else:
            d['heights'] = None
        d['polygons'] = load_polygons(self.inputs['polygons'],
                                      attribute=self.attribute,
                                      verbose=self.verbose)

        self.loaded = d
        return(d)

    def region_mask(self):
        """
        Region id of every model grid cell, rasterized once from the polygons
        """

        if 'mask' not in self.cache:
            d = self.load_inputs()
            ds = d['timeseries']
            self.cache['mask'] = rasterize_regions(
                d['polygons'], ds.lat.values, ds.lon.values,
                attribute=self.attribute)
        return(self.cache['mask'])

    def cells(self, depths=None):
        """
        Grid cell records for a set of depth bins (ignored in area mode)
        """

        d = self.load_inputs()
        if self.mode == 'area':
            return(grid_cells(d['area']))
        if d['heights'] is not None:
            return(grid_cells(d['area'], d['heights']))
        if depths is None:
            raise ValueError('volume weights need depth bins or a heights ' +
                             'table')
        return(grid_cells(d['area'], depth_heights(depths, self.bottom)))

    def grid_table(self):
        """
        Grid cells of the model run with their region id
        """

        if 'grid' not in self.cache:
            self.cache['grid'] = assign_regions(
                self.cells(self.model_depths()), self.region_mask(),
                fill_value=self.fill_value, decimals=self.decimals,
                verbose=self.verbose)
        return(self.cache['grid'])

    def model_depths(self):
        """
        Depth bins of the model run, including bins that hold no data
        """

        ds = self.load_inputs()['timeseries']
        return(ds.depth.values if 'depth' in ds.dims else None)

    def prepare(self, table, depths=None):
        """
        Joins cell geometry, depth layer, region and weight onto a table of
        per-cell values

        Args:
        * table (pandas.DataFrame)
        * depths (array-like) [optional]: depth bins the table lives on, used
          to derive heights when no heights table is staged. Defaults to the
          depths found in the table
        """

        if depths is None and 'depth' in table.columns:
            depths = table['depth'].unique()
        t = attach(table, self.cells(depths), decimals=self.decimals,
                   verbose=self.verbose)
        if 'depth' in t.columns:
            t = add_layers(t, exclusive=self.exclusive, verbose=self.verbose)
        t = assign_regions(t, self.region_mask(), fill_value=self.fill_value,
                           decimals=self.decimals, verbose=self.verbose)
        return(add_weights(t, mode=self.mode))

    def long_table(self):
        if 'long' not in self.cache:
            self.cache['long'] = to_long(self.load_inputs()['timeseries'],
                                         var=self.var)
        return(self.cache['long'])

    def reference_climatology(self):
        """
        Weighted reference climatology per (region_id, depth_layer, month)
        """

        if 'ref' not in self.cache:
            ref = self.prepare(self.load_inputs()['ref_clim'])
            self.cache['ref'] = climatology(
                ref, 'vals', name=params.value_names['ref'])
        return(self.cache['ref'])

    def model_climatology(self):
        """
        Weighted model climatology per (region_id, depth_layer, month), read
        from the staged file or derived from the model run
        """

        if 'model' not in self.cache:
            model = self.load_inputs()['model_clim']
            depths = None
            if model is None:
                if self.verbose:
                    print('\n[OCF] Deriving model climatology ' +
                          str(self.clim_period[0]) + '-' +
                          str(self.clim_period[1]) + ' from the model run')
                model = monthly_climatology(
                    self.long_table(), self.var, period=self.clim_period)
                model = model.rename(columns={self.var: 'vals'})
                depths = self.model_depths()
            self.cache['model'] = climatology(
                self.prepare(model, depths), 'vals',
                name=params.value_names['model'])
        return(self.cache['model'])

    def observed_timeseries(self):
        """
        Weighted mean of the model run per (region_id, depth_layer, date)
        """

        if 'ts' not in self.cache:
            self.cache['ts'] = timeseries(
                self.prepare(self.long_table(), self.model_depths()), self.var,
                name=params.value_names['ts'])
        return(self.cache['ts'])

    def correct(self, output=None):
        """
        Returns the bias-corrected time series

        Args:
        * output (str or bool) [optional]: path of a parquet/csv export. If
          True, the file is named by the stage
        """

        corrected = bias_correct(self.observed_timeseries(),
                                 self.model_climatology(),
                                 self.reference_climatology())
        if self.verbose:
            print('\n[OCF] Corrected ' + str(len(corrected)) + ' rows')

        if output is True:
            output = self.stage.outfile()
        if output:
            export(corrected, output, verbose=self.verbose)

        return(corrected)
