#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

import os


class stage(object):

    modes = ['area', 'volume']

    def __init__(self, preset='demo', **kwargs):
        """
        stage is used to manage file organization for a regional run of the
        bias correction recipe in conjunction with query

        Every region applies the same recipe to different input files, so a
        region is described by a preset (directory layout and file names)
        plus any keyword overrides. File entries set to None are treated as
        not staged (ex. no model climatology file means the climatology is
        derived from the model run itself)

        Args:
        * preset (str) [optional]: 'demo' (multi-layer, volume-weighted) or
          'demo_surface' (single depth, area-weighted)

        Kwargs:
        * region (str): name used in output filenames
        * mode (str): 'volume' or 'area' weighting
        * attribute (str): integer id attribute of the polygon layer
        * var (str): main variable of the model array store
        * any key of self.directories or self.files
        """

        if preset == 'demo':
            self.directories = {"gfdl": "data/gfdl", "woa": "data/woa",
                                "grid": "data/grid", "shapes": "data/shapes",
                                "output": "data/output"}
            self.files = {"timeseries": "thetao_gfdl.zarr",
                          "model_clim": "gfdl_clim_1981-2010.parquet",
                          "ref_clim": "woa_clim_1981-2010.parquet",
                          "area": "cell_area.parquet",
                          "heights": "depth_heights.parquet",
                          "polygons": "boxes.shp"}
            self.mode = 'volume'
        elif preset == 'demo_surface':
            self.directories = {"gfdl": "data/gfdl", "woa": "data/woa",
                                "grid": "data/grid", "shapes": "data/shapes",
                                "output": "data/output"}
            self.files = {"timeseries": "thetao_gfdl_surface.zarr",
                          "model_clim": "gfdl_clim_surface_1981-2010.parquet",
                          "ref_clim": "woa_clim_surface_1981-2010.parquet",
                          "area": "cell_area.parquet",
                          "heights": None,
                          "polygons": "boxes.shp"}
            self.mode = 'area'
        else:
            raise ValueError("Unknown preset '" + str(preset) +
                             "'; use 'demo' or 'demo_surface'")

        # Directory each file lives in
        self.locations = {"timeseries": "gfdl", "model_clim": "gfdl",
                          "ref_clim": "woa", "area": "grid",
                          "heights": "grid", "polygons": "shapes"}
        self.region = kwargs.pop('region', preset)
        self.mode = kwargs.pop('mode', self.mode)
        self.attribute = kwargs.pop('attribute', 'box_id')
        self.var = kwargs.pop('var', 'thetao')

        if self.mode not in self.modes:
            raise ValueError("mode must be one of " + ', '.join(self.modes))

        for key, value in kwargs.items():
            if key in self.directories:
                self.directories[key] = value
            elif key in self.files:
                self.files[key] = value
            else:
                raise ValueError("Unknown stage entry '" + key + "'")

    def path(self, key):
        """
        Returns the full path of a staged file, or None if it is not staged
        """
        fname = self.files[key]
        if fname is None:
            return None
        return os.path.join(self.directories[self.locations[key]], fname)

    def outfile(self, ext='parquet', tag='corrected'):
        return os.path.join(self.directories['output'],
                            '.'.join([self.region, self.mode, tag, ext]))
