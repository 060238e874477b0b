#!/usr/bin/env python
# -*- coding: utf-8 -*-

########################################
#
#  OCEANFORCE - Making ocean forcing malleable
#  Copyright (C) 2018 Andres Chang
#
########################################

import os
from oceanforce import params


def bias_correct(ts, model_clim, ref_clim, names=params.value_names):
    """
    Applies the additive bias correction

        corrected_temp = temp_ts - temp_model + temp_ref

    to a weighted time series, joining both climatologies on the keys the
    three tables share among (region_id, depth_layer, month). residual is
    the anomaly of the time series against the model climatology

    Args:
    * ts (pandas.DataFrame): output of aggregate.timeseries
    * model_clim (pandas.DataFrame): model climatology from
      aggregate.climatology
    * ref_clim (pandas.DataFrame): reference (WOA) climatology
    * names (dict): value column of each table, keyed 'ts', 'model', 'ref'
    """

    ts_name, model_name, ref_name = names['ts'], names['model'], names['ref']
    keys = [k for k in params.clim_keys if k in ts.columns and
            k in model_clim.columns and k in ref_clim.columns]
    if 'month' not in keys:
        raise ValueError('time series and climatologies must all have a ' +
                         'month column')

    out = (ts.merge(model_clim[keys + [model_name]], on=keys, how='inner')
             .merge(ref_clim[keys + [ref_name]], on=keys, how='inner'))

    # ref - model is exactly 0 where the climatologies agree
    out['corrected_temp'] = out[ts_name] + (out[ref_name] - out[model_name])
    out['residual'] = out[ts_name] - out[model_name]

    order = [k for k in params.ts_keys + ['month'] if k in out.columns]
    out = out.sort_values(order).reset_index(drop=True)
    return(out[order + [ts_name, model_name, ref_name, 'corrected_temp',
                        'residual']])


def export(corrected, path, verbose=True):
    """
    Writes the corrected series to parquet (or csv if path ends with .csv)
    """

    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)

    if os.path.splitext(path)[1].lower() == '.csv':
        corrected.to_csv(path, index=False)
    else:
        corrected.to_parquet(path, index=False)

    if verbose:
        print('\n[OCF] WROTE ' + path)

    return(path)
