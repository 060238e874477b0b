import geopandas as gpd
import numpy as np
import pandas as pd
import pytest
import xarray as xr
from shapely.geometry import box

LAT = np.array([10.5, 11.5])
LON = np.array([20.5, 21.5, 22.5])
DEPTH = np.array([25., 75., 200.])


def make_run(depth=DEPTH, years=2):
    """
    Monthly model run with raw time values (days since 1980-01-01) that
    depend only on month, depth and lon. The deepest bin of the first cell
    is land (NaN)
    """
    nt = 12 * years
    time = (pd.date_range('1981-01-01', periods=nt, freq='MS') +
            pd.Timedelta(days=14))
    days = (time - pd.Timestamp('1980-01-01')).days.values.astype(float)
    month = time.month.values.astype(float)

    data = (10. + month[:, None, None, None]
            - depth[None, :, None, None] / 100.
            + (LON[None, None, None, :] - 20.)
            + np.zeros((nt, len(depth), len(LAT), len(LON))))
    if len(depth) > 2:
        data[:, 2, 0, 0] = np.nan

    ds = xr.Dataset(
        {'thetao': (('time', 'depth_bin_m', 'lat', 'lon'), data)},
        coords={'time': days, 'depth_bin_m': depth, 'lat': LAT, 'lon': LON})
    ds.time.attrs['units'] = 'days since 1980-01-01'
    ds.time.attrs['calendar'] = 'proleptic_gregorian'
    return ds


def make_clim(depth=DEPTH, offset=0.5):
    """
    Per-cell monthly climatology in the tabular layout, equal to the model
    run plus offset
    """
    rows = []
    for m in range(1, 13):
        for d in depth:
            for la in LAT:
                for lo in LON:
                    rows.append({'lat': la, 'lon': lo, 'depth': d,
                                 'month': m,
                                 'vals': 10. + m - d / 100. + (lo - 20.) +
                                 offset})
    return pd.DataFrame(rows)


def make_area():
    rows = [{'lat': la, 'lon': lo, 'vals': 1. + (lo - 20.5)}
            for la in LAT for lo in LON]
    return pd.DataFrame(rows)


def make_boxes():
    return gpd.GeoDataFrame(
        {'box_id': [1, 2]},
        geometry=[box(20., 10., 21., 12.), box(21., 10., 23., 12.)],
        crs='EPSG:4326')


@pytest.fixture
def run():
    return make_run()


@pytest.fixture
def ref_clim():
    return make_clim()


@pytest.fixture
def area():
    return make_area()


@pytest.fixture
def boxes():
    return make_boxes()


@pytest.fixture
def surface_run():
    return make_run(depth=np.array([5.]))


@pytest.fixture
def surface_clim():
    return make_clim(depth=np.array([5.]))


@pytest.fixture
def deep_run():
    # the deepest bin holds no data anywhere
    ds = make_run(depth=np.array([150., 250., 400.]))
    ds['thetao'][:, 2] = np.nan
    return ds


@pytest.fixture
def float32_run():
    return make_run(depth=np.array([5.1, 75.3, 200.7], dtype='float32'))
