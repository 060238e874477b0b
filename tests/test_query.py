import numpy as np
import oceanforce as ocf
import pandas as pd
import pytest
from conftest import make_clim


def make_query(run, ref_clim, area, boxes, **kwargs):
    params = dict(timeseries=run, ref_clim=ref_clim, model_clim=None,
                  area=area, heights=None, polygons=boxes,
                  clim_period=(1981, 1982))
    params.update(kwargs)
    return ocf.query(verbose=False, **params)


def test_observed_timeseries(run, ref_clim, area, boxes):
    ts = make_query(run, ref_clim, area, boxes).observed_timeseries()
    # 2 regions x 3 layers x 24 dates
    assert len(ts) == 144
    row = ts[(ts['region_id'] == 2) & (ts['depth_layer'] == 1) &
             (ts['date'] == pd.Timestamp('1981-01-15'))]
    # cells at lon 21.5 (area 2) and 22.5 (area 3), same height
    assert np.isclose(row['temp_ts'].iloc[0],
                      (2 * 12.25 + 3 * 13.25) / 5.)


def test_correct(run, ref_clim, area, boxes):
    out = make_query(run, ref_clim, area, boxes).correct()
    assert len(out) == 144
    assert out['region_id'].notnull().all()
    assert np.allclose(out['corrected_temp'] - out['temp_ts'], 0.5)
    assert np.allclose(out['residual'], 0.)


def test_correct_with_model_climatology_table(run, ref_clim, area, boxes):
    model = ref_clim.assign(vals=ref_clim['vals'] - 0.5 + 0.2)
    out = make_query(run, ref_clim, area, boxes,
                     model_clim=model).correct()
    assert np.allclose(out['corrected_temp'] - out['temp_ts'], 0.3)
    assert np.allclose(out['residual'], -0.2)


def test_correct_equal_climatologies(run, ref_clim, area, boxes):
    out = make_query(run, ref_clim, area, boxes,
                     model_clim=ref_clim).correct()
    assert (out['corrected_temp'] == out['temp_ts']).all()


def test_grid_table(run, ref_clim, area, boxes):
    q = make_query(run, ref_clim, area, boxes)
    cells = q.grid_table()
    assert list(cells.columns) == ['lat', 'lon', 'area', 'depth', 'height',
                                   'region_id']
    assert len(cells) == 18
    assert np.allclose(cells.groupby('depth')['height'].first(),
                       [50., 87.5, 125.])


def test_cells_outside_polygons(run, ref_clim, area, boxes):
    q = make_query(run, ref_clim, area, boxes.iloc[:1])
    assert set(q.observed_timeseries()['region_id']) == {1}
    q.set_params(fill_value=ocf.params.unassigned_region)
    assert set(q.observed_timeseries()['region_id']) == {1, -1}


def test_area_mode(surface_run, surface_clim, area, boxes):
    q = make_query(surface_run, surface_clim, area, boxes, mode='area')
    out = q.correct()
    assert len(out) == 2 * 24
    assert set(out['depth_layer']) == {1}
    assert np.allclose(out['corrected_temp'] - out['temp_ts'], 0.5)


def test_set_params_errors(run, ref_clim, area, boxes):
    q = make_query(run, ref_clim, area, boxes)
    with pytest.raises(ValueError):
        q.set_params(colour='blue')
    with pytest.raises(ValueError):
        q.set_params(mode='mass')


def test_staged_run(run, ref_clim, area, boxes, tmp_path):
    for folder in ['gfdl', 'woa', 'grid', 'shapes']:
        (tmp_path / folder).mkdir()
    run.to_zarr(str(tmp_path / 'gfdl' / 'thetao.zarr'))
    ref_clim.to_parquet(str(tmp_path / 'woa' / 'woa.parquet'))
    area.to_parquet(str(tmp_path / 'grid' / 'area.parquet'))
    boxes.to_file(str(tmp_path / 'shapes' / 'boxes.geojson'),
                  driver='GeoJSON')

    stage = ocf.stage(
        'demo', region='test', gfdl=str(tmp_path / 'gfdl'),
        woa=str(tmp_path / 'woa'), grid=str(tmp_path / 'grid'),
        shapes=str(tmp_path / 'shapes'), output=str(tmp_path / 'output'),
        timeseries='thetao.zarr', model_clim=None, ref_clim='woa.parquet',
        area='area.parquet', heights=None, polygons='boxes.geojson')
    q = ocf.query(stage=stage, verbose=False, clim_period=(1981, 1982))
    out = q.correct(output=True)

    back = pd.read_parquet(stage.outfile())
    assert len(back) == len(out) == 144
    assert np.allclose(back['corrected_temp'], out['corrected_temp'])


def test_heights_from_model_depths(deep_run, area, boxes):
    ref_clim = make_clim(depth=np.array([150., 250., 400.]))
    q = make_query(deep_run, ref_clim, area, boxes)
    # edges at 0, 200, 325 and 475 m, including the empty 400 m bin
    assert np.allclose(q.grid_table().groupby('depth')['height'].first(),
                       [200., 125., 150.])
    ts = q.observed_timeseries()
    row = ts[(ts['region_id'] == 2) & (ts['depth_layer'] == 3) &
             (ts['date'] == pd.Timestamp('1981-01-15'))]
    # area-weighted means over lon 21.5 and 22.5 at 150 and 250 m
    v150, v250 = (2 * 11. + 3 * 12.) / 5., (2 * 10. + 3 * 11.) / 5.
    assert np.isclose(row['temp_ts'].iloc[0],
                      (200. * v150 + 125. * v250) / 325.)


def test_heights_table_with_float32_depths(float32_run, area, boxes):
    depth = np.array([5.1, 75.3, 200.7])
    heights = pd.DataFrame({'depth': depth, 'vals': [10.2, 130.2, 120.]})
    q = make_query(float32_run, make_clim(depth=depth), area, boxes,
                   heights=heights)
    assert np.allclose(q.grid_table().groupby('depth')['height'].first(),
                       [10.2, 130.2, 120.])
    out = q.correct()
    assert len(out) == 144
    assert np.allclose(out['corrected_temp'] - out['temp_ts'], 0.5)
