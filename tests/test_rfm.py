import math

import numpy as np
import pytest
from scipy.io import netcdf_file

from harp.opacity import AttenuatorOptions
from harp.rfm import RFM, get_reftemp, read_weights_rfm

WAVE = [100.0, 200.0, 300.0]
PRES = [1.0e5, 1.0e6, 1.0e7]
TGRID = [-50.0, 0.0, 50.0]
TREF = [200.0, 250.0, 300.0]


def _write_table(path):
    nw, npres, nt = len(WAVE), len(PRES), len(TGRID)
    co2 = np.full((nw, npres, nt), math.log(1000.0))
    h2o = np.empty((nw, npres, nt))
    for t in range(nt):
        h2o[:, :, t] = math.log(1000.0 * (t + 1))
    with netcdf_file(str(path), "w") as f:
        f.createDimension("Wavenumber", nw)
        f.createDimension("Pressure", npres)
        f.createDimension("TempGrid", nt)
        f.createDimension("weights", 2)
        for name, dim, values in [
            ("Wavenumber", "Wavenumber", WAVE),
            ("Pressure", "Pressure", PRES),
            ("TempGrid", "TempGrid", TGRID),
            ("Temperature", "Pressure", TREF),
        ]:
            var = f.createVariable(name, "d", (dim,))
            var[:] = values
        dims = ("Wavenumber", "Pressure", "TempGrid")
        f.createVariable("CO2", "d", dims)[:] = co2
        f.createVariable("H2O", "d", dims)[:] = h2o
        f.createVariable("weights", "d", ("weights",))[:] = [0.25, 0.75]


@pytest.fixture
def table(tmp_path):
    path = tmp_path / "amarsw-ck-B1.nc"
    _write_table(path)
    return str(path)


def _options(table, species):
    return AttenuatorOptions(
        species_names=["CO2", "H2O"],
        species_weights=[44.0e-3, 18.0e-3],
        species_ids=[species],
        opacity_files=[table],
    )


def test_lw_loads_tables(table):
    co2 = RFM(_options(table, 0))
    assert co2.kshape == (3, 3, 3)
    assert co2.kdata.shape == (3, 3, 3)
    np.testing.assert_allclose(np.exp(co2.krefatm[RFM.IPR]), PRES)
    np.testing.assert_allclose(co2.krefatm[RFM.ITM], TREF)
    np.testing.assert_allclose(co2.kaxis[:3], WAVE)
    np.testing.assert_allclose(co2.kaxis[3:6], np.log(PRES))
    np.testing.assert_allclose(co2.kaxis[6:], TGRID)

    h2o = RFM(_options(table, 1))
    np.testing.assert_allclose(h2o.kdata[0, 0, :], np.log([1000.0, 2000.0, 3000.0]))


def test_get_reftemp_top_of_table(table):
    co2 = RFM(_options(table, 0))
    coord = np.log(np.ones((2, 2)) * 100.0e5)
    temp = get_reftemp(coord, co2.krefatm[RFM.IPR], co2.krefatm[RFM.ITM])
    assert temp.shape == (2, 2)
    np.testing.assert_allclose(temp, 300.0)


def test_get_reftemp_interpolates_and_clamps():
    klnp = np.log(PRES)
    lnp = np.array([[math.log(1.0e4), math.log(1.0e8)], [math.log(1.0e5), 0.5 * (klnp[0] + klnp[1])]])
    temp = get_reftemp(lnp, klnp, TREF)
    assert temp[0, 0] == pytest.approx(200.0)
    assert temp[0, 1] == pytest.approx(300.0)
    assert temp[1, 0] == pytest.approx(200.0)
    assert temp[1, 1] == pytest.approx(225.0)


def test_get_reftemp_size_mismatch():
    with pytest.raises(ValueError):
        get_reftemp([1.0], [1.0, 2.0], [1.0])


def test_forward(table):
    co2 = RFM(_options(table, 0))
    h2o = RFM(_options(table, 1))

    conc = np.ones((1, 1, 2))
    kwargs = {"pres": np.ones((1, 1)) * 10.0e5, "temp": np.ones((1, 1)) * 300.0}

    result1 = co2.forward(conc, kwargs)
    result2 = h2o.forward(conc, kwargs)
    assert result1.shape == (3, 1, 1, 1)
    np.testing.assert_allclose(result1, 1.0)
    # temperature anomaly of 50 K selects the last temperature column
    np.testing.assert_allclose(result2.squeeze(), [3.0, 3.0, 3.0])


def test_forward_scales_with_concentration(table):
    co2 = RFM(_options(table, 0))
    conc = np.array([[[2.0, 1.0], [5.0, 1.0]]])
    kwargs = {"pres": np.full((1, 2), 1.0e6), "temp": np.full((1, 2), 250.0)}
    result = co2.forward(conc, kwargs)
    assert result.shape == (3, 1, 2, 1)
    np.testing.assert_allclose(result[:, 0, 0, 0], 2.0)
    np.testing.assert_allclose(result[:, 0, 1, 0], 5.0)


def test_forward_requires_pres_and_temp(table):
    co2 = RFM(_options(table, 0))
    conc = np.ones((1, 1, 2))
    with pytest.raises(KeyError, match="pres"):
        co2.forward(conc, {"temp": np.ones((1, 1))})
    with pytest.raises(KeyError, match="temp"):
        co2.forward(conc, {"pres": np.ones((1, 1))})


def test_invalid_options(table):
    options = _options(table, 0)
    options.opacity_files = [table, table]
    with pytest.raises(ValueError, match="Only one opacity file"):
        RFM(options)

    options = _options(table, 0)
    options.species_ids = [0, 1]
    with pytest.raises(ValueError, match="Only one species"):
        RFM(options)

    with pytest.raises(ValueError, match="Invalid species_id"):
        RFM(_options(table, -1))

    options = _options(table, 0)
    options.type = "s8_fuller"
    with pytest.raises(ValueError, match="Mismatch type"):
        RFM(options)


def test_missing_species_variable(table):
    options = _options(table, 0)
    options.species_names = ["CH4", "H2O"]
    with pytest.raises(KeyError, match="CH4"):
        RFM(options)


def test_not_a_netcdf_file(tmp_path):
    path = tmp_path / "bad.nc"
    path.write_text("this is not netcdf\n")
    with pytest.raises(ValueError):
        RFM(_options(str(path), 0))


def test_read_weights(table):
    weights = read_weights_rfm(table)
    np.testing.assert_allclose(weights, [0.25, 0.75])


def test_read_weights_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_weights_rfm(str(tmp_path / "missing.nc"))