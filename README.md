# harp

Building blocks for atmospheric radiative-transfer calculations with NumPy:
tabulated aerosol and gas opacities, layer-to-level interpolation, spherical
flux correction, resource-file lookup and small text-file readers.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Contents |
| --- | --- |
| `harp.interpolation` | `locate`, `interp1`, `interpn`: bisection search and multilinear interpolation on tabulated data, taking the value at the nearest edge outside the grid |
| `harp.layer2level` | `layer2level`, `Layer2LevelOptions`, `InterpOrder`, `Boundary`, `center4_interp`: turn cell-centred layer values into interface (level) values |
| `harp.flux` | `spherical_flux_correction`: rescale plane-parallel fluxes for spherical geometry |
| `harp.opacity` | `AttenuatorOptions`, `TabulatedAerosol`, `S8Fuller`, `H2SO4Simple`: aerosol opacities from three-column text tables |
| `harp.rfm` | `RFM`, `get_reftemp`, `read_weights_rfm`: absorption tables over wavenumber, log-pressure and temperature anomaly, read from NetCDF files |
| `harp.standard_grid` | `AtmToStandardGrid`, `AtmToStandardGridOptions`: map pressure, temperature anomaly and composition onto `[-1, 1]` |
| `harp.resources` | `find_resource`, `add_resource_directory`, `set_default_directories` and the search-path helpers: locate data files along a search path |
| `harp.fileio` | `decomment_file`, `read_data_vector`, `read_stellar_flux`, `vectorize`, `vectorize_floats`, `strip_line`, `get_num_cols`, `get_num_rows` and friends |
| `harp.directions` | `parse_radiation_direction(s)`, `get_direction_grids`, `deg2rad`, `rad2deg`: parse `(zenith,azimuth)` strings into `[mu, phi]` rays |
| `harp.constants` | physical constants and index positions of atmospheric, optical and flux variables |

## Examples

One-dimensional interpolation:

```python
from harp.interpolation import interp1

axis = [0.0, 1.0, 2.0]
data = [10.0, 20.0, 40.0]
interp1(1.5, data, axis)   # 30.0
interp1(5.0, data, axis)   # outside the grid: nearest value, 40.0
```

Layer values to level values (the last axis is the layer axis, and the
result has one more entry along it):

```python
import numpy as np
from harp.layer2level import Layer2LevelOptions, layer2level

temp = np.full((1, 40), 300.0)
temf = layer2level(temp, Layer2LevelOptions())
temf.shape   # (1, 41)
```

By default the interior uses fourth-order centred interpolation, the lowest
level is extrapolated and the highest level takes the top layer's value. With
`check_positivity` set (the default), a negative level value raises
`ValueError`.

Aerosol opacities from tabulated files found on the resource search path
(the table files themselves are not shipped with the package):

```python
import numpy as np
from harp.opacity import AttenuatorOptions, S8Fuller
from harp.resources import add_resource_directory

add_resource_directory("data")

options = AttenuatorOptions(
    species_names=["S8", "H2SO4"],
    species_weights=[256.0e-3, 98.0e-3],
    species_ids=[0],
    opacity_files=["s8_k_fuller.txt"],
)
s8 = S8Fuller(options)

conc = np.ones((1, 1, 2))                        # (ncol, nlyr, nspecies), mol/m^3
prop = s8.forward(conc, {"wavelength": s8.kwave})
prop.shape                                       # (nwave, ncol, nlyr, 2)
```

The opacity tables hold wavelength in micrometres, the extinction cross
section in m²/kg and the single scattering albedo; `#` starts a comment. On
loading, the cross section is multiplied by the species' molecular weight to
give m²/mol. `forward` accepts either `"wavelength"` (µm) or `"wavenumber"`
(cm⁻¹) and returns the attenuation in 1/m and the attenuation-weighted single
scattering albedo.

`RFM` reads the dimensions `Wavenumber`, `Pressure` and `TempGrid`, the
variables of the same names, `Temperature` and one variable per species name.
Its `forward` needs `"pres"` (Pa) and `"temp"` (K) and returns the attenuation
in 1/m with shape `(nwave, ncol, nlyr, 1)`.

## Resource lookup

`find_resource(name)` searches the directories of the search path in order
and returns the first readable match. The path starts as the current
directory alone; `add_resource_directory` puts a directory at the front, so
the most recently added directory is searched first, and a `data` directory
inside the installed package is always searched last.
`set_default_directories` resets the path to the current directory. Absolute
paths and paths starting with `~/` are checked as given, with `~` expanded to
the home directory. If nothing is found, `FileNotFoundError` is raised,
listing every directory that was searched.

## What the package does not do

- It has no radiative-transfer solver: it produces optical properties,
  level temperatures and flux corrections, but computing fluxes or radiances
  from them is left to other software.
- NetCDF files are read with `scipy.io.netcdf_file`, which handles the
  classic NetCDF formats only; NetCDF-4 (HDF5-based) files cannot be read.
- There is no command-line program; everything is used from Python.