"""Physical constants and index positions of atmospheric, optical and flux variables."""

# Physical constants (SI unless marked cgs)
RGAS = 8.314462
RGAS_CGS = 8.314462e7
K_BOLTZ = 1.3806504e-23
K_BOLTZ_CGS = 1.3806504e-16
LOSCHMIDT = 2.68719e25

H_PLANCK = 6.62606957e-34
H_PLANCK_CGS = 6.62606957e-27
C_LIGHT = 2.99792458e8
C_LIGHT_CGS = 2.99792458e10
STEFAN_BOLTZMANN = 5.670374419e-8

# Atmospheric variables (legacy layout)
ITM = 0
IPR = 1
ICX = 2

# Optical variables
IEX = 0  # extinction cross section
ISS = 1  # single scattering albedo
IPM = 2  # first phase moment

# Flux variables
IUP = 0  # upward
IDN = 1  # downward