"""
Date: 10/18/2026
Physical constants used by the ocean surface forcing.
"""

# Seawater reference properties
rho_sw = 1.026e3 # Reference seawater density (kg/m^3)
cp_sw = 3.996e3 # Specific heat of seawater (J/kg/K)

# Phase change
latent_heat_fusion_mks = 3.337e5 # Latent heat of fusion (J/kg)

# Conversion factors from surface fluxes to tracer tendencies
hflux_factor = 1.0 / (rho_sw * cp_sw) # W/m^2 -> K m/s
sflux_factor = 1.0 # salinity flux -> PSU m/s

# Upper bound on the salinity a single step may extract from the surface layer (PSU)
max_salt_removal = 4.0

# freezing point of freshwater in Celsius; runoff never enters colder than this
frz_fw = 0.0
