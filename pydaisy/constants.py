# pydaisy/constants.py

"""
Central repository for the physical constants and model parameters of the
Daisyworld simulation.
"""

# --- Albedos (fraction of incoming light reflected) ---
WHITE_ALBEDO = 0.75
BLACK_ALBEDO = 0.25
GRAY_ALBEDO = 0.50
GROUND_ALBEDO = 0.50

# --- Radiative constants ---
STEFAN_CONSTANT = 0.0000567  # Stefan's constant (erg s^-1 cm^-2 K^-4)
FLUX_CONSTANT = 917000.0  # Base solar flux (erg s^-1 cm^-2)
CELSIUS_TO_KELVIN = 273.0  # Add to convert Celsius to Kelvin

# --- Local temperature ---
CONDUCTIVITY_CONSTANT = 20.0  # Degree to which absorbed heat is shared between surfaces

# --- Growth / death ---
OPTIMAL_TEMPERATURE = 22.5  # Peak of the growth curve (deg C)
GROWTH_CURVATURE = 0.003265  # Width of the parabolic growth curve
DEATH_RATE = 0.3  # Per unit time
EXTINCTION_FLOOR = 0.001  # Proportions below this snap to exactly 0

# --- Time stepping ---
TIME_PER_UPDATE = 0.01  # 100 updates make one unit of time

# --- Round planet ---
N_BANDS = 90  # Internal latitude resolution (0 = pole, N-1 = equator)
N_DISPLAY_BANDS = 10  # Coarse view used for visualization
POLE_INSOLATION = 0.6
EQUATOR_INSOLATION = 1.5
SPARSE_THRESHOLD = 0.0001  # Below this total a color has no meaningful latitude

# --- Extinction recovery ---
BOOST_THRESHOLD = 0.01
BAND_BOOST_FRACTION = 0.5  # Per-band threshold as a fraction of the planet-wide one
