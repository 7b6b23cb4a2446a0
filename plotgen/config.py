"""
Configuration constants.

Centralizes the tunable values used by plot generation.
"""

import sys

# =============================================================================
# GENERAL
# =============================================================================

# RANDOM_SEED = "burrito1"
RANDOM_SEED = None

# Test environment detection
IS_TEST_ENVIRONMENT = "pytest" in sys.modules

# =============================================================================
# PLOT GENERATION
# =============================================================================

# Side length of the square plot, in cells
PLOT_SIZE = 16

# RNG stream used for cell tie-breaks and tile choice
WFC_RNG_DOMAIN = "plot.wfc"

# =============================================================================
# LOGGING
# =============================================================================

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
