"""
Duration Reporter - Configuration

Flat settings for the duration reporter, read once from the environment.
"""

import os

# Reporting settings
TIME_UNIT = os.getenv("DURATION_REPORTER_TIME_UNIT", "ms")  # Display unit name (ns, us, ms, s)
FAMILY_MATCH = os.getenv("DURATION_REPORTER_FAMILY_MATCH", "exact")  # exact | contains
STRICT = os.getenv("DURATION_REPORTER_STRICT", "false").lower() in ("1", "true", "yes")
