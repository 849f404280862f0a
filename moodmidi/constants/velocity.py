"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127).
"""

# MIDI standard range
MIN_VELOCITY = 0
MAX_VELOCITY = 127

# Softest velocity a composer will emit for an audible note
MIN_AUDIBLE_VELOCITY = 1
