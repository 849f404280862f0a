"""General MIDI Level 1 percussion keys used by the jazz brush kit.

These note numbers are played on the percussion channel (0-indexed channel 9)
and are supported by virtually all GM-compatible SoundFonts.
"""

SIDE_STICK = 37
ACOUSTIC_SNARE = 38
CLOSED_HI_HAT = 42
PEDAL_HI_HAT = 44
RIDE_CYMBAL_1 = 51
RIDE_BELL = 53
HI_WOOD_BLOCK = 76
LOW_WOOD_BLOCK = 77
