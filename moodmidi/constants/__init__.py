"""Constants for moodmidi.

This package contains four sets of constants:

- ``moodmidi.constants.velocity`` - MIDI velocity bounds and defaults
- ``moodmidi.constants.durations`` - Beat-based durations used by the composers
- ``moodmidi.constants.gm_instruments`` - General MIDI program names and the percussion marker
- ``moodmidi.constants.gm_drums`` - GM percussion key numbers used by the jazz kit

File-level constants shared by the encoder and the validators live here.
"""

# Standard MIDI File resolution (ticks per quarter note).
TICKS_PER_BEAT = 480

# Largest value a 4-byte variable-length quantity can hold.
MAX_TICK = 0x0FFFFFFF

MIN_PITCH = 0
MAX_PITCH = 127

MIN_CHANNEL = 0
MAX_CHANNEL = 15

# GM reserves channel 10 (0-indexed 9) for percussion.
PERCUSSION_CHANNEL = 9

# set_tempo carries microseconds per quarter note.
MICROSECONDS_PER_MINUTE = 60_000_000

MIN_TEMPO = 20
MAX_TEMPO = 300

MIN_INTENSITY = 0
MAX_INTENSITY = 100

MIN_OCTAVE = 0
MAX_OCTAVE = 10

# 4/4 time signature written to the tempo track.
TIME_SIGNATURE_NUMERATOR = 4
TIME_SIGNATURE_DENOMINATOR = 4
TIME_SIGNATURE_CLOCKS_PER_CLICK = 24
TIME_SIGNATURE_32NDS_PER_BEAT = 8
