"""Beat-based duration constants used by the mood composers.

All values are in **beats**, where 1.0 = one quarter note::

    import moodmidi.constants.durations as dur

    t += dur.THIRTYSECOND     # tremolo step
    bar = dur.WHOLE           # one 4/4 bar
"""

THIRTYSECOND = 0.125
SIXTEENTH = 0.25
EIGHTH = 0.5
DOTTED_EIGHTH = 0.75
QUARTER = 1.0
WHOLE = 4.0
