"""General MIDI instrument names and program numbers.

``GM_INSTRUMENT_MAP`` maps the friendly names accepted on the command line and
in JSON input to GM program numbers (0-127). Several names may share one
program (``"piano"`` and ``"acoustic_piano"`` are both 0).

``PERCUSSION`` is not a program number: a sequence whose instrument is
``PERCUSSION`` is routed to the GM percussion channel by the encoder.
"""

import typing


PERCUSSION = -1

ACOUSTIC_PIANO = 0
BRIGHT_PIANO = 1
ELECTRIC_PIANO = 4
CELESTA = 8
GLOCKENSPIEL = 9
VIBRAPHONE = 11
MARIMBA = 12
XYLOPHONE = 13
TUBULAR_BELLS = 14
ACOUSTIC_GUITAR = 25
ELECTRIC_GUITAR = 27
ACOUSTIC_BASS = 32
ELECTRIC_BASS = 33
VIOLIN = 40
VIOLA = 41
CELLO = 42
CONTRABASS = 43
TREMOLO_STRINGS = 44
PIZZICATO_STRINGS = 45
HARP = 46
STRINGS = 48
TRUMPET = 56
TROMBONE = 57
TUBA = 58
FRENCH_HORN = 60
OBOE = 68
BASSOON = 70
CLARINET = 71
FLUTE = 73
SYNTH_LEAD = 80
SYNTH_PAD = 88
PAD_WARM = 89
PAD_CHOIR = 91
SOUNDTRACK = 97
ATMOSPHERE = 99


GM_INSTRUMENT_MAP: typing.Dict[str, int] = {
	# Pianos
	"piano": ACOUSTIC_PIANO,
	"acoustic_piano": ACOUSTIC_PIANO,
	"bright_piano": BRIGHT_PIANO,
	"electric_piano": ELECTRIC_PIANO,
	# Strings
	"strings": STRINGS,
	"violin": VIOLIN,
	"viola": VIOLA,
	"cello": CELLO,
	"contrabass": CONTRABASS,
	"tremolo_strings": TREMOLO_STRINGS,
	"pizzicato_strings": PIZZICATO_STRINGS,
	"harp": HARP,
	# Woodwinds
	"flute": FLUTE,
	"oboe": OBOE,
	"clarinet": CLARINET,
	"bassoon": BASSOON,
	# Brass
	"trumpet": TRUMPET,
	"trombone": TROMBONE,
	"french_horn": FRENCH_HORN,
	"tuba": TUBA,
	# Synth
	"synth_pad": SYNTH_PAD,
	"synth_lead": SYNTH_LEAD,
	"pad_warm": PAD_WARM,
	"pad_choir": PAD_CHOIR,
	# Ambient
	"atmosphere": ATMOSPHERE,
	"soundtrack": SOUNDTRACK,
	# Guitar and bass
	"acoustic_guitar": ACOUSTIC_GUITAR,
	"electric_guitar": ELECTRIC_GUITAR,
	"acoustic_bass": ACOUSTIC_BASS,
	"bass": ELECTRIC_BASS,
	"electric_bass": ELECTRIC_BASS,
	# Bells and tuned percussion
	"vibraphone": VIBRAPHONE,
	"marimba": MARIMBA,
	"xylophone": XYLOPHONE,
	"tubular_bells": TUBULAR_BELLS,
	"glockenspiel": GLOCKENSPIEL,
	"celesta": CELESTA,
	# Drum kit on the percussion channel
	"drums": PERCUSSION,
}
