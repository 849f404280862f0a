import typing


INTERVAL_DEFINITIONS: typing.Dict[str, typing.List[int]] = {
	"diminished_scale": [0, 2, 3, 5, 6, 8, 9, 11],
	"dissonant_cluster": [0, 1, 6],
	"major_7th": [0, 4, 7, 11],
	"major_ionian": [0, 2, 4, 5, 7, 9, 11],
	"major_pentatonic": [0, 2, 4, 7, 9],
	"minor_add9": [0, 3, 7, 14],
	"minor_pentatonic": [0, 3, 5, 7, 10],
	"natural_minor": [0, 2, 3, 5, 7, 8, 10],
	"minor_2nd": [0, 1],
}


# Rootless jazz piano voicings (semitones from the key root), one set per key mode.

MAJOR_JAZZ_VOICINGS: typing.List[typing.List[int]] = [
	[4, 7, 11, 14],		# maj9: 3rd, 5th, 7th, 9th
	[4, 11, 14],		# maj7 spread
	[11, 14, 16],		# maj9 upper structure
	[-1, 4, 7, 11],		# maj7 with the 7th below
	[4, 7, 11],			# maj7 basic
	[7, 11, 14, 18],	# maj9#11 upper structure
]

MINOR_JAZZ_VOICINGS: typing.List[typing.List[int]] = [
	[3, 7, 10, 14],		# m9: 3rd, 5th, 7th, 9th
	[3, 10, 14],		# m7 spread
	[10, 14, 17],		# m9 upper structure
	[-2, 3, 7, 10],		# m7 with the 7th below
	[3, 7, 10],			# m7 basic
	[7, 10, 14, 17],	# m11 voicing
]


def get_intervals (name: str) -> typing.List[int]:

	"""
	Return a named interval list from the registry.
	"""

	if name not in INTERVAL_DEFINITIONS:
		raise ValueError(f"Unknown interval set: {name}")

	return list(INTERVAL_DEFINITIONS[name])
