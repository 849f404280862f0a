"""Calm: an open pad chord under a slow harp arpeggio."""

import typing

import moodmidi.constants.gm_instruments
import moodmidi.intervals
import moodmidi.keys
import moodmidi.moods.base
import moodmidi.randomness
import moodmidi.sequence


ARPEGGIO_START = 0.25
ARPEGGIO_SPACING = 1.0
ARPEGGIO_LENGTH = 0.75

# The arpeggio stops this many beats before the end so the last note can ring.
ARPEGGIO_TAIL = 0.5


class CalmComposer (moodmidi.moods.base.MoodComposer):

	name = "calm"
	description = "Peaceful, serene mood with sustained pads and gentle arpeggios"

	def compose (
		self,
		duration_seconds: float,
		key: moodmidi.keys.Key,
		intensity: int,
		tempo: float,
		ctx: moodmidi.randomness.PresetContext
	) -> typing.List[moodmidi.sequence.NoteSequence]:

		beats = moodmidi.moods.base.seconds_to_beats(duration_seconds, tempo)

		return [
			self._pad(key, beats, tempo),
			self._arpeggio(key, beats, tempo, ctx.rng),
		]


	def _pad (self, key: moodmidi.keys.Key, beats: float, tempo: float) -> moodmidi.sequence.NoteSequence:

		"""
		Major keys get an open maj7, minor keys an open m(add9).
		"""

		root = key.root()
		shape = "minor_add9" if key.is_minor else "major_7th"
		intervals = moodmidi.intervals.get_intervals(shape)

		# Drop the root an octave to open the voicing.
		pitches = [root + intervals[0] - 12] + [root + interval for interval in intervals[1:]]
		velocities = [40, 35, 35, 30]

		notes = [moodmidi.moods.base.make_note(pitch, beats, velocity) for pitch, velocity in zip(pitches, velocities)]

		return moodmidi.moods.base.layer("pad", moodmidi.constants.gm_instruments.PAD_WARM, notes, tempo)


	def _arpeggio (self, key: moodmidi.keys.Key, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		chord = key.seventh_chord(moodmidi.keys.DEFAULT_OCTAVE + 1)
		notes = []
		index = 0
		t = ARPEGGIO_START

		while t < beats - ARPEGGIO_TAIL:
			velocity = rng.bounded_int(40, 60)
			notes.append(moodmidi.moods.base.make_note(chord[index % len(chord)], ARPEGGIO_LENGTH, velocity, t))
			index += 1
			t = ARPEGGIO_START + index * ARPEGGIO_SPACING

		return moodmidi.moods.base.layer("arpeggio", moodmidi.constants.gm_instruments.HARP, notes, tempo)
