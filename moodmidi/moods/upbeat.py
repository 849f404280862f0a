"""Upbeat: a syncopated chord riff over a bouncing root-fifth bass, with a lead run when pushed."""

import typing

import moodmidi.constants.durations
import moodmidi.constants.gm_instruments
import moodmidi.keys
import moodmidi.moods.base
import moodmidi.randomness
import moodmidi.sequence


RUN_GATE = 50

# One bar of chord hits (beat offsets). 0 and 2.5 carry the accents.
RIFF_PATTERN: typing.List[float] = [0.0, 0.5, 1.0, 1.5, 2.5, 3.0, 3.5]
RIFF_ACCENTS = (0.0, 2.5)
RIFF_LONG_HIT = 2.5

BASS_GATE_LENGTH = 0.9

# The run begins this far into the clip.
RUN_START = 0.6
RUN_OCTAVE_CHANCE = 0.3


class UpbeatComposer (moodmidi.moods.base.MoodComposer):

	name = "upbeat"
	description = "Energetic, happy mood with rhythmic patterns and major harmony"

	def compose (
		self,
		duration_seconds: float,
		key: moodmidi.keys.Key,
		intensity: int,
		tempo: float,
		ctx: moodmidi.randomness.PresetContext
	) -> typing.List[moodmidi.sequence.NoteSequence]:

		beats = moodmidi.moods.base.seconds_to_beats(duration_seconds, tempo)

		layers = [
			self._riff(key, beats, tempo, ctx.rng),
			self._bass(key, beats, tempo, ctx.rng),
		]

		if intensity > RUN_GATE:
			layers.append(self._run(key, beats, tempo, ctx.rng))

		return layers


	def _riff (self, key: moodmidi.keys.Key, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		chord = key.chord_tones()
		notes = []
		bar_start = 0.0

		while bar_start < beats:

			for offset in RIFF_PATTERN:
				position = bar_start + offset

				if position >= beats:
					break

				if offset in RIFF_ACCENTS:
					velocity = rng.bounded_int(80, 90)
				else:
					velocity = rng.bounded_int(70, 80)

				duration = moodmidi.constants.durations.DOTTED_EIGHTH if offset == RIFF_LONG_HIT else moodmidi.constants.durations.SIXTEENTH

				for pitch in chord:
					notes.append(moodmidi.moods.base.make_note(pitch, duration, velocity, position, end_limit=beats))

			bar_start += moodmidi.constants.durations.WHOLE

		return moodmidi.moods.base.layer("riff", moodmidi.constants.gm_instruments.BRIGHT_PIANO, notes, tempo)


	def _bass (self, key: moodmidi.keys.Key, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""
		Root and fifth an octave down, alternating on every quarter note.
		"""

		root = key.root() - 12
		pitches = [root, root + key.fifth]
		notes = []
		index = 0
		t = 0.0

		while t < beats:
			velocity = rng.bounded_int(85, 95)
			notes.append(moodmidi.moods.base.make_note(pitches[index % 2], BASS_GATE_LENGTH, velocity, t, end_limit=beats))
			index += 1
			t = index * moodmidi.constants.durations.QUARTER

		return moodmidi.moods.base.layer("bass", moodmidi.constants.gm_instruments.ELECTRIC_BASS, notes, tempo)


	def _run (self, key: moodmidi.keys.Key, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""
		Two to four sixteenth-note scale tones near the end of the clip, the last one held.
		"""

		root = key.root()
		scale = key.scale_intervals()
		count = rng.bounded_int(2, 4)
		start = beats * RUN_START
		notes = []

		for i in range(count):
			position = start + i * moodmidi.constants.durations.SIXTEENTH

			if position >= beats:
				break

			interval = rng.pick(scale)
			octave = 12 if rng.chance(RUN_OCTAVE_CHANCE) else 0
			velocity = rng.bounded_int(70, 90)
			duration = moodmidi.constants.durations.EIGHTH if i == count - 1 else moodmidi.constants.durations.SIXTEENTH

			notes.append(moodmidi.moods.base.make_note(root + interval + octave, duration, velocity, position, end_limit=beats))

		return moodmidi.moods.base.layer("run", moodmidi.constants.gm_instruments.SYNTH_LEAD, notes, tempo)
