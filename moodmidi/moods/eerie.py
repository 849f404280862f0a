"""Eerie: a diminished pad that creeps in, sparse celesta bells and a chromatic breath texture."""

import typing

import moodmidi.constants.durations
import moodmidi.constants.gm_instruments
import moodmidi.intervals
import moodmidi.keys
import moodmidi.moods.base
import moodmidi.randomness
import moodmidi.sequence


TEXTURE_GATE = 40

# Entry stagger is capped at one beat per voice and compressed for clips under eight beats.
PAD_STAGGER_BEATS = 1.0
PAD_STAGGER_DIVISOR = 8.0

# Bells are spread across the first 80% of the clip.
BELL_SPAN = 0.8


class EerieComposer (moodmidi.moods.base.MoodComposer):

	name = "eerie"
	description = "Creepy, unsettling mood with sparse tones and diminished harmony"

	def compose (
		self,
		duration_seconds: float,
		key: moodmidi.keys.Key,
		intensity: int,
		tempo: float,
		ctx: moodmidi.randomness.PresetContext
	) -> typing.List[moodmidi.sequence.NoteSequence]:

		beats = moodmidi.moods.base.seconds_to_beats(duration_seconds, tempo)
		root = key.root()

		layers = [
			self._pad(root, beats, tempo),
			self._bells(root, beats, tempo, ctx.rng),
		]

		if intensity > TEXTURE_GATE:
			layers.append(self._texture(root, beats, tempo, ctx.rng))

		return layers


	def _pad (self, root: int, beats: float, tempo: float) -> moodmidi.sequence.NoteSequence:

		"""
		Root, minor third and a high tritone. Each voice enters a little later and louder than the last.
		"""

		voices = [root - 12, root + 3, root + 6 + 12]
		velocities = [30, 35, 40]
		stagger = min(PAD_STAGGER_BEATS, beats / PAD_STAGGER_DIVISOR)
		notes = []

		for i, (pitch, velocity) in enumerate(zip(voices, velocities)):
			entry = i * stagger
			notes.append(moodmidi.moods.base.make_note(pitch, beats - entry, velocity, entry))

		return moodmidi.moods.base.layer("pad", moodmidi.constants.gm_instruments.PAD_WARM, notes, tempo)


	def _bells (self, root: int, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		scale = moodmidi.intervals.get_intervals("diminished_scale")
		count = rng.bounded_int(1, 3)
		notes = []

		for i in range(count):
			interval = rng.pick(scale)
			octave = rng.bounded_int(1, 2) * 12
			velocity = rng.bounded_int(30, 50)
			duration = rng.uniform(1.0, 2.0)
			position = (i / count) * beats * BELL_SPAN

			notes.append(moodmidi.moods.base.make_note(root + interval + octave, duration, velocity, position, end_limit=beats))

		return moodmidi.moods.base.layer("bells", moodmidi.constants.gm_instruments.CELESTA, notes, tempo)


	def _texture (self, root: int, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""
		Half-beat chromatic steps wandering at most a tritone either side of the root.
		"""

		step = moodmidi.constants.durations.EIGHTH
		notes = []
		pitch = root
		index = 0
		t = 0.0

		while t < beats:
			velocity = rng.bounded_int(15, 25)
			notes.append(moodmidi.moods.base.make_note(pitch, step, velocity, t, end_limit=beats))

			pitch = max(root - 6, min(root + 6, pitch + rng.bounded_int(-1, 1)))
			index += 1
			t = index * step

		return moodmidi.moods.base.layer("texture", moodmidi.constants.gm_instruments.ATMOSPHERE, notes, tempo)
