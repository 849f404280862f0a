"""Ambient: a slowly breathing string drone with scattered vibraphone tones."""

import math
import typing

import moodmidi.constants.durations
import moodmidi.constants.gm_instruments
import moodmidi.keys
import moodmidi.moods.base
import moodmidi.randomness
import moodmidi.sequence


SEGMENT_BEATS = moodmidi.constants.durations.WHOLE

DRONE_MIN_VELOCITY = 25
DRONE_MAX_VELOCITY = 45
DRONE_VELOCITY_STEP = 4


class AmbientComposer (moodmidi.moods.base.MoodComposer):

	name = "ambient"
	description = "Atmospheric, textural mood with drones and sparse pentatonic tones"

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
			self._drone(key, beats, tempo, ctx.rng),
			self._tones(key, beats, intensity, tempo, ctx.rng),
		]


	def _drone (self, key: moodmidi.keys.Key, beats: float, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""Root two octaves down, root and fifth one octave down.

		The chord is re-struck every bar so its velocity can drift, which gives
		the drone a slow swell without controller data.
		"""

		root = key.root()
		pitches = [root - 24, root - 12, root + key.fifth - 12]
		segments = max(1, math.ceil(beats / SEGMENT_BEATS))
		walk = rng.random_walk(segments, DRONE_MIN_VELOCITY, DRONE_MAX_VELOCITY, DRONE_VELOCITY_STEP)
		notes = []

		for i, velocity in enumerate(walk):
			start = i * SEGMENT_BEATS

			for pitch in pitches:
				notes.append(moodmidi.moods.base.make_note(pitch, SEGMENT_BEATS, velocity, start, end_limit=beats))

		return moodmidi.moods.base.layer("drone", moodmidi.constants.gm_instruments.STRINGS, notes, tempo)


	def _tones (self, key: moodmidi.keys.Key, beats: float, intensity: int, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		root = key.root()
		scale = key.pentatonic_intervals()
		count = 3 + intensity // 30

		positions = sorted(rng.uniform(0.5, max(0.5, beats - 1.0)) for _ in range(count))
		notes = []

		# Tones are left to ring past the clip end.
		for position in positions:
			interval = rng.pick(scale)
			octave = rng.bounded_int(0, 2) * 12
			velocity = rng.bounded_int(20, 40)
			duration = rng.uniform(1.5, 3.0)

			notes.append(moodmidi.moods.base.make_note(root + interval + octave, duration, velocity, position))

		return moodmidi.moods.base.layer("tones", moodmidi.constants.gm_instruments.VIBRAPHONE, notes, tempo)
