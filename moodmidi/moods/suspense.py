"""Suspense: a low drone under a nervous minor-second tremolo, with dissonant stabs at high intensity."""

import typing

import moodmidi.constants.durations
import moodmidi.constants.gm_instruments
import moodmidi.intervals
import moodmidi.keys
import moodmidi.moods.base
import moodmidi.randomness
import moodmidi.sequence


CLUSTER_GATE = 60
CLUSTER_MAX_VELOCITY = 90


class SuspenseComposer (moodmidi.moods.base.MoodComposer):

	name = "suspense"
	description = "Tense low drone with a minor-second tremolo and dissonant cluster hits"

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
			self._drone(root, key, beats, tempo),
			self._tremolo(root, beats, intensity, tempo, ctx.rng),
		]

		if intensity > CLUSTER_GATE:
			layers.append(self._clusters(root, beats, intensity, tempo, ctx.rng))

		return layers


	def _drone (self, root: int, key: moodmidi.keys.Key, beats: float, tempo: float) -> moodmidi.sequence.NoteSequence:

		notes = [
			moodmidi.moods.base.make_note(root - 24, beats, 50),
			moodmidi.moods.base.make_note(root + key.fifth - 24, beats, 40),
		]

		return moodmidi.moods.base.layer("drone", moodmidi.constants.gm_instruments.CELLO, notes, tempo)


	def _tremolo (self, root: int, beats: float, intensity: int, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""
		Alternate root+12 and root+13 on every thirty-second note for the whole clip.
		"""

		step = moodmidi.constants.durations.THIRTYSECOND
		dyad = moodmidi.intervals.get_intervals("minor_2nd")
		notes = []

		t = 0.0
		index = 0

		while t < beats:
			pitch = root + 12 + dyad[index % len(dyad)]
			velocity = 20 + intensity // 10 + rng.bounded_int(0, 10)
			notes.append(moodmidi.moods.base.make_note(pitch, step, velocity, t, end_limit=beats))
			index += 1
			t = index * step

		return moodmidi.moods.base.layer("tremolo", moodmidi.constants.gm_instruments.TREMOLO_STRINGS, notes, tempo)


	def _clusters (self, root: int, beats: float, intensity: int, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""
		Place one to three {0, 1, 6} cluster hits at random positions away from the clip edges.
		"""

		count = rng.bounded_int(1, 3)

		low = 0.5
		high = beats - 0.5

		# Short clips: collapse the window onto the middle of the clip.
		if high < low:
			low = high = beats / 2

		positions = sorted(rng.uniform(low, high) for _ in range(count))
		cluster = moodmidi.intervals.get_intervals("dissonant_cluster")
		notes = []

		for position in positions:
			velocity = min(CLUSTER_MAX_VELOCITY, rng.bounded_int(60, 60 + 30 * intensity // 100))

			for interval in cluster:
				notes.append(moodmidi.moods.base.make_note(root + interval, moodmidi.constants.durations.EIGHTH, velocity, position, end_limit=beats))

		return moodmidi.moods.base.layer("clusters", moodmidi.constants.gm_instruments.ACOUSTIC_PIANO, notes, tempo)
