"""Jazz: a nightclub trio of walking bass, piano comping and brushed drums.

Unlike the other moods the trio first draws a ``PresetVariation`` from the
run's random stream. It nudges the tempo, picks the bass and comping styles
and the keys instrument, and supplies a phrase contour, so neighbouring seeds
sound like different takes rather than small perturbations of one take.
"""

import logging
import typing

import moodmidi.constants.gm_drums
import moodmidi.constants.gm_instruments
import moodmidi.intervals
import moodmidi.keys
import moodmidi.moods.base
import moodmidi.note
import moodmidi.randomness
import moodmidi.sequence
import moodmidi.variation


logger = logging.getLogger(__name__)


DRUMS_GATE = 40

# Lowest bass note (E1).
BASS_FLOOR = 28

# (step in beats, note length in beats) per bass style.
BASS_RHYTHM: typing.Dict[str, typing.Tuple[float, float]] = {
	moodmidi.variation.BASS_WALKING: (1.0, 0.95),
	moodmidi.variation.BASS_TWO_FEEL: (2.0, 1.9),
	moodmidi.variation.BASS_SYNCOPATED: (1.0, 0.8),
}

# (skip probability, step in beats) per comping style.
COMP_RHYTHM: typing.Dict[str, typing.Tuple[float, float]] = {
	moodmidi.variation.COMP_SPARSE: (0.45, 2.0),
	moodmidi.variation.COMP_MEDIUM: (0.25, 1.5),
	moodmidi.variation.COMP_DENSE: (0.10, 1.0),
}

# Comping stays in the piano's middle register.
COMP_LOW = 48
COMP_HIGH = 84


class JazzComposer (moodmidi.moods.base.MoodComposer):

	name = "jazz"
	description = "Nightclub trio style with walking bass, piano comping, and brushed drums"

	def compose (
		self,
		duration_seconds: float,
		key: moodmidi.keys.Key,
		intensity: int,
		tempo: float,
		ctx: moodmidi.randomness.PresetContext
	) -> typing.List[moodmidi.sequence.NoteSequence]:

		variation = moodmidi.variation.PresetVariation.draw(ctx.rng)
		effective_tempo = variation.effective_tempo(tempo)
		beats = moodmidi.moods.base.seconds_to_beats(duration_seconds, effective_tempo)

		logger.debug(
			f"Jazz variation: tempo {effective_tempo}, bass {variation.bass_style}, "
			f"comping {variation.comp_style}, keys program {variation.keys_instrument}"
		)

		layers = [
			self._walking_bass(key, beats, intensity, effective_tempo, variation, ctx.rng),
			self._comping(key, beats, intensity, effective_tempo, variation, ctx.rng),
		]

		if intensity > DRUMS_GATE:
			layers.append(self._brushes(beats, intensity, effective_tempo, ctx.rng))

		return layers


	def _walking_bass (
		self,
		key: moodmidi.keys.Key,
		beats: float,
		intensity: int,
		tempo: float,
		variation: moodmidi.variation.PresetVariation,
		rng: moodmidi.randomness.RandomSource
	) -> moodmidi.sequence.NoteSequence:

		"""Walk through scale steps, chord-tone leaps and chromatic approaches.

		Steps follow the variation's contour. Downbeats are humanised by a
		hair, offbeats are pushed late for swing, and the odd grace note slides
		into its target from a semitone away.
		"""

		bass_root = max(BASS_FLOOR, key.root() - 24)
		scale = key.scale_intervals() + [12]

		scale_notes = sorted({
			bass_root + octave + interval
			for octave in (-12, 0, 12)
			for interval in scale
			if BASS_FLOOR <= bass_root + octave + interval <= bass_root + 14
		})

		chord_tones = [bass_root, bass_root + key.third, bass_root + key.fifth, bass_root + key.seventh]
		step, base_duration = BASS_RHYTHM[variation.bass_style]
		syncopated = variation.bass_style == moodmidi.variation.BASS_SYNCOPATED
		vel_base = 95 + intensity // 10

		notes = []
		last_pitch = bass_root
		phrase_pos = 0
		t = 0.0

		while t < beats:

			if syncopated and variation.should_rest(rng):
				t += 0.5
				phrase_pos += 1
				continue

			if t == 0.0:
				pitch = bass_root

			elif rng.chance(0.55):
				direction = variation.direction(phrase_pos) or rng.pick([-1, 1])
				pitch = _scale_step(scale_notes, last_pitch, direction)

			elif rng.chance(0.5):
				pitch = rng.pick(chord_tones)

			else:
				target = rng.pick(chord_tones)
				pitch = max(BASS_FLOOR, target - 1) if rng.chance(0.5) else min(bass_root + 12, target + 1)

			phrase_pos += 1

			# Lean on beats 1 and 3 of the bar.
			accent = 5 if int(t) % 4 in (0, 2) else -3
			velocity = variation.adjust_velocity(vel_base + accent) + rng.bounded_int(0, 7)

			if int(t * 2) % 2 == 1:
				swing = rng.uniform(0.02, 0.08)
			else:
				swing = rng.uniform(-0.02, 0.02)

			start = max(0.0, t + swing)
			duration = max(0.1, base_duration + rng.uniform(-0.05, 0.05))

			if rng.chance(0.15) and start > 0.1:
				grace_pitch = pitch - 1 if rng.chance(0.5) else pitch + 1
				notes.append(moodmidi.moods.base.make_note(grace_pitch, 0.08, max(40, velocity - 20), start - 0.08))

			notes.append(moodmidi.moods.base.make_note(pitch, duration, velocity, start))
			last_pitch = pitch

			if syncopated and rng.chance(0.25):
				ghost_pitch = rng.pick(chord_tones)
				ghost_time = t + 0.5 + rng.uniform(0.0, 0.05)

				if ghost_time < beats:
					notes.append(moodmidi.moods.base.make_note(ghost_pitch, 0.2, vel_base - 35, ghost_time))

			t += step

		return moodmidi.moods.base.layer("bass", moodmidi.constants.gm_instruments.ACOUSTIC_BASS, notes, tempo)


	def _comping (
		self,
		key: moodmidi.keys.Key,
		beats: float,
		intensity: int,
		tempo: float,
		variation: moodmidi.variation.PresetVariation,
		rng: moodmidi.randomness.RandomSource
	) -> moodmidi.sequence.NoteSequence:

		"""
		Rootless voicings on the off-beats, stepping through the voicing list along the contour.
		"""

		root = key.root()
		voicings = moodmidi.intervals.MINOR_JAZZ_VOICINGS if key.is_minor else moodmidi.intervals.MAJOR_JAZZ_VOICINGS
		skip_probability, base_step = COMP_RHYTHM[variation.comp_style]
		vel_base = variation.adjust_velocity(30 + intensity // 12)

		notes: typing.List[moodmidi.note.Note] = []
		voicing_index = variation.voicing_offset % len(voicings)
		phrase_pos = 0
		t = 0.0

		while t < beats - 0.5:

			if variation.should_rest(rng) or rng.chance(skip_probability * 0.5):
				t += rng.uniform(0.5, 1.0)
				phrase_pos += 1
				continue

			voicing = voicings[voicing_index]
			swing = rng.uniform(0.02, 0.1) if rng.chance(0.4) else 0.0
			chord_time = t + 0.5 + swing

			if chord_time >= beats:
				break

			if rng.chance(0.3):
				duration = 0.2
			elif rng.chance(0.4):
				duration = 0.5
			else:
				duration = rng.uniform(0.8, 1.2)

			# Upper voices sit slightly louder.
			for i, interval in enumerate(voicing):
				pitch = max(COMP_LOW, min(COMP_HIGH, root + interval))
				velocity = min(110, vel_base + i * 2 + rng.bounded_int(0, 9))
				notes.append(moodmidi.moods.base.make_note(pitch, duration, velocity, chord_time))

			if rng.chance(0.15) and chord_time + 0.5 < beats:
				notes.extend(_flourish(key, chord_time, rng))

			voicing_index = (voicing_index + variation.direction(phrase_pos)) % len(voicings)
			phrase_pos += 1

			t += base_step + rng.uniform(-0.3, 0.3)

		return moodmidi.moods.base.layer("comping", variation.keys_instrument, notes, tempo)


	def _brushes (self, beats: float, intensity: int, tempo: float, rng: moodmidi.randomness.RandomSource) -> moodmidi.sequence.NoteSequence:

		"""Ride with a swung skip beat, hi-hat and brushed snare on 2 and 4, woodblock accents.

		Accent density and drum velocities rise with intensity.
		"""

		drums = moodmidi.constants.gm_drums
		swing_ratio = rng.uniform(0.62, 0.72)
		boost = (intensity - DRUMS_GATE) // 6
		accent_probability = intensity / 100.0

		notes = []
		t = 0.0

		while t < beats:
			beat = int(t)

			notes.append(moodmidi.moods.base.make_note(drums.RIDE_CYMBAL_1, 0.2, 65 + boost + rng.bounded_int(0, 19), t))

			skip_time = t + swing_ratio

			if skip_time < beats and rng.chance(0.85):
				ride = drums.RIDE_CYMBAL_1 if rng.chance(0.8) else drums.RIDE_BELL
				notes.append(moodmidi.moods.base.make_note(ride, 0.15, 55 + boost + rng.bounded_int(0, 14), skip_time))

			if beat % 2 == 1:
				notes.append(moodmidi.moods.base.make_note(drums.PEDAL_HI_HAT, 0.1, 50 + rng.bounded_int(0, 14), t))

			if rng.chance(0.2) and t + 0.5 < beats:
				notes.append(moodmidi.moods.base.make_note(drums.CLOSED_HI_HAT, 0.08, 45 + rng.bounded_int(0, 9), t + 0.5))

			if beat % 2 == 1 and rng.chance(0.7):
				snare = drums.SIDE_STICK if rng.chance(0.6) else drums.ACOUSTIC_SNARE
				notes.append(moodmidi.moods.base.make_note(snare, 0.15, 50 + boost + rng.bounded_int(0, 19), t))

			# Brush swirl: a soft, longer snare stroke between beats.
			if rng.chance(0.1):
				swirl_time = t + rng.uniform(0.2, 0.4)

				if swirl_time < beats:
					notes.append(moodmidi.moods.base.make_note(drums.ACOUSTIC_SNARE, 0.3, 40 + rng.bounded_int(0, 9), swirl_time))

			if beat % 4 == 0 and rng.chance(accent_probability):
				block = drums.HI_WOOD_BLOCK if rng.chance(0.5) else drums.LOW_WOOD_BLOCK
				notes.append(moodmidi.moods.base.make_note(block, 0.1, 60 + intensity // 4 + rng.bounded_int(0, 9), t))

			t += 1.0

		return moodmidi.moods.base.layer("brushes", moodmidi.constants.gm_instruments.PERCUSSION, notes, tempo)


def _scale_step (scale_notes: typing.List[int], from_pitch: int, direction: int) -> int:

	"""
	Return the scale note one step above or below ``from_pitch``, or ``from_pitch`` at the edges.
	"""

	index = next((i for i, note in enumerate(scale_notes) if note >= from_pitch), 0)

	if direction > 0:
		return scale_notes[index + 1] if index + 1 < len(scale_notes) else from_pitch

	return scale_notes[index - 1] if index > 0 else from_pitch


def _flourish (key: moodmidi.keys.Key, chord_time: float, rng: moodmidi.randomness.RandomSource) -> typing.List[moodmidi.note.Note]:

	"""
	A quick two- to four-note scale run an octave up, just after a chord.
	"""

	root = key.root()
	scale = key.scale_intervals()
	start = chord_time + rng.uniform(0.5, 0.8)
	degree = rng.bounded_int(0, len(scale) - 1)
	direction = rng.pick([-1, 1])
	count = rng.bounded_int(2, 4)
	notes = []

	for i in range(count):
		interval = scale[(degree + direction * i) % len(scale)]
		pitch = max(60, min(84, root + interval + 12))
		notes.append(moodmidi.moods.base.make_note(pitch, 0.15, 35 + rng.bounded_int(0, 14), start + i * 0.1))

	return notes
