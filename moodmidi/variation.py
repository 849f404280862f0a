"""Seed-driven variation parameters for the jazz trio.

A ``PresetVariation`` is drawn from the run's random stream before any notes
are written. It fixes the choices that make two seeds sound like different
performances (tempo push or drag, bass and comping style, keys timbre and a
phrase contour) while every layer still shares one time base.
"""

import dataclasses
import typing

import moodmidi.constants.gm_instruments
import moodmidi.constants.velocity
import moodmidi.randomness


MIN_EFFECTIVE_TEMPO = 40
MAX_EFFECTIVE_TEMPO = 200

BASS_WALKING = "walking"
BASS_TWO_FEEL = "two_feel"
BASS_SYNCOPATED = "syncopated"

COMP_SPARSE = "sparse"
COMP_MEDIUM = "medium"
COMP_DENSE = "dense"

# Repeated entries weight the draw.
BASS_STYLES: typing.List[str] = [BASS_WALKING, BASS_WALKING, BASS_TWO_FEEL, BASS_SYNCOPATED]
COMP_STYLES: typing.List[str] = [COMP_SPARSE, COMP_MEDIUM, COMP_MEDIUM, COMP_DENSE]

KEYS_INSTRUMENTS: typing.List[int] = [
	moodmidi.constants.gm_instruments.ACOUSTIC_PIANO,
	moodmidi.constants.gm_instruments.ACOUSTIC_PIANO,
	moodmidi.constants.gm_instruments.ACOUSTIC_PIANO,
	moodmidi.constants.gm_instruments.BRIGHT_PIANO,
	moodmidi.constants.gm_instruments.ELECTRIC_PIANO,
]


@dataclasses.dataclass(frozen=True)
class PresetVariation:

	"""
	Performance choices drawn once per run.

	Attributes:
		tempo_factor: Multiplier applied to the requested tempo (0.85 - 1.15).
		bass_style: One of ``walking``, ``two_feel`` or ``syncopated``.
		comp_style: One of ``sparse``, ``medium`` or ``dense``.
		keys_instrument: GM program for the comping layer.
		velocity_offset: Added to base velocities (-15 to +15).
		rest_probability: Chance that a bass or comping slot is left empty.
		contour: Phrase directions (-1 down, 0 hold, 1 up) cycled by the bass and comping layers.
		voicing_offset: Index of the first comping voicing.
	"""

	tempo_factor: float
	bass_style: str
	comp_style: str
	keys_instrument: int
	velocity_offset: int
	rest_probability: float
	contour: typing.Tuple[int, ...]
	voicing_offset: int


	@classmethod
	def draw (cls, rng: moodmidi.randomness.RandomSource) -> "PresetVariation":

		"""
		Draw a full set of variation parameters, in a fixed order, from ``rng``.
		"""

		tempo_factor = 1.0 + rng.bounded_int(-15, 15) / 100.0
		bass_style = rng.pick(BASS_STYLES)
		comp_style = rng.pick(COMP_STYLES)
		keys_instrument = rng.pick(KEYS_INSTRUMENTS)
		velocity_offset = rng.bounded_int(-15, 15)
		rest_probability = rng.uniform(0.05, 0.25)
		phrase_length = rng.bounded_int(4, 8)
		contour = tuple(rng.pick([-1, 0, 1]) for _ in range(phrase_length))
		voicing_offset = rng.bounded_int(0, 5)

		return cls(
			tempo_factor = tempo_factor,
			bass_style = bass_style,
			comp_style = comp_style,
			keys_instrument = keys_instrument,
			velocity_offset = velocity_offset,
			rest_probability = rest_probability,
			contour = contour,
			voicing_offset = voicing_offset
		)


	def effective_tempo (self, base_tempo: float) -> int:

		"""
		Return the varied tempo, clamped to 40-200 BPM.
		"""

		return max(MIN_EFFECTIVE_TEMPO, min(MAX_EFFECTIVE_TEMPO, int(base_tempo * self.tempo_factor)))


	def adjust_velocity (self, velocity: int) -> int:

		return max(
			moodmidi.constants.velocity.MIN_AUDIBLE_VELOCITY,
			min(moodmidi.constants.velocity.MAX_VELOCITY, velocity + self.velocity_offset)
		)


	def direction (self, position: int) -> int:

		"""
		Return the contour direction for a phrase position.
		"""

		return self.contour[position % len(self.contour)]


	def should_rest (self, rng: moodmidi.randomness.RandomSource) -> bool:

		return rng.chance(self.rest_probability)
