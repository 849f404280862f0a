"""Mood preset pipeline: request in, encoded MIDI and a layer summary out.

``generate_preset`` validates the request, resolves mood, key and seed,
composes every layer, validates the complete set and encodes it. Nothing
touches the filesystem until ``PresetResult.write`` is called.

Example:
	```python
	result = generate_preset(PresetRequest(mood="suspense", duration_seconds=5.0, intensity=70, seed=42))
	result.write("intro.mid")
	```
"""

import dataclasses
import logging
import math
import os
import typing

import moodmidi.constants
import moodmidi.errors
import moodmidi.keys
import moodmidi.midi_writer
import moodmidi.mood
import moodmidi.randomness
import moodmidi.sequence


logger = logging.getLogger(__name__)


DEFAULT_INTENSITY = 50
DEFAULT_TEMPO = 90


@dataclasses.dataclass
class PresetRequest:

	"""
	Parameters for one preset run. ``key=None`` uses the mood's default key and ``seed=None`` a time-derived seed.
	"""

	mood: typing.Union[str, moodmidi.mood.Mood]
	duration_seconds: float
	key: typing.Optional[str] = None
	intensity: int = DEFAULT_INTENSITY
	tempo: float = DEFAULT_TEMPO
	seed: typing.Optional[int] = None


@dataclasses.dataclass(frozen=True)
class LayerSummary:

	name: typing.Optional[str]
	instrument: int
	instrument_name: str
	channel: int
	note_count: int


@dataclasses.dataclass(frozen=True)
class PresetResult:

	"""
	The outcome of a preset run. ``seed`` is the resolved seed, so passing it back reproduces ``midi_bytes`` exactly.
	"""

	seed: int
	mood: moodmidi.mood.Mood
	key: moodmidi.keys.Key
	tempo: float
	sequences: typing.Tuple[moodmidi.sequence.NoteSequence, ...]
	midi_bytes: bytes
	layers: typing.Tuple[LayerSummary, ...]


	def write (self, path: typing.Union[str, os.PathLike]) -> int:

		"""
		Write the encoded file in one call and return the number of bytes written.
		"""

		with open(path, "wb") as f:
			f.write(self.midi_bytes)

		return len(self.midi_bytes)


def validate_request (request: PresetRequest) -> None:

	"""Check the numeric parts of a request.

	Raises:
		InvalidIntensity: Intensity outside 0-100.
		InvalidTempo: Tempo outside 20-300 BPM.
		OutOfRange: Duration not a positive, finite number of seconds.
	"""

	if not moodmidi.constants.MIN_INTENSITY <= request.intensity <= moodmidi.constants.MAX_INTENSITY:
		raise moodmidi.errors.InvalidIntensity(
			f"Intensity out of range: {request.intensity}",
			field = "intensity",
			value = request.intensity,
			expected = f"{moodmidi.constants.MIN_INTENSITY}-{moodmidi.constants.MAX_INTENSITY}"
		)

	if not moodmidi.constants.MIN_TEMPO <= request.tempo <= moodmidi.constants.MAX_TEMPO:
		raise moodmidi.errors.InvalidTempo(
			f"Tempo out of range: {request.tempo}",
			field = "tempo",
			value = request.tempo,
			expected = f"{moodmidi.constants.MIN_TEMPO}-{moodmidi.constants.MAX_TEMPO} BPM"
		)

	if not (math.isfinite(request.duration_seconds) and request.duration_seconds > 0):
		raise moodmidi.errors.OutOfRange(
			f"Duration must be positive: {request.duration_seconds}",
			field = "duration_seconds",
			value = request.duration_seconds,
			expected = "> 0 seconds"
		)


def summarise (sequences: typing.Sequence[moodmidi.sequence.NoteSequence]) -> typing.Tuple[LayerSummary, ...]:

	return tuple(
		LayerSummary(
			name = sequence.name,
			instrument = sequence.instrument,
			instrument_name = moodmidi.sequence.instrument_name(sequence.instrument),
			channel = sequence.channel,
			note_count = len(sequence.notes)
		)
		for sequence in sequences
	)


def generate_preset (request: PresetRequest) -> PresetResult:

	"""Compose and encode a mood preset.

	Raises:
		UnknownMood, InvalidKey, InvalidIntensity, InvalidTempo, OutOfRange:
			Propagated unchanged from request validation.
	"""

	validate_request(request)

	mood = moodmidi.mood.parse_mood(request.mood)
	key = moodmidi.keys.parse_key(request.key) if request.key else mood.default_key
	ctx = moodmidi.randomness.PresetContext.create(request.seed)

	sequences = moodmidi.mood.compose(mood, request.duration_seconds, key, request.intensity, request.tempo, ctx)

	moodmidi.sequence.validate_sequences(sequences)

	midi_bytes = moodmidi.midi_writer.encode(sequences)

	logger.info(f"Generated {mood.value} preset in {key.name} with seed {ctx.seed} ({len(sequences)} layers, {len(midi_bytes)} bytes)")

	return PresetResult(
		seed = ctx.seed,
		mood = mood,
		key = key,
		tempo = sequences[0].tempo,
		sequences = tuple(sequences),
		midi_bytes = midi_bytes,
		layers = summarise(sequences)
	)
