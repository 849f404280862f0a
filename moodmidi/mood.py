"""Mood lookup and the single dispatch entry point for the mood composers.

Each mood lives in its own module under ``moodmidi.moods`` and exposes one
``MoodComposer`` subclass. Callers go through ``compose()``, which runs the
composer for a ``Mood`` and gives every layer its own MIDI channel.

Example:
	```python
	ctx = moodmidi.randomness.PresetContext.create(seed=42)
	key = moodmidi.keys.parse_key("Am")
	layers = moodmidi.mood.compose(Mood.SUSPENSE, 5.0, key, intensity=70, tempo=90, ctx=ctx)
	```
"""

import enum
import logging
import typing

import moodmidi.constants
import moodmidi.errors
import moodmidi.keys
import moodmidi.moods.ambient
import moodmidi.moods.base
import moodmidi.moods.calm
import moodmidi.moods.eerie
import moodmidi.moods.jazz
import moodmidi.moods.suspense
import moodmidi.moods.upbeat
import moodmidi.randomness
import moodmidi.sequence


logger = logging.getLogger(__name__)


class Mood (enum.Enum):

	"""
	The available moods. Values are the canonical names.
	"""

	SUSPENSE = "suspense"
	EERIE = "eerie"
	UPBEAT = "upbeat"
	CALM = "calm"
	AMBIENT = "ambient"
	JAZZ = "jazz"


	@property
	def default_key (self) -> moodmidi.keys.Key:

		return moodmidi.keys.parse_key(DEFAULT_KEYS[self])


	@property
	def description (self) -> str:

		return COMPOSERS[self].description


MOOD_ALIASES: typing.Dict[str, Mood] = {
	"suspense": Mood.SUSPENSE,
	"tense": Mood.SUSPENSE,
	"tension": Mood.SUSPENSE,
	"eerie": Mood.EERIE,
	"creepy": Mood.EERIE,
	"spooky": Mood.EERIE,
	"upbeat": Mood.UPBEAT,
	"happy": Mood.UPBEAT,
	"energetic": Mood.UPBEAT,
	"calm": Mood.CALM,
	"peaceful": Mood.CALM,
	"serene": Mood.CALM,
	"ambient": Mood.AMBIENT,
	"atmospheric": Mood.AMBIENT,
	"drone": Mood.AMBIENT,
	"jazz": Mood.JAZZ,
	"jazzy": Mood.JAZZ,
	"swing": Mood.JAZZ,
}

DEFAULT_KEYS: typing.Dict[Mood, str] = {
	Mood.SUSPENSE: "Am",
	Mood.EERIE: "Dm",
	Mood.UPBEAT: "C",
	Mood.CALM: "G",
	Mood.AMBIENT: "Em",
	Mood.JAZZ: "F",
}

COMPOSERS: typing.Dict[Mood, moodmidi.moods.base.MoodComposer] = {
	Mood.SUSPENSE: moodmidi.moods.suspense.SuspenseComposer(),
	Mood.EERIE: moodmidi.moods.eerie.EerieComposer(),
	Mood.UPBEAT: moodmidi.moods.upbeat.UpbeatComposer(),
	Mood.CALM: moodmidi.moods.calm.CalmComposer(),
	Mood.AMBIENT: moodmidi.moods.ambient.AmbientComposer(),
	Mood.JAZZ: moodmidi.moods.jazz.JazzComposer(),
}


def parse_mood (name: typing.Union[str, Mood]) -> Mood:

	"""Resolve a mood name or alias, case-insensitively.

	Raises:
		UnknownMood: The name matches no mood or alias.

	Example:
		```python
		parse_mood("Spooky")  # → Mood.EERIE
		```
	"""

	if isinstance(name, Mood):
		return name

	mood = MOOD_ALIASES.get(name.strip().lower())

	if mood is None:
		raise moodmidi.errors.UnknownMood(
			f"Unknown mood: {name!r}",
			field = "mood",
			value = name,
			expected = ", ".join(m.value for m in Mood)
		)

	return mood


def get_composer (mood: Mood) -> moodmidi.moods.base.MoodComposer:

	return COMPOSERS[mood]


def assign_channels (layers: typing.Sequence[moodmidi.sequence.NoteSequence]) -> typing.List[moodmidi.sequence.NoteSequence]:

	"""Give each layer its own channel.

	Melodic layers take channels 0, 1, 2 and so on, skipping the percussion
	channel. Percussion layers always go to channel 9.

	Raises:
		ValueError: More melodic layers than free channels.
	"""

	free = [c for c in range(moodmidi.constants.MIN_CHANNEL, moodmidi.constants.MAX_CHANNEL + 1) if c != moodmidi.constants.PERCUSSION_CHANNEL]
	assigned: typing.List[moodmidi.sequence.NoteSequence] = []

	for sequence in layers:

		if sequence.is_percussion:
			assigned.append(sequence.with_channel(moodmidi.constants.PERCUSSION_CHANNEL))
			continue

		if not free:
			raise ValueError(f"Too many melodic layers: {len(layers)}")

		assigned.append(sequence.with_channel(free.pop(0)))

	return assigned


def compose (
	mood: Mood,
	duration_seconds: float,
	key: moodmidi.keys.Key,
	intensity: int,
	tempo: float,
	ctx: moodmidi.randomness.PresetContext
) -> typing.List[moodmidi.sequence.NoteSequence]:

	"""Compose a mood and return its layers with channels assigned.

	Intensity is assumed to be validated by the caller. Layers that come out
	empty (possible only for clips shorter than a beat) are dropped.
	"""

	composer = get_composer(mood)
	beats = moodmidi.moods.base.seconds_to_beats(duration_seconds, tempo)

	logger.debug(f"Composing {mood.value} in {key.name}: {beats:.2f} beats at {tempo} BPM, intensity {intensity}")

	layers = composer.compose(duration_seconds, key, intensity, tempo, ctx)

	kept = []

	for sequence in layers:

		if not sequence.notes:
			logger.debug(f"Dropping empty layer {sequence.name!r}")
			continue

		kept.append(sequence)

	return assign_channels(kept)
