"""Note sequences bound to one instrument, channel and tempo.

A composition with several timbres is a list of ``NoteSequence`` objects, one
per instrument layer. The encoder writes each sequence to its own track.

This module also holds the validators that guard the encoder, the GM
instrument lookup, and the adapter for JSON note input.
"""

import dataclasses
import logging
import typing

import moodmidi.constants
import moodmidi.constants.gm_instruments
import moodmidi.errors
import moodmidi.note
import moodmidi.pitch


logger = logging.getLogger(__name__)


DEFAULT_TEMPO = 120
DEFAULT_INSTRUMENT = "piano"


@dataclasses.dataclass(frozen=True)
class NoteSequence:

	"""
	An ordered set of notes played by one instrument on one channel.

	Notes are stably sorted by start time on construction, so notes that start
	together keep the order they were given in.
	"""

	notes: typing.Tuple[moodmidi.note.Note, ...]
	instrument: int = moodmidi.constants.gm_instruments.ACOUSTIC_PIANO
	channel: int = 0
	tempo: float = DEFAULT_TEMPO
	name: typing.Optional[str] = None


	def __post_init__ (self) -> None:

		object.__setattr__(self, "notes", tuple(sorted(self.notes, key=lambda n: n.start_time)))


	@property
	def is_percussion (self) -> bool:

		"""
		True when the sequence is routed to the GM percussion channel.
		"""

		return self.instrument == moodmidi.constants.gm_instruments.PERCUSSION


	def duration_beats (self) -> float:

		"""
		Return the beat position at which the last note ends.
		"""

		return max((n.end_time for n in self.notes), default=0.0)


	def duration_seconds (self) -> float:

		"""
		Return the sequence length in seconds at its tempo.
		"""

		return self.duration_beats() * 60.0 / self.tempo


	def with_channel (self, channel: int) -> "NoteSequence":

		return dataclasses.replace(self, channel=channel)


def validate_sequence (sequence: NoteSequence) -> None:

	"""Check a sequence before it is handed to the encoder.

	Raises:
		EmptySequence: The sequence contains no notes.
		InvalidTempo: The tempo lies outside 20-300 BPM.
		OutOfRange: The channel lies outside 0-15 or the instrument is neither a
			GM program (0-127) nor the percussion marker.
		InvalidNote: A note breaks its invariants. ``index`` identifies the
			note and the underlying ``OutOfRange`` is chained.
	"""

	if not sequence.notes:
		raise moodmidi.errors.EmptySequence("Sequence contains no notes", field="notes", value=0, expected="at least one note")

	if not moodmidi.constants.MIN_TEMPO <= sequence.tempo <= moodmidi.constants.MAX_TEMPO:
		raise moodmidi.errors.InvalidTempo(
			f"Tempo out of range: {sequence.tempo}",
			field = "tempo",
			value = sequence.tempo,
			expected = f"{moodmidi.constants.MIN_TEMPO}-{moodmidi.constants.MAX_TEMPO} BPM"
		)

	if not moodmidi.constants.MIN_CHANNEL <= sequence.channel <= moodmidi.constants.MAX_CHANNEL:
		raise moodmidi.errors.OutOfRange(f"Channel out of range: {sequence.channel}", field="channel", value=sequence.channel, expected="0-15")

	if not (sequence.is_percussion or 0 <= sequence.instrument <= 127):
		raise moodmidi.errors.OutOfRange(f"Instrument out of range: {sequence.instrument}", field="instrument", value=sequence.instrument, expected="GM program 0-127 or percussion")

	for index, note in enumerate(sequence.notes):

		try:
			moodmidi.note.validate_note(note)

		except moodmidi.errors.OutOfRange as exc:
			raise moodmidi.errors.InvalidNote(
				f"Invalid note at position {index}: {exc}",
				index = index,
				field = exc.field,
				value = exc.value,
				expected = exc.expected
			) from exc


def validate_sequences (sequences: typing.Sequence[NoteSequence]) -> None:

	"""Validate a complete set of sequences.

	Raises:
		EmptyTrackSet: No sequences were supplied.
	"""

	if not sequences:
		raise moodmidi.errors.EmptyTrackSet("No sequences to encode", field="sequences", value=0, expected="at least one sequence")

	for sequence in sequences:
		validate_sequence(sequence)


def resolve_instrument (name: typing.Union[str, int]) -> typing.Optional[int]:

	"""Resolve an instrument name or program number.

	Names are looked up case-insensitively in ``GM_INSTRUMENT_MAP``; numeric
	strings 0-127 are accepted directly.

	Returns:
		The program number (or the percussion marker), or ``None`` if unknown.

	Example:
		```python
		resolve_instrument("Violin")  # → 40
		resolve_instrument("127")     # → 127
		resolve_instrument("kazoo")   # → None
		```
	"""

	if isinstance(name, int) and not isinstance(name, bool):
		return name if 0 <= name <= 127 else None

	key = str(name).strip().lower()

	if key.isdecimal() and key.isascii():
		number = int(key)
		return number if number <= 127 else None

	return moodmidi.constants.gm_instruments.GM_INSTRUMENT_MAP.get(key)


def instrument_name (program: int) -> str:

	"""
	Return the first friendly name registered for a program number, or ``"unknown"``.
	"""

	for name, number in moodmidi.constants.gm_instruments.GM_INSTRUMENT_MAP.items():
		if number == program:
			return name

	return "unknown"


def _bad_json (message: str, field: str, value: typing.Any) -> moodmidi.errors.InvalidNoteFormat:

	return moodmidi.errors.InvalidNoteFormat(message, field=field, value=value, expected="JSON object with tempo, instrument, channel and notes")


def _notes_from_json (items: typing.Any) -> typing.List[moodmidi.note.Note]:

	if not isinstance(items, list):
		raise _bad_json("'notes' must be a list", "notes", items)

	notes: typing.List[moodmidi.note.Note] = []

	for item in items:

		if not isinstance(item, dict):
			raise _bad_json("Each note must be an object", "notes", item)

		try:
			duration = float(item["duration"])
			velocity = int(item["velocity"])
			offset = float(item.get("offset", 0.0))
			pitch_value = item["pitch"]
		except KeyError as exc:
			raise _bad_json(f"Note is missing field {exc.args[0]!r}", str(exc.args[0]), item) from None
		except (TypeError, ValueError):
			raise _bad_json("Note fields must be numeric", "notes", item) from None

		notes.append(moodmidi.note.Note(
			pitch = moodmidi.pitch.parse_pitch(pitch_value),
			duration = duration,
			velocity = velocity,
			start_time = offset
		))

	return notes


def instrument_or_piano (value: typing.Any) -> int:

	"""
	Resolve an instrument, falling back to piano (with a warning) when it is unknown.
	"""

	program = resolve_instrument(value)

	if program is None:
		logger.warning(f"Unknown instrument {value!r} - falling back to piano")
		return moodmidi.constants.gm_instruments.ACOUSTIC_PIANO

	return program


def sequences_from_dict (data: typing.Dict[str, typing.Any]) -> typing.List[NoteSequence]:

	"""Build sequences from a decoded JSON note document.

	The document looks like::

		{
			"tempo": 100,
			"instrument": "strings",
			"channel": 0,
			"notes": [{"pitch": "C4", "duration": 1.0, "velocity": 80, "offset": 0.0}]
		}

	A ``"tracks"`` list of ``{"instrument", "channel", "notes"}`` objects takes
	precedence over top-level notes and yields one sequence per track. Missing
	``tempo`` defaults to 120, ``instrument`` to ``"piano"`` and ``channel``
	to 0. Unknown instrument names fall back to piano with a warning.

	The returned sequences are not validated; pass them through
	``validate_sequences`` before encoding.

	Raises:
		InvalidNoteFormat: The document structure is malformed.
		InvalidPitch: A pitch field cannot be parsed.
	"""

	if not isinstance(data, dict):
		raise _bad_json("Note document must be an object", "document", data)

	try:
		tempo = float(data.get("tempo", DEFAULT_TEMPO))
		channel = int(data.get("channel", 0))
	except (TypeError, ValueError):
		raise _bad_json("'tempo' and 'channel' must be numeric", "tempo", data.get("tempo")) from None

	tracks = data.get("tracks") or []

	if not isinstance(tracks, list):
		raise _bad_json("'tracks' must be a list", "tracks", tracks)

	sequences: typing.List[NoteSequence] = []

	if tracks:

		for track in tracks:

			if not isinstance(track, dict):
				raise _bad_json("Each track must be an object", "tracks", track)

			try:
				track_channel = int(track.get("channel", 0))
			except (TypeError, ValueError):
				raise _bad_json("'channel' must be numeric", "channel", track.get("channel")) from None

			sequences.append(NoteSequence(
				notes = tuple(_notes_from_json(track.get("notes", []))),
				instrument = instrument_or_piano(track.get("instrument", DEFAULT_INSTRUMENT)),
				channel = track_channel,
				tempo = tempo
			))

	elif data.get("notes"):

		sequences.append(NoteSequence(
			notes = tuple(_notes_from_json(data["notes"])),
			instrument = instrument_or_piano(data.get("instrument", DEFAULT_INSTRUMENT)),
			channel = channel,
			tempo = tempo
		))

	logger.debug(f"Parsed {len(sequences)} sequence(s) from note document")

	return sequences
