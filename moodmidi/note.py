"""Timed notes and the ``PITCH:DURATION:VELOCITY[@OFFSET]`` token format.

Examples of tokens:

- ``C4:1:80`` - Middle C, 1 beat, velocity 80, starting at beat 0
- ``F#3:0.5:100@2`` - F# below middle C, half a beat, velocity 100, starting at beat 2
- ``60:2:64`` - Bare MIDI numbers are accepted for the pitch
"""

import dataclasses
import math
import typing

import moodmidi.constants
import moodmidi.constants.velocity
import moodmidi.errors
import moodmidi.pitch


TOKEN_FORMAT = "PITCH:DURATION:VELOCITY[@OFFSET]"


@dataclasses.dataclass(frozen=True)
class Note:

	"""
	A single note with pitch, length and velocity, positioned in beats relative to its sequence.
	"""

	pitch: int
	duration: float
	velocity: int
	start_time: float = 0.0


	@property
	def end_time (self) -> float:

		"""
		Beat position at which the note is released.
		"""

		return self.start_time + self.duration


	def shifted (self, beats: float) -> "Note":

		"""
		Return a copy of this note moved later (or earlier) by a number of beats.
		"""

		return dataclasses.replace(self, start_time=self.start_time + beats)


def validate_note (note: Note) -> None:

	"""Check a note against its invariants.

	Raises:
		OutOfRange: Naming the first field that breaks its bounds - pitch and
			velocity must lie in 0-127, duration must be positive and finite, and
			the start time must be non-negative.
	"""

	if not moodmidi.constants.MIN_PITCH <= note.pitch <= moodmidi.constants.MAX_PITCH:
		raise moodmidi.errors.OutOfRange(f"Pitch out of range: {note.pitch}", field="pitch", value=note.pitch, expected="0-127")

	if not (math.isfinite(note.duration) and note.duration > 0):
		raise moodmidi.errors.OutOfRange(f"Duration must be positive: {note.duration}", field="duration", value=note.duration, expected="> 0 beats")

	if not moodmidi.constants.velocity.MIN_VELOCITY <= note.velocity <= moodmidi.constants.velocity.MAX_VELOCITY:
		raise moodmidi.errors.OutOfRange(f"Velocity out of range: {note.velocity}", field="velocity", value=note.velocity, expected="0-127")

	if not (math.isfinite(note.start_time) and note.start_time >= 0):
		raise moodmidi.errors.OutOfRange(f"Start time must be non-negative: {note.start_time}", field="start_time", value=note.start_time, expected=">= 0 beats")


def _parse_number (text: str, field: str, token: str, parse: typing.Callable[[str], typing.Any]) -> typing.Any:

	try:
		value = parse(text.strip())
	except ValueError:
		raise moodmidi.errors.InvalidNoteFormat(
			f"Non-numeric {field} in note token {token!r}",
			field = field,
			value = text,
			expected = TOKEN_FORMAT
		) from None

	if isinstance(value, float) and not math.isfinite(value):
		raise moodmidi.errors.InvalidNoteFormat(f"Non-finite {field} in note token {token!r}", field=field, value=text, expected=TOKEN_FORMAT)

	return value


def parse_note_token (text: str) -> Note:

	"""Parse a single ``PITCH:DURATION:VELOCITY[@OFFSET]`` token.

	The offset defaults to 0 when omitted. Surrounding whitespace is ignored.

	Raises:
		InvalidNoteFormat: Wrong number of fields, or a non-numeric duration,
			velocity or offset.
		InvalidPitch: The pitch field is not a valid name or MIDI number.
		OutOfRange: Duration <= 0, velocity outside 0-127, or negative offset.

	Example:
		```python
		parse_note_token("C4:0.5:80@1.5")  # → Note(pitch=60, duration=0.5, velocity=80, start_time=1.5)
		parse_note_token("Bb5:1:127")      # → Note(pitch=82, duration=1.0, velocity=127, start_time=0.0)
		```
	"""

	token = text.strip()

	main_part, separator, offset_part = token.partition("@")

	if separator and "@" in offset_part:
		raise moodmidi.errors.InvalidNoteFormat(f"Bad note token: {token!r}", field="token", value=token, expected=TOKEN_FORMAT)

	fields = main_part.split(":")

	if len(fields) != 3:
		raise moodmidi.errors.InvalidNoteFormat(f"Bad note token: {token!r}", field="token", value=token, expected=TOKEN_FORMAT)

	pitch_text, duration_text, velocity_text = fields

	pitch = moodmidi.pitch.parse_pitch(pitch_text)
	duration = float(_parse_number(duration_text, "duration", token, float))
	velocity = _parse_number(velocity_text, "velocity", token, int)
	start_time = float(_parse_number(offset_part, "offset", token, float)) if separator else 0.0

	if duration <= 0:
		raise moodmidi.errors.OutOfRange(f"Duration must be positive in {token!r}", field="duration", value=duration, expected="> 0 beats")

	if not moodmidi.constants.velocity.MIN_VELOCITY <= velocity <= moodmidi.constants.velocity.MAX_VELOCITY:
		raise moodmidi.errors.OutOfRange(f"Velocity out of range in {token!r}", field="velocity", value=velocity, expected="0-127")

	if start_time < 0:
		raise moodmidi.errors.OutOfRange(f"Offset must be non-negative in {token!r}", field="offset", value=start_time, expected=">= 0 beats")

	return Note(pitch=pitch, duration=duration, velocity=velocity, start_time=start_time)


def parse_note_tokens (text: str) -> typing.List[Note]:

	"""Parse a comma-separated list of note tokens.

	Example:
		```python
		notes = parse_note_tokens("C4:1:80, E4:0.5:100@1, G4:0.5:100@1.5")
		[n.pitch for n in notes]  # → [60, 64, 67]
		```
	"""

	return [parse_note_token(part) for part in text.split(",")]
