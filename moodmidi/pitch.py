"""Pitch names and beat/tick arithmetic.

Pitches are MIDI note numbers (0-127) with **C4 = 60** (Middle C), matching the
MIDI Manufacturers Association convention and most DAWs.

Module-level constants:
- `LETTER_TO_SEMITONE`: Maps natural note letters to their offset within an octave
- `PC_TO_NOTE_NAME`: Maps pitch classes to sharp-spelled note names

Module-level helpers:
- `parse_pitch(text)`: Parse ``"C4"``, ``"F#3"``, ``"Bb5"`` or ``"60"`` to a MIDI number.
- `pitch_name(pitch)`: Render a MIDI number back to a name (``60`` → ``"C4"``).
- `beats_to_ticks(beats)`: Convert beats to file ticks, rounding to the nearest tick.
"""

import typing

import moodmidi.constants
import moodmidi.errors


LETTER_TO_SEMITONE: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"B": 11,
}

ACCIDENTAL_TO_OFFSET: typing.Dict[str, int] = {
	"#": 1,
	"b": -1,
}

PC_TO_NOTE_NAME: typing.List[str] = [
	"C",
	"C#",
	"D",
	"D#",
	"E",
	"F",
	"F#",
	"G",
	"G#",
	"A",
	"A#",
	"B",
]

_EXPECTED_PITCH = "MIDI number 0-127 or note name A-G with optional #/b and octave 0-10"


def _invalid (text: typing.Any) -> moodmidi.errors.InvalidPitch:

	return moodmidi.errors.InvalidPitch(
		f"Invalid pitch: {text!r}",
		field = "pitch",
		value = text,
		expected = _EXPECTED_PITCH
	)


def parse_pitch (text: typing.Union[str, int]) -> int:

	"""Parse a pitch name or bare MIDI number.

	Parameters:
		text: Either a MIDI integer (``60`` or ``"60"``) or a note name made of a
			letter A-G (any case), an optional ``#`` or ``b`` and an octave 0-10.

	Returns:
		MIDI note number computed as ``(octave + 1) * 12 + semitone``.

	Raises:
		InvalidPitch: If the letter, accidental or octave is malformed, or the
			result falls outside 0-127.

	Example:
		```python
		parse_pitch("C4")   # → 60
		parse_pitch("A4")   # → 69
		parse_pitch("Bb5")  # → 82
		parse_pitch("F#3")  # → 54
		```
	"""

	# bool is an int subclass; floats, None and containers are not pitches.
	if isinstance(text, bool) or not isinstance(text, (int, str)):
		raise _invalid(text)

	if isinstance(text, int):
		if not moodmidi.constants.MIN_PITCH <= text <= moodmidi.constants.MAX_PITCH:
			raise _invalid(str(text))
		return text

	stripped = text.strip()

	if not stripped:
		raise _invalid(text)

	if stripped.isdecimal() and stripped.isascii():
		value = int(stripped)
		if value > moodmidi.constants.MAX_PITCH:
			raise _invalid(text)
		return value

	letter = stripped[0].upper()

	if letter not in LETTER_TO_SEMITONE:
		raise _invalid(text)

	rest = stripped[1:]
	accidental = 0

	if rest[:1] in ACCIDENTAL_TO_OFFSET:
		accidental = ACCIDENTAL_TO_OFFSET[rest[:1]]
		rest = rest[1:]

	# Signs and non-ASCII digits are rejected here, so "C-1" never reaches the range check.
	if not (rest.isdecimal() and rest.isascii()):
		raise _invalid(text)

	octave = int(rest)

	if not moodmidi.constants.MIN_OCTAVE <= octave <= moodmidi.constants.MAX_OCTAVE:
		raise _invalid(text)

	pitch = (octave + 1) * 12 + LETTER_TO_SEMITONE[letter] + accidental

	if not moodmidi.constants.MIN_PITCH <= pitch <= moodmidi.constants.MAX_PITCH:
		raise _invalid(text)

	return pitch


def pitch_name (pitch: int) -> str:

	"""Return the sharp-spelled name of a MIDI note number.

	Example:
		```python
		pitch_name(60)  # → "C4"
		pitch_name(70)  # → "A#4"
		```
	"""

	if not moodmidi.constants.MIN_PITCH <= pitch <= moodmidi.constants.MAX_PITCH:
		raise ValueError(f"Pitch must be 0-127, got {pitch}")

	octave = pitch // 12 - 1

	return f"{PC_TO_NOTE_NAME[pitch % 12]}{octave}"


def beats_to_ticks (beats: float, ticks_per_beat: int = moodmidi.constants.TICKS_PER_BEAT) -> int:

	"""Convert a beat position or length to file ticks.

	Rounds to the nearest tick so that very short notes at coarse resolutions are
	not silently truncated to zero length.

	Example:
		```python
		beats_to_ticks(1.0)    # → 480
		beats_to_ticks(0.25)   # → 120
		beats_to_ticks(1 / 3)  # → 160
		```
	"""

	if ticks_per_beat <= 0:
		raise ValueError("Ticks per beat must be positive")

	return int(round(beats * ticks_per_beat))
