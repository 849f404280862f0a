"""Musical keys used by the mood composers.

A ``Key`` is a root pitch class plus a mode (``"major"`` or ``"minor"``). It
supplies every layer with the same root, third, fifth and seventh so that all
layers of a preset agree harmonically.

Supported keys: C, Cm, D, Dm, Eb, Ebm, E, Em, F, Fm, G, Gm, A, Am, Bb, Bbm,
B, Bm. ``D#`` and ``A#`` (and their minors) are accepted as aliases for
``Eb`` and ``Bb``. Parsing is case-insensitive.
"""

import dataclasses
import typing

import moodmidi.errors
import moodmidi.intervals


MAJOR = "major"
MINOR = "minor"

DEFAULT_OCTAVE = 4

# Root pitch classes for the supported key names.
KEY_ROOTS: typing.Dict[str, int] = {
	"C": 0,
	"D": 2,
	"Eb": 3,
	"E": 4,
	"F": 5,
	"G": 7,
	"A": 9,
	"Bb": 10,
	"B": 11,
}

KEY_ALIASES: typing.Dict[str, str] = {
	"D#": "Eb",
	"A#": "Bb",
}


@dataclasses.dataclass(frozen=True)
class Key:

	"""
	A musical key: root pitch class and mode.
	"""

	name: str
	root_pc: int
	mode: str = MAJOR


	@property
	def is_minor (self) -> bool:

		return self.mode == MINOR


	@property
	def third (self) -> int:

		"""
		Semitones from the root to the key's third.
		"""

		return 3 if self.is_minor else 4


	@property
	def fifth (self) -> int:

		return 7


	@property
	def seventh (self) -> int:

		"""
		Semitones from the root to the diatonic seventh (minor 7th in minor keys, major 7th in major keys).
		"""

		return 10 if self.is_minor else 11


	def root (self, octave: int = DEFAULT_OCTAVE) -> int:

		"""Return the MIDI note number of the root in a given octave.

		Example:
			```python
			parse_key("Am").root()   # → 69
			parse_key("C").root(2)   # → 36
			```
		"""

		return (octave + 1) * 12 + self.root_pc


	def scale_intervals (self) -> typing.List[int]:

		"""
		Return the natural minor or major scale intervals for this key.
		"""

		return moodmidi.intervals.get_intervals("natural_minor" if self.is_minor else "major_ionian")


	def pentatonic_intervals (self) -> typing.List[int]:

		return moodmidi.intervals.get_intervals("minor_pentatonic" if self.is_minor else "major_pentatonic")


	def chord_tones (self, octave: int = DEFAULT_OCTAVE) -> typing.List[int]:

		"""
		Return the root, third and fifth as MIDI note numbers.
		"""

		root = self.root(octave)

		return [root, root + self.third, root + self.fifth]


	def seventh_chord (self, octave: int = DEFAULT_OCTAVE) -> typing.List[int]:

		"""
		Return root, third, fifth and seventh as MIDI note numbers.
		"""

		return self.chord_tones(octave) + [self.root(octave) + self.seventh]


def parse_key (text: str) -> Key:

	"""Parse a key name such as ``"Am"``, ``"C"``, ``"bb"`` or ``"D#m"``.

	Raises:
		InvalidKey: The name is not one of the supported keys or aliases.
	"""

	stripped = text.strip()
	is_minor = len(stripped) > 1 and stripped[-1] in ("m", "M")
	tonic = stripped[:-1] if is_minor else stripped

	# Normalise case: first letter upper, accidental lower ("BB" → "Bb", "d#" → "D#").
	tonic = tonic[:1].upper() + tonic[1:].lower()
	tonic = KEY_ALIASES.get(tonic, tonic)

	if tonic not in KEY_ROOTS:
		raise moodmidi.errors.InvalidKey(
			f"Unknown key: {text!r}",
			field = "key",
			value = text,
			expected = ", ".join(available_keys())
		)

	mode = MINOR if is_minor else MAJOR
	name = f"{tonic}m" if is_minor else tonic

	return Key(name=name, root_pc=KEY_ROOTS[tonic], mode=mode)


def available_keys () -> typing.List[str]:

	"""
	Return the canonical names of all supported keys.
	"""

	names: typing.List[str] = []

	for tonic in KEY_ROOTS:
		names.append(tonic)
		names.append(f"{tonic}m")

	return names
