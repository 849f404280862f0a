"""Error types raised by the generation and encoding engine.

Every error is a ``ValueError`` subclass carrying the offending ``field``, the
offending ``value`` and a description of what was ``expected``, so callers can
build their own messages without parsing the exception text.

Hierarchy:

- ``MoodMidiError``
	- ``InvalidPitch``
	- ``InvalidNoteFormat``
	- ``OutOfRange``
		- ``InvalidTempo``
		- ``InvalidIntensity``
	- ``EmptySequence``
	- ``InvalidNote``
	- ``UnknownMood``
	- ``InvalidKey``
	- ``EncodingOverflow``
	- ``EmptyTrackSet``
"""

import typing


class MoodMidiError (ValueError):

	"""
	Base class for all engine errors.
	"""

	def __init__ (self, message: str, field: typing.Optional[str] = None, value: typing.Any = None, expected: typing.Optional[str] = None) -> None:

		super().__init__(message)

		self.field = field
		self.value = value
		self.expected = expected


class InvalidPitch (MoodMidiError):
	pass


class InvalidNoteFormat (MoodMidiError):
	pass


class OutOfRange (MoodMidiError):
	pass


class InvalidTempo (OutOfRange):
	pass


class InvalidIntensity (OutOfRange):
	pass


class EmptySequence (MoodMidiError):
	pass


class InvalidNote (MoodMidiError):

	"""
	A note inside a sequence broke its invariants.

	``index`` is the note's position within the sequence; the underlying
	``OutOfRange`` is chained as ``__cause__``.
	"""

	def __init__ (self, message: str, index: int, field: typing.Optional[str] = None, value: typing.Any = None, expected: typing.Optional[str] = None) -> None:

		super().__init__(message, field=field, value=value, expected=expected)

		self.index = index


class UnknownMood (MoodMidiError):
	pass


class InvalidKey (MoodMidiError):
	pass


class EncodingOverflow (MoodMidiError):
	pass


class EmptyTrackSet (MoodMidiError):
	pass
