"""Shared contract and note helpers for the mood composers."""

import abc
import typing

import moodmidi.constants
import moodmidi.constants.velocity
import moodmidi.keys
import moodmidi.note
import moodmidi.randomness
import moodmidi.sequence


# Shortest note a composer will emit, in beats.
MIN_NOTE_DURATION = 0.01


def seconds_to_beats (duration_seconds: float, tempo: float) -> float:

	"""
	Convert a clip length in seconds to beats at a tempo.
	"""

	return duration_seconds * tempo / 60.0


def clamp_pitch (pitch: int) -> int:

	return max(moodmidi.constants.MIN_PITCH, min(moodmidi.constants.MAX_PITCH, pitch))


def clamp_velocity (velocity: int) -> int:

	return max(moodmidi.constants.velocity.MIN_AUDIBLE_VELOCITY, min(moodmidi.constants.velocity.MAX_VELOCITY, velocity))


def make_note (pitch: int, duration: float, velocity: int, start_time: float = 0.0, end_limit: typing.Optional[float] = None) -> moodmidi.note.Note:

	"""Build a note that always satisfies the note invariants.

	The start is clamped to zero, pitch and velocity to the MIDI range, and the
	duration to at least ``MIN_NOTE_DURATION``. When ``end_limit`` is given the
	note is shortened so that it releases no later than that beat.
	"""

	start = max(0.0, start_time)
	length = duration

	if end_limit is not None:
		length = min(length, end_limit - start)

	return moodmidi.note.Note(
		pitch = clamp_pitch(pitch),
		duration = max(MIN_NOTE_DURATION, length),
		velocity = clamp_velocity(velocity),
		start_time = start
	)


def layer (name: str, instrument: int, notes: typing.Iterable[moodmidi.note.Note], tempo: float) -> moodmidi.sequence.NoteSequence:

	"""
	Wrap a layer's notes in a sequence. Channels are assigned later by the dispatcher.
	"""

	return moodmidi.sequence.NoteSequence(notes=tuple(notes), instrument=instrument, tempo=tempo, name=name)


class MoodComposer (abc.ABC):

	"""Abstract base for mood composers.

	A composer is a fixed, ordered pipeline of layers. Every random draw is
	taken from ``ctx.rng`` in layer order, and optional layers are gated only
	on intensity, so identical inputs always give identical notes.
	"""

	name: str = ""
	description: str = ""

	@abc.abstractmethod
	def compose (
		self,
		duration_seconds: float,
		key: moodmidi.keys.Key,
		intensity: int,
		tempo: float,
		ctx: moodmidi.randomness.PresetContext
	) -> typing.List[moodmidi.sequence.NoteSequence]:

		"""Return one sequence per layer, in layer order."""

		...
