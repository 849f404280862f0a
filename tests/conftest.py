import struct
import typing

import pytest

import moodmidi.constants.gm_instruments
import moodmidi.note
import moodmidi.randomness
import moodmidi.sequence


def _split_chunks (data: bytes) -> typing.List[typing.Tuple[bytes, int, bytes]]:

	"""Walk a Standard MIDI File and return ``(chunk_id, declared_length, body)`` for every chunk.

	Fails the test if a declared length runs past the end of the data.
	"""

	chunks = []
	position = 0

	while position < len(data):
		chunk_id = data[position:position + 4]
		(length,) = struct.unpack(">I", data[position + 4:position + 8])
		body = data[position + 8:position + 8 + length]

		assert len(body) == length, f"Chunk {chunk_id!r} declares {length} bytes but only {len(body)} remain"

		chunks.append((chunk_id, length, body))
		position += 8 + length

	return chunks


def _read_vlq (body: bytes, position: int) -> typing.Tuple[int, int]:

	"""Decode a variable-length quantity and return ``(value, next_position)``."""

	value = 0

	while True:
		byte = body[position]
		position += 1
		value = (value << 7) | (byte & 0x7F)

		if not byte & 0x80:
			return value, position


def _walk_track (body: bytes) -> typing.List[typing.Tuple[int, int, bytes]]:

	"""Decode an MTrk body into ``(delta, status, data)`` events, following running status.

	Fails the test if an event runs past the end of the body.
	"""

	events = []
	position = 0
	running = None

	while position < len(body):
		delta, position = _read_vlq(body, position)

		if body[position] & 0x80:
			status = body[position]
			position += 1
		else:
			assert running is not None, "Running status with no previous status byte"
			status = running

		# Meta events keep their type byte at the front of data.
		if status == 0xFF:
			meta_type = body[position]
			length, position = _read_vlq(body, position + 1)
			data = bytes([meta_type]) + body[position:position + length]
			position += length
		elif status in (0xF0, 0xF7):
			length, position = _read_vlq(body, position)
			data = body[position:position + length]
			position += length
		else:
			running = status
			size = 1 if (status & 0xF0) in (0xC0, 0xD0) else 2
			data = body[position:position + size]
			position += size

		assert position <= len(body), "Event runs past the end of the track"

		events.append((delta, status, data))

	return events


@pytest.fixture
def walk_track () -> typing.Callable[[bytes], typing.List[typing.Tuple[int, int, bytes]]]:

	return _walk_track


@pytest.fixture
def split_chunks () -> typing.Callable[[bytes], typing.List[typing.Tuple[bytes, int, bytes]]]:

	"""Raw chunk walker, independent of mido."""

	return _split_chunks


@pytest.fixture
def read_vlq () -> typing.Callable[[bytes, int], typing.Tuple[int, int]]:

	return _read_vlq


@pytest.fixture
def c_major_sequence () -> moodmidi.sequence.NoteSequence:

	"""A short C major arpeggio on piano at 120 BPM."""

	notes = (
		moodmidi.note.Note(pitch=60, duration=1.0, velocity=80, start_time=0.0),
		moodmidi.note.Note(pitch=64, duration=1.0, velocity=80, start_time=1.0),
		moodmidi.note.Note(pitch=67, duration=2.0, velocity=90, start_time=2.0),
	)

	return moodmidi.sequence.NoteSequence(notes=notes, instrument=moodmidi.constants.gm_instruments.ACOUSTIC_PIANO, tempo=120)


@pytest.fixture
def drum_sequence () -> moodmidi.sequence.NoteSequence:

	"""Four ride hits on the percussion marker."""

	notes = tuple(moodmidi.note.Note(pitch=51, duration=0.25, velocity=70, start_time=float(i)) for i in range(4))

	return moodmidi.sequence.NoteSequence(notes=notes, instrument=moodmidi.constants.gm_instruments.PERCUSSION, channel=3, tempo=120)


@pytest.fixture
def make_ctx () -> typing.Callable[[int], moodmidi.randomness.PresetContext]:

	"""Factory for seeded preset contexts."""

	def _make (seed: int = 42) -> moodmidi.randomness.PresetContext:
		return moodmidi.randomness.PresetContext.create(seed)

	return _make
