import subprocess
import sys
import typing

import pytest

import moodmidi.constants
import moodmidi.constants.gm_instruments
import moodmidi.errors
import moodmidi.keys
import moodmidi.mood
import moodmidi.note
import moodmidi.randomness
import moodmidi.sequence


Mood = moodmidi.mood.Mood

ContextFactory = typing.Callable[[int], moodmidi.randomness.PresetContext]

# (mood, intensity gate) for the moods that have an intensity-gated layer.
GATED_MOODS = [
	(Mood.SUSPENSE, 60),
	(Mood.EERIE, 40),
	(Mood.UPBEAT, 50),
	(Mood.JAZZ, 40),
]


def _compose (make_ctx: ContextFactory, mood: Mood, key: str = "", intensity: int = 50, duration: float = 5.0, tempo: float = 90, seed: int = 42) -> typing.List[moodmidi.sequence.NoteSequence]:

	parsed = moodmidi.keys.parse_key(key) if key else mood.default_key

	return moodmidi.mood.compose(mood, duration, parsed, intensity, tempo, make_ctx(seed))


# ---------------------------------------------------------------------------
# Mood lookup
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("name, expected", [
	("suspense", Mood.SUSPENSE),
	("Tension", Mood.SUSPENSE),
	("SPOOKY", Mood.EERIE),
	("happy", Mood.UPBEAT),
	("serene", Mood.CALM),
	("drone", Mood.AMBIENT),
	("swing", Mood.JAZZ),
])
def test_parse_mood_aliases (name: str, expected: Mood) -> None:

	"""Canonical names and aliases resolve case-insensitively."""

	assert moodmidi.mood.parse_mood(name) is expected


@pytest.mark.parametrize("module", ["moodmidi", "moodmidi.moods", "moodmidi.moods.jazz", "moodmidi.mood", "moodmidi.__main__"])
def test_imports_in_a_fresh_interpreter (module: str) -> None:

	"""Each entry point imports cleanly on its own, whatever the import order."""

	completed = subprocess.run([sys.executable, "-c", f"import {module}"], capture_output=True, text=True)

	assert completed.returncode == 0, completed.stderr


def test_parse_mood_unknown () -> None:

	"""Unknown moods raise UnknownMood with the accepted names."""

	with pytest.raises(moodmidi.errors.UnknownMood) as exc_info:
		moodmidi.mood.parse_mood("grumpy")

	assert exc_info.value.field == "mood"
	assert "jazz" in exc_info.value.expected


def test_default_keys () -> None:

	"""Each mood has its own default key."""

	assert Mood.SUSPENSE.default_key.name == "Am"
	assert Mood.EERIE.default_key.name == "Dm"
	assert Mood.UPBEAT.default_key.name == "C"
	assert Mood.CALM.default_key.name == "G"
	assert Mood.AMBIENT.default_key.name == "Em"
	assert Mood.JAZZ.default_key.name == "F"


def test_every_mood_has_a_description () -> None:

	"""Descriptions come from the composers."""

	for mood in Mood:
		assert mood.description
		assert moodmidi.mood.get_composer(mood).name == mood.value


# ---------------------------------------------------------------------------
# Shared properties
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("mood", list(Mood))
def test_composition_is_deterministic (mood: Mood, make_ctx: ContextFactory) -> None:

	"""Identical inputs and seed give identical layers."""

	first = _compose(make_ctx, mood, intensity=70)
	second = _compose(make_ctx, mood, intensity=70)

	assert first == second


@pytest.mark.parametrize("mood", [Mood.SUSPENSE, Mood.EERIE, Mood.AMBIENT, Mood.JAZZ])
def test_seed_changes_output (mood: Mood, make_ctx: ContextFactory) -> None:

	"""Different seeds give different notes for moods with random layers."""

	assert _compose(make_ctx, mood, intensity=70, seed=1) != _compose(make_ctx, mood, intensity=70, seed=2)


@pytest.mark.parametrize("mood", list(Mood))
@pytest.mark.parametrize("key", ["C", "Am", "Bb", "Bm"])
@pytest.mark.parametrize("intensity", [0, 100])
@pytest.mark.parametrize("duration", [0.5, 5.0, 20.0])
def test_all_layers_are_valid (mood: Mood, key: str, intensity: int, duration: float, make_ctx: ContextFactory) -> None:

	"""Every generated layer passes validation, including very short and long clips."""

	layers = _compose(make_ctx, mood, key=key, intensity=intensity, duration=duration)

	assert layers
	moodmidi.sequence.validate_sequences(layers)


@pytest.mark.parametrize("mood, gate", GATED_MOODS)
def test_intensity_adds_layers (mood: Mood, gate: int, make_ctx: ContextFactory) -> None:

	"""At the gate the optional layer is absent; one above it, it appears."""

	below = _compose(make_ctx, mood, intensity=gate, duration=8.0)
	above = _compose(make_ctx, mood, intensity=gate + 1, duration=8.0)

	assert len(below) < len(above)


@pytest.mark.parametrize("mood", list(Mood))
def test_channels_are_unique (mood: Mood, make_ctx: ContextFactory) -> None:

	"""Melodic layers never share a channel or land on the percussion channel."""

	layers = _compose(make_ctx, mood, intensity=100)
	channels = [s.channel for s in layers]

	assert len(set(channels)) == len(channels)

	for sequence in layers:
		if sequence.is_percussion:
			assert sequence.channel == moodmidi.constants.PERCUSSION_CHANNEL
		else:
			assert sequence.channel != moodmidi.constants.PERCUSSION_CHANNEL


def test_assign_channels_skips_percussion_channel () -> None:

	"""Channels count up from 0, skipping 9, and drums always go to 9."""

	note = moodmidi.note.Note(pitch=60, duration=1.0, velocity=80)
	melodic = moodmidi.sequence.NoteSequence(notes=(note,))
	drums = moodmidi.sequence.NoteSequence(notes=(note,), instrument=moodmidi.constants.gm_instruments.PERCUSSION)

	layers = [melodic] * 9 + [drums] + [melodic]
	channels = [s.channel for s in moodmidi.mood.assign_channels(layers)]

	assert channels == [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10]


# ---------------------------------------------------------------------------
# Suspense
# ---------------------------------------------------------------------------

def test_suspense_layers (make_ctx: ContextFactory) -> None:

	"""Drone, tremolo and clusters use their registers, instruments and velocity ranges."""

	drone, tremolo, clusters = _compose(make_ctx, Mood.SUSPENSE, key="Am", intensity=100)
	beats = 5.0 * 90 / 60

	assert [drone.instrument, tremolo.instrument, clusters.instrument] == [42, 44, 0]

	assert sorted(n.pitch for n in drone.notes) == [45, 52]
	assert all(n.duration == beats for n in drone.notes)

	assert {n.pitch for n in tremolo.notes} == {81, 82}
	assert all(20 <= n.velocity <= 40 for n in tremolo.notes)
	assert len(tremolo.notes) == 60

	assert {n.pitch for n in clusters.notes} <= {69, 70, 75}
	assert len(clusters.notes) in (3, 6, 9)
	assert all(60 <= n.velocity <= 90 for n in clusters.notes)
	assert all(0.5 <= n.start_time <= beats - 0.5 for n in clusters.notes)


def test_suspense_short_clip_clusters (make_ctx: ContextFactory) -> None:

	"""Clips under a beat still place their clusters inside the clip."""

	layers = _compose(make_ctx, Mood.SUSPENSE, intensity=100, duration=0.4)
	beats = 0.4 * 90 / 60

	assert all(n.start_time < beats for n in layers[2].notes)


# ---------------------------------------------------------------------------
# Eerie
# ---------------------------------------------------------------------------

def test_eerie_layers (make_ctx: ContextFactory) -> None:

	"""Staggered diminished pad, diminished-scale bells and a narrow chromatic texture."""

	pad, bells, texture = _compose(make_ctx, Mood.EERIE, key="Dm", intensity=80)
	root = 62

	assert [n.pitch for n in pad.notes] == [root - 12, root + 3, root + 18]
	assert [n.velocity for n in pad.notes] == [30, 35, 40]
	assert [n.start_time for n in pad.notes] == [0.0, 0.9375, 1.875]

	assert 1 <= len(bells.notes) <= 3
	assert all((n.pitch - root) % 12 in (0, 2, 3, 5, 6, 8, 9, 11) for n in bells.notes)
	assert all(n.pitch >= root + 12 for n in bells.notes)
	assert all(30 <= n.velocity <= 50 for n in bells.notes)

	assert all(root - 6 <= n.pitch <= root + 6 for n in texture.notes)
	assert all(15 <= n.velocity <= 25 for n in texture.notes)
	assert texture.instrument == 99


# ---------------------------------------------------------------------------
# Upbeat
# ---------------------------------------------------------------------------

def test_upbeat_layers (make_ctx: ContextFactory) -> None:

	"""Triad riff, alternating bass and a late run."""

	riff, bass, run = _compose(make_ctx, Mood.UPBEAT, key="C", intensity=80, tempo=120, duration=4.0)
	beats = 8.0

	assert {n.pitch for n in riff.notes} == {60, 64, 67}
	assert sorted({n.start_time for n in riff.notes}) == [0.0, 0.5, 1.0, 1.5, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0, 5.5, 6.5, 7.0, 7.5]

	accents = [n.velocity for n in riff.notes if n.start_time % 4 in (0.0, 2.5)]
	assert all(80 <= v <= 90 for v in accents)

	assert [n.pitch for n in bass.notes] == [48, 55] * 4
	assert all(85 <= n.velocity <= 95 for n in bass.notes)

	assert 2 <= len(run.notes) <= 4
	assert run.notes[0].start_time == pytest.approx(beats * 0.6)
	assert all((n.pitch - 60) % 12 in (0, 2, 4, 5, 7, 9, 11) for n in run.notes)


# ---------------------------------------------------------------------------
# Calm
# ---------------------------------------------------------------------------

def test_calm_major_pad_and_arpeggio (make_ctx: ContextFactory) -> None:

	"""G major gets an open maj7 pad and an evenly spaced arpeggio."""

	pad, arpeggio = _compose(make_ctx, Mood.CALM, key="G", duration=6.0, tempo=60)

	assert sorted(n.pitch for n in pad.notes) == [55, 71, 74, 78]
	assert [n.start_time for n in arpeggio.notes] == [0.25, 1.25, 2.25, 3.25, 4.25, 5.25]
	assert [n.pitch for n in arpeggio.notes] == [79, 83, 86, 90, 79, 83]
	assert all(40 <= n.velocity <= 60 for n in arpeggio.notes)
	assert all(n.duration == 0.75 for n in arpeggio.notes)


def test_calm_minor_pad () -> None:

	"""Minor keys get m(add9) instead of maj7."""

	ctx = moodmidi.randomness.PresetContext.create(5)
	pad = moodmidi.mood.compose(Mood.CALM, 4.0, moodmidi.keys.parse_key("Am"), 50, 90, ctx)[0]

	assert sorted(n.pitch for n in pad.notes) == [57, 72, 76, 83]


# ---------------------------------------------------------------------------
# Ambient
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("intensity", [0, 30, 90])
def test_ambient_layers (intensity: int, make_ctx: ContextFactory) -> None:

	"""Drone re-struck every bar with drifting velocity, plus pentatonic tones."""

	drone, tones = _compose(make_ctx, Mood.AMBIENT, key="C", intensity=intensity, duration=10.0, tempo=96)

	# 16 beats = four bars of three drone voices.
	assert len(drone.notes) == 12
	assert {n.pitch for n in drone.notes} == {36, 48, 55}
	assert all(25 <= n.velocity <= 45 for n in drone.notes)

	assert len(tones.notes) == 3 + intensity // 30
	assert all((n.pitch - 60) % 12 in (0, 2, 4, 7, 9) for n in tones.notes)
	assert all(20 <= n.velocity <= 40 for n in tones.notes)
	assert all(1.5 <= n.duration <= 3.0 for n in tones.notes)


# ---------------------------------------------------------------------------
# Jazz
# ---------------------------------------------------------------------------

def test_jazz_trio (make_ctx: ContextFactory) -> None:

	"""Bass, comping and brushes share one varied tempo."""

	layers = _compose(make_ctx, Mood.JAZZ, key="F", intensity=80, duration=8.0, tempo=120)
	bass, comping, drums = layers

	assert bass.instrument == 32
	assert comping.instrument in (0, 1, 4)
	assert drums.is_percussion
	assert drums.channel == moodmidi.constants.PERCUSSION_CHANNEL

	tempos = {s.tempo for s in layers}
	assert len(tempos) == 1
	assert 101 <= tempos.pop() <= 138

	assert all(28 <= n.pitch <= 60 for n in bass.notes)
	assert all(48 <= n.pitch <= 84 for n in comping.notes)
	assert {n.pitch for n in drums.notes} <= {37, 38, 42, 44, 51, 53, 76, 77}


def test_jazz_without_drums_at_low_intensity (make_ctx: ContextFactory) -> None:

	"""Low intensity leaves the drums out."""

	layers = _compose(make_ctx, Mood.JAZZ, intensity=20, duration=8.0)

	assert not any(s.is_percussion for s in layers)
