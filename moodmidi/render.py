"""Audio rendering through an external FluidSynth process.

This is a thin adapter: it locates the FluidSynth binary and a General MIDI
SoundFont, then runs FluidSynth once per file with a timeout. Failures are
raised as ``RenderError`` and never retried.
"""

import logging
import os
import shutil
import subprocess
import typing

import moodmidi.config


logger = logging.getLogger(__name__)


FLUIDSYNTH_PATHS: typing.List[str] = [
	"/opt/homebrew/bin/fluidsynth",
	"/usr/local/bin/fluidsynth",
	"/usr/bin/fluidsynth",
]

# Searched in order. Project-local SoundFonts win over system installs.
SOUNDFONT_PATHS: typing.List[str] = [
	"./soundfonts/FluidR3_GM.sf2",
	"./soundfonts/GeneralUser_GS.sf2",
	"./soundfonts/MuseScore_General.sf2",
	"./soundfonts/default.sf2",
	"/opt/homebrew/share/sounds/sf2/FluidR3_GM.sf2",
	"/opt/homebrew/share/soundfonts/default.sf2",
	"/usr/local/share/soundfonts/default.sf2",
	"/usr/share/sounds/sf2/FluidR3_GM.sf2",
	"/usr/share/soundfonts/FluidR3_GM.sf2",
	"/usr/share/soundfonts/default.sf2",
	"/usr/share/soundfonts/freepats-general-midi.sf2",
]


class RenderError (RuntimeError):

	"""
	Raised when audio cannot be rendered: missing tools, a failing process or a timeout.
	"""


def find_fluidsynth (configured: str = "fluidsynth") -> str:

	"""Return a runnable FluidSynth path.

	The configured name is looked up on ``PATH`` first, then the usual
	install locations are tried.
	"""

	found = shutil.which(configured)

	if found:
		return found

	for path in FLUIDSYNTH_PATHS:
		if os.path.exists(path):
			return path

	raise RenderError(
		"FluidSynth not found. Install with:\n"
		"  macOS: brew install fluid-synth\n"
		"  Ubuntu: apt install fluidsynth"
	)


def find_soundfont (configured: typing.Optional[str] = None) -> str:

	"""
	Return the configured SoundFont if it exists, otherwise the first one found in ``SOUNDFONT_PATHS``.
	"""

	if configured:
		path = os.path.expanduser(configured)

		if not os.path.exists(path):
			raise RenderError(f"SoundFont not found: {configured}")

		return path

	for path in SOUNDFONT_PATHS:
		if os.path.exists(path):
			return path

	raise RenderError(
		"No SoundFont found. Install FluidR3_GM or specify --soundfont.\n"
		"  macOS: brew install fluid-synth (includes SoundFont)\n"
		"  Ubuntu: apt install fluid-soundfont-gm"
	)


def build_command (fluidsynth: str, soundfont: str, midi_path: str, wav_path: str, render_config: moodmidi.config.RenderConfig) -> typing.List[str]:

	"""
	Build the FluidSynth argument list. ``-F`` has to come before the SoundFont and MIDI file.
	"""

	return [
		fluidsynth,
		"-ni",
		"-g", str(render_config.gain),
		"-r", str(render_config.sample_rate),
		"-F", wav_path,
		soundfont,
		midi_path,
	]


def render_wav (
	midi_path: typing.Union[str, os.PathLike],
	wav_path: typing.Union[str, os.PathLike],
	render_config: typing.Optional[moodmidi.config.RenderConfig] = None,
	soundfont: typing.Optional[str] = None
) -> None:

	"""Render a MIDI file to WAV.

	Parameters:
		midi_path: Existing MIDI file
		wav_path: Output path for the audio
		render_config: Renderer settings (default: ``RenderConfig()``)
		soundfont: Overrides ``render_config.soundfont`` when given

	Raises:
		RenderError: FluidSynth or a SoundFont is missing, the process exits
			with an error, or it runs past ``timeout_seconds``.
	"""

	if render_config is None:
		render_config = moodmidi.config.RenderConfig()

	if not os.path.exists(midi_path):
		raise RenderError(f"MIDI file not found: {midi_path}")

	fluidsynth = find_fluidsynth(render_config.fluidsynth)
	soundfont_path = find_soundfont(soundfont or render_config.soundfont)
	command = build_command(fluidsynth, soundfont_path, os.fspath(midi_path), os.fspath(wav_path), render_config)

	logger.debug(f"Running {' '.join(command)}")

	try:
		result = subprocess.run(command, capture_output=True, text=True, timeout=render_config.timeout_seconds)

	except subprocess.TimeoutExpired as exc:
		raise RenderError(f"FluidSynth timed out after {render_config.timeout_seconds} seconds") from exc

	except OSError as exc:
		raise RenderError(f"Could not run FluidSynth: {exc}") from exc

	if result.returncode != 0:
		raise RenderError(f"FluidSynth failed with status {result.returncode}: {result.stderr.strip()}")

	logger.info(f"Rendered {wav_path} using {os.path.basename(soundfont_path)}")
