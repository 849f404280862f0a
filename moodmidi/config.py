"""Optional YAML configuration.

A ``moodmidi.yaml`` file can override preset defaults and the renderer
settings::

	preset:
	  tempo: 100
	  intensity: 60
	  duration: 8.0
	  seed: 7

	render:
	  fluidsynth: /usr/local/bin/fluidsynth
	  soundfont: ~/soundfonts/GeneralUser.sf2
	  sample_rate: 48000
	  gain: 0.8
	  timeout_seconds: 60

Any section or key may be omitted. A missing file is not an error.
"""

import dataclasses
import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "moodmidi.yaml"


@dataclasses.dataclass
class PresetDefaults:

	tempo: float = 90
	intensity: int = 50
	duration: float = 5.0
	seed: int = 1


@dataclasses.dataclass
class RenderConfig:

	"""
	Settings for the FluidSynth renderer. ``soundfont=None`` means search the usual install locations.
	"""

	fluidsynth: str = "fluidsynth"
	soundfont: typing.Optional[str] = None
	sample_rate: int = 44100
	gain: float = 1.0
	timeout_seconds: float = 120


@dataclasses.dataclass
class AppConfig:

	preset: PresetDefaults = dataclasses.field(default_factory=PresetDefaults)
	render: RenderConfig = dataclasses.field(default_factory=RenderConfig)


def _section (data: typing.Dict[str, typing.Any], name: str, cls: typing.Type[typing.Any]) -> typing.Any:

	section = data.get(name) or {}

	if not isinstance(section, dict):
		raise ValueError(f"Config section '{name}' must be a mapping")

	known = {field.name for field in dataclasses.fields(cls)}
	unknown = set(section) - known

	if unknown:
		logger.warning(f"Ignoring unknown {name} settings: {', '.join(sorted(unknown))}")

	return cls(**{k: v for k, v in section.items() if k in known})


def load_config (config_path: str = DEFAULT_CONFIG_PATH) -> AppConfig:

	"""
	Load configuration from a YAML file, falling back to defaults when the file does not exist.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return AppConfig()

	with open(config_path, 'r') as f:
		data = yaml.safe_load(f) or {}

	if not isinstance(data, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping")

	return AppConfig(
		preset = _section(data, "preset", PresetDefaults),
		render = _section(data, "render", RenderConfig)
	)
