"""Seeded randomness for reproducible composition.

Every random decision a composer makes is drawn from one ``RandomSource``
owned by the ``PresetContext`` of that run. Identical seeds and inputs
therefore yield identical notes. Nothing here touches the module-level
``random`` functions.
"""

import dataclasses
import logging
import random
import time
import typing


logger = logging.getLogger(__name__)


T = typing.TypeVar("T")


class RandomSource:

	"""A deterministic stream of random values.

	Wraps a single ``random.Random`` instance. Every method advances the
	stream, so the order in which a composer asks for values is part of its
	output.

	Example:
		```python
		rng = RandomSource(42)
		rng.bounded_int(60, 90)    # same value every run
		rng.pick(["ride", "bell"])
		```
	"""

	def __init__ (self, seed: int) -> None:

		self.seed = seed
		self._random = random.Random(seed)


	def uniform (self, low: float, high: float) -> float:

		"""
		Return a float in ``[low, high]``.
		"""

		if low > high:
			raise ValueError(f"low ({low}) must be <= high ({high})")

		return self._random.uniform(low, high)


	def bounded_int (self, low: int, high: int) -> int:

		"""
		Return an integer in ``[low, high]`` inclusive.
		"""

		if low > high:
			raise ValueError(f"low ({low}) must be <= high ({high})")

		return self._random.randint(low, high)


	def chance (self, probability: float) -> bool:

		"""
		Return True with the given probability (0.0 - 1.0).
		"""

		return self._random.random() < probability


	def pick (self, items: typing.Sequence[T]) -> T:

		"""
		Return one element of a non-empty sequence.
		"""

		if not items:
			raise ValueError("Cannot pick from an empty sequence")

		return items[self._random.randrange(len(items))]


	def random_walk (self, n: int, low: int, high: int, step: int, start: typing.Optional[int] = None) -> typing.List[int]:

		"""Generate values that drift by small steps within a range.

		Each value moves up or down by at most ``step`` from the previous,
		clamped to ``[low, high]``.

		Parameters:
			n: Number of values to generate
			low: Minimum value (inclusive)
			high: Maximum value (inclusive)
			step: Maximum change per step
			start: Starting value (default: midpoint of range)

		Example:
			```python
			# Drifting velocity for eight drone segments
			rng.random_walk(8, low=25, high=45, step=4)
			```
		"""

		if n <= 0:
			return []

		if low > high:
			raise ValueError(f"low ({low}) must be <= high ({high})")

		if start is not None:
			current = max(low, min(high, start))
		else:
			current = (low + high) // 2

		result = [current]

		for _ in range(n - 1):
			delta = self._random.randint(-step, step)
			current = max(low, min(high, current + delta))
			result.append(current)

		return result


def resolve_seed (seed: typing.Optional[int]) -> int:

	"""Return a usable seed.

	A positive seed is returned unchanged. ``None`` or a value <= 0 is
	replaced by a time-derived seed, which is logged so the run can be
	reproduced.
	"""

	if seed is not None and seed > 0:
		return seed

	resolved = time.time_ns() % (2 ** 32) or 1

	logger.info(f"Using time-derived seed {resolved}")

	return resolved


@dataclasses.dataclass
class PresetContext:

	"""
	Per-invocation state: the resolved seed and the random stream drawn from it.
	"""

	seed: int
	rng: RandomSource


	@classmethod
	def create (cls, seed: typing.Optional[int] = None) -> "PresetContext":

		resolved = resolve_seed(seed)

		return cls(seed=resolved, rng=RandomSource(resolved))
