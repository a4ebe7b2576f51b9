from typing import Iterable, List

import pytest


class ScriptedRandom:
	"""Random source that replays a fixed sequence of draws."""

	def __init__(self, draws: Iterable[float]) -> None:
		self.draws: List[float] = list(draws)
		self.calls = 0

	def random(self) -> float:
		if not self.draws:
			raise AssertionError("scripted random source exhausted")
		self.calls += 1
		return self.draws.pop(0)


@pytest.fixture
def scripted():
	return ScriptedRandom
