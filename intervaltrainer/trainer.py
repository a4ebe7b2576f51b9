from __future__ import annotations

import logging
import random
from typing import List, Mapping, Optional, Protocol, Sequence, TypeVar

from .errors import QuizStateError
from .intervals import enabled_keys, get_interval, get_valid_base_notes, target_pitch_number
from .models import AnswerRecord, Direction, IntervalQuestion, Pitch, PracticeSettings, Score, TargetPitch
from .notes import is_in_range, pitch_to_display_name

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RandomSource(Protocol):
	def random(self) -> float: ...


_default_rng = random.Random()


def _pick(choices: Sequence[T], rng: RandomSource) -> T:
	idx = int(rng.random() * len(choices))
	# guard against sources that return exactly 1.0
	return choices[min(idx, len(choices) - 1)]


def resolve_direction(direction: Direction, rng: RandomSource) -> bool:
	if direction == "ascending":
		return True
	if direction == "descending":
		return False
	if direction == "both":
		return rng.random() > 0.5
	raise ValueError(f"unknown direction: {direction!r}")


def generate_question(
	enabled_intervals: Mapping[str, bool],
	direction: Direction = "ascending",
	locked_base_pitch: Optional[Pitch] = None,
	rng: Optional[RandomSource] = None,
) -> Optional[IntervalQuestion]:
	"""Build one playable interval example, or None when none is possible.

	Draws, in order: the interval (uniform over enabled keys), the direction
	(only for "both"), and the base pitch (only when the locked base pitch is
	absent or would push the target out of range).
	"""
	rng = rng or _default_rng
	keys = enabled_keys(enabled_intervals)
	if not keys:
		logger.debug("no intervals enabled, no question generated")
		return None

	interval_key = _pick(keys, rng)
	interval = get_interval(interval_key)
	ascending = resolve_direction(direction, rng)

	base: Optional[Pitch] = None
	if locked_base_pitch is not None:
		locked = locked_base_pitch.pitch_number
		if is_in_range(locked) and is_in_range(target_pitch_number(locked, interval_key, ascending)):
			base = locked_base_pitch
		else:
			logger.debug("locked base %s out of range for %s, picking another", locked_base_pitch.display_name, interval_key)

	if base is None:
		candidates: List[Pitch] = get_valid_base_notes(interval_key, ascending)
		if not candidates:
			logger.debug("no valid base pitch for %s (ascending=%s)", interval_key, ascending)
			return None
		base = _pick(candidates, rng)

	target = target_pitch_number(base.pitch_number, interval_key, ascending)
	return IntervalQuestion(
		base_pitch=base,
		target_pitch=TargetPitch(pitch_number=target, display_name=pitch_to_display_name(target)),
		interval_key=interval_key,
		interval_name=interval.name,
		is_ascending=ascending,
	)


class QuizSession:
	"""Caller-owned quiz state: the current question, whether it was answered, and the score."""

	def __init__(self, settings: PracticeSettings, rng: Optional[RandomSource] = None) -> None:
		self.settings = settings
		self.rng = rng or _default_rng
		self.score = Score()
		self.question: Optional[IntervalQuestion] = None
		self.answered = False
		self.history: List[AnswerRecord] = []

	def next_question(self) -> Optional[IntervalQuestion]:
		s = self.settings
		self.question = generate_question(s.enabled_intervals, s.direction, s.locked_base_pitch, self.rng)
		self.answered = False
		return self.question

	def answer(self, interval_key: str) -> AnswerRecord:
		q = self.question
		if q is None:
			raise QuizStateError("no current question")
		if self.answered:
			raise QuizStateError("question already answered")
		if interval_key not in enabled_keys(self.settings.enabled_intervals):
			raise QuizStateError(f"{interval_key} is not an enabled answer")
		is_correct = interval_key == q.interval_key
		self.answered = True
		self.score = Score(correct=self.score.correct + int(is_correct), total=self.score.total + 1)
		rec = AnswerRecord(interval_key=q.interval_key, chosen=interval_key, correct=is_correct)
		self.history.append(rec)
		return rec

	def comparison_target(self, interval_key: str) -> int:
		"""Pitch reached from the current base by another interval, for comparing answers."""
		q = self.question
		if q is None or not self.answered:
			raise QuizStateError("comparison is available only after answering")
		return target_pitch_number(q.base_pitch.pitch_number, interval_key, q.is_ascending)

	def toggle_lock(self) -> Optional[Pitch]:
		q = self.question
		if q is None:
			raise QuizStateError("no current question")
		locked = self.settings.locked_base_pitch
		if locked is not None and locked.pitch_number == q.base_pitch.pitch_number:
			new_lock = None
		else:
			new_lock = q.base_pitch
		self.settings = self.settings.model_copy(update={"locked_base_pitch": new_lock})
		return new_lock
