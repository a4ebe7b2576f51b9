class IntervalTrainerError(Exception):
	pass


class UnknownIntervalError(IntervalTrainerError, KeyError):
	pass


class UnknownScaleError(IntervalTrainerError, KeyError):
	pass


class QuizStateError(IntervalTrainerError):
	"""Raised when a quiz action does not fit the current question state."""
