class QuizEngineError(Exception):
    pass


class QuizNotFoundError(QuizEngineError):
    pass


class AttemptNotFoundError(QuizEngineError):
    pass


class AnswerOptionNotFoundError(QuizEngineError):
    pass


class AttemptAccessError(QuizEngineError):
    pass


class MaxAttemptsReachedError(QuizEngineError):
    pass


class AttemptStartConflictError(QuizEngineError):
    pass


class AttemptAlreadySubmittedError(QuizEngineError):
    pass


class AttemptNotCompletedError(QuizEngineError):
    pass


class InvalidSubmissionError(QuizEngineError):
    pass


class QuestionNotInQuizError(InvalidSubmissionError):
    pass


class DuplicateAnswerError(InvalidSubmissionError):
    pass
