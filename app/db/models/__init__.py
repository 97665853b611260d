from app.db.models.quiz_answer_options import QuizAnswerOption
from app.db.models.quiz_attempts import QuizAttempt
from app.db.models.quiz_questions import QuizQuestion
from app.db.models.quiz_user_answers import QuizUserAnswer
from app.db.models.quizzes import Quiz

__all__ = [
    "Quiz",
    "QuizAnswerOption",
    "QuizAttempt",
    "QuizQuestion",
    "QuizUserAnswer",
]
