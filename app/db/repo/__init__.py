from app.db.repo.quiz_attempts_repo import QuizAttemptsRepo
from app.db.repo.quiz_questions_repo import QuizQuestionsRepo
from app.db.repo.quiz_user_answers_repo import QuizUserAnswersRepo
from app.db.repo.quizzes_repo import QuizzesRepo

__all__ = [
    "QuizAttemptsRepo",
    "QuizQuestionsRepo",
    "QuizUserAnswersRepo",
    "QuizzesRepo",
]
