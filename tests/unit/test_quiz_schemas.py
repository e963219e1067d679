# =============================================================================
# TESTES - Quiz Schemas Module
# =============================================================================
# Testes unitários para schemas Pydantic do contrato HTTP
# =============================================================================

import pytest
from pydantic import ValidationError


class TestQuiz:
    """Testes para Quiz/Question."""

    def test_aliases(self, timed_quiz_data):
        """Verifica mapeamento camelCase -> snake_case."""
        from quiz_session.models.schemas import Quiz

        quiz = Quiz.model_validate(timed_quiz_data)

        assert quiz.timer_duration_ms == 60000
        assert quiz.quiz_type == "MULTIPLE_CHOICE"
        assert quiz.questions[1].prompt_text == "Pergunta 2"
        assert quiz.questions[1].answer_options == ["C", "D"]
        assert quiz.is_timed is True

    def test_option_order_preserved(self, two_question_quiz_data):
        """Ordem das alternativas é preservada como recebida."""
        from quiz_session.models.schemas import Quiz

        data = {**two_question_quiz_data}
        data["questions"] = [
            {"id": "q1", "text": "?", "options": ["Z", "A", "M"]},
        ]

        quiz = Quiz.model_validate(data)

        assert quiz.questions[0].answer_options == ["Z", "A", "M"]

    @pytest.mark.parametrize("timer", [None, 0])
    def test_zero_or_null_timer_is_untimed(self, two_question_quiz_data, timer):
        """timer 0/null -> sem cronômetro."""
        from quiz_session.models.schemas import Quiz

        quiz = Quiz.model_validate({**two_question_quiz_data, "timer": timer})

        assert quiz.timer_duration_ms is None
        assert quiz.is_timed is False

    def test_numeric_ids_coerced(self):
        """IDs numéricos viram string."""
        from quiz_session.models.schemas import Quiz

        quiz = Quiz.model_validate(
            {"id": 10, "questions": [{"id": 3, "text": "?", "options": ["a"]}]}
        )

        assert quiz.id == "10"
        assert quiz.questions[0].id == "3"

    def test_null_questions(self):
        """questions null -> lista vazia."""
        from quiz_session.models.schemas import Quiz

        assert Quiz.model_validate({"id": "x", "questions": None}).questions == []

    def test_extra_fields_ignored(self, two_question_quiz_data):
        """Campos desconhecidos são ignorados."""
        from quiz_session.models.schemas import Quiz

        quiz = Quiz.model_validate({**two_question_quiz_data, "createdAt": "2026-01-01"})

        assert not hasattr(quiz, "createdAt")

    def test_completed_status(self, two_question_quiz_data):
        """Verifica is_completed (case-insensitive)."""
        from quiz_session.models.schemas import Quiz

        assert Quiz.model_validate({**two_question_quiz_data, "status": "completed"}).is_completed
        assert not Quiz.model_validate(two_question_quiz_data).is_completed

    def test_question_missing_text(self):
        """Pergunta sem enunciado é inválida."""
        from quiz_session.models.schemas import Question

        with pytest.raises(ValidationError):
            Question.model_validate({"id": "q1", "options": ["a"]})


class TestResumeSnapshot:
    """Testes para ResumeSnapshot."""

    def test_saved_answers_skip_unanswered(self, snapshot_data):
        """Perguntas sem savedAnswer não entram no mapa."""
        from quiz_session.models.schemas import ResumeSnapshot

        snapshot = ResumeSnapshot.model_validate(snapshot_data)

        assert snapshot.saved_answers() == {"q1": "B"}
        assert snapshot.elapsed_time == 40

    def test_requires_attempt_id(self):
        """attemptId é obrigatório."""
        from quiz_session.models.schemas import ResumeSnapshot

        with pytest.raises(ValidationError):
            ResumeSnapshot.model_validate({"elapsedTime": 3})


class TestRequests:
    """Testes para payloads de pause/submit."""

    def test_pause_request_by_alias(self):
        """Verifica serialização camelCase do pause."""
        from quiz_session.models.schemas import AnswerPayload, PauseRequest

        request = PauseRequest(
            answers=[AnswerPayload(question_id="q1", user_answer="A")], elapsed_time=30
        )

        assert request.model_dump(by_alias=True) == {
            "answers": [{"questionId": "q1", "userAnswer": "A"}],
            "elapsedTime": 30,
        }

    def test_submit_request_accepts_aliases(self):
        """Verifica populate_by_name (alias ou atributo)."""
        from quiz_session.models.schemas import SubmitRequest

        by_alias = SubmitRequest.model_validate({"answers": [], "timeSpent": 5, "attemptId": "a"})
        by_name = SubmitRequest(answers=[], time_spent=5, attempt_id="a")

        assert by_alias == by_name


class TestQuizResult:
    """Testes para QuizResult."""

    def test_parse(self, result_data):
        """Verifica parse do resultado completo."""
        from quiz_session.models.schemas import QuizResult

        result = QuizResult.model_validate(result_data)

        assert result.correct_count == 1
        assert result.time_spent == 75
        assert result.quiz.topic.name == "Biologia"
        assert result.answers[1].correct_answer == "D"
        assert result.answers[0].explanation is None

    def test_minimal(self):
        """Resultado com apenas id usa defaults."""
        from quiz_session.models.schemas import QuizResult

        result = QuizResult.model_validate({"id": 1})

        assert result.id == "1"
        assert result.answers == []
        assert result.time_spent is None
