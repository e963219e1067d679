"""Rotas do backend usadas pelo cliente."""


class QuizEndpoints:
    """Rotas de quiz (relativas a api_url)."""

    @staticmethod
    def get(quiz_id: str) -> str:
        return f"/api/v1/quiz/{quiz_id}"

    @staticmethod
    def resume(quiz_id: str) -> str:
        return f"/api/v1/quiz/{quiz_id}/resume"

    @staticmethod
    def pause(quiz_id: str) -> str:
        return f"/api/v1/quiz/{quiz_id}/pause"

    @staticmethod
    def submit(quiz_id: str) -> str:
        return f"/api/v1/quiz/{quiz_id}/submit"

    @staticmethod
    def results(quiz_id: str) -> str:
        return f"/api/v1/results/quiz/{quiz_id}"


def results_page(quiz_id: str) -> str:
    """Rota da tela de resultados (destino da navegação após submit)."""
    return f"/quizzes/{quiz_id}/results"


LOGIN_PAGE = "/login"
