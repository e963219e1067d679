"""Result Renderer - exibição pura do resultado pontuado pelo servidor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..models.schemas import QuizResult

if TYPE_CHECKING:
    from ..api.client import QuizApiClient


def format_time(ms: int) -> str:
    """Formata milissegundos como ``m:ss``."""
    total_seconds = max(0, int(ms)) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes}:{seconds:02d}"


@dataclass
class ResultSummary:
    """Números do cartão de pontuação."""

    title: str
    percentage: int
    correct_count: int
    incorrect_count: int
    total_questions: int
    score: float
    time_spent_label: str | None


class ResultRenderer:
    """Transforma um QuizResult em resumo e relatório de texto."""

    @staticmethod
    def summarize(result: QuizResult) -> ResultSummary:
        total = result.total_questions
        correct = result.correct_count
        percentage = int(correct / total * 100 + 0.5) if total > 0 else 0

        time_label = None
        if result.time_spent is not None:
            # timeSpent vem em segundos
            time_label = format_time(int(result.time_spent * 1000))

        return ResultSummary(
            title=result.quiz.title if result.quiz else "",
            percentage=percentage,
            correct_count=correct,
            incorrect_count=total - correct,
            total_questions=total,
            score=result.score,
            time_spent_label=time_label,
        )

    @classmethod
    def render_text(cls, result: QuizResult) -> str:
        """Relatório em texto (cartão + respostas por pergunta)."""
        summary = cls.summarize(result)
        lines = [
            "Quiz Results",
            summary.title,
            "",
            f"Score: {summary.percentage}%",
            f"Correct: {summary.correct_count}  Incorrect: {summary.incorrect_count}  "
            f"Total: {summary.total_questions}",
        ]
        if summary.time_spent_label:
            lines.append(f"Time spent: {summary.time_spent_label}")

        for number, answer in enumerate(result.answers, start=1):
            mark = "+" if answer.is_correct else "-"
            lines.append("")
            lines.append(f"{mark} {number}. {answer.question_text}")
            lines.append(f"   Your answer: {answer.user_answer or '(none)'}")
            if not answer.is_correct and answer.correct_answer:
                lines.append(f"   Correct answer: {answer.correct_answer}")
            if answer.explanation:
                lines.append(f"   {answer.explanation}")

        return "\n".join(lines)


async def load_result(api: QuizApiClient, quiz_id: str) -> QuizResult:
    """Busca o resultado pontuado (GET /api/v1/results/quiz/{id})."""
    return await api.get_results(quiz_id)
