"""CLI - consulta rápida de quiz e resultados.

Uso:
    quiz-session status <quiz_id>
    quiz-session results <quiz_id>
    quiz-session --api-url http://localhost:3001 results <quiz_id>
"""

import argparse
import asyncio
import sys
from dataclasses import replace
from pathlib import Path

import httpx

from .api.auth import AuthStorageSessionProvider, SessionProvider
from .api.client import QuizApiClient
from .core.config import ClientConfig
from .core.exceptions import ApiError
from .core.logger import configure_logging
from .results.renderer import ResultRenderer, format_time


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quiz-session",
        description="Consulta quizzes e resultados no backend",
    )
    parser.add_argument("--api-url", help="URL base da API (padrão: QUIZ_API_URL)")
    parser.add_argument("--auth-storage", help="Arquivo JSON com o blob de autenticação")

    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Mostra o quiz e se há tentativa pausada")
    status.add_argument("quiz_id")

    results = subparsers.add_parser("results", help="Mostra o resultado pontuado")
    results.add_argument("quiz_id")

    return parser


async def _status(api: QuizApiClient, quiz_id: str) -> None:
    quiz, snapshot = await asyncio.gather(
        api.get_quiz(quiz_id), api.get_resume_snapshot(quiz_id)
    )
    timer = format_time(quiz.timer_duration_ms) if quiz.is_timed else "sem cronômetro"
    print(f"{quiz.title} [{quiz.difficulty or '-'}]")
    print(f"Perguntas: {len(quiz.questions)}  Tempo: {timer}  Status: {quiz.status or '-'}")
    if snapshot is None:
        print("Nenhuma tentativa pausada")
    else:
        answered = len(snapshot.saved_answers())
        print(
            f"Tentativa pausada {snapshot.attempt_id}: "
            f"{answered} respondidas, {round(snapshot.elapsed_time)}s gastos"
        )


async def _results(api: QuizApiClient, quiz_id: str) -> None:
    result = await api.get_results(quiz_id)
    print(ResultRenderer.render_text(result))


async def run(
    args: argparse.Namespace,
    config: ClientConfig,
    session_provider: SessionProvider | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    provider = session_provider or AuthStorageSessionProvider(config.auth_storage_path)
    async with QuizApiClient(provider, config, transport=transport) as api:
        try:
            if args.command == "status":
                await _status(api, args.quiz_id)
            else:
                await _results(api, args.quiz_id)
        except ApiError as e:
            print(f"Erro: {e.message}", file=sys.stderr)
            return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = ClientConfig.from_env()
    if args.api_url:
        config = replace(config, api_url=args.api_url)
    if args.auth_storage:
        config = replace(config, auth_storage_path=Path(args.auth_storage))
    configure_logging(config.log_level)
    return asyncio.run(run(args, config))


if __name__ == "__main__":
    sys.exit(main())
