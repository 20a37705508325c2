"""
Domain errors for the trivia service.

Every failure the core can report derives from ``TriviaError`` and carries a
short stable ``code``, the HTTP status the API answers with, and whether the
caller may retry. ``main.py`` renders them as ``{"ok": False, "error": code}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TriviaError(Exception):
    code: str = "trivia_error"
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ok": False, "error": self.code, "detail": self.message}
        if self.details:
            body["details"] = self.details
        if self.retryable:
            body["retryable"] = True
        return body


class DailyGameNotFound(TriviaError):
    code = "not_found"
    status_code = 404

    def __init__(self, game_date: Any) -> None:
        super().__init__(
            "No trivia available for today. Please check back later.",
            {"date": str(game_date)},
        )


class QuestionNotFound(TriviaError):
    code = "question_not_found"
    status_code = 404

    def __init__(self, question_id: str) -> None:
        super().__init__("Question not found", {"question_id": question_id})


class QuestionNotInGame(TriviaError):
    code = "question_not_in_game"
    status_code = 404

    def __init__(self, question_id: str, game_date: Any) -> None:
        super().__init__(
            "That question is not part of today's trivia.",
            {"question_id": question_id, "date": str(game_date)},
        )


class StoreUnavailable(TriviaError):
    """The record store call itself failed. The core never retries these."""

    code = "store_unavailable"
    status_code = 503
    retryable = True


class ResetPartialFailure(TriviaError):
    code = "reset_partial_failure"
    status_code = 503


class PoolTooSmall(TriviaError):
    code = "pool_too_small"
    status_code = 409

    def __init__(self, available: int, needed: int) -> None:
        super().__init__(
            f"Question pool has {available} questions; {needed} are needed for a daily game.",
            {"available": available, "needed": needed},
        )


class DuplicateRecord(TriviaError):
    code = "duplicate"
    status_code = 409


class InvalidRecord(TriviaError):
    code = "invalid_record"
    status_code = 500
