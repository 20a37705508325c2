# Question bank: seed files -> record store.

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from pydantic import ValidationError

from errors import DuplicateRecord
from schemas.records import QuestionRecord
from store import TriviaStore

logger = logging.getLogger("daily-trivia.bank")


def _iter_jsonl(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        for idx, line in enumerate(f, 1):
            s = line.strip()
            if not s or s.startswith("#") or s.startswith("//"):
                continue
            try:
                yield json.loads(s)
            except json.JSONDecodeError:
                logger.warning("%s:%d: skipping malformed row", p.name, idx)
                continue


def _iter_json(p: Path) -> Iterable[Dict[str, Any]]:
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError:
            logger.warning("%s: not valid JSON, skipped", p.name)
            data = []
    if isinstance(data, list):
        yield from data


def read_questions(data_dir: Path) -> List[QuestionRecord]:
    """Read every valid question from the .json / .jsonl files under ``data_dir``."""
    questions: List[QuestionRecord] = []
    if not data_dir.exists():
        logger.warning("question directory %s does not exist", data_dir)
        return questions

    for p in sorted(data_dir.rglob("*")):
        if not p.is_file():
            continue
        suf = p.suffix.lower()
        if suf == ".jsonl":
            source = _iter_jsonl(p)
        elif suf == ".json":
            source = _iter_json(p)
        else:
            continue

        for raw in source:
            try:
                questions.append(QuestionRecord.model_validate(raw))
            except ValidationError:
                # Skip invalid records
                logger.warning(
                    "%s: skipping invalid question %r",
                    p.name,
                    raw.get("id") if isinstance(raw, dict) else raw,
                )
                continue
    return questions


def load_into(store: TriviaStore, data_dir: Path) -> int:
    """
    Insert questions that the store does not have yet. Existing questions are
    left untouched since questions are immutable once created.
    Returns the number of questions added.
    """
    added = 0
    for q in read_questions(data_dir):
        if store.find_question(q.id) is not None:
            continue
        try:
            store.insert_question(q)
        except DuplicateRecord:
            continue
        added += 1
    logger.info("question bank: %d added from %s", added, data_dir)
    return added
