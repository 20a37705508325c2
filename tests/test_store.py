import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError

from db import Base, make_engine, make_session_factory
from errors import DuplicateRecord, InvalidRecord, StoreUnavailable
from models import Question
from schemas.records import DailyGameRecord, QuestionRecord
from store import SqlTriviaStore, _is_unique_violation

from conftest import GAME_DAY


def test_daily_game_roundtrip_keeps_order(store):
    ids = ["Q5", "Q1", "Q9", "Q2", "Q7", "Q3", "Q8", "Q4", "Q6"]
    store.insert_daily_game(DailyGameRecord(game_date=GAME_DAY, question_ids=ids))
    assert store.find_daily_game(GAME_DAY).question_ids == ids


def test_second_game_for_same_date_conflicts(store):
    store.insert_daily_game(DailyGameRecord(game_date=GAME_DAY, question_ids=["Q1", "Q2"]))
    with pytest.raises(DuplicateRecord):
        store.insert_daily_game(DailyGameRecord(game_date=GAME_DAY, question_ids=["Q3", "Q4"]))
    # the first game is untouched and no stray rows were left behind
    assert store.find_daily_game(GAME_DAY).question_ids == ["Q1", "Q2"]


def test_daily_game_record_rejects_repeated_ids():
    with pytest.raises(ValueError):
        DailyGameRecord(game_date=GAME_DAY, question_ids=["Q1", "Q1"])


def test_duplicate_question_id_conflicts(store):
    with pytest.raises(DuplicateRecord):
        store.insert_question(
            QuestionRecord(id="Q1", prompt="again?", category="x", difficulty="easy", answer="y")
        )


def test_bad_row_is_rejected_at_the_boundary(store, engine):
    factory = make_session_factory(engine)
    with factory() as db:
        db.add(Question(id="broken", prompt="", category="x", difficulty="easy", answer="y"))
        db.commit()
    with pytest.raises(InvalidRecord):
        store.find_question("broken")


def test_list_random_questions_has_no_repeats(store):
    qs = store.list_random_questions(15)
    assert len({q.id for q in qs}) == 15


def test_list_questions_by_category(store):
    assert len(store.list_questions(category="General")) == 20
    assert store.list_questions(category="Nope") == []
    assert store.count_questions() == 20


def test_delete_answers_with_no_ids_is_a_noop(store):
    assert store.delete_answers("user-1", [], GAME_DAY) == 0
    assert store.find_answers("user-1", [], GAME_DAY) == []


def test_unreachable_database_is_store_unavailable(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'missing' / 'dir' / 'trivia.db'}")
    broken = SqlTriviaStore(make_session_factory(engine))
    with pytest.raises(StoreUnavailable) as ei:
        broken.find_daily_game(GAME_DAY)
    assert ei.value.retryable is True


def test_not_null_violation_is_not_a_duplicate(store):
    with pytest.raises(InvalidRecord) as ei:
        with store._session() as db:
            db.add(Question(id="Qn", prompt=None, category="x", difficulty="easy", answer="y"))
            db.commit()
    assert "NOT NULL" in ei.value.details["error"]
    assert store.find_question("Qn") is None


class _DriverError(Exception):
    def __init__(self, message, sqlstate):
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.mark.parametrize(
    "orig, unique",
    [
        (_DriverError("duplicate key value violates unique constraint", "23505"), True),
        (_DriverError("insert or update violates foreign key constraint", "23503"), False),
        (Exception("UNIQUE constraint failed: daily_games.game_date"), True),
        (Exception("FOREIGN KEY constraint failed"), False),
    ],
)
def test_only_unique_violations_count_as_duplicates(orig, unique):
    assert _is_unique_violation(IntegrityError("INSERT ...", {}, orig)) is unique


def test_foreign_key_failure_surfaces_as_invalid_record(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'fk.db'}")

    @event.listens_for(engine, "connect")
    def _enforce_fks(dbapi_conn, _record):
        dbapi_conn.execute("PRAGMA foreign_keys=ON")

    Base.metadata.create_all(engine)
    fk_store = SqlTriviaStore(make_session_factory(engine))
    fk_store.insert_question(
        QuestionRecord(id="Q1", prompt="p?", category="x", difficulty="easy", answer="y")
    )

    with pytest.raises(InvalidRecord):
        fk_store.insert_daily_game(DailyGameRecord(game_date=GAME_DAY, question_ids=["Q1", "gone"]))
    assert fk_store.find_daily_game(GAME_DAY) is None
    engine.dispose()
