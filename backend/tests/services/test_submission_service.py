import random
from datetime import datetime
from uuid import uuid4

import pytest

from flashquiz.core.enums import DifficultyLevel, QuizMode
from flashquiz.core.exceptions import NotFound
from flashquiz.domain.quiz import AttemptWindow, QuizSizePolicy, SubmittedCard
from flashquiz.models import Flashcard, Marathon, QuizRecord
from flashquiz.repositories import CategoryStore
from flashquiz.services.marathon_service import MarathonService
from flashquiz.services.submission_service import MARATHON_QUIZ_NOT_FOUND, SubmissionService

WINDOW = AttemptWindow(
    start_time=datetime(2026, 1, 5, 9, 0),
    end_time=datetime(2026, 1, 5, 9, 12),
)


def submitted(card, level=None, category=None):
    return SubmittedCard(
        flashcard_id=card.id,
        difficulty_level=level or card.difficulty_level,
        category=category or card.category,
    )


@pytest.fixture
def marathon(db, test_user, make_flashcards):
    make_flashcards("History", 6)
    service = MarathonService(db, policy=QuizSizePolicy(), rng=random.Random(0))
    marathon_id = service.generate(test_user.username, "History", 2)
    return service.current_quiz(test_user.username, marathon_id)


def test_marathon_submission_completes_quiz_and_records(db, test_user, marathon):
    cards = marathon.quiz.flashcards
    payload = [submitted(cards[0], DifficultyLevel.hard)] + [submitted(c) for c in cards[1:]]

    ack = SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.marathon,
        cards=payload,
        window=WINDOW,
        quiz_id=marathon.marathon.quiz_id,
        marathon_id=marathon.marathon_id,
    )

    assert ack.applied is True
    assert ack.records_written == 3
    row = (
        db.query(Marathon)
        .filter_by(marathon_id=marathon.marathon_id, quiz_id=marathon.marathon.quiz_id)
        .one()
    )
    assert row.completed is True

    records = db.query(QuizRecord).filter_by(quiz_id=marathon.marathon.quiz_id).all()
    assert all(r.completed for r in records)
    assert all(r.start_time == WINDOW.start_time and r.end_time == WINDOW.end_time for r in records)
    first = next(r for r in records if r.flashcard_id == cards[0].id)
    assert first.difficulty_level == DifficultyLevel.hard
    # no new records in marathon mode
    assert db.query(QuizRecord).count() == 6


def test_marathon_submission_is_idempotent(db, test_user, marathon):
    payload = [submitted(c) for c in marathon.quiz.flashcards]
    service = SubmissionService(db)
    kwargs = dict(
        mode=QuizMode.marathon,
        cards=payload,
        window=WINDOW,
        quiz_id=marathon.marathon.quiz_id,
        marathon_id=marathon.marathon_id,
    )

    service.submit(test_user.username, **kwargs)
    ack = service.submit(test_user.username, **kwargs)

    assert ack.applied is True
    assert db.query(QuizRecord).count() == 6
    assert db.query(Marathon).filter_by(completed=True).count() == 1


def test_missing_marathon_quiz_is_acknowledged_without_writes(db, test_user, marathon):
    payload = [submitted(c) for c in marathon.quiz.flashcards]

    ack = SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.marathon,
        cards=payload,
        window=WINDOW,
        quiz_id=uuid4(),
        marathon_id=marathon.marathon_id,
    )

    assert ack.applied is False
    assert ack.reason == MARATHON_QUIZ_NOT_FOUND
    assert ack.records_written == 0
    assert db.query(Marathon).filter_by(completed=True).count() == 0
    assert db.query(QuizRecord).filter_by(completed=True).count() == 0


def test_marathon_of_another_user_is_not_applied(db, other_user, marathon):
    ack = SubmissionService(db).submit(
        other_user.username,
        mode=QuizMode.marathon,
        cards=[submitted(c) for c in marathon.quiz.flashcards],
        window=WINDOW,
        quiz_id=marathon.marathon.quiz_id,
        marathon_id=marathon.marathon_id,
    )

    assert ack.applied is False
    assert db.query(Marathon).filter_by(completed=True).count() == 0


def test_unscheduled_card_is_not_inserted(db, test_user, marathon, make_flashcards):
    stray = make_flashcards("Geography", 1)[0]
    payload = [submitted(c) for c in marathon.quiz.flashcards] + [submitted(stray)]

    ack = SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.marathon,
        cards=payload,
        window=WINDOW,
        quiz_id=marathon.marathon.quiz_id,
        marathon_id=marathon.marathon_id,
    )

    assert ack.records_written == 3
    assert db.query(QuizRecord).filter_by(flashcard_id=stray.id).count() == 0


def test_marathon_mode_requires_ids(db, test_user):
    with pytest.raises(ValueError):
        SubmissionService(db).submit(
            test_user.username, mode=QuizMode.marathon, cards=[], window=WINDOW
        )


def test_practice_submission_creates_a_new_quiz(db, test_user, make_flashcards):
    cards = make_flashcards("Biology", 3)

    ack = SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.practice,
        cards=[submitted(c) for c in cards],
        window=WINDOW,
    )

    assert ack.applied is True
    assert ack.records_written == 3
    records = db.query(QuizRecord).filter_by(quiz_id=ack.quiz_id).order_by(QuizRecord.position).all()
    assert [r.flashcard_id for r in records] == [c.id for c in cards]
    assert all(r.completed and r.username == test_user.username for r in records)
    assert all(r.start_time == WINDOW.start_time for r in records)


def test_practice_submissions_never_share_a_quiz_id(db, test_user, make_flashcards):
    cards = make_flashcards("Biology", 3)
    service = SubmissionService(db)

    first = service.submit(
        test_user.username, mode=QuizMode.practice, cards=[submitted(c) for c in cards], window=WINDOW
    )
    second = service.submit(
        test_user.username, mode=QuizMode.practice, cards=[submitted(c) for c in cards], window=WINDOW
    )

    assert first.quiz_id != second.quiz_id
    assert db.query(QuizRecord).count() == 6


def test_repeated_card_is_recorded_once_with_its_last_answer(db, test_user, make_flashcards):
    card = make_flashcards("Biology", 1)[0]
    payload = [
        submitted(card, DifficultyLevel.easy),
        submitted(card, DifficultyLevel.hard),
    ]

    ack = SubmissionService(db).submit(
        test_user.username, mode=QuizMode.practice, cards=payload, window=WINDOW
    )

    records = db.query(QuizRecord).filter_by(quiz_id=ack.quiz_id).all()
    assert len(records) == 1
    assert records[0].difficulty_level == DifficultyLevel.hard


def test_practice_submission_writes_ratings_back_to_flashcards(db, test_user, make_flashcards):
    cards = make_flashcards("Biology", 3)

    SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.practice,
        cards=[submitted(c, DifficultyLevel.hard) for c in cards],
        window=WINDOW,
    )

    levels = [db.get(Flashcard, c.id).difficulty_level for c in cards]
    assert levels == [DifficultyLevel.hard] * 3


def test_rerated_category_is_normalized_and_indexed(db, test_user, make_flashcards):
    card = make_flashcards("Biology", 1)[0]

    ack = SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.practice,
        cards=[submitted(card, category="chemistry")],
        window=WINDOW,
    )

    record = db.query(QuizRecord).filter_by(quiz_id=ack.quiz_id).one()
    assert record.category == "Chemistry"
    assert db.get(Flashcard, card.id).category == "Chemistry"
    # the card was the last one in Biology
    assert CategoryStore(db).list(test_user.username) == ["Chemistry"]


def test_practice_submission_with_unknown_flashcard_writes_nothing(db, test_user, make_flashcards):
    cards = make_flashcards("Biology", 2)
    ghost = SubmittedCard(
        flashcard_id=uuid4(), difficulty_level=DifficultyLevel.easy, category="biology"
    )

    with pytest.raises(NotFound):
        SubmissionService(db).submit(
            test_user.username,
            mode=QuizMode.practice,
            cards=[submitted(c, DifficultyLevel.hard) for c in cards] + [ghost],
            window=WINDOW,
        )

    assert db.query(QuizRecord).count() == 0
    assert db.get(Flashcard, cards[0].id).difficulty_level == DifficultyLevel.easy


def test_practice_submission_with_foreign_flashcard_is_not_found(
    db, test_user, other_user, make_flashcards
):
    foreign = make_flashcards("Biology", 1, username=other_user.username)[0]

    with pytest.raises(NotFound):
        SubmissionService(db).submit(
            test_user.username,
            mode=QuizMode.practice,
            cards=[submitted(foreign, DifficultyLevel.hard)],
            window=WINDOW,
        )

    assert db.query(QuizRecord).count() == 0
    assert db.get(Flashcard, foreign.id).difficulty_level == DifficultyLevel.easy


def test_marathon_submission_rerates_only_own_flashcards(
    db, test_user, other_user, marathon, make_flashcards
):
    foreign = make_flashcards("History", 1, username=other_user.username)[0]
    cards = marathon.quiz.flashcards
    payload = [submitted(c, DifficultyLevel.medium) for c in cards] + [
        submitted(foreign, DifficultyLevel.hard)
    ]

    ack = SubmissionService(db).submit(
        test_user.username,
        mode=QuizMode.marathon,
        cards=payload,
        window=WINDOW,
        quiz_id=marathon.marathon.quiz_id,
        marathon_id=marathon.marathon_id,
    )

    assert ack.records_written == 3
    assert all(db.get(Flashcard, c.id).difficulty_level == DifficultyLevel.medium for c in cards)
    assert db.get(Flashcard, foreign.id).difficulty_level == DifficultyLevel.easy
