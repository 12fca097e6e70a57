"""Shared pytest configuration for GeoWiz"""

import os

# Must be set before the app module is imported
os.environ['FLASK_ENV'] = 'testing'

import pytest

from app import app as flask_app
from extensions import db
from game_data import GameMode, Region
from learning_engine import SessionRecord
from models import Question, GameSession, User


@pytest.fixture
def app():
    """Flask app with fresh tables for every test"""
    with flask_app.app_context():
        db.drop_all()
        db.create_all()
        yield flask_app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_record():
    """Factory for engine input records"""
    def _make(mode=GameMode.CAPITALS, region=Region.GLOBAL, answered=10, correct=5,
              max_streak=0, current_streak=0, completed=True):
        return SessionRecord(
            mode=mode,
            region=region,
            questions_answered=answered,
            correct_answers=correct,
            current_streak=current_streak,
            max_streak=max_streak,
            is_completed=completed,
        )
    return _make


@pytest.fixture
def user(app):
    player = User(username="explorer", email="explorer@example.com")
    db.session.add(player)
    db.session.commit()
    return player


@pytest.fixture
def question(app):
    q = Question(
        mode="capitals",
        region="global",
        question_text="What is the capital of Australia?",
        hint="This city is located in the Australian Capital Territory.",
        answer="canberra",
        alternative_answers=["canberra act"],
        fun_fact="Canberra was purpose-built as a compromise between Sydney and Melbourne.",
        difficulty=2,
        visual_type="text",
    )
    db.session.add(q)
    db.session.commit()
    return q


@pytest.fixture
def make_session(app):
    """Factory for persisted game sessions"""
    def _make(user_id=None, mode="capitals", region="global", score=0, answered=0,
              correct=0, max_streak=0, completed=False):
        game_session = GameSession(
            user_id=user_id, mode=mode, region=region, score=score,
            questions_answered=answered, correct_answers=correct,
            max_streak=max_streak, is_completed=completed,
        )
        db.session.add(game_session)
        db.session.commit()
        return game_session
    return _make
