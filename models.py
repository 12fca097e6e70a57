from __future__ import annotations

# models.py - Database models for GeoWiz players, questions and game sessions

from extensions import db
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, index=True)
    username = db.Column(db.String(80), unique=True, index=True, nullable=False)
    email = db.Column(db.String(120), unique=True, index=True)
    first_name = db.Column(db.String(80))
    last_name = db.Column(db.String(80))
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # Relationships
    game_sessions = relationship("GameSession", back_populates="user")
    achievements = relationship("Achievement", back_populates="user")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'created_at': _isoformat(self.created_at),
        }

    def __repr__(self):
        return f'<User {self.username}>'

class Question(db.Model):
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True, index=True)
    mode = db.Column(db.String(40), nullable=False, index=True)  # GameMode value
    region = db.Column(db.String(40), nullable=False, index=True)  # Region value
    question_text = db.Column(db.Text, nullable=False)
    hint = db.Column(db.Text)
    answer = db.Column(db.String(200), nullable=False)
    alternative_answers = db.Column(db.JSON, default=list)
    fun_fact = db.Column(db.Text, nullable=False)
    difficulty = db.Column(db.Integer, nullable=False, default=1)  # 1-5 scale
    visual_type = db.Column(db.String(20))  # 'flag', 'outline', 'audio', 'text'
    visual_url = db.Column(db.String(500))

    # Relationships
    answers = relationship("GameAnswer", back_populates="question")

    def accepts(self, user_answer: str) -> bool:
        """Case-insensitive match against the answer and its alternatives"""
        given = (user_answer or '').strip().lower()
        if given == self.answer.strip().lower():
            return True
        return given in [alt.strip().lower() for alt in (self.alternative_answers or [])]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'mode': self.mode,
            'region': self.region,
            'question_text': self.question_text,
            'hint': self.hint,
            'answer': self.answer,
            'alternative_answers': list(self.alternative_answers or []),
            'fun_fact': self.fun_fact,
            'difficulty': self.difficulty,
            'visual_type': self.visual_type,
            'visual_url': self.visual_url,
        }

class GameSession(db.Model):
    __tablename__ = "game_sessions"

    id = db.Column(db.Integer, primary_key=True, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), index=True)
    mode = db.Column(db.String(40), nullable=False)  # Use String instead of Enum to avoid crashes
    region = db.Column(db.String(40), nullable=False)
    score = db.Column(db.Integer, nullable=False, default=0)
    questions_answered = db.Column(db.Integer, nullable=False, default=0)
    correct_answers = db.Column(db.Integer, nullable=False, default=0)
    current_streak = db.Column(db.Integer, nullable=False, default=0)
    max_streak = db.Column(db.Integer, nullable=False, default=0)
    is_completed = db.Column(db.Boolean, nullable=False, default=False)
    started_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    completed_at = db.Column(db.DateTime)

    # Relationships
    user = relationship("User", back_populates="game_sessions")
    answers = relationship("GameAnswer", back_populates="session", cascade="all, delete-orphan")

    @property
    def accuracy(self) -> float:
        if not self.questions_answered:
            return 0.0
        return self.correct_answers / self.questions_answered

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'mode': self.mode,
            'region': self.region,
            'score': self.score,
            'questions_answered': self.questions_answered,
            'correct_answers': self.correct_answers,
            'current_streak': self.current_streak,
            'max_streak': self.max_streak,
            'is_completed': self.is_completed,
            'started_at': _isoformat(self.started_at),
            'completed_at': _isoformat(self.completed_at),
        }

    def __repr__(self):
        return f'<GameSession {self.id} - {self.mode}/{self.region}>'

class GameAnswer(db.Model):
    __tablename__ = "game_answers"

    id = db.Column(db.Integer, primary_key=True, index=True)
    session_id = db.Column(db.Integer, db.ForeignKey("game_sessions.id"), nullable=False)
    question_id = db.Column(db.Integer, db.ForeignKey("questions.id"), nullable=False)
    user_answer = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False)
    time_spent = db.Column(db.Integer)  # in seconds
    answered_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    session = relationship("GameSession", back_populates="answers")
    question = relationship("Question", back_populates="answers")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'session_id': self.session_id,
            'question_id': self.question_id,
            'user_answer': self.user_answer,
            'is_correct': self.is_correct,
            'time_spent': self.time_spent,
            'answered_at': _isoformat(self.answered_at),
        }

class Achievement(db.Model):
    __tablename__ = "achievements"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    achievement_type = db.Column(db.String(50), nullable=False)  # 'flag_master', 'world_explorer', etc.
    unlocked_at = db.Column(db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="achievements")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'user_id': self.user_id,
            'achievement_type': self.achievement_type,
            'unlocked_at': _isoformat(self.unlocked_at),
        }

    def __repr__(self):
        return f'<Achievement {self.achievement_type} - User {self.user_id}>'
