# storage.py - Database access for questions, game sessions, answers and achievements

import logging
import random
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

from flask import current_app
from sqlalchemy import func

from extensions import db
from game_data import GameMode, Region
from learning_engine import SessionRecord
from models import User, Question, GameSession, GameAnswer, Achievement

logger = logging.getLogger(__name__)

# Fields a client may change through a partial session update
UPDATABLE_SESSION_FIELDS = {
    'score', 'questions_answered', 'correct_answers',
    'current_streak', 'max_streak', 'is_completed',
}


class GameStorage:
    """Helper class for game-related database operations"""

    # ===================== USERS =====================

    @staticmethod
    def get_user(user_id: int) -> Optional[User]:
        return db.session.get(User, user_id)

    @staticmethod
    def upsert_user(username: str, **fields: Any) -> User:
        """Create the user if needed, otherwise refresh profile fields"""
        try:
            user = User.query.filter_by(username=username).first()
            if not user:
                user = User(username=username)
                db.session.add(user)
            for key in ('email', 'first_name', 'last_name'):
                if fields.get(key) is not None:
                    setattr(user, key, fields[key])
            db.session.commit()
            return user
        except Exception:
            db.session.rollback()
            raise

    # ===================== QUESTIONS =====================

    @staticmethod
    def get_questions_by_mode(mode: GameMode, region: Region, limit: int = 10) -> List[Question]:
        """Random selection of questions for a mode; global questions fit every region"""
        query = Question.query.filter(Question.mode == mode.value)
        if region is not Region.GLOBAL:
            query = query.filter(Question.region.in_([region.value, Region.GLOBAL.value]))
        questions = query.order_by(Question.id).all()
        random.shuffle(questions)
        return questions[:limit]

    @staticmethod
    def get_question(question_id: int) -> Optional[Question]:
        return db.session.get(Question, question_id)

    @staticmethod
    def create_question(**fields: Any) -> Question:
        try:
            question = Question(**fields)
            db.session.add(question)
            db.session.commit()
            return question
        except Exception:
            db.session.rollback()
            raise

    # ===================== GAME SESSIONS =====================

    @staticmethod
    def create_game_session(mode: GameMode, region: Region, user_id: Optional[int] = None) -> GameSession:
        try:
            game_session = GameSession(user_id=user_id, mode=mode.value, region=region.value)
            db.session.add(game_session)
            db.session.commit()
            logger.info(f"Game session {game_session.id} started: {mode.value}/{region.value} (user {user_id})")
            return game_session
        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def get_game_session(session_id: int) -> Optional[GameSession]:
        return db.session.get(GameSession, session_id)

    @staticmethod
    def update_game_session(session_id: int, updates: Dict[str, Any]) -> Optional[GameSession]:
        game_session = db.session.get(GameSession, session_id)
        if not game_session:
            return None
        try:
            for key, value in updates.items():
                if key in UPDATABLE_SESSION_FIELDS:
                    setattr(game_session, key, value)
            db.session.commit()
            return game_session
        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def complete_game_session(session_id: int) -> Optional[GameSession]:
        game_session = db.session.get(GameSession, session_id)
        if not game_session:
            return None
        try:
            game_session.is_completed = True
            game_session.completed_at = datetime.now(timezone.utc)
            db.session.commit()
            return game_session
        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def get_user_game_sessions(user_id: int) -> List[GameSession]:
        """All sessions for a user, oldest first"""
        return GameSession.query.filter_by(user_id=user_id)\
            .order_by(GameSession.started_at, GameSession.id).all()

    @classmethod
    def get_session_history(cls, user_id: int) -> List[SessionRecord]:
        """Chronological snapshot of a user's sessions for the learning engine"""
        return [SessionRecord.from_model(s) for s in cls.get_user_game_sessions(user_id)]

    # ===================== ANSWERS =====================

    @staticmethod
    def record_answer(session_id: int, question_id: int, user_answer: str,
                      time_spent: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Store an answer and roll it into the session's score and streak.

        Returns None when the session or the question does not exist.
        """
        game_session = db.session.get(GameSession, session_id)
        question = db.session.get(Question, question_id)
        if not game_session or not question:
            return None

        is_correct = question.accepts(user_answer)
        score_earned = 0
        try:
            answer = GameAnswer(
                session_id=session_id,
                question_id=question_id,
                user_answer=user_answer,
                is_correct=is_correct,
                time_spent=time_spent,
            )
            db.session.add(answer)

            previous_streak = game_session.current_streak or 0
            if is_correct:
                score_earned = (current_app.config['BASE_POINTS']
                                + previous_streak * current_app.config['STREAK_BONUS'])
                game_session.current_streak = previous_streak + 1
                game_session.correct_answers = (game_session.correct_answers or 0) + 1
            else:
                game_session.current_streak = 0
            game_session.questions_answered = (game_session.questions_answered or 0) + 1
            game_session.max_streak = max(game_session.max_streak or 0, game_session.current_streak)
            game_session.score = (game_session.score or 0) + score_earned

            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

        return {
            'answer': answer,
            'question': question,
            'score_earned': score_earned,
        }

    @staticmethod
    def get_session_answers(session_id: int) -> List[GameAnswer]:
        return GameAnswer.query.filter_by(session_id=session_id).order_by(GameAnswer.id).all()

    # ===================== ACHIEVEMENTS =====================

    @staticmethod
    def get_user_achievements(user_id: int) -> List[Achievement]:
        return Achievement.query.filter_by(user_id=user_id).order_by(Achievement.unlocked_at).all()

    @staticmethod
    def create_achievement(user_id: int, achievement_type: str) -> Achievement:
        try:
            achievement = Achievement(user_id=user_id, achievement_type=achievement_type)
            db.session.add(achievement)
            db.session.commit()
            return achievement
        except Exception:
            db.session.rollback()
            raise

    # ===================== LEADERBOARD =====================

    @staticmethod
    def get_leaderboard(limit: int = 10) -> List[Dict[str, Any]]:
        """Players ranked by the total score of their completed sessions"""
        total_score = func.sum(GameSession.score).label('total_score')
        rows = db.session.query(User, total_score)\
            .join(GameSession, GameSession.user_id == User.id)\
            .filter(GameSession.is_completed.is_(True))\
            .group_by(User.id)\
            .order_by(total_score.desc(), User.id)\
            .limit(limit).all()

        return [
            {'user': user, 'total_score': int(score or 0), 'rank': index + 1}
            for index, (user, score) in enumerate(rows)
        ]


storage = GameStorage()
