# app.py - GeoWiz geography trivia API
import logging
import os
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, List

from dotenv import load_dotenv
from flask import Flask, request, session, jsonify
from sqlalchemy import text

# Configure logging
logging.basicConfig(level=logging.INFO)
logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
logging.getLogger('sqlalchemy.pool').setLevel(logging.WARNING)

# Load environment variables
load_dotenv()

# Initialize Flask app
app = Flask(__name__)

# Load configuration
from config import config as config_map
config_name = os.environ.get('FLASK_ENV', 'development')
app.config.from_object(config_map.get(config_name, config_map['default']))

# Initialize extensions
from extensions import db
db.init_app(app)

from game_data import (
    GAME_MODES, REGIONS, TRIVIA_FACTS, catalogue_entry, get_rank_title, parse_game_mode, parse_region,
)
from learning_engine import LearningPathEngine
from storage import storage

# ===================== HELPERS =====================

def login_required(f: Callable) -> Callable:
    """Decorator to require a signed-in player for API routes"""
    @wraps(f)
    def decorated_function(*args: Any, **kwargs: Any):
        if 'user_id' not in session:
            return jsonify({'error': 'User not authenticated'}), 401
        return f(*args, **kwargs)

    return decorated_function

def _require_json_fields(*fields: str) -> Dict[str, Any]:
    """Return the JSON body, raising ValueError if it lacks any of ``fields``"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError('Request body must be a JSON object')
    missing = [field for field in fields if data.get(field) in (None, '')]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    return data

def _non_negative_int(value: Any, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{field} must be a non-negative integer")
    return value

def _positive_int_arg(name: str, default: int) -> int:
    """Read an optional positive integer query argument"""
    value = request.args.get(name, type=int)
    if value is None:
        return default
    if value < 1:
        raise ValueError(f"{name} must be a positive integer")
    return value

def _serialize_all(items: List[Any]) -> List[Dict[str, Any]]:
    return [item.to_dict() for item in items]

# ===================== ERROR HANDLERS =====================

@app.errorhandler(404)
def not_found_error(error: Any) -> tuple:
    return jsonify({'error': 'Not found'}), 404

@app.errorhandler(405)
def method_not_allowed_error(error: Any) -> tuple:
    return jsonify({'error': 'Method not allowed'}), 405

@app.errorhandler(500)
def internal_error(error: Any) -> tuple:
    db.session.rollback()
    return jsonify({'error': 'Internal server error'}), 500

# ===================== CATALOGUE ROUTES =====================

@app.route('/api/game-modes')
def list_game_modes():
    return jsonify([catalogue_entry(info) for info in GAME_MODES])

@app.route('/api/regions')
def list_regions():
    return jsonify([catalogue_entry(info) for info in REGIONS])

@app.route('/api/trivia-facts')
def list_trivia_facts():
    return jsonify(TRIVIA_FACTS)

@app.route('/api/questions/<mode>/<region>')
def get_questions(mode, region):
    """Questions for a game in the given mode and region"""
    try:
        game_mode = parse_game_mode(mode)
        game_region = parse_region(region)
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        limit = _positive_int_arg('limit', app.config['DEFAULT_QUESTION_LIMIT'])
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        questions = storage.get_questions_by_mode(game_mode, game_region, limit)
        return jsonify(_serialize_all(questions))
    except Exception as e:
        app.logger.error(f"Error fetching questions for {mode}/{region}: {e}")
        return jsonify({'error': 'Failed to fetch questions'}), 500

# ===================== AUTH ROUTES =====================

@app.route('/api/auth/login', methods=['POST'])
def login():
    """Identify the player by username, creating the account on first visit"""
    try:
        data = _require_json_fields('username')
        username = data['username']
        if not isinstance(username, str) or not username.strip():
            raise ValueError('username must be a non-empty string')
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        user = storage.upsert_user(
            username.strip(),
            email=data.get('email'),
            first_name=data.get('first_name'),
            last_name=data.get('last_name'),
        )
    except Exception as e:
        app.logger.error(f"Error signing in {data.get('username')}: {e}")
        return jsonify({'error': 'Failed to sign in'}), 500

    session['user_id'] = user.id
    session['user_name'] = user.username
    app.logger.info(f"User {user.id} signed in")
    return jsonify(user.to_dict())

@app.route('/api/auth/logout', methods=['POST'])
def logout():
    session.clear()
    return jsonify({'success': True})

@app.route('/api/auth/user')
@login_required
def current_user():
    user = storage.get_user(session['user_id'])
    if not user:
        session.clear()
        return jsonify({'error': 'User not found'}), 404
    return jsonify(user.to_dict())

# ===================== GAME SESSION ROUTES =====================

@app.route('/api/sessions', methods=['POST'])
def create_session():
    """Start a new game session"""
    try:
        data = _require_json_fields('mode', 'region')
        game_mode = parse_game_mode(data['mode'])
        game_region = parse_region(data['region'])
        user_id = session.get('user_id') or data.get('user_id')
        if user_id is not None:
            user_id = _non_negative_int(user_id, 'user_id')
    except ValueError as e:
        return jsonify({'error': 'Invalid session data', 'details': str(e)}), 400

    if user_id is not None and not storage.get_user(user_id):
        return jsonify({'error': 'User not found'}), 404

    try:
        game_session = storage.create_game_session(game_mode, game_region, user_id)
        return jsonify(game_session.to_dict()), 201
    except Exception as e:
        app.logger.error(f"Error creating game session: {e}")
        return jsonify({'error': 'Failed to create session'}), 500

@app.route('/api/sessions/<int:session_id>')
def get_session(session_id):
    game_session = storage.get_game_session(session_id)
    if not game_session:
        return jsonify({'error': 'Session not found'}), 404
    return jsonify(game_session.to_dict())

@app.route('/api/sessions/<int:session_id>', methods=['PATCH'])
def update_session(session_id):
    game_session = storage.get_game_session(session_id)
    if not game_session:
        return jsonify({'error': 'Session not found'}), 404

    try:
        data = _require_json_fields()
        updates = {}
        for key, value in data.items():
            if key == 'is_completed':
                if not isinstance(value, bool):
                    raise ValueError('is_completed must be a boolean')
                updates[key] = value
            elif key in ('score', 'questions_answered', 'correct_answers', 'current_streak', 'max_streak'):
                updates[key] = _non_negative_int(value, key)

        # Counts must stay consistent with the stored row after the merge
        answered = updates.get('questions_answered', game_session.questions_answered or 0)
        correct = updates.get('correct_answers', game_session.correct_answers or 0)
        if correct > answered:
            raise ValueError('correct_answers cannot exceed questions_answered')
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        game_session = storage.update_game_session(session_id, updates)
    except Exception as e:
        app.logger.error(f"Error updating session {session_id}: {e}")
        return jsonify({'error': 'Failed to update session'}), 500

    if not game_session:
        return jsonify({'error': 'Session not found'}), 404
    return jsonify(game_session.to_dict())

@app.route('/api/sessions/<int:session_id>/complete', methods=['POST'])
def complete_session(session_id):
    try:
        game_session = storage.complete_game_session(session_id)
    except Exception as e:
        app.logger.error(f"Error completing session {session_id}: {e}")
        return jsonify({'error': 'Failed to complete session'}), 500

    if not game_session:
        return jsonify({'error': 'Session not found'}), 404

    app.logger.info(f"Session {session_id} completed with score {game_session.score}")
    result = game_session.to_dict()
    result['accuracy'] = round(game_session.accuracy * 100)
    result['rank_title'] = get_rank_title(game_session.score)
    return jsonify(result)

@app.route('/api/answers', methods=['POST'])
def submit_answer():
    """Check an answer and update the session's score and streak"""
    try:
        data = _require_json_fields('session_id', 'question_id', 'user_answer')
        session_id = _non_negative_int(data['session_id'], 'session_id')
        question_id = _non_negative_int(data['question_id'], 'question_id')
        time_spent = data.get('time_spent')
        if time_spent is not None:
            time_spent = _non_negative_int(time_spent, 'time_spent')
        user_answer = str(data['user_answer'])
    except ValueError as e:
        return jsonify({'error': 'Invalid answer data', 'details': str(e)}), 400

    if not storage.get_game_session(session_id):
        return jsonify({'error': 'Session not found'}), 404

    try:
        result = storage.record_answer(session_id, question_id, user_answer, time_spent)
    except Exception as e:
        app.logger.error(f"Error submitting answer for session {session_id}: {e}")
        return jsonify({'error': 'Failed to submit answer'}), 500

    if result is None:
        return jsonify({'error': 'Question not found'}), 404

    response = result['answer'].to_dict()
    response['question'] = result['question'].to_dict()
    response['score_earned'] = result['score_earned']
    return jsonify(response)

# ===================== PLAYER ROUTES =====================

@app.route('/api/users/<int:user_id>/sessions')
def get_user_sessions(user_id):
    try:
        return jsonify(_serialize_all(storage.get_user_game_sessions(user_id)))
    except Exception as e:
        app.logger.error(f"Error fetching sessions for user {user_id}: {e}")
        return jsonify({'error': 'Failed to fetch user sessions'}), 500

@app.route('/api/users/<int:user_id>/achievements')
def get_user_achievements(user_id):
    try:
        return jsonify(_serialize_all(storage.get_user_achievements(user_id)))
    except Exception as e:
        app.logger.error(f"Error fetching achievements for user {user_id}: {e}")
        return jsonify({'error': 'Failed to fetch achievements'}), 500

@app.route('/api/leaderboard')
def get_leaderboard():
    try:
        limit = _positive_int_arg('limit', app.config['LEADERBOARD_LIMIT'])
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    try:
        entries = storage.get_leaderboard(limit)
    except Exception as e:
        app.logger.error(f"Error building leaderboard: {e}")
        return jsonify({'error': 'Failed to fetch leaderboard'}), 500

    return jsonify([{
        'user': entry['user'].to_dict(),
        'total_score': entry['total_score'],
        'rank': entry['rank'],
        'rank_title': get_rank_title(entry['total_score']),
    } for entry in entries])

# ===================== LEARNING PATH ROUTES =====================

@app.route('/api/learning/insights')
@login_required
def get_learning_insights():
    """Strengths and weaknesses for the signed-in player"""
    try:
        sessions = storage.get_session_history(session['user_id'])
        insights = LearningPathEngine().analyze_user_performance(sessions)
        return jsonify(_serialize_all(insights))
    except Exception as e:
        app.logger.error(f"Error building learning insights: {e}")
        return jsonify({'error': 'Failed to fetch learning insights'}), 500

@app.route('/api/learning/recommendations')
@login_required
def get_learning_recommendations():
    """What the signed-in player should play next"""
    try:
        sessions = storage.get_session_history(session['user_id'])
        recommendations = LearningPathEngine().generate_recommendations(sessions)
        return jsonify(_serialize_all(recommendations))
    except Exception as e:
        app.logger.error(f"Error building recommendations: {e}")
        return jsonify({'error': 'Failed to fetch recommendations'}), 500

@app.route('/api/learning/progress')
@login_required
def get_learning_progress():
    try:
        sessions = storage.get_session_history(session['user_id'])
        return jsonify(LearningPathEngine().summarize_performance(sessions))
    except Exception as e:
        app.logger.error(f"Error building progress summary: {e}")
        return jsonify({'error': 'Failed to fetch progress'}), 500

# Health check endpoint for deployment monitoring
@app.route('/api/health')
def health_check():
    try:
        db.session.execute(text('SELECT 1'))
        db_status = "healthy"
    except Exception:
        db_status = "unhealthy"

    return jsonify({
        'status': 'ok',
        'database': db_status,
        'timestamp': datetime.now(timezone.utc).isoformat()
    })

with app.app_context():
    db.create_all()
