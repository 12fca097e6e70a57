"""Integration tests for the HTTP API"""

import pytest

from data_seeder import seed_questions
from models import User


def _login(client, username="explorer"):
    response = client.post('/api/auth/login', json={'username': username})
    assert response.status_code == 200
    return response.get_json()


def _play(client, question_id, answers, mode="capitals", region="global"):
    created = client.post('/api/sessions', json={'mode': mode, 'region': region})
    assert created.status_code == 201
    session_id = created.get_json()['id']
    for answer in answers:
        client.post('/api/answers', json={
            'session_id': session_id, 'question_id': question_id, 'user_answer': answer,
        })
    return client.post(f'/api/sessions/{session_id}/complete').get_json()


@pytest.mark.integration
class TestGameplayApi:

    def test_catalogue_endpoints(self, client):
        modes = client.get('/api/game-modes').get_json()
        regions = client.get('/api/regions').get_json()

        assert modes[0]['id'] == "capitals"
        assert {r['id'] for r in regions} >= {"global", "europe", "oceania"}
        assert client.get('/api/trivia-facts').get_json()[0]['title'] == "Highest Capital City"

    def test_questions_endpoint(self, client, app):
        seed_questions()

        response = client.get('/api/questions/capitals/europe?limit=2')

        assert response.status_code == 200
        assert len(response.get_json()) == 2

    def test_unknown_mode_is_rejected(self, client):
        response = client.get('/api/questions/rivers/global')

        assert response.status_code == 400
        assert "Unknown game mode" in response.get_json()['error']

    def test_create_session_validates_body(self, client):
        assert client.post('/api/sessions', json={'mode': "capitals"}).status_code == 400
        assert client.post('/api/sessions', json={'mode': "capitals", 'region': "mars"}).status_code == 400
        assert client.post('/api/sessions', data="not json").status_code == 400

    def test_create_session_for_unknown_user(self, client):
        response = client.post('/api/sessions', json={'mode': "capitals", 'region': "global", 'user_id': 42})

        assert response.status_code == 404

    def test_answer_flow(self, client, question):
        created = client.post('/api/sessions', json={'mode': "capitals", 'region': "global"}).get_json()

        response = client.post('/api/answers', json={
            'session_id': created['id'], 'question_id': question.id,
            'user_answer': "Canberra", 'time_spent': 4,
        })
        body = response.get_json()

        assert response.status_code == 200
        assert body['is_correct'] is True
        assert body['score_earned'] == 100
        assert body['question']['fun_fact']

        state = client.get(f"/api/sessions/{created['id']}").get_json()
        assert state['score'] == 100
        assert state['current_streak'] == 1

    def test_answer_for_missing_question(self, client, make_session):
        game_session = make_session()

        response = client.post('/api/answers', json={
            'session_id': game_session.id, 'question_id': 999, 'user_answer': "x",
        })

        assert response.status_code == 404

    def test_answer_with_bad_payload(self, client, make_session):
        game_session = make_session()

        response = client.post('/api/answers', json={
            'session_id': game_session.id, 'question_id': -1, 'user_answer': "x",
        })

        assert response.status_code == 400

    def test_patch_and_complete_session(self, client, make_session):
        game_session = make_session()

        patched = client.patch(f'/api/sessions/{game_session.id}', json={'score': 1200})
        completed = client.post(f'/api/sessions/{game_session.id}/complete')

        assert patched.get_json()['score'] == 1200
        assert completed.get_json()['is_completed'] is True
        assert completed.get_json()['rank_title'] == "Atlas Explorer"
        assert client.patch(f'/api/sessions/{game_session.id}', json={'score': -5}).status_code == 400
        assert client.get('/api/sessions/999').status_code == 404
        assert client.post('/api/sessions/999/complete').status_code == 404

    def test_patch_keeps_correct_within_answered(self, client, make_session):
        game_session = make_session(answered=10, correct=5)
        url = f'/api/sessions/{game_session.id}'

        rejected = client.patch(url, json={'correct_answers': 50})
        state = client.get(url).get_json()
        accepted = client.patch(url, json={'questions_answered': 60, 'correct_answers': 50})

        assert rejected.status_code == 400
        assert "cannot exceed" in rejected.get_json()['error']
        assert state['correct_answers'] == 5
        assert accepted.status_code == 200
        assert accepted.get_json()['correct_answers'] == 50
        assert client.patch(url, json={'questions_answered': 40}).status_code == 400

    def test_patch_requires_boolean_completion_flag(self, client, make_session):
        game_session = make_session()
        url = f'/api/sessions/{game_session.id}'

        response = client.patch(url, json={'is_completed': "false"})

        assert response.status_code == 400
        assert client.get(url).get_json()['is_completed'] is False
        assert client.patch(url, json={'is_completed': True}).get_json()['is_completed'] is True

    def test_patch_unknown_session(self, client):
        assert client.patch('/api/sessions/999', json={'score': 1}).status_code == 404

    @pytest.mark.parametrize("path", [
        '/api/questions/capitals/global?limit=-3',
        '/api/questions/capitals/global?limit=0',
        '/api/leaderboard?limit=-1',
    ])
    def test_non_positive_limit_is_rejected(self, client, path):
        response = client.get(path)

        assert response.status_code == 400
        assert response.get_json()['error'] == "limit must be a positive integer"

    @pytest.mark.parametrize("username", [123, "   ", ["mapfan"]])
    def test_login_rejects_invalid_username(self, client, username):
        response = client.post('/api/auth/login', json={'username': username})

        assert response.status_code == 400
        assert User.query.count() == 0

    def test_login_trims_username(self, client):
        assert _login(client, "  mapfan ")['username'] == "mapfan"

    def test_leaderboard_and_user_listings(self, client, question):
        player = _login(client, "globetrotter")
        _play(client, question.id, ["canberra", "canberra"])

        board = client.get('/api/leaderboard').get_json()
        sessions = client.get(f"/api/users/{player['id']}/sessions").get_json()
        achievements = client.get(f"/api/users/{player['id']}/achievements").get_json()

        assert board[0]['user']['username'] == "globetrotter"
        assert board[0]['total_score'] == 210
        assert board[0]['rank'] == 1
        assert board[0]['rank_title'] == "Compass Cadet"
        assert len(sessions) == 1
        assert achievements == []

    def test_health(self, client):
        body = client.get('/api/health').get_json()

        assert body['status'] == "ok"
        assert body['database'] == "healthy"

    def test_unknown_route_returns_json(self, client):
        response = client.get('/api/nowhere')

        assert response.status_code == 404
        assert response.get_json() == {'error': 'Not found'}


@pytest.mark.integration
class TestLearningApi:

    @pytest.mark.parametrize("path", [
        '/api/learning/insights',
        '/api/learning/recommendations',
        '/api/learning/progress',
        '/api/auth/user',
    ])
    def test_requires_signed_in_player(self, client, path):
        assert client.get(path).status_code == 401

    def test_new_player_gets_starter_content(self, client):
        _login(client)

        insights = client.get('/api/learning/insights').get_json()
        recommendations = client.get('/api/learning/recommendations').get_json()

        assert insights == [{
            'type': "opportunity",
            'category': "Getting Started",
            'description': "Ready to begin your geography journey",
            'evidence': "No games played yet",
        }]
        assert 0 < len(recommendations) <= 6
        assert recommendations[0]['suggested_mode'] == "capitals"
        assert recommendations[0]['suggested_region'] == "global"

    def test_insights_follow_play_history(self, client, question):
        _login(client)
        for _ in range(2):
            _play(client, question.id, ["canberra"] * 5)

        insights = client.get('/api/learning/insights').get_json()
        categories = [i['category'] for i in insights]

        assert categories == ["Capitals Mastery", "Global Expert", "Consistency"]
        assert insights[0]['evidence'] == "100% accuracy across 10 questions"

    def test_recommendations_follow_play_history(self, client, question):
        _login(client)
        _play(client, question.id, ["paris", "canberra", "rome", "oslo", "lima"])

        recommendations = client.get('/api/learning/recommendations').get_json()

        assert recommendations[0]['id'] == "improve-capitals"
        assert recommendations[0]['priority'] == "high"
        assert recommendations[0]['reasoning'].startswith("Current accuracy: 20%")
        assert len(recommendations) <= 4

    def test_progress_summary(self, client, question):
        _login(client)
        _play(client, question.id, ["canberra", "sydney"])

        progress = client.get('/api/learning/progress').get_json()

        assert progress['total_sessions'] == 1
        assert progress['completed_sessions'] == 1
        assert progress['accuracy'] == 0.5
        assert progress['modes']['capitals']['total_questions'] == 2

    def test_logout_clears_player(self, client):
        _login(client)
        assert client.get('/api/auth/user').status_code == 200

        client.post('/api/auth/logout')

        assert client.get('/api/learning/insights').status_code == 401
