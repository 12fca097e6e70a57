"""
Learning path engine for GeoWiz.

Looks at a player's game-session history and produces two things:

1. Insights - strengths, weaknesses and opportunities derived from accuracy
   per game mode and per region, plus streak consistency.
2. Recommendations - a short, prioritised list of what to play next, each
   carrying a mode/region pair the client can use to start a game.

Every function here is a pure computation over the list it is given. Nothing
is cached or written back, so the same history always yields the same output.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Any, Iterable, List, Optional, Sequence

from game_data import (
    GameMode, Region, HARDEST_MODE, SUGGESTABLE_MODES, EXPLORABLE_REGIONS,
    BEGINNER_RECOMMENDATIONS, format_display_name,
)

logger = logging.getLogger(__name__)

MASTERY_THRESHOLD = 0.8
STRUGGLE_THRESHOLD = 0.5
FOCUS_THRESHOLD = 0.6
EXPLORE_THRESHOLD = 0.7
CHALLENGE_THRESHOLD = 0.9
REGION_MIN_QUESTIONS = 5
CONSISTENCY_STREAK = 5
RECENT_SESSION_COUNT = 3
MAX_RECOMMENDATIONS = 4


@dataclass(frozen=True)
class SessionRecord:
    """Read-only snapshot of one game session, as the engine sees it."""

    mode: GameMode
    region: Region
    questions_answered: int = 0
    correct_answers: int = 0
    current_streak: int = 0
    max_streak: int = 0
    is_completed: bool = False

    @classmethod
    def from_model(cls, session) -> "SessionRecord":
        return cls(
            mode=GameMode(session.mode),
            region=Region(session.region),
            questions_answered=session.questions_answered or 0,
            correct_answers=session.correct_answers or 0,
            current_streak=session.current_streak or 0,
            max_streak=session.max_streak or 0,
            is_completed=bool(session.is_completed),
        )


@dataclass(frozen=True)
class LearningInsight:
    type: str  # strength | weakness | opportunity
    category: str
    description: str
    evidence: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PersonalizedRecommendation:
    id: str
    title: str
    description: str
    priority: str  # high | medium | low
    suggested_mode: Optional[GameMode]
    suggested_region: Optional[Region]
    reasoning: str
    type: str  # focus_area | difficulty_adjustment | new_region | skill_building

    @property
    def is_playable(self) -> bool:
        """True when the client can start a game straight from this card"""
        return self.suggested_mode is not None and self.suggested_region is not None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['suggested_mode'] = self.suggested_mode.value if self.suggested_mode else None
        data['suggested_region'] = self.suggested_region.value if self.suggested_region else None
        return data


class _Tally:
    """Running totals for one mode or region."""

    __slots__ = ('total_questions', 'correct_answers')

    def __init__(self):
        self.total_questions = 0
        self.correct_answers = 0

    @property
    def has_answers(self) -> bool:
        return self.total_questions > 0

    @property
    def accuracy(self) -> float:
        if self.total_questions <= 0:
            return 0.0
        return self.correct_answers / self.total_questions

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_questions': self.total_questions,
            'correct_answers': self.correct_answers,
            'accuracy': self.accuracy,
        }


def _percent(ratio: float) -> int:
    # Half-up, so 0.845 reads as 85% rather than banker's 84%
    return int(math.floor(ratio * 100 + 0.5))


def _tally_by(sessions: Iterable, key: str) -> Dict[Any, _Tally]:
    """Group sessions by ``key`` in first-encountered order."""
    tallies: Dict[Any, _Tally] = {}
    for session in sessions:
        tally = tallies.setdefault(getattr(session, key), _Tally())
        tally.total_questions += session.questions_answered
        tally.correct_answers += session.correct_answers
    return tallies


def _recent_accuracy(sessions: Sequence) -> float:
    recent = list(sessions)[-RECENT_SESSION_COUNT:]
    total = sum(s.questions_answered for s in recent)
    if total <= 0:
        return 0.0
    return sum(s.correct_answers for s in recent) / total


def _max_streak(sessions: Sequence) -> int:
    return max((s.max_streak for s in sessions), default=0)


class LearningPathEngine:
    """Builds insights and next-step recommendations from session history.

    Holds no state; create one wherever it is needed.
    """

    def analyze_user_performance(self, sessions: Sequence) -> List[LearningInsight]:
        if not sessions:
            return [LearningInsight(
                type="opportunity",
                category="Getting Started",
                description="Ready to begin your geography journey",
                evidence="No games played yet",
            )]

        insights: List[LearningInsight] = []

        for mode, stats in _tally_by(sessions, 'mode').items():
            if not stats.has_answers:
                continue
            name = format_display_name(mode.value)
            if stats.accuracy >= MASTERY_THRESHOLD:
                insights.append(LearningInsight(
                    type="strength",
                    category=f"{name} Mastery",
                    description=f"Excellent performance in {mode.value.replace('-', ' ')} questions",
                    evidence=f"{_percent(stats.accuracy)}% accuracy across {stats.total_questions} questions",
                ))
            elif stats.accuracy < STRUGGLE_THRESHOLD:
                insights.append(LearningInsight(
                    type="weakness",
                    category=f"{name} Challenge",
                    description=f"Room for improvement in {mode.value.replace('-', ' ')} questions",
                    evidence=f"{_percent(stats.accuracy)}% accuracy - consider more practice",
                ))

        for region, stats in _tally_by(sessions, 'region').items():
            # A single lucky session is not expertise
            if stats.total_questions < REGION_MIN_QUESTIONS:
                continue
            if stats.accuracy >= MASTERY_THRESHOLD:
                name = format_display_name(region.value)
                insights.append(LearningInsight(
                    type="strength",
                    category=f"{name} Expert",
                    description=f"Strong knowledge of {region.value.replace('-', ' ')} geography",
                    evidence=f"{_percent(stats.accuracy)}% accuracy in {name} across {stats.total_questions} questions",
                ))

        best_streak = _max_streak(sessions)
        if best_streak >= CONSISTENCY_STREAK:
            insights.append(LearningInsight(
                type="strength",
                category="Consistency",
                description="Great ability to maintain focus and accuracy",
                evidence=f"Achieved {best_streak} question streak",
            ))

        logger.debug("Built %d insights from %d sessions", len(insights), len(sessions))
        return insights

    def generate_recommendations(self, sessions: Sequence) -> List[PersonalizedRecommendation]:
        if not sessions:
            return self.get_beginner_recommendations()

        mode_stats = _tally_by(sessions, 'mode')
        region_stats = _tally_by(sessions, 'region')
        recent = _recent_accuracy(sessions)
        recommendations: List[PersonalizedRecommendation] = []

        # Weakest mode first; the earliest-played mode wins ties
        weakest = None
        for mode, stats in mode_stats.items():
            if not stats.has_answers or stats.accuracy >= FOCUS_THRESHOLD:
                continue
            if weakest is None or stats.accuracy < mode_stats[weakest].accuracy:
                weakest = mode
        if weakest is not None:
            name = format_display_name(weakest.value)
            recommendations.append(PersonalizedRecommendation(
                id=f"improve-{weakest.value}",
                title=f"Master {name}",
                description=f"Focus on improving your {name} skills with targeted practice",
                priority="high",
                suggested_mode=weakest,
                suggested_region=Region.GLOBAL,
                reasoning=f"Current accuracy: {_percent(mode_stats[weakest].accuracy)}%. Practice will help build confidence.",
                type="focus_area",
            ))

        best_mode = self._best_mode(mode_stats)
        mastered = [m for m, s in mode_stats.items() if s.has_answers and s.accuracy >= MASTERY_THRESHOLD]
        untried_modes = [m for m in SUGGESTABLE_MODES if m not in mode_stats]
        if mastered and untried_modes:
            target = untried_modes[0]
            name = format_display_name(target.value)
            top = mode_stats[best_mode]
            recommendations.append(PersonalizedRecommendation(
                id=f"challenge-{target.value}",
                title=f"Try {name}",
                description=f"Ready for a new challenge? Test your skills with {name}",
                priority="medium",
                suggested_mode=target,
                suggested_region=Region.GLOBAL,
                reasoning=(
                    f"{_percent(top.accuracy)}% accuracy in {format_display_name(best_mode.value)} "
                    "shows you're ready for more advanced challenges."
                ),
                type="skill_building",
            ))

        untried_regions = [r for r in EXPLORABLE_REGIONS if r not in region_stats]
        if untried_regions and recent >= EXPLORE_THRESHOLD:
            target = untried_regions[0]
            name = format_display_name(target.value)
            recommendations.append(PersonalizedRecommendation(
                id=f"explore-{target.value}",
                title=f"Explore {name}",
                description=f"Expand your geographical knowledge to {name}",
                priority="medium",
                suggested_mode=best_mode,
                suggested_region=target,
                reasoning=f"{_percent(recent)}% recent accuracy suggests you're ready to explore new regions.",
                type="new_region",
            ))

        if recent >= CHALLENGE_THRESHOLD:
            recommendations.append(PersonalizedRecommendation(
                id="difficulty-increase",
                title="Challenge Yourself",
                description="Your accuracy is excellent! Try harder game modes to push your limits",
                priority="low",
                suggested_mode=HARDEST_MODE,
                suggested_region=Region.GLOBAL,
                reasoning=f"{_percent(recent)}% recent accuracy shows you're ready for harder challenges.",
                type="difficulty_adjustment",
            ))

        logger.debug("Built %d recommendations from %d sessions", len(recommendations), len(sessions))
        return recommendations[:MAX_RECOMMENDATIONS]

    def summarize_performance(self, sessions: Sequence) -> Dict[str, Any]:
        """Per-mode and per-region breakdown for the progress screen"""
        mode_stats = _tally_by(sessions, 'mode')
        region_stats = _tally_by(sessions, 'region')
        total_questions = sum(s.questions_answered for s in sessions)
        correct = sum(s.correct_answers for s in sessions)
        average_streak = (
            sum(s.max_streak for s in sessions) / len(sessions) if sessions else 0.0
        )
        return {
            'total_sessions': len(sessions),
            'completed_sessions': sum(1 for s in sessions if s.is_completed),
            'total_questions': total_questions,
            'correct_answers': correct,
            'accuracy': correct / total_questions if total_questions > 0 else 0.0,
            'recent_accuracy': _recent_accuracy(sessions),
            'max_streak': _max_streak(sessions),
            'average_streak': average_streak,
            'modes': {mode.value: stats.to_dict() for mode, stats in mode_stats.items()},
            'regions': {region.value: stats.to_dict() for region, stats in region_stats.items()},
        }

    def get_beginner_recommendations(self) -> List[PersonalizedRecommendation]:
        return [PersonalizedRecommendation(**entry) for entry in BEGINNER_RECOMMENDATIONS]

    @staticmethod
    def _best_mode(mode_stats: Dict[GameMode, _Tally]) -> GameMode:
        best = None
        for mode, stats in mode_stats.items():
            if not stats.has_answers:
                continue
            if best is None or stats.accuracy > mode_stats[best].accuracy:
                best = mode
        return best or GameMode.CAPITALS
