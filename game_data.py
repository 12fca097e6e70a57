# game_data.py - Static game catalogue: modes, regions, ranks and starter recommendations

import enum
from typing import Dict, Any, List, Optional

class GameMode(enum.Enum):
    CAPITALS = "capitals"
    MISPRONOUNCED_CAPITALS = "mispronounced-capitals"
    MULTIPLE_CAPITALS = "multiple-capitals"
    HIDDEN_OUTLINES = "hidden-outlines"
    FLAG_QUIRKS = "flag-quirks"
    MYSTERY_MIX = "mystery-mix"
    CUSTOM = "custom"

class Region(enum.Enum):
    GLOBAL = "global"
    EUROPE = "europe"
    ASIA = "asia"
    AFRICA = "africa"
    NORTH_AMERICA = "north-america"
    SOUTH_AMERICA = "south-america"
    OCEANIA = "oceania"
    CUSTOM = "custom"

# Hardest built-in mode, suggested when a player is ready for a step up
HARDEST_MODE = GameMode.MYSTERY_MIX

# Modes and regions the learning path may point a player at, in suggestion order.
# "custom" is user-built and "global" is everyone's default, so neither is suggested.
SUGGESTABLE_MODES = [mode for mode in GameMode if mode is not GameMode.CUSTOM]
EXPLORABLE_REGIONS = [
    region for region in Region
    if region not in (Region.GLOBAL, Region.CUSTOM)
]

GAME_MODES: List[Dict[str, Any]] = [
    {
        'id': GameMode.CAPITALS,
        'title': "World Capitals",
        'description': "The classic: match every country to its capital city",
        'difficulty': "Easy",
        'difficulty_stars': 1,
        'badge': "Start Here",
    },
    {
        'id': GameMode.MISPRONOUNCED_CAPITALS,
        'title': "Mispronounced Capitals",
        'description': "Test your knowledge on capitals people often say wrong",
        'difficulty': "Medium",
        'difficulty_stars': 3,
        'badge': "Popular Choice",
    },
    {
        'id': GameMode.MULTIPLE_CAPITALS,
        'title': "Multiple Capitals",
        'description': "Countries with multiple capitals like South Africa",
        'difficulty': "Hard",
        'difficulty_stars': 4,
        'badge': "Mind Bender",
    },
    {
        'id': GameMode.HIDDEN_OUTLINES,
        'title': "Hidden Outlines",
        'description': "Identify countries from partially blurred map shapes",
        'difficulty': "Medium",
        'difficulty_stars': 3,
        'badge': "Visual Challenge",
    },
    {
        'id': GameMode.FLAG_QUIRKS,
        'title': "Flag Quirks",
        'description': "Visual oddities and fascinating flag histories",
        'difficulty': "Easy",
        'difficulty_stars': 2,
        'badge': "Colorful Fun",
    },
    {
        'id': GameMode.MYSTERY_MIX,
        'title': "Mystery Mix",
        'description': "Unexpected trivia: microstates, borders, altitudes",
        'difficulty': "Expert",
        'difficulty_stars': 5,
        'badge': "Expert Level",
    },
    {
        'id': GameMode.CUSTOM,
        'title': "Custom Challenge",
        'description': "Create your own geography adventure",
        'difficulty': "Medium",
        'difficulty_stars': 0,
        'badge': "Build Your Own",
    },
]

REGIONS: List[Dict[str, Any]] = [
    {'id': Region.GLOBAL, 'name': "Global Challenge", 'description': "All countries worldwide", 'country_count': 195, 'badge': "Ultimate"},
    {'id': Region.EUROPE, 'name': "Europe", 'description': "From Iceland to Turkey", 'country_count': 50, 'badge': "Popular"},
    {'id': Region.ASIA, 'name': "Asia", 'description': "Largest continent challenge", 'country_count': 48, 'badge': "Challenging"},
    {'id': Region.AFRICA, 'name': "Africa", 'description': "Diverse nations and cultures", 'country_count': 54, 'badge': "Diverse"},
    {'id': Region.NORTH_AMERICA, 'name': "North America", 'description': "From Canada to Panama", 'country_count': 23, 'badge': None},
    {'id': Region.SOUTH_AMERICA, 'name': "South America", 'description': "From Colombia to Chile", 'country_count': 12, 'badge': None},
    {'id': Region.OCEANIA, 'name': "Oceania", 'description': "Pacific Island nations", 'country_count': 14, 'badge': None},
    {'id': Region.CUSTOM, 'name': "Custom Set", 'description': "Create your own challenge", 'country_count': 0, 'badge': None},
]

# (minimum total score, title), highest first
RANK_TITLES = [
    (2000, "Cartography Sorcerer"),
    (1500, "Geography Gladiator"),
    (1000, "Atlas Explorer"),
    (500, "Map Navigator"),
    (200, "Compass Cadet"),
    (0, "Geography Novice"),
]

TRIVIA_FACTS = [
    {
        'title': "Highest Capital City",
        'description': "La Rinconada, Peru, sits at 16,732 feet above sea level, making it the highest permanent settlement on Earth!",
    },
    {
        'title': "Continent Movement",
        'description': "Africa and South America are moving apart at about the same rate your fingernails grow - 2.5 cm per year!",
    },
    {
        'title': "Smallest Country",
        'description': "Vatican City is so small that its entire area is just 0.17 square miles - you could walk across it in 20 minutes!",
    },
]

# Shown to players with no history yet. Order is the display order.
BEGINNER_RECOMMENDATIONS: List[Dict[str, Any]] = [
    {
        'id': "start-capitals",
        'title': "Master World Capitals",
        'description': "Build your foundation with capital cities - the cornerstone of geography knowledge",
        'priority': "high",
        'suggested_mode': GameMode.CAPITALS,
        'suggested_region': Region.GLOBAL,
        'reasoning': "Capital cities are the perfect starting point. Learn country-capital relationships that form the basis of all geographic knowledge.",
        'type': "skill_building",
    },
    {
        'id': "explore-europe",
        'title': "Explore European Geography",
        'description': "Start with Europe - familiar names, manageable size, rich history",
        'priority': "high",
        'suggested_mode': GameMode.CAPITALS,
        'suggested_region': Region.EUROPE,
        'reasoning': "Europe offers a perfect balance of challenge and familiarity, with countries you've likely heard of before.",
        'type': "new_region",
    },
    {
        'id': "try-asia",
        'title': "Challenge Yourself with Asia",
        'description': "Ready for something different? Test your knowledge of Asian capitals and cultures",
        'priority': "medium",
        'suggested_mode': GameMode.CAPITALS,
        'suggested_region': Region.ASIA,
        'reasoning': "Asia provides an excellent challenge with diverse countries and fascinating capital cities.",
        'type': "new_region",
    },
    {
        'id': "flag-basics",
        'title': "Learn Flag Patterns",
        'description': "Discover the stories behind country flags and their unique quirks",
        'priority': "medium",
        'suggested_mode': GameMode.FLAG_QUIRKS,
        'suggested_region': Region.GLOBAL,
        'reasoning': "Flags are visual and memorable - a fun way to connect countries with their symbols and history.",
        'type': "skill_building",
    },
    {
        'id': "americas-focus",
        'title': "Discover the Americas",
        'description': "From Canada to Chile - explore North and South American geography",
        'priority': "medium",
        'suggested_mode': GameMode.CAPITALS,
        'suggested_region': Region.NORTH_AMERICA,
        'reasoning': "The Americas offer diverse geography and interesting capital cities to learn.",
        'type': "new_region",
    },
    {
        'id': "pronunciation-fun",
        'title': "Pronunciation Challenge",
        'description': "Think you know how to say those tricky capital names? Test yourself!",
        'priority': "low",
        'suggested_mode': GameMode.MISPRONOUNCED_CAPITALS,
        'suggested_region': Region.GLOBAL,
        'reasoning': "Once you know the capitals, challenge yourself with correct pronunciation - it's trickier than you think!",
        'type': "skill_building",
    },
]


def format_display_name(slug: str) -> str:
    """Turn a slug like 'north-america' into 'North America'"""
    return ' '.join(word[:1].upper() + word[1:] for word in slug.split('-'))

def get_game_mode_info(mode: GameMode) -> Optional[Dict[str, Any]]:
    for info in GAME_MODES:
        if info['id'] is mode:
            return info
    return None

def get_region_info(region: Region) -> Optional[Dict[str, Any]]:
    for info in REGIONS:
        if info['id'] is region:
            return info
    return None

def get_rank_title(score: int) -> str:
    """Rank title shown on the results screen for a given score"""
    for threshold, title in RANK_TITLES:
        if score >= threshold:
            return title
    return RANK_TITLES[-1][1]

def parse_game_mode(value: str) -> GameMode:
    """Convert a request value to a GameMode, raising ValueError if unknown"""
    try:
        return GameMode(value)
    except ValueError:
        raise ValueError(f"Unknown game mode: {value}")

def parse_region(value: str) -> Region:
    """Convert a request value to a Region, raising ValueError if unknown"""
    try:
        return Region(value)
    except ValueError:
        raise ValueError(f"Unknown region: {value}")

def catalogue_entry(info: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-ready copy of a mode or region table entry"""
    entry = dict(info)
    entry['id'] = info['id'].value
    return entry
