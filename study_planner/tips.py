# study_planner/tips.py
from typing import Dict, List, Tuple


STUDY_TIPS: Dict[int, List[str]] = {
    1: [
        "Quick review sessions are sufficient",
        "Use flashcards for key concepts",
        "Test yourself with practice questions",
    ],
    2: [
        "Regular short study sessions work well",
        "Create summary notes",
        "Teach the material to someone else",
    ],
    3: [
        "Break down into smaller topics",
        "Use active recall techniques",
        "Schedule regular review sessions",
    ],
    4: [
        "Focus during peak energy hours",
        "Use the Feynman technique",
        "Create mind maps for complex topics",
    ],
    5: [
        "Schedule multiple focused sessions",
        "Start with fundamentals first",
        "Use spaced repetition",
        "Seek help from tutors or study groups",
    ],
}
DEFAULT_TIPS_LEVEL = 3


def get_study_tips(difficulty: int) -> List[str]:
    """Study tips for a difficulty rating; unknown ratings get the level-3 tips."""
    tips = STUDY_TIPS.get(difficulty, STUDY_TIPS[DEFAULT_TIPS_LEVEL])
    return list(tips)


def describe_urgency(days_remaining: int) -> Tuple[str, str]:
    """(level, message) shown next to an exam date."""
    if days_remaining <= 3:
        return "critical", "Critical! Very limited time"
    if days_remaining <= 7:
        return "high", "High urgency"
    if days_remaining <= 14:
        return "medium", "Medium urgency"
    return "low", "Plenty of time"
