from __future__ import annotations

from enum import Enum


class Trade(str, Enum):
    ELECTRICIAN = "Electrician"
    PLUMBER = "Plumber"
    CARPENTER = "Carpenter"
    MECHANIC = "Mechanic"
    WELDER = "Welder"
    HVAC_TECHNICIAN = "HVAC Technician"
    MASON = "Mason"
    PAINTER = "Painter"
    ROOFER = "Roofer"
    OTHER = "Other"


class DailyLogStatus(str, Enum):
    LEARNING = "learning"
    CHALLENGING = "challenging"
    NEUTRAL = "neutral"
    GOOD = "good"


class QuestionCategory(str, Enum):
    LEARNING = "learning"
    PROBLEM_SOLVING = "problem-solving"
    ACHIEVEMENT = "achievement"
    REFLECTION = "reflection"


def option_values(enum_type: type[Enum]) -> list[str]:
    return [member.value for member in enum_type]


__all__ = ["Trade", "DailyLogStatus", "QuestionCategory", "option_values"]
