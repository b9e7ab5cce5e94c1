from core.domain.enums import DailyLogStatus, QuestionCategory, Trade, option_values

__all__ = [
    "Trade",
    "DailyLogStatus",
    "QuestionCategory",
    "option_values",
]
