from __future__ import annotations

from enum import Enum


class GradeLevel(str, Enum):
    """Grade levels served by the counseling room (kindergarten to 8th)."""

    K = "K"
    G1 = "1"
    G2 = "2"
    G3 = "3"
    G4 = "4"
    G5 = "5"
    G6 = "6"
    G7 = "7"
    G8 = "8"

    @property
    def label(self) -> str:
        return "Kindergarten" if self is GradeLevel.K else f"Grade {self.value}"


class Emotion(str, Enum):
    """How the student reports feeling on arrival."""

    ANGRY = "Angry"
    SAD = "Sad"
    ANXIOUS = "Anxious/Worried"
    FRUSTRATED = "Frustrated"
    OVERWHELMED = "Overwhelmed"
    TIRED = "Tired"
    OTHER = "Other"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"

    @property
    def label(self) -> str:
        return "Morning (before 12pm)" if self is TimeOfDay.MORNING else "Afternoon (12pm+)"
