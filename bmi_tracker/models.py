"""Data models for the BMI tracking application."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class WeightUnit(str, Enum):
    KG = "kg"
    LBS = "lbs"

    @property
    def display_name(self) -> str:
        return "Kilograms" if self is WeightUnit.KG else "Pounds"


class HeightUnit(str, Enum):
    CM = "cm"
    INCHES = "inches"

    @property
    def display_name(self) -> str:
        return "Centimeters" if self is HeightUnit.CM else "Inches"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class BMICategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"
    UNKNOWN = "Unknown"  # only reachable for NaN


@dataclass(frozen=True)
class WeightValue:
    """A weight magnitude tagged with its unit."""
    magnitude: float
    unit: WeightUnit


@dataclass(frozen=True)
class HeightValue:
    """A height magnitude tagged with its unit."""
    magnitude: float
    unit: HeightUnit


@dataclass(frozen=True)
class BMIResult:
    """A computed BMI with its derived category and advisory text."""
    value: float
    category: BMICategory
    description: str


@dataclass(frozen=True)
class IdealWeightRange:
    """Weight bounds in kilograms for a healthy BMI at a given height."""
    min_kg: float
    max_kg: float

    def __iter__(self):
        return iter((self.min_kg, self.max_kg))


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a field check. ``message`` is set exactly when invalid.

    Unpacks as ``(is_valid, message)``.
    """
    is_valid: bool
    message: Optional[str] = None

    def __post_init__(self):
        if self.is_valid == (self.message is not None):
            raise ValueError("message must be set if and only if the outcome is invalid")

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(True, None)

    @classmethod
    def fail(cls, message: str) -> "ValidationOutcome":
        return cls(False, message)

    def __iter__(self):
        return iter((self.is_valid, self.message))

    def __bool__(self) -> bool:
        return self.is_valid


@dataclass
class UserProfile:
    """Body metrics stored per user, in the units they were entered in."""
    user_id: str
    weight: float
    height: float
    gender: str  # Male, Female, Other
    weight_unit: str = WeightUnit.KG.value
    height_unit: str = HeightUnit.CM.value
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class WeightEntry:
    """A single point in a user's weight history."""
    user_id: str
    weight: float
    unit: str
    recorded_at: datetime
    id: Optional[int] = None


@dataclass
class BMIRecord:
    """A BMI value as it was computed and stored at a point in time."""
    user_id: str
    bmi: float
    category: str
    calculated_at: datetime
    id: Optional[int] = None


@dataclass
class Dashboard:
    """Everything the BMI dashboard shows for one user."""
    profile: Optional[UserProfile]
    latest: Optional[BMIRecord]
    weight_history: list = field(default_factory=list)  # List[WeightEntry]
    bmi_history: list = field(default_factory=list)  # List[BMIRecord]
    description: str = ""
    weight_kg: Optional[float] = None  # Profile weight, for the formula breakdown
    height_m: Optional[float] = None

    @property
    def has_data(self) -> bool:
        return self.latest is not None
