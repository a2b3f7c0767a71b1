"""Programs module - periodized program generation and progression.

This module provides:
- Exercise catalog loading and filtering by body region and injury
- The weekly periodization table and phase/focus calculators
- Program skeleton generation
- Session workout synthesis with memoization
- Completion tracking and the phase gate evaluator
"""

from hygie.programs.catalog import load_catalog
from hygie.programs.categorization import (
    body_region_of,
    exclude_by_injury,
    filter_by_region,
    map_weakness_to_region,
    prioritize_by_weaknesses,
)
from hygie.programs.errors import (
    CatalogExhaustedError,
    InvalidConfigurationError,
    InvalidReferenceError,
    ProgramEngineError,
    ProgramInvariantError,
)
from hygie.programs.models import Program, SynthesisResult, WorkoutPlan
from hygie.programs.periodization import (
    is_gate_week,
    program_phase,
    session_focus,
    week_scheme,
    weekly_focus,
)
from hygie.programs.progression import (
    calculate_progression,
    evaluate_gate,
    mark_completed,
    record_completion,
    rewind_to_week,
)
from hygie.programs.schemas import ClientProfile, SessionRecord
from hygie.programs.serializers import deserialize_program, serialize_program
from hygie.programs.service import ProgramEngine
from hygie.programs.skeleton import create_program
from hygie.programs.swap import swap_exercise
from hygie.programs.synthesizer import split_pattern, synthesize_session

__all__ = [
    "CatalogExhaustedError",
    "ClientProfile",
    "InvalidConfigurationError",
    "InvalidReferenceError",
    "Program",
    "ProgramEngine",
    "ProgramEngineError",
    "ProgramInvariantError",
    "SessionRecord",
    "SynthesisResult",
    "WorkoutPlan",
    "body_region_of",
    "calculate_progression",
    "create_program",
    "deserialize_program",
    "evaluate_gate",
    "exclude_by_injury",
    "filter_by_region",
    "is_gate_week",
    "load_catalog",
    "map_weakness_to_region",
    "mark_completed",
    "prioritize_by_weaknesses",
    "program_phase",
    "record_completion",
    "rewind_to_week",
    "serialize_program",
    "session_focus",
    "split_pattern",
    "swap_exercise",
    "synthesize_session",
    "week_scheme",
    "weekly_focus",
]
