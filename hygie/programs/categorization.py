"""Exercise catalog filtering.

Pure functions that partition the catalog into body regions, drop entries
that conflict with declared injuries, and rank exercises against a
client's weaknesses. Nothing here mutates its inputs or takes a lock.
"""

from collections.abc import Iterable

from hygie.programs.enums import BodyRegion
from hygie.programs.models import ExerciseDefinition

CORE_CATEGORY_KEYWORDS = (
    "gainage",
    "core",
    "anti-rotation",
    "anti rotation",
    "stabilité lombaire",
    "stabilité lombraire",
)
CORE_TARGET_KEYWORDS = ("transverse", "obliques", "core", "abdos", "multifides")

LOWER_CATEGORY_KEYWORDS = (
    "membres inférieurs",
    "jambes",
    "quadriceps",
    "fessier",
    "ischio",
    "mollets",
    "péroniers",
    "tibial",
    "genou",
    "cheville",
    "hanche",
)
LOWER_TARGET_KEYWORDS = (
    "quadriceps",
    "fessier",
    "ischio",
    "mollets",
    "péroniers",
    "tibial",
    "adducteurs",
    "vmo",
    "gastrocnémien",
)

WEAKNESS_REGION_KEYWORDS: tuple[tuple[BodyRegion, tuple[str, ...]], ...] = (
    (
        BodyRegion.UPPER,
        (
            "épaule",
            "cou",
            "dos",
            "lombaire",
            "poignet",
            "biceps",
            "triceps",
            "pectoraux",
            "trapèze",
            "rhomboïde",
            "deltoïde",
        ),
    ),
    (
        BodyRegion.LOWER,
        (
            "genou",
            "cheville",
            "hanche",
            "pied",
            "fessier",
            "quadriceps",
            "ischio",
            "mollet",
            "péronier",
            "tibial",
        ),
    ),
    (BodyRegion.CORE, ("core", "abdos", "transverse", "oblique", "stabilité")),
)


def _contains_any(text: str, keywords: Iterable[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def body_region_of(exercise: ExerciseDefinition) -> BodyRegion:
    """Determine the body region of a catalog entry.

    Core keywords are checked first, then lower-body keywords. Anything
    matching neither is upper body.

    Args:
        exercise: Catalog entry

    Returns:
        BodyRegion for the entry
    """
    category = exercise.category.lower()
    targets = " ".join(t.lower() for t in exercise.targets)

    if _contains_any(category, CORE_CATEGORY_KEYWORDS) or _contains_any(targets, CORE_TARGET_KEYWORDS):
        return BodyRegion.CORE

    if _contains_any(category, LOWER_CATEGORY_KEYWORDS) or _contains_any(targets, LOWER_TARGET_KEYWORDS):
        return BodyRegion.LOWER

    return BodyRegion.UPPER


def filter_by_region(
    catalog: Iterable[ExerciseDefinition],
    region: BodyRegion,
) -> tuple[ExerciseDefinition, ...]:
    """Return the catalog partition for a body region, preserving order."""
    return tuple(exercise for exercise in catalog if body_region_of(exercise) == region)


def _normalize_injuries(injuries: Iterable[str]) -> list[str]:
    return [injury.strip().lower() for injury in injuries if injury and injury.strip()]


def _matches_injury(exercise: ExerciseDefinition, injuries: list[str]) -> bool:
    terms = [t.lower() for t in (*exercise.targets, *exercise.triggers) if t]
    return any(injury in term or term in injury for injury in injuries for term in terms)


def exclude_by_injury(
    exercises: Iterable[ExerciseDefinition],
    injuries: Iterable[str],
) -> tuple[ExerciseDefinition, ...]:
    """Drop exercises whose targets or triggers mention a declared injury.

    Matching is case-insensitive substring containment in both directions:
    the exercise term contains the injury, or the injury contains the term.
    Blank injury strings are ignored.

    Args:
        exercises: Candidate exercises
        injuries: Declared injury keywords (free text)

    Returns:
        Admissible exercises (possibly empty)
    """
    normalized = _normalize_injuries(injuries)
    if not normalized:
        return tuple(exercises)
    return tuple(exercise for exercise in exercises if not _matches_injury(exercise, normalized))


def _relevance_score(exercise: ExerciseDefinition, concerns: list[str]) -> int:
    score = 0
    triggers = [t.lower() for t in exercise.triggers]
    targets = [t.lower() for t in exercise.targets]
    category = exercise.category.lower()

    for concern in concerns:
        if any(trigger in concern or concern in trigger for trigger in triggers):
            score += 10
        if any(target in concern or concern in target for target in targets):
            score += 5
        if category in concern or concern in category:
            score += 3

    return score


def prioritize_by_weaknesses(
    exercises: Iterable[ExerciseDefinition],
    weaknesses: Iterable[str],
    injuries: Iterable[str],
) -> tuple[ExerciseDefinition, ...]:
    """Rank exercises by relevance to the client's weaknesses and injuries.

    Trigger matches weigh 10, target matches 5 and category matches 3 per
    concern. The sort is stable, so equal scores keep catalog order.

    Args:
        exercises: Candidate exercises
        weaknesses: Declared weaknesses
        injuries: Declared injuries

    Returns:
        Exercises ordered from most to least relevant
    """
    concerns = _normalize_injuries([*weaknesses, *injuries])
    return tuple(sorted(exercises, key=lambda exercise: _relevance_score(exercise, concerns), reverse=True))


def map_weakness_to_region(weakness: str) -> BodyRegion | None:
    """Map a free-text weakness to a body region, if recognizable."""
    text = weakness.lower()
    for region, keywords in WEAKNESS_REGION_KEYWORDS:
        if _contains_any(text, keywords):
            return region
    return None
