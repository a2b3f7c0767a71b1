"""Constants shared by the periodization table and the synthesizer."""

GATE_WEEK = 12

# Sessions at or below this week get posture-correction focus labels
# when the client declares upper- or lower-body injuries.
POSTURE_CORRECTION_WEEKS = 8

SECONDS_PER_SET = 60

UPPER_BODY_INJURY_ZONES = ("épaule", "cou", "dos", "lombaire", "poignet")
LOWER_BODY_INJURY_ZONES = ("genou", "cheville", "hanche", "pied")

PAIN_KEYWORDS = ("douleur", "douloureux")

EXPERIENCE_PROGRESSION_MULTIPLIER = {
    "Débutant": 0.5,
    "Intermédiaire": 1.0,
    "Avancé": 1.5,
}

BASE_WEIGHT_INCREASE_PERCENT = 2.5
