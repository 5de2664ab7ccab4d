"""Language & Pattern Library.

Declarative reference tables consumed by the detectors and field
extractors. Adding a language, sport or activity keyword means adding
an entry here; no extraction code has to change.
"""

from dataclasses import dataclass

from coachplan.extraction.enums import ActivityCategory, Language

# -----------------------------
# Calendar vocabulary
# -----------------------------
DAYS_OF_WEEK: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# Localized day name -> canonical English token, per language (same order as DAYS_OF_WEEK)
DAY_NAMES: dict[Language, tuple[str, ...]] = {
    Language.ENGLISH: DAYS_OF_WEEK,
    Language.SPANISH: ("lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"),
    Language.FRENCH: ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
    Language.GERMAN: ("montag", "dienstag", "mittwoch", "donnerstag", "freitag", "samstag", "sonntag"),
    Language.PORTUGUESE: ("segunda", "terça", "quarta", "quinta", "sexta", "sábado", "domingo"),
    Language.ITALIAN: ("lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato", "domenica"),
}

# Unaccented spellings that show up in extracted text
DAY_NAME_ALIASES: dict[str, str] = {
    "miercoles": "wednesday",
    "sabado": "saturday",
    "terca": "tuesday",
    "lunedi": "monday",
    "martedi": "tuesday",
    "mercoledi": "wednesday",
    "giovedi": "thursday",
    "venerdi": "friday",
}

WEEK_KEYWORDS: dict[Language, tuple[str, ...]] = {
    Language.ENGLISH: ("week", "wk", "w"),
    Language.SPANISH: ("semana", "sem"),
    Language.FRENCH: ("semaine", "sem"),
    Language.GERMAN: ("woche", "wo"),
    Language.PORTUGUESE: ("semana", "sem"),
    Language.ITALIAN: ("settimana", "sett"),
}

# Word used in "Day 1 (Monday)" style headers
DAY_WORDS: dict[Language, tuple[str, ...]] = {
    Language.ENGLISH: ("day",),
    Language.SPANISH: ("día", "dia"),
    Language.FRENCH: ("jour",),
    Language.GERMAN: ("tag",),
    Language.PORTUGUESE: ("dia",),
    Language.ITALIAN: ("giorno",),
}

# Fixed round-robin used when sessions carry no day information
SESSION_DAY_ROTATION: tuple[str, ...] = (
    "monday",
    "wednesday",
    "friday",
    "tuesday",
    "thursday",
    "saturday",
    "sunday",
)

UNSTRUCTURED_TRAINING_DAYS: tuple[str, ...] = ("monday", "wednesday", "friday")

# -----------------------------
# Durations
# -----------------------------
MINUTE_UNITS: tuple[str, ...] = ("minutes", "minute", "mins", "min", "minutos", "minuti")
HOUR_UNITS: tuple[str, ...] = ("hours", "hour", "hrs", "hr", "horas", "ore", "heures", "stunden")

# -----------------------------
# Section structure
# -----------------------------
MAJOR_SECTION_PATTERNS: tuple[str, ...] = (
    r"^week\s+\d+",
    r"^alternative\s+drills?",
    r"^specific\s+drills?",
    r"^={5,}",
    r"^-{5,}",
)

SCHEDULING_LINE_PATTERNS: tuple[str, ...] = (
    r"\(.*hours?\s*each\)",
    r"day.*\d+\s*hours?",
    r"^\d+\s*hours?\s*each$",
)

HEADER_LINE_PATTERN = r"^(week\s*\d+|session\s*\d+|day\s*\d+|training\s*week)"

PROGRESSION_KEYWORDS: tuple[str, ...] = ("beginner", "intermediate", "advanced", "progression")

# -----------------------------
# Activity taxonomy
# -----------------------------
@dataclass(frozen=True)
class ActivityTaxonomyEntry:
    """Keyword sets for one activity category.

    Attributes:
        keywords: English keywords (weight 3)
        synonyms: Spanish/French/German/Italian synonyms (weight 2)
        activities: Known example activities (weight 4)
    """

    keywords: tuple[str, ...]
    synonyms: tuple[str, ...]
    activities: tuple[str, ...]


ACTIVITY_TAXONOMY: dict[ActivityCategory, ActivityTaxonomyEntry] = {
    ActivityCategory.WARM_UP: ActivityTaxonomyEntry(
        keywords=("warm", "warmup", "warm-up", "activation", "dynamic stretch", "mobility", "jog", "jogging"),
        synonyms=("calentamiento", "preparación", "échauffement", "aufwärmen", "riscaldamento"),
        activities=("light jogging", "dynamic stretching", "movement prep", "joint mobility"),
    ),
    ActivityCategory.TECHNICAL: ActivityTaxonomyEntry(
        keywords=("drill", "practice", "technique", "skill", "training", "exercise", "work"),
        synonyms=("técnica", "technique", "technik", "tecnica"),
        activities=("ball control", "passing drill", "shooting practice", "dribbling"),
    ),
    ActivityCategory.TACTICAL: ActivityTaxonomyEntry(
        keywords=("tactical", "strategy", "positioning", "formation", "game", "match", "scrimmage"),
        synonyms=("táctica", "tactique", "taktik", "tattica"),
        activities=("small-sided game", "positional play", "team tactics", "set pieces"),
    ),
    ActivityCategory.CONDITIONING: ActivityTaxonomyEntry(
        keywords=("conditioning", "fitness", "cardio", "endurance", "stamina", "running", "sprint"),
        synonyms=("acondicionamiento", "conditionnement", "kondition", "condizionamento"),
        activities=("interval running", "shuttle runs", "fitness circuit", "stamina work"),
    ),
    ActivityCategory.COOL_DOWN: ActivityTaxonomyEntry(
        keywords=("cool", "cooldown", "cool-down", "recovery", "static stretch", "flexibility"),
        synonyms=("enfriamiento", "retour au calme", "abkühlen", "defaticamento"),
        activities=("static stretching", "light walking", "breathing exercises", "foam rolling"),
    ),
}

ACTION_VERBS: tuple[str, ...] = ("perform", "execute", "practice", "run", "complete", "focus on", "work on")

# Secondary markers that open a new session inside one day
SESSION_SPLIT_PATTERNS: tuple[str, ...] = (
    r"\bsession\s*\d+",
    r"\b\d{1,2}:\d{2}\b",
    r"\b(?:warm[\s-]?up|technical|tactical|conditioning|cool[\s-]?down)\b",
)

DRILL_KEYWORDS: tuple[str, ...] = ("drill", "exercise")
OBJECTIVE_KEYWORDS: tuple[str, ...] = ("focus", "objective", "goal", "emphasize")
NOTE_KEYWORDS: tuple[str, ...] = ("note", "emphasize", "encourage")

DESCRIPTION_LEAD_WORDS: tuple[str, ...] = (
    "warm-up",
    "warm up",
    "technical",
    "conditioning",
    "special",
    "gameplay",
    "cool-down",
    "cool down",
)

# -----------------------------
# Focus vocabulary
# -----------------------------
FOCUS_KEYWORDS: tuple[str, ...] = (
    "body positioning",
    "arm recovery",
    "arm entry",
    "underwater catch",
    "kick",
    "head positioning",
    "breathing",
    "stroke timing",
    "shooting",
    "passing",
    "dribbling",
    "defending",
    "tactics",
    "fitness",
    "conditioning",
    "technique",
    "teamwork",
    "strategy",
)

DEFAULT_FOCUS: tuple[str, ...] = ("general training",)

SPORT_FOCUS_ROTATION: dict[str, tuple[str, ...]] = {
    "soccer": ("ball control", "passing", "shooting", "defending"),
    "basketball": ("dribbling", "shooting", "defense", "teamwork"),
    "tennis": ("serves", "groundstrokes", "volleys", "strategy"),
    "general": ("technique", "fitness", "tactics", "teamwork"),
}

# -----------------------------
# Session typing
# -----------------------------
# First matching keyword wins
SESSION_TYPE_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("warm",), "Warm-up Session"),
    (("technical",), "Technical Training"),
    (("tactical",), "Tactical Training"),
    (("conditioning",), "Conditioning"),
    (("match", "game"), "Match/Game"),
)
DEFAULT_SESSION_TYPE = "Team Training"

PARTICIPANT_RULES: tuple[tuple[tuple[str, ...], int], ...] = (
    (("individual", "1-on-1", "one-on-one"), 1),
    (("small group", "small", "youth"), 12),
)
DEFAULT_PARTICIPANTS = 15

# -----------------------------
# Equipment
# -----------------------------
EQUIPMENT_DATABASE: dict[str, dict[str, tuple[str, ...]]] = {
    "soccer": {
        "balls": ("soccer ball", "football", "size 3 ball", "size 4 ball", "size 5 ball", "training ball", "match ball"),
        "training": ("cones", "markers", "disc cones", "flat markers", "training poles", "corner flags", "boundary markers"),
        "goals": ("full size goal", "portable goal", "pop-up goal", "mini goal", "target goal", "rebound goal"),
        "protection": ("shin guards", "goalkeeper gloves", "bibs", "pinnies", "training vests", "scrimmage vests"),
        "advanced": (
            "agility ladder",
            "speed ladder",
            "hurdles",
            "mini hurdles",
            "slalom poles",
            "training dummies",
            "rebounders",
            "passing arcs",
        ),
    },
    "basketball": {
        "balls": ("basketball", "size 5 ball", "size 6 ball", "size 7 ball", "training ball", "weighted ball"),
        "training": ("cones", "markers", "agility ladder", "speed ladder", "resistance bands", "jump rope"),
        "hoops": ("regulation hoop", "adjustable hoop", "training hoop", "mini hoop"),
        "advanced": ("shooting machine", "dribble goggles", "weighted vest", "reaction ball", "blocking pad", "shooting targets"),
    },
    "tennis": {
        "basic": ("tennis ball", "racket", "net", "court"),
        "training": ("cones", "markers", "agility ladder", "ball hopper", "target zones"),
        "advanced": ("ball machine", "speed radar", "training targets", "resistance bands", "video analysis"),
    },
    "volleyball": {
        "basic": ("volleyball", "net", "court markers", "antenna"),
        "training": ("cones", "volleyball cart", "ball cart", "training pads"),
        "protection": ("knee pads", "ankle braces"),
        "advanced": ("blocking sled", "spike trainer", "jump trainer", "setting target"),
    },
    "general": {
        "basic": ("cones", "markers", "balls", "mats"),
        "strength": ("dumbbells", "resistance bands", "medicine ball", "kettlebells"),
        "cardio": ("jump rope", "agility ladder", "hurdles"),
        "advanced": ("trx", "battle ropes", "plyo boxes", "resistance parachute"),
    },
}

# Canonical item -> lexical variants that also count as a mention
EQUIPMENT_VARIATIONS: dict[str, tuple[str, ...]] = {
    "soccer ball": ("soccer balls", "footballs", "football"),
    "football": ("soccer ball", "soccer balls", "footballs"),
    "cones": ("pylons", "disc cones", "cone"),
    "markers": ("marker", "flat markers"),
    "goals": ("posts", "goalposts"),
    "bibs": ("pinnies", "vests", "scrimmage vests"),
    "agility ladder": ("speed ladder", "coordination ladder"),
    "basketball": ("basketballs",),
    "regulation hoop": ("hoops", "baskets", "rims"),
    "tennis ball": ("tennis balls",),
    "racket": ("racquet", "rackets", "tennis racket"),
}

BASIC_EQUIPMENT: dict[str, tuple[str, ...]] = {
    "soccer": ("soccer balls", "cones", "goals", "bibs"),
    "basketball": ("basketballs", "hoops", "cones"),
    "tennis": ("tennis balls", "rackets", "net"),
    "general": ("cones", "markers", "equipment"),
}

# -----------------------------
# Drill reference
# -----------------------------
@dataclass(frozen=True)
class DrillReference:
    """Known drill with descriptive metadata.

    Attributes:
        type: Activity family (technical, tactical, conditioning)
        equipment: Equipment the drill needs
        focus: Skills the drill develops
        skill_level: Intended level
    """

    type: str
    equipment: tuple[str, ...]
    focus: tuple[str, ...]
    skill_level: str


DRILL_DATABASE: dict[str, dict[str, DrillReference]] = {
    "soccer": {
        "dribbling through cones": DrillReference(
            "technical", ("cones", "soccer ball"), ("ball control", "close control", "agility"), "beginner"
        ),
        "pass and move": DrillReference(
            "technical", ("soccer ball", "cones"), ("passing", "movement", "communication"), "beginner"
        ),
        "rondo": DrillReference(
            "tactical", ("soccer ball", "cones"), ("possession", "quick thinking", "technique under pressure"), "advanced"
        ),
        "small sided game": DrillReference(
            "tactical", ("soccer ball", "goals", "bibs"), ("game understanding", "decision making"), "intermediate"
        ),
    },
    "basketball": {
        "layup lines": DrillReference("technical", ("basketball", "hoop"), ("finishing", "footwork", "coordination"), "beginner"),
        "mikan drill": DrillReference(
            "technical", ("basketball", "hoop"), ("ambidextrous finishing", "touch", "repetition"), "intermediate"
        ),
        "shell drill": DrillReference(
            "tactical", ("basketball",), ("defensive positioning", "rotations", "communication"), "intermediate"
        ),
    },
    "general": {
        "circuit training": DrillReference("conditioning", ("cones", "mats"), ("fitness", "strength", "endurance"), "all levels"),
        "agility ladder": DrillReference("conditioning", ("agility ladder",), ("footwork", "speed", "coordination"), "all levels"),
    },
}

# -----------------------------
# Academy header
# -----------------------------
ACADEMY_NAME_PATTERN = r"^([A-Z][A-Z\s]+ACADEMY|[A-Z][A-Z\s]+CLUB)"
SPORT_PATTERN = r"\b(soccer|football|basketball|tennis|volleyball|swimming)\b"
AGE_GROUP_PATTERN = r"(\d+\s*[-–]\s*\d+\s*years?|under\s*\d+|\bu\d+\b|\d+\s*years?)"
PROGRAM_LINE_KEYWORDS: tuple[str, ...] = ("COACHING", "PLAN", "PROGRAM")
ACADEMY_HEADER_LINES = 20

# Sports that share another sport's reference tables
SPORT_ALIASES: dict[str, str] = {"football": "soccer"}
