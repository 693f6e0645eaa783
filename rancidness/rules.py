"""
Fixed survey schema and parsing rules.

This file exists to make non-goals explicit and enforceable: the item list and
column order are known in advance and never inferred from the input.
"""

# Column order of the survey, three cells per item after the metadata columns.
ITEM_NAMES = (
    "artichoke",
    "avocado",
    "banana",
    "brussels_sprout",
    "cantaloupe",
    "cauliflower",
    "chard",
    "crimini_mushroom",
    "golden_beet",
    "jalapeno",
    "kiwi",
    "korean_melon",
    "lime",
    "pear",
    "plucot",
    "red_grapefruit",
    "red_onion",
    "straightneck_squash",
    "strawberry",
    "tomatillo",
)

METADATA_COLUMNS = 3  # timestamp etc., owned by someone else
CELLS_PER_ITEM = 3  # would_throw, expected, desired

SCALE_MIN = 1.0
SCALE_MAX = 5.0

TRUE_TOKEN = "Yes"
FALSE_TOKEN = "No"

# Some respondents wrote "fresh" instead of a number; that is the bottom of the scale.
FRESH_WORD = "fresh"
FRESH_VALUE = SCALE_MIN

NOTE_SEPARATOR = " | "

RECORD_COLUMNS = ("would_throw", "expected_rancidness", "desired_rancidness")
REPORT_COLUMNS = (
    "would_throw_count",
    "would_not_throw_count",
    "average_expected_rancidness",
    "average_desired_rancidness",
)

# Output file names of the batch tool.
INGESTED_JSON = "result_ingested.json"
NORMALIZED_JSON = "result_massaged.json"
NORMALIZED_CSV = "result_massaged.csv"
REPORT_CSV = "result.csv"
