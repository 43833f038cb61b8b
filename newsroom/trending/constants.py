"""
Trending score constants.

score = views24h * VIEWS_24H_WEIGHT + views48h * VIEWS_48H_WEIGHT - ageInDays * AGE_DECAY_PER_DAY
"""

VIEWS_24H_WEIGHT = 2
VIEWS_48H_WEIGHT = 0.5
AGE_DECAY_PER_DAY = 0.1

# Articles scoring strictly above this are flagged automatically
TRENDING_THRESHOLD = 5

SCORE_PRECISION = 2

# Scheduled runs only rescore recently published articles
RECENT_WINDOW_DAYS = 7

DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 50

UNCATEGORIZED = 'Uncategorized'
