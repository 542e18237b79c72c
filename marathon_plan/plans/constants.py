"""Marathon plan constants - single source of truth.

Progression tables are keyed by training week (1..14). Marathon progressions
are non-monotonic near the taper, so each table is written out week by week
rather than derived from a formula. All tables are checked once at import.
"""

from types import MappingProxyType

TOTAL_WEEKS = 14
RACE_WEEK = 14
WEEKS: tuple[int, ...] = tuple(range(1, TOTAL_WEEKS + 1))

MARATHON_DISTANCE_MILES = 26.2188
KM_PER_MILE = 1.609344
METERS_PER_MILE = 1609.344

# Pace offsets (seconds per mile)
TEMPO_OFFSET_SECONDS = 12
MIN_TEMPO_PACE_SECONDS = 180  # 3:00/mile
EASY_OFFSET_SECONDS = 60
MIN_EASY_PACE_SECONDS = 540  # 9:00/mile
RECOVERY_OFFSET_SECONDS = 30
MAX_LONG_RUN_EASY_PACE_SECONDS = 540

# Fixed workout segments (miles)
TEMPO_WARM_UP_MILES = 1.0
TEMPO_COOL_DOWN_MILES = 1.0
INTERVAL_WARM_UP_MILES = 2.0
INTERVAL_COOL_DOWN_MILES = 1.0
INTERVAL_REP_METERS = 800
INTERVAL_REP_MILES = 0.5
INTERVAL_STRESS_MULTIPLIER = 2.5

# Tempo distance (miles): build 3 -> 12, taper 10 -> 4
TEMPO_DISTANCE_MILES = MappingProxyType(
    {1: 3, 2: 4, 3: 5, 4: 6, 5: 7, 6: 8, 7: 9, 8: 10, 9: 11, 10: 12, 11: 10, 12: 8, 13: 6, 14: 4}
)

# 800m repetitions: build 2 -> 10, hold, taper 8 -> 2
INTERVAL_REPETITIONS = MappingProxyType(
    {1: 2, 2: 3, 3: 4, 4: 5, 5: 6, 6: 7, 7: 8, 8: 9, 9: 10, 10: 10, 11: 8, 12: 6, 13: 4, 14: 2}
)

# Long run easy portion (minutes); week 14 is the race
LONG_RUN_EASY_MINUTES = MappingProxyType(
    {1: 90, 2: 90, 3: 100, 4: 100, 5: 110, 6: 110, 7: 120, 8: 120, 9: 120, 10: 110, 11: 100, 12: 80, 13: 60, 14: 0}
)

# Marathon pace finish (miles); week 14 runs the full marathon instead
LONG_RUN_MARATHON_PACE_MILES = MappingProxyType(
    {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 6: 6, 7: 6, 8: 6, 9: 6, 10: 6, 11: 6, 12: 6, 13: 6, 14: 0}
)

# Easy run distance (miles): 5 -> 10 -> 5
EASY_RUN_DISTANCE_MILES = MappingProxyType(
    {1: 5, 2: 6, 3: 6, 4: 7, 5: 7, 6: 8, 7: 8, 8: 9, 9: 9, 10: 10, 11: 8, 12: 7, 13: 6, 14: 5}
)

# Recovery run distance (miles)
RECOVERY_RUN_DISTANCE_MILES = MappingProxyType(
    {1: 3, 2: 3, 3: 3, 4: 3, 5: 4, 6: 4, 7: 4, 8: 4, 9: 4, 10: 4, 11: 4, 12: 3, 13: 3, 14: 2}
)

PROGRESSION_TABLES = MappingProxyType(
    {
        "tempo_distance_miles": TEMPO_DISTANCE_MILES,
        "interval_repetitions": INTERVAL_REPETITIONS,
        "long_run_easy_minutes": LONG_RUN_EASY_MINUTES,
        "long_run_marathon_pace_miles": LONG_RUN_MARATHON_PACE_MILES,
        "easy_run_distance_miles": EASY_RUN_DISTANCE_MILES,
        "recovery_run_distance_miles": RECOVERY_RUN_DISTANCE_MILES,
    }
)

# Short timeline thresholds (weeks)
RECOMMENDED_MINIMUM_WEEKS = TOTAL_WEEKS
ABSOLUTE_MINIMUM_WEEKS = 4
MINIMAL_STRATEGY_MAX_WEEKS = 5
PRIORITIZE_STRATEGY_MAX_WEEKS = 9
MIN_KEY_WORKOUTS = 20
MINIMAL_LONG_RUN_WEEKS: tuple[int, ...] = (7, 9, 12, 14)

# Assignment scoring
BASE_QUALITY_SCORE = 100
ADJACENT_HARD_PENALTY = 15
NON_OPTIMAL_LONG_RUN_PENALTY = 10
INSUFFICIENT_REST_PENALTY = 20
MIN_REST_DAYS = 2
OPTIMAL_BONUS = 10
WEEKEND_DAYS: tuple[int, ...] = (6, 7)
PREFERRED_QUALITY_DAYS: tuple[int, ...] = (2, 3, 4)


def _validate_progression_tables() -> None:
    for name, table in PROGRESSION_TABLES.items():
        missing = [week for week in WEEKS if week not in table]
        if missing:
            raise RuntimeError(f"Progression table {name} is missing weeks {missing}")
        extra = [week for week in table if week not in WEEKS]
        if extra:
            raise RuntimeError(f"Progression table {name} has unknown weeks {extra}")
        negative = [week for week, value in table.items() if value < 0]
        if negative:
            raise RuntimeError(f"Progression table {name} has negative values for weeks {negative}")


_validate_progression_tables()
