"""
Core constants — **Single Source of Truth** for project-wide magic numbers.

Any formula or business rule that references a numeric constant should
import it from here instead of hardcoding.  This avoids drift between
the observations app (which triggers rewards) and the rewards app
(which computes them).
"""

# ── Reward Calculation ──────────────────────────────────────────────
# Every valid observation earns the base award; a complete one earns
# the bonus on top, for 20 points in total.
BASE_OBSERVATION_POINTS: int = 10
COMPLETE_OBSERVATION_BONUS: int = 10

# ── Badge Thresholds ────────────────────────────────────────────────
# Minimum total points for each badge tier.
BRONZE_BADGE_THRESHOLD: int = 100
SILVER_BADGE_THRESHOLD: int = 200
GOLD_BADGE_THRESHOLD: int = 500

# Label returned as "next badge" once Gold has been reached.
MAXIMUM_LEVEL_LABEL: str = "Maximum Level"

# ── Listing Limits ──────────────────────────────────────────────────
RECENT_OBSERVATIONS_LIMIT: int = 5
DEFAULT_LEADERBOARD_LIMIT: int = 10
TOP_CONTRIBUTORS_LIMIT: int = 3

# ── Identifiers ─────────────────────────────────────────────────────
# Citizen ids travel between apps as opaque strings.
CITIZEN_ID_MAX_LENGTH: int = 100
CITIZEN_ID_PATTERN: str = r"[A-Za-z0-9_.@:\-]{1,100}"

# ── Ledger Bounds ───────────────────────────────────────────────────
# Ledger counters are stored in 32-bit integer columns.
MAX_LEDGER_VALUE: int = 2**31 - 1
# Most observations one batch credit may record.
MAX_BATCH_OBSERVATIONS: int = 10_000
