"""
Badge catalog.

Ten fixed achievements. Values are copied onto the Achievement row when a
badge is awarded, so editing an entry here never touches badges already
earned. Catalog order is the order rules are checked and reported in.
"""
from dataclasses import dataclass, asdict
from types import MappingProxyType


@dataclass(frozen=True)
class Badge:
    badge_type: str
    badge_name: str
    badge_description: str
    points: int

    def as_dict(self):
        return asdict(self)


FIRST_STEPS = "first_steps"
EARLY_BIRD = "early_bird"
NIGHT_OWL = "night_owl"
SPEED_DEMON = "speed_demon"
MARATHON_RUNNER = "marathon_runner"
TEAM_PLAYER = "team_player"
PROFIT_MAKER = "profit_maker"
ON_TIME_HERO = "on_time_hero"
BIG_SPENDER = "big_spender"
MONEY_MAKER = "money_maker"


_CATALOG = (
    Badge(FIRST_STEPS, "First Steps", "Complete your first task", 10),
    Badge(EARLY_BIRD, "Early Bird", "Log hours before 9 AM", 20),
    Badge(NIGHT_OWL, "Night Owl", "Log hours after 8 PM", 20),
    Badge(SPEED_DEMON, "Speed Demon", "Complete 5 tasks in one day", 50),
    Badge(MARATHON_RUNNER, "Marathon Runner", "7-day streak of logging hours", 100),
    Badge(TEAM_PLAYER, "Team Player", "Work on 3+ projects simultaneously", 30),
    Badge(PROFIT_MAKER, "Profit Maker", "Complete project with >30% profit", 150),
    Badge(ON_TIME_HERO, "On Time Hero", "Complete all tasks before deadline", 40),
    Badge(BIG_SPENDER, "Big Spender", "Approve 10+ expenses", 60),
    Badge(MONEY_MAKER, "Money Maker", "Generate ₹1,00,000+ revenue", 200),
)

BADGES = MappingProxyType({badge.badge_type: badge for badge in _CATALOG})

BADGE_TYPE_CHOICES = [(badge.badge_type, badge.badge_name) for badge in _CATALOG]


def get_badge(badge_type):
    """Look up a catalog entry. Raises KeyError for unknown types."""
    return BADGES[badge_type]


def all_badges():
    return list(_CATALOG)
