import logging

from .models import UserStats

logger = logging.getLogger("oneflow.gamification")


def get_or_create_stats(user_id, for_update=False):
    """
    Return the user's stats row, creating an all-default one if absent.

    An existing row is returned unmodified. With `for_update=True` the row is
    locked until the surrounding transaction ends, so callers must be inside
    `transaction.atomic()`.
    """
    queryset = UserStats.objects.all()
    if for_update:
        queryset = queryset.select_for_update()

    stats, created = queryset.get_or_create(user_id=user_id)
    if created:
        logger.debug("Initialized gamification stats for user %s", user_id)
    return stats
