import logging

from django.db import DatabaseError, transaction

from gamification.engine import AchievementEngine

logger = logging.getLogger("oneflow.activity")


class ActivityService:
    @staticmethod
    def record(user_id, action):
        """
        Schedule an achievement evaluation for `user_id` once the current
        transaction commits (immediately when not inside one).

        Evaluation failures are logged, not raised: the triggering write is
        already committed. Re-sending the same action later awards whatever
        is still missing.
        """
        if user_id is None:
            return

        def _evaluate():
            try:
                awarded = AchievementEngine.evaluate(user_id, action)
            except DatabaseError:
                logger.exception("Achievement evaluation failed: %s for user %s", action.tag, user_id)
                return
            if awarded:
                logger.info(
                    "%s for user %s awarded %s",
                    action.tag, user_id, ", ".join(badge.badge_type for badge in awarded),
                )

        transaction.on_commit(_evaluate)
