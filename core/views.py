import logging
import time

from django.conf import settings
from django.db import connection
from django.db.utils import OperationalError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

logger = logging.getLogger("oneflow.api")

SERVICE_NAME = "oneflow-backend"


class HealthCheckView(APIView):
    """
    Uptime probe for the OneFlow API.

    Answers 503 when the database is unreachable so load balancers stop
    routing to this instance.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, *args, **kwargs):
        start = time.monotonic()

        db_ok = True
        try:
            connection.ensure_connection()
        except OperationalError:
            logger.warning("Health check: database unreachable", exc_info=True)
            db_ok = False

        return Response(
            {
                "service": SERVICE_NAME,
                "status": "ok" if db_ok else "degraded",
                "db": db_ok,
                "env": settings.ENV,
                "leaderboard_size": settings.GAMIFICATION["LEADERBOARD_SIZE"],
                "latency_ms": int((time.monotonic() - start) * 1000),
            },
            status=status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        )
