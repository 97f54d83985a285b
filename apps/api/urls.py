"""API URL configuration."""
from django.urls import include, path
from rest_framework.routers import DefaultRouter

from . import views

app_name = "api"

router = DefaultRouter()
router.register("briefs", views.BriefViewSet, basename="brief")
router.register("matches", views.MatchViewSet, basename="match")
router.register("designers", views.DesignerViewSet)

urlpatterns = [
    path("match/", views.MatchView.as_view(), name="match"),
    path("match/best/", views.BestMatchView.as_view(), name="match-best"),
    path("", include(router.urls)),
]

# ── Example payloads ───────────────────────────────────
#
# POST /api/match/
# {"briefId": "uuid"}
# Response:
# {
#   "matches": [
#     {
#       "designer": {"id": "uuid", "firstName": "Ana", "lastInitial": "S", ...},
#       "score": 76.5,
#       "confidence": "medium",
#       "reasons": ["Specializes in Branding & Logo Design", ...],
#       "scoreBreakdown": {"category": 30.0, "style": 12.5, ...},
#       "aiAnalyzed": false
#     }
#   ],
#   "briefData": {"briefId": "uuid", "category": "branding-logo", ...},
#   "matchId": "uuid"
# }
#
# Errors:
# {"error": "Our matching service is temporarily busy. ...", "code": "matching_unavailable", "retryable": true}
#
# POST /api/matches/{uuid}/unlock/
# Response: {"success": true, "alreadyUnlocked": false, "creditsRemaining": 2, "match": {...}}
