"""DRF views: matching, briefs, matches and designer moderation."""
import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, permissions, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.briefs.models import Brief
from apps.designers.models import DesignerProfile
from apps.designers.services import ModerationError, approve_designer, reject_designer
from apps.matching.engine import MatchOutcome, find_best_match, find_matches
from apps.matching.exceptions import BriefNotFoundError
from apps.matching.models import Match
from apps.matching.services import unlock_match

from .serializers import (
    BriefDataSerializer,
    BriefSerializer,
    DesignerSerializer,
    MatchRequestSerializer,
    MatchSerializer,
    RankedMatchSerializer,
    RejectDesignerSerializer,
)

logger = logging.getLogger(__name__)


def client_for(request):
    client = getattr(request.user, "client_profile", None)
    if client is None:
        raise PermissionDenied("A client profile is required.")
    return client


def ensure_brief_access(request, brief_id: str):
    """Clients may only match their own briefs; staff may match any."""
    if request.user.is_staff:
        return
    try:
        owned = Brief.objects.filter(pk=brief_id, client__user=request.user).exists()
    except (ValidationError, ValueError):
        owned = False
    if not owned:
        raise BriefNotFoundError(f"Brief {brief_id} not found for user {request.user.pk}")


def outcome_payload(outcome: MatchOutcome) -> dict:
    data = {"briefData": BriefDataSerializer(outcome.brief).data}
    if outcome.message:
        data["message"] = outcome.message
    if outcome.match is not None:
        data["matchId"] = str(outcome.match.pk)
    return data


class MatchView(APIView):
    """POST /api/match/ {"briefId": "uuid"} -> every ranked match."""

    def post(self, request):
        serializer = MatchRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        brief_id = serializer.validated_data["briefId"]
        ensure_brief_access(request, brief_id)

        outcome = find_matches(brief_id)
        data = outcome_payload(outcome)
        data["matches"] = RankedMatchSerializer(outcome.ranked, many=True).data
        return Response(data)


class BestMatchView(APIView):
    """POST /api/match/best/ {"briefId": "uuid"} -> the single best match."""

    def post(self, request):
        serializer = MatchRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        brief_id = serializer.validated_data["briefId"]
        ensure_brief_access(request, brief_id)

        outcome = find_best_match(brief_id)
        data = outcome_payload(outcome)
        data["match"] = RankedMatchSerializer(outcome.best).data if outcome.best else None
        return Response(data)


class BriefViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = BriefSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["status", "design_category"]
    ordering = ["-created_at"]

    def get_queryset(self):
        qs = Brief.objects.select_related("client")
        if self.request.user.is_staff:
            return qs
        return qs.filter(client__user=self.request.user)

    def perform_create(self, serializer):
        from apps.matching.tasks import auto_match_brief

        brief = serializer.save(client=client_for(self.request))
        logger.info("Brief %s created by client %s", brief.pk, brief.client_id)
        transaction.on_commit(lambda: auto_match_brief.delay(str(brief.pk)))


class MatchViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = MatchSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ["status", "brief", "confidence"]
    ordering_fields = ["score", "created_at"]
    ordering = ["-score", "created_at"]

    def get_queryset(self):
        qs = Match.objects.select_related("designer", "brief")
        if self.request.user.is_staff:
            return qs
        return qs.filter(client__user=self.request.user)

    @action(detail=True, methods=["post"])
    def unlock(self, request, pk=None):
        """POST /api/matches/{id}/unlock/"""
        match = self.get_object()
        match, already = unlock_match(match.pk, match.client)
        match.client.refresh_from_db(fields=["match_credits"])
        return Response({
            "success": True,
            "alreadyUnlocked": already,
            "creditsRemaining": match.client.match_credits,
            "match": MatchSerializer(match).data,
        })


class DesignerViewSet(viewsets.ReadOnlyModelViewSet):
    """Staff-only designer listing and moderation."""

    queryset = DesignerProfile.objects.all()
    serializer_class = DesignerSerializer
    permission_classes = [permissions.IsAdminUser]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["first_name", "last_name", "email", "title"]
    filterset_fields = ["is_approved", "is_verified", "collaboration_style"]
    ordering_fields = ["created_at", "rating", "total_projects"]
    ordering = ["created_at"]

    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        """POST /api/designers/{id}/approve/"""
        designer = approve_designer(self.get_object())
        return Response({"success": True, "designer": DesignerSerializer(designer).data})

    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        """POST /api/designers/{id}/reject/ {"reason": "..."}"""
        serializer = RejectDesignerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            designer = reject_designer(self.get_object(), serializer.validated_data["reason"])
        except ModerationError as exc:
            return Response({"error": str(exc), "code": "invalid", "retryable": False}, status=400)
        return Response({"success": True, "designer": DesignerSerializer(designer).data})
