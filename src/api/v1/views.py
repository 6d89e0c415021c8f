"""ViewSets for users and the organization (zones, departments, teams)."""
import logging

from django.contrib.auth import get_user_model
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from api.v1.permissions import IsAdminRole
from api.v1.serializers import (
    DepartmentSerializer,
    TeamSerializer,
    TeamWriteSerializer,
    UserCreateSerializer,
    UserSerializer,
    UserTransferSerializer,
    ZoneSerializer,
)
from organization.models import Department, Team, Zone
from organization.services import (
    create_team,
    delete_team,
    transfer_user,
    update_team,
    users_in_zone,
)

logger = logging.getLogger('salesdesk')

User = get_user_model()

WRITE_ACTIONS = ('create', 'update', 'partial_update', 'destroy')


class AdminWriteMixin:
    """Reads for any authenticated user; writes for administrators."""

    admin_actions = WRITE_ACTIONS

    def get_permissions(self):
        if self.action in self.admin_actions:
            return [IsAdminRole()]
        return [IsAuthenticated()]


# ---------------------------------------------------------------------------
# User ViewSet
# ---------------------------------------------------------------------------

class UserViewSet(AdminWriteMixin, viewsets.ModelViewSet):
    """
    CRUD for users, plus zone listing and transfer.

    Uses UserCreateSerializer for create action and UserSerializer for others.
    """

    queryset = User.objects.select_related('team', 'department', 'zone')
    admin_actions = WRITE_ACTIONS + ('transfer',)
    filterset_fields = ['role', 'is_active', 'team', 'department', 'zone']
    search_fields = ['email', 'name', 'mobile']
    ordering_fields = ['name', 'email', 'date_joined', 'role']

    def get_serializer_class(self):
        if self.action == 'create':
            return UserCreateSerializer
        return UserSerializer

    @action(detail=False, methods=['get'], url_path=r'zone/(?P<zone_id>[^/.]+)')
    def by_zone(self, request, zone_id=None):
        """Users currently placed in ``zone_id``."""
        serializer = UserSerializer(users_in_zone(zone_id), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=['put'])
    def transfer(self, request, pk=None):
        """Move the user to another team (or out of any team)."""
        user = self.get_object()
        serializer = UserTransferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            user = transfer_user(user, actor=request.user, **serializer.validated_data)
        except ValueError as e:
            logger.warning('Transfer of user %s rejected: %s', user.pk, e)
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': 'User transferred successfully',
            'user': UserSerializer(user).data,
        })


# ---------------------------------------------------------------------------
# Team ViewSet
# ---------------------------------------------------------------------------

class TeamViewSet(AdminWriteMixin, viewsets.ModelViewSet):
    """
    CRUD for teams. Membership changes are delegated to
    ``organization.services`` so every affected user is kept in sync.
    """

    serializer_class = TeamSerializer
    queryset = Team.objects.select_related(
        'department', 'department__zone', 'team_leader',
    ).prefetch_related('members')
    filterset_fields = ['department']
    search_fields = ['name']
    ordering_fields = ['name', 'created_at']

    def create(self, request, *args, **kwargs):
        serializer = TeamWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            team = create_team(actor=request.user, **serializer.validated_data)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            TeamSerializer(self.get_queryset().get(pk=team.pk)).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        team = self.get_object()
        serializer = TeamWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            team = update_team(team, actor=request.user, **serializer.validated_data)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(TeamSerializer(self.get_queryset().get(pk=team.pk)).data)

    def perform_destroy(self, instance):
        delete_team(instance, actor=self.request.user)


# ---------------------------------------------------------------------------
# Department / Zone ViewSets
# ---------------------------------------------------------------------------

class DepartmentViewSet(AdminWriteMixin, viewsets.ModelViewSet):
    serializer_class = DepartmentSerializer
    queryset = Department.objects.select_related('zone')
    filterset_fields = ['zone']
    search_fields = ['name']
    ordering_fields = ['name', 'created_at']


class ZoneViewSet(AdminWriteMixin, viewsets.ModelViewSet):
    serializer_class = ZoneSerializer
    queryset = Zone.objects.all()
    search_fields = ['name']
    ordering_fields = ['name', 'created_at']
