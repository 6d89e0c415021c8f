"""Serializers for users and the organization (zones, departments, teams)."""
from django.contrib.auth import get_user_model
from rest_framework import serializers
from rest_framework.validators import UniqueValidator
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from organization.models import Department, Team, Zone

User = get_user_model()


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------

class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user representation embedded in other payloads."""

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'role']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """Read/update serializer for User model.

    ``team``, ``department`` and ``zone`` are read-only here: they change
    only through team management and the transfer endpoint.
    """

    email = serializers.EmailField(
        validators=[
            UniqueValidator(
                queryset=User.objects.all(),
                lookup='iexact',
                message='A user with this email already exists.',
            ),
        ],
    )
    password = serializers.CharField(write_only=True, required=False, min_length=8)
    team_name = serializers.CharField(source='team.name', read_only=True, default=None)
    department_name = serializers.CharField(source='department.name', read_only=True, default=None)
    zone_name = serializers.CharField(source='zone.name', read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'name', 'mobile', 'role', 'is_active', 'password',
            'team', 'team_name', 'department', 'department_name',
            'zone', 'zone_name', 'date_joined',
        ]
        read_only_fields = ['id', 'team', 'department', 'zone', 'date_joined']

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        user = super().update(instance, validated_data)
        if password:
            user.set_password(password)
            user.save(update_fields=['password'])
        return user


class UserCreateSerializer(UserSerializer):
    """Serializer for creating a new user; the password is mandatory."""

    password = serializers.CharField(write_only=True, min_length=8)

    def create(self, validated_data):
        password = validated_data.pop('password')
        return User.objects.create_user(password=password, **validated_data)


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """Extends JWT token response to include user profile data."""

    def validate(self, attrs):
        data = super().validate(attrs)
        data['user'] = UserSerializer(self.user).data
        return data


class UserTransferSerializer(serializers.Serializer):
    """Body of ``PUT users/{id}/transfer/``."""

    new_team = serializers.UUIDField(required=False, allow_null=True)
    new_department = serializers.UUIDField(required=False, allow_null=True)
    new_zone = serializers.UUIDField(required=False, allow_null=True)


# ---------------------------------------------------------------------------
# Organization
# ---------------------------------------------------------------------------

class ZoneSerializer(serializers.ModelSerializer):

    class Meta:
        model = Zone
        fields = ['id', 'name', 'description', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class DepartmentSerializer(serializers.ModelSerializer):
    zone_name = serializers.CharField(source='zone.name', read_only=True, default=None)

    class Meta:
        model = Department
        fields = ['id', 'name', 'zone', 'zone_name', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class TeamSerializer(serializers.ModelSerializer):
    """Read serializer for Team with leader and member summaries."""

    department_name = serializers.CharField(source='department.name', read_only=True)
    zone = serializers.UUIDField(source='zone_id', read_only=True, default=None)
    zone_name = serializers.SerializerMethodField()
    team_leader_detail = UserSummarySerializer(source='team_leader', read_only=True, default=None)
    members_detail = UserSummarySerializer(source='members', many=True, read_only=True)

    class Meta:
        model = Team
        fields = [
            'id', 'name', 'department', 'department_name', 'zone', 'zone_name',
            'team_leader', 'team_leader_detail', 'members', 'members_detail',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_zone_name(self, obj):
        zone = obj.zone
        return zone.name if zone else None


class TeamWriteSerializer(serializers.Serializer):
    """Input for team create/update.

    Referenced ids are only shape-checked here; existence and role rules are
    enforced by ``organization.services`` so errors carry domain messages.
    """

    name = serializers.CharField(max_length=120)
    department = serializers.UUIDField()
    team_leader = serializers.UUIDField(required=False, allow_null=True)
    members = serializers.ListField(child=serializers.UUIDField(), required=False)
