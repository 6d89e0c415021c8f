"""Serializers for business accounts, their notes and follow-ups."""
from django.contrib.auth import get_user_model
from rest_framework import serializers

from customers.models import AccountFollowUp, AccountNote, BusinessAccount
from organization.models import Zone

User = get_user_model()


class AccountNoteSerializer(serializers.ModelSerializer):

    class Meta:
        model = AccountNote
        fields = ['id', 'text', 'author', 'timestamp']
        read_only_fields = ['id']
        extra_kwargs = {
            'author': {'required': False},
            'timestamp': {'required': False},
        }


class AccountFollowUpSerializer(serializers.ModelSerializer):
    added_by = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True,
    )
    added_by_name = serializers.CharField(source='added_by.name', read_only=True, default=None)

    class Meta:
        model = AccountFollowUp
        fields = ['id', 'date', 'note', 'status', 'added_by', 'added_by_name', 'created_at']
        read_only_fields = ['id', 'created_at']


class AccountFollowUpUpdateSerializer(serializers.Serializer):
    date = serializers.DateTimeField(required=False)
    note = serializers.CharField(required=False)
    status = serializers.ChoiceField(choices=AccountFollowUp.Status.choices, required=False)


class BusinessAccountSerializer(serializers.ModelSerializer):
    """Business account with assignee/zone summaries and nested children.

    ``business_name`` uniqueness is case-insensitive and reported as a
    conflict by the view, so the default unique validator is disabled.
    """

    assigned_to = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(), required=False, allow_null=True,
    )
    assigned_to_detail = serializers.SerializerMethodField()
    zone = serializers.PrimaryKeyRelatedField(
        queryset=Zone.objects.all(), required=False, allow_null=True,
    )
    zone_name = serializers.CharField(source='zone.name', read_only=True, default=None)
    type_of_lead = serializers.ListField(
        child=serializers.ChoiceField(choices=BusinessAccount.LeadType.choices),
        required=False,
    )
    notes = AccountNoteSerializer(many=True, read_only=True)
    followups = AccountFollowUpSerializer(many=True, read_only=True)

    class Meta:
        model = BusinessAccount
        fields = [
            'id', 'business_name', 'contact_name', 'contact_email', 'contact_number',
            'contact_person', 'address', 'gst_number', 'source_type', 'type_of_lead',
            'status', 'is_customer', 'total_price',
            'assigned_to', 'assigned_to_detail', 'zone', 'zone_name',
            'notes', 'followups', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_customer', 'created_at', 'updated_at']
        extra_kwargs = {
            'business_name': {'validators': []},
        }

    def get_assigned_to_detail(self, obj):
        user = obj.assigned_to
        if user is None:
            return None
        return {'id': str(user.pk), 'name': user.name, 'role': user.role}
