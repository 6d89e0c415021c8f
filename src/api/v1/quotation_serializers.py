"""Serializers for quotations, their line items, notes and follow-ups."""
from decimal import Decimal

from rest_framework import serializers

from customers.models import BusinessAccount
from quotations.models import Quotation, QuotationFollowUp, QuotationItem, QuotationNote


class QuotationItemSerializer(serializers.ModelSerializer):
    """Serializer for QuotationItem (line items on a quotation)."""

    quantity = serializers.DecimalField(max_digits=12, decimal_places=3, min_value=Decimal('0'))
    rate = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal('0'))
    gst_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2,
        min_value=Decimal('0'), max_value=Decimal('100'),
        required=False, default=Decimal('0'),
    )
    line_total = serializers.DecimalField(max_digits=16, decimal_places=2, read_only=True)

    class Meta:
        model = QuotationItem
        fields = ['description', 'hsn_code', 'quantity', 'rate', 'gst_percentage', 'line_total']


class QuotationNoteSerializer(serializers.ModelSerializer):

    class Meta:
        model = QuotationNote
        fields = ['id', 'text', 'author', 'timestamp']
        read_only_fields = ['id']
        extra_kwargs = {
            'author': {'required': False},
            'timestamp': {'required': False},
        }


class QuotationFollowUpSerializer(serializers.ModelSerializer):
    added_by_name = serializers.CharField(source='added_by.name', read_only=True, default=None)

    class Meta:
        model = QuotationFollowUp
        fields = ['id', 'date', 'note', 'status', 'added_by', 'added_by_name', 'created_at']
        read_only_fields = ['id', 'added_by', 'created_at']


class QuotationFollowUpUpdateSerializer(serializers.Serializer):
    """Partial follow-up update; absent fields are left unchanged."""

    date = serializers.DateTimeField(required=False)
    note = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=QuotationFollowUp.Status.choices, required=False)


class QuotationSerializer(serializers.ModelSerializer):
    """Quotation with nested items, notes and follow-ups.

    Money fields are derived and read-only; writes go through
    ``quotations.services`` which reprices the quotation.
    """

    manual_gst_amount = serializers.DecimalField(
        max_digits=14, decimal_places=2, min_value=Decimal('0'),
        required=False, allow_null=True,
    )
    manual_sgst_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), max_value=Decimal('100'),
        required=False, allow_null=True,
    )
    manual_cgst_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), max_value=Decimal('100'),
        required=False, allow_null=True,
    )
    manual_igst_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=Decimal('0'), max_value=Decimal('100'),
        required=False, allow_null=True,
    )

    business = serializers.PrimaryKeyRelatedField(
        queryset=BusinessAccount.objects.all(), required=False, allow_null=True,
    )
    business_name = serializers.CharField(source='business.business_name', read_only=True, default=None)
    quotation_number = serializers.CharField(max_length=50, required=False, allow_blank=True)
    status = serializers.CharField(max_length=30, required=False, allow_blank=True)
    items = QuotationItemSerializer(many=True, required=False)
    notes = QuotationNoteSerializer(many=True, required=False)
    followups = QuotationFollowUpSerializer(many=True, read_only=True)
    gst_breakdown = serializers.SerializerMethodField()
    created_by_name = serializers.CharField(source='created_by.name', read_only=True, default=None)

    class Meta:
        model = Quotation
        fields = [
            'id', 'quotation_number', 'business', 'business_name',
            'customer_name', 'customer_email', 'mobile_number', 'gstin',
            'gst_type', 'date', 'valid_until', 'status',
            'items', 'sub_total', 'gst_breakdown', 'total',
            'manual_gst_amount', 'manual_sgst_percentage',
            'manual_cgst_percentage', 'manual_igst_percentage',
            'notes', 'followups',
            'created_by', 'created_by_name', 'created_at', 'updated_at',
        ]
        read_only_fields = [
            'id', 'sub_total', 'total', 'created_by', 'created_at', 'updated_at',
        ]

    def get_gst_breakdown(self, obj):
        return {
            'total_gst': str(obj.total_gst),
            'sgst': str(obj.sgst),
            'cgst': str(obj.cgst),
            'igst': str(obj.igst),
        }

    def validate_quotation_number(self, value):
        if not value:
            return value
        qs = Quotation.objects.filter(quotation_number=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError('A quotation with this number already exists.')
        return value


class ActiveBusinessSerializer(serializers.ModelSerializer):
    """Account fields needed by quotation forms."""

    class Meta:
        model = BusinessAccount
        fields = [
            'id', 'business_name', 'contact_name', 'contact_email',
            'contact_number', 'gst_number', 'address',
        ]
        read_only_fields = fields
