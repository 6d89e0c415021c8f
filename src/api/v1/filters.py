"""django-filter FilterSets for API v1 list endpoints."""
import django_filters as df
from django.db.models import Q

from customers.models import BusinessAccount


class BusinessAccountFilter(df.FilterSet):
    """Filters for the account list and counts.

    ``status=all`` disables the status filter; ``search`` matches business or
    contact name, case-insensitively.
    """

    search = df.CharFilter(method="filter_search")
    status = df.CharFilter(method="filter_status")
    zone = df.UUIDFilter(field_name="zone_id")
    assigned_to = df.UUIDFilter(field_name="assigned_to_id")
    source_type = df.CharFilter(field_name="source_type")

    class Meta:
        model = BusinessAccount
        fields = ["search", "status", "zone", "assigned_to", "source_type"]

    def filter_search(self, queryset, name, value):
        value = value.strip()
        if not value:
            return queryset
        return queryset.filter(Q(business_name__icontains=value) | Q(contact_name__icontains=value))

    def filter_status(self, queryset, name, value):
        if not value or value.lower() == "all":
            return queryset
        return queryset.filter(status=value)
