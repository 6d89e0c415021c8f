"""Pagination utilities for API v1."""
from django.conf import settings
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """Page number pagination with client-controlled page size."""

    page_size = 25
    page_size_query_param = "page_size"
    max_page_size = 200


class EnvelopePagination(StandardResultsSetPagination):
    """Respond with ``{data, total, page, page_size}``."""

    def get_paginated_response(self, data):
        return Response({
            "data": data,
            "total": self.page.paginator.count,
            "page": self.page.number,
            "page_size": self.get_page_size(self.request),
        })

    def get_paginated_response_schema(self, schema):
        return {
            "type": "object",
            "required": ["data", "total", "page", "page_size"],
            "properties": {
                "data": schema,
                "total": {"type": "integer"},
                "page": {"type": "integer"},
                "page_size": {"type": "integer"},
            },
        }


class AccountPagination(EnvelopePagination):
    page_size = settings.ACCOUNT_PAGE_SIZE


class QuotationPagination(EnvelopePagination):
    page_size = settings.QUOTATION_PAGE_SIZE
    page_size_query_param = "limit"
