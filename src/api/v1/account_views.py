"""ViewSet for business accounts (leads and customers)."""
from django.db.models import Count, Q
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from django_filters.rest_framework import DjangoFilterBackend

from api.v1.account_serializers import (
    AccountFollowUpSerializer,
    AccountFollowUpUpdateSerializer,
    AccountNoteSerializer,
    BusinessAccountSerializer,
)
from api.v1.filters import BusinessAccountFilter
from api.v1.pagination import AccountPagination
from api.v1.permissions import is_employee_user
from customers.models import AccountFollowUp, BusinessAccount
from customers.services import (
    DuplicateBusinessNameError,
    add_account_followup,
    add_account_note,
    create_account,
    delete_account_followup,
    soft_delete_account,
    update_account,
    update_account_followup,
)


SORTABLE_FIELDS = {
    'created_at', 'updated_at', 'business_name', 'contact_name',
    'status', 'source_type', 'total_price',
}

FOLLOWUP_NOT_FOUND = 'Follow-up not found.'


def _conflict_response(exc: DuplicateBusinessNameError):
    return Response(
        {
            'detail': str(exc),
            'existing_account': str(exc.existing.pk),
            'assigned_to': exc.assigned_to,
        },
        status=status.HTTP_409_CONFLICT,
    )


class BusinessAccountViewSet(viewsets.ModelViewSet):
    """
    ViewSet for business accounts.

    Employees only ever see the accounts assigned to them. DELETE closes
    the account instead of removing it.

    - list: ``search``, ``status`` (``all``), ``zone``, ``assigned_to``,
      ``sort_by`` / ``sort_order``; paginated with ``page`` / ``page_size``
    - all_accounts: the same list without pagination
    - counts: per-status totals under the same scoping and zone filter
    - active_leads / customers / quotations_sent / by_source: status views
    - notes, followups, followup_detail: child records
    """

    serializer_class = BusinessAccountSerializer
    queryset = BusinessAccount.objects.select_related(
        'assigned_to', 'zone',
    ).prefetch_related('notes', 'followups__added_by')
    filter_backends = [DjangoFilterBackend]
    filterset_class = BusinessAccountFilter
    pagination_class = AccountPagination

    def get_queryset(self):
        qs = super().get_queryset()
        if is_employee_user(self.request.user):
            qs = qs.filter(assigned_to=self.request.user)
        return qs

    def _sorted(self, qs):
        sort_by = self.request.query_params.get('sort_by', 'created_at')
        if sort_by not in SORTABLE_FIELDS:
            sort_by = 'created_at'
        descending = self.request.query_params.get('sort_order', 'desc').lower() != 'asc'
        return qs.order_by(f'-{sort_by}' if descending else sort_by)

    def list(self, request, *args, **kwargs):
        qs = self._sorted(self.filter_queryset(self.get_queryset()))
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=False, methods=['get'], url_path='all')
    def all_accounts(self, request):
        """Every visible account in one unpaginated list; same filters and sort as list."""
        qs = self._sorted(self.filter_queryset(self.get_queryset()))
        return Response(BusinessAccountSerializer(qs, many=True).data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            account = create_account(serializer.validated_data, actor=request.user)
        except DuplicateBusinessNameError as e:
            return _conflict_response(e)

        return Response(
            BusinessAccountSerializer(account).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        account = self.get_object()
        serializer = self.get_serializer(account, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        try:
            account = update_account(account, serializer.validated_data, actor=request.user)
        except DuplicateBusinessNameError as e:
            return _conflict_response(e)

        return Response(BusinessAccountSerializer(account).data)

    def destroy(self, request, *args, **kwargs):
        account = soft_delete_account(self.get_object(), actor=request.user)
        return Response({
            'message': 'Account status set to Closed',
            'account': BusinessAccountSerializer(account).data,
        })

    # -- status views -------------------------------------------------------

    @action(detail=False, methods=['get'])
    def counts(self, request):
        qs = self.get_queryset()
        zone = request.query_params.get('zone')
        if zone:
            qs = qs.filter(zone_id=zone)

        Status = BusinessAccount.Status
        counts = qs.aggregate(
            all=Count('id'),
            active=Count('id', filter=Q(status=Status.ACTIVE)),
            pipeline=Count('id', filter=Q(status=Status.PIPELINE)),
            quotations=Count('id', filter=Q(status=Status.QUOTATIONS)),
            customers=Count('id', filter=Q(status=Status.CUSTOMER)),
            closed=Count('id', filter=Q(status=Status.CLOSED)),
        )
        return Response(counts)

    def _status_list(self, **filters):
        qs = self.get_queryset().filter(**filters)
        return Response(BusinessAccountSerializer(qs, many=True).data)

    @action(detail=False, methods=['get'], url_path='active-leads')
    def active_leads(self, request):
        return self._status_list(status=BusinessAccount.Status.ACTIVE)

    @action(detail=False, methods=['get'])
    def customers(self, request):
        return self._status_list(status=BusinessAccount.Status.CUSTOMER)

    @action(detail=False, methods=['get'], url_path='quotations-sent')
    def quotations_sent(self, request):
        return self._status_list(status=BusinessAccount.Status.QUOTATIONS)

    @action(detail=False, methods=['get'], url_path=r'by-source/(?P<source_type>[^/]+)')
    def by_source(self, request, source_type=None):
        qs = self.get_queryset().filter(source_type=source_type).exclude(
            status=BusinessAccount.Status.CUSTOMER,
        )
        return Response(BusinessAccountSerializer(qs, many=True).data)

    # -- notes and follow-ups -----------------------------------------------

    @action(detail=True, methods=['post'])
    def notes(self, request, pk=None):
        account = self.get_object()
        serializer = AccountNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        add_account_note(account, actor=request.user, **serializer.validated_data)

        return Response({
            'message': 'Note added successfully',
            'notes': AccountNoteSerializer(account.notes.order_by('timestamp', 'id'), many=True).data,
        })

    def _followups_response(self, account, message, status_code=status.HTTP_200_OK):
        followups = account.followups.select_related('added_by')
        return Response(
            {
                'message': message,
                'followups': AccountFollowUpSerializer(followups, many=True).data,
            },
            status=status_code,
        )

    @action(detail=True, methods=['get', 'post'])
    def followups(self, request, pk=None):
        account = self.get_object()
        if request.method == 'GET':
            followups = account.followups.select_related('added_by')
            return Response(AccountFollowUpSerializer(followups, many=True).data)

        serializer = AccountFollowUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        add_account_followup(account, serializer.validated_data, actor=request.user)
        return self._followups_response(
            account, 'Follow-up added successfully', status.HTTP_201_CREATED,
        )

    @action(
        detail=True,
        methods=['put', 'patch', 'delete'],
        url_path=r'followups/(?P<key>[^/.]+)',
    )
    def followup_detail(self, request, pk=None, key=None):
        """Update or delete a follow-up by position (``0``, ``1``...) or id."""
        account = self.get_object()

        try:
            if request.method == 'DELETE':
                delete_account_followup(account, key)
                return self._followups_response(account, 'Follow-up deleted')

            serializer = AccountFollowUpUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            update_account_followup(account, key, serializer.validated_data)
        except AccountFollowUp.DoesNotExist:
            return Response({'detail': FOLLOWUP_NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)

        return self._followups_response(account, 'Follow-up updated')
