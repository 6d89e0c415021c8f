"""ViewSet for quotations and their follow-ups."""
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.response import Response

from django_filters.rest_framework import DjangoFilterBackend

from api.v1.pagination import QuotationPagination
from api.v1.quotation_serializers import (
    ActiveBusinessSerializer,
    QuotationFollowUpSerializer,
    QuotationFollowUpUpdateSerializer,
    QuotationSerializer,
)
from quotations.models import Quotation, QuotationFollowUp
from quotations.services import (
    active_businesses,
    add_quotation_followup,
    create_quotation,
    delete_quotation,
    delete_quotation_followup,
    quotations_for_business,
    update_quotation,
    update_quotation_followup,
)


FOLLOWUP_NOT_FOUND = 'Follow-up not found.'


class QuotationViewSet(viewsets.ModelViewSet):
    """
    ViewSet for quotations.

    - list: newest first, paginated with ``page`` / ``limit``
    - create / update: priced by ``quotations.services``
    - business: quotations of one business account
    - active_businesses: accounts selectable on the quotation form
    - followups / followup_detail: follow-up sub-resource, addressed by
      position or id
    """

    serializer_class = QuotationSerializer
    queryset = Quotation.objects.select_related(
        'business', 'created_by',
    ).prefetch_related('items', 'notes', 'followups__added_by')
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    filterset_fields = ['status', 'gst_type', 'business']
    ordering_fields = ['created_at', 'total', 'quotation_number', 'date']
    ordering = ['-created_at']
    pagination_class = QuotationPagination

    def _refreshed(self, quotation):
        return self.get_queryset().get(pk=quotation.pk)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            quotation = create_quotation(serializer.validated_data, actor=request.user)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            QuotationSerializer(self._refreshed(quotation)).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        quotation = self.get_object()
        serializer = self.get_serializer(quotation, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        for field in ('quotation_number', 'status'):
            if field in data and not data[field]:
                data.pop(field)

        try:
            quotation = update_quotation(quotation, data, actor=request.user)
        except ValueError as e:
            return Response({'detail': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(QuotationSerializer(self._refreshed(quotation)).data)

    def destroy(self, request, *args, **kwargs):
        delete_quotation(self.get_object(), actor=request.user)
        return Response({'message': 'Quotation deleted successfully.'})

    @action(detail=False, methods=['get'], url_path=r'business/(?P<business_id>[^/.]+)')
    def business(self, request, business_id=None):
        quotations = quotations_for_business(business_id).select_related(
            'business', 'created_by',
        ).prefetch_related('items', 'notes', 'followups__added_by')
        return Response(QuotationSerializer(quotations, many=True).data)

    @action(detail=False, methods=['get'], url_path='active-businesses')
    def active_business_list(self, request):
        return Response(ActiveBusinessSerializer(active_businesses(), many=True).data)

    # -- follow-ups ---------------------------------------------------------

    def _followups_response(self, quotation, message, status_code=status.HTTP_200_OK):
        followups = quotation.followups.select_related('added_by')
        return Response(
            {
                'message': message,
                'followups': QuotationFollowUpSerializer(followups, many=True).data,
            },
            status=status_code,
        )

    @action(detail=True, methods=['get', 'post'])
    def followups(self, request, pk=None):
        quotation = self.get_object()
        if request.method == 'GET':
            followups = quotation.followups.select_related('added_by')
            return Response(QuotationFollowUpSerializer(followups, many=True).data)

        serializer = QuotationFollowUpSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        add_quotation_followup(quotation, serializer.validated_data, actor=request.user)
        return self._followups_response(
            quotation, 'Follow-up added successfully.', status.HTTP_201_CREATED,
        )

    @action(
        detail=True,
        methods=['put', 'patch', 'delete'],
        url_path=r'followups/(?P<key>[^/.]+)',
    )
    def followup_detail(self, request, pk=None, key=None):
        """Update or delete a follow-up by position (``0``, ``1``...) or id."""
        quotation = self.get_object()

        try:
            if request.method == 'DELETE':
                delete_quotation_followup(quotation, key)
                return self._followups_response(quotation, 'Follow-up deleted successfully.')

            serializer = QuotationFollowUpUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            update_quotation_followup(quotation, key, serializer.validated_data)
        except QuotationFollowUp.DoesNotExist:
            return Response({'detail': FOLLOWUP_NOT_FOUND}, status=status.HTTP_404_NOT_FOUND)

        return self._followups_response(quotation, 'Follow-up updated successfully.')
