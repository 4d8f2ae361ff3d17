import logging

from django.http import HttpResponse
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema
from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes, authentication_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated, AllowAny
from rest_framework.response import Response

from apps.members.services import MemberNotFoundError
from apps.scoring.services import InvalidRatingError
from .models import Share
from .serializers import (
    ShareSerializer,
    ShareFilterSerializer,
    CreatePaymentLinkSerializer,
    OutstandingSharesSerializer,
)
from .services import (
    create_payment_link,
    handle_webhook,
    mark_share_paid,
    cancel_share,
    get_member_outstanding,
    render_payment_qr,
    # Exceptions
    ShareNotFoundError,
    NoPendingSharesError,
    InvalidPaymentAmountError,
    ShareAlreadyPaidError,
    ShareNotPendingError,
    PaymentRequestNotFoundError,
    GatewayError,
)


logger = logging.getLogger(__name__)


# Response serializers for API documentation
class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()
    details = drf_serializers.CharField(required=False)


class PaymentLinkResponseSerializer(drf_serializers.Serializer):
    checkoutUrl = drf_serializers.URLField()
    orderCode = drf_serializers.IntegerField()


class SharePagination(PageNumberPagination):
    """Custom pagination for shares."""
    page_size = 50
    page_size_query_param = 'page_size'
    max_page_size = 200


class ShareViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for payment shares (admin).

    list: Get shares (filterable by match, member, status)
    retrieve: Get a specific share
    mark_paid: Record a payment made outside the gateway
    cancel: Cancel a pending share
    """

    queryset = Share.objects.select_related('member', 'match').filter(match__is_deleted=False)
    serializer_class = ShareSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SharePagination

    def get_queryset(self):
        """Filter shares using input serializer validation."""
        queryset = super().get_queryset()

        filter_serializer = ShareFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if params.get('match'):
            queryset = queryset.filter(match_id=params['match'])
        if params.get('member'):
            queryset = queryset.filter(member_id=params['member'])
        if params.get('status'):
            queryset = queryset.filter(status=params['status'])

        return queryset.order_by('-match__date', 'created_at')

    @action(detail=True, methods=['post'])
    def mark_paid(self, request, pk=None):
        """Mark share as paid manually."""
        try:
            share = mark_share_paid(share_id=pk)
        except ShareNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ShareNotPendingError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ShareSerializer(share).data)

    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """Cancel a pending share."""
        try:
            share = cancel_share(share_id=pk)
        except ShareNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ShareAlreadyPaidError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ShareSerializer(share).data)


@extend_schema(
    request=CreatePaymentLinkSerializer,
    responses={
        200: PaymentLinkResponseSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
        500: ErrorResponseSerializer,
    },
    description="Create a PayOS payment link for a member's pending shares.",
    tags=['payments'],
)
@api_view(['POST'])
@authentication_classes([])
@permission_classes([AllowAny])
def create_payment_link_view(request):
    """Create a payment link using service layer."""
    serializer = CreatePaymentLinkSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(
            {
                'error': 'shareIds (non-empty array) and memberId are required',
                'details': serializer.errors,
            },
            status=status.HTTP_400_BAD_REQUEST
        )

    data = serializer.validated_data
    try:
        link = create_payment_link(
            share_ids=data['shareIds'],
            member_id=data['memberId'],
            ratings=data.get('ratings'),
        )
    except (MemberNotFoundError, NoPendingSharesError) as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except (InvalidPaymentAmountError, InvalidRatingError) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except GatewayError as e:
        logger.exception("Error creating payment link")
        return Response(
            {'error': 'Failed to create payment link', 'details': str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response(link)


@extend_schema(
    request=None,
    responses={200: None, 500: ErrorResponseSerializer},
    description="PayOS webhook. GET answers the gateway's URL check; POST/PUT settle payments.",
    tags=['payments'],
)
@api_view(['GET', 'POST', 'PUT'])
@authentication_classes([])
@permission_classes([AllowAny])
def payos_webhook(request):
    """Receive PayOS payment notifications."""
    if request.method == 'GET':
        return Response({'message': 'Webhook URL is active and ready to receive data.'})

    try:
        result = handle_webhook(request.data)
    except Exception as e:
        logger.exception("Error processing webhook")
        return Response(
            {'error': 'Webhook processing failed', 'details': str(e)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return Response({'success': True, **result})


@extend_schema(
    responses={200: OutstandingSharesSerializer, 404: ErrorResponseSerializer},
    description="Pending shares of a member across published matches.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def member_outstanding(request, member_id):
    """Outstanding shares of a member (public pay page)."""
    try:
        outstanding = get_member_outstanding(member_id=member_id)
    except MemberNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(OutstandingSharesSerializer(outstanding).data)


@extend_schema(
    responses={(200, 'image/png'): OpenApiTypes.BINARY, 404: ErrorResponseSerializer},
    description="VietQR code of a payment request as PNG.",
    tags=['payments'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def payment_qr_code(request, order_code):
    """Render the payment QR code."""
    try:
        png = render_payment_qr(order_code=order_code)
    except PaymentRequestNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return HttpResponse(png, content_type='image/png')
