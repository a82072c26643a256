from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    OrderSerializer,
    OrderCreateSerializer,
    OrderDispatchSerializer,
    OrderReceiveSerializer,
    ReceivedItemsQuerySerializer,
    ReceivedItemSerializer,
)

from apps.discrepancies.serializers import DiscrepancySerializer
from apps.orders.services import (
    OrderLifecycleService,
    received_items_report,
    # Exceptions
    InsufficientPermissionsError,
    VendorMismatchError,
    VendorLookupError,
    AmountOutOfRangeError,
    OrderNotFoundError,
    InvalidTransitionError,
    DiscrepancyConflictError,
)


class OrderViewSet(viewsets.ViewSet):
    """
    Purchase orders between franchises and their kitchens.

    All business logic is handled by OrderLifecycleService.
    Views are thin HTTP handlers only.

    list: Orders visible to the caller
    create: Place an order (franchise side)
    accept: PLACED -> ACCEPTED (kitchen side)
    dispatch_order: ACCEPTED -> DISPATCHED (kitchen side)
    receive: DISPATCHED -> RECEIVED (blocked by open discrepancies)
    received_items: Flattened lines of received orders
    """

    permission_classes = [IsAuthenticated]

    def get_service(self):
        return OrderLifecycleService()

    @extend_schema(responses=OrderSerializer(many=True))
    def list(self, request):
        """List orders scoped to the caller's role."""
        orders = self.get_service().list_orders(claims=request.user)
        serializer = OrderSerializer(orders, many=True)
        return Response(serializer.data)

    @extend_schema(request=OrderCreateSerializer, responses={201: OrderSerializer})
    def create(self, request):
        """Place a new order."""
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self.get_service().create(
                claims=request.user,
                vendor_id=serializer.validated_data.get('vendor_id'),
                items=serializer.validated_data.get('items', []),
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except (VendorMismatchError, AmountOutOfRangeError) as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except VendorLookupError as e:
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses=OrderSerializer)
    @action(detail=True, methods=['put'])
    def accept(self, request, pk=None):
        """Kitchen accepts a placed order."""
        try:
            order = self.get_service().accept(claims=request.user, order_id=pk)
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderDispatchSerializer, responses=OrderSerializer)
    @action(detail=True, methods=['put'], url_path='dispatch', url_name='dispatch')
    def dispatch_order(self, request, pk=None):
        """Kitchen dispatches an accepted order."""
        serializer = OrderDispatchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self.get_service().dispatch(
                claims=request.user,
                order_id=pk,
                dispatch_photos=serializer.validated_data['dispatch_photos'],
                dispatch_notes=serializer.validated_data['dispatch_notes'],
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(request=OrderReceiveSerializer, responses=OrderSerializer)
    @action(detail=True, methods=['put'])
    def receive(self, request, pk=None):
        """Franchise confirms receipt of a dispatched order."""
        serializer = OrderReceiveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = self.get_service().receive(
                claims=request.user,
                order_id=pk,
                receive_photos=serializer.validated_data['receive_photos'],
                received_items=serializer.validated_data.get('received_items'),
            )
        except DiscrepancyConflictError as e:
            return Response(
                {
                    'error': str(e),
                    'unresolvedCount': e.unresolved_count,
                    'discrepancies': DiscrepancySerializer(e.discrepancies, many=True).data,
                },
                status=status.HTTP_400_BAD_REQUEST
            )
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except InvalidTransitionError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(parameters=[ReceivedItemsQuerySerializer], responses=ReceivedItemSerializer(many=True))
    @action(detail=False, methods=['get'], url_path='received-items')
    def received_items(self, request):
        """Lines of received orders for reporting."""
        query = ReceivedItemsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        report = received_items_report(
            claims=request.user,
            start_date=query.validated_data.get('startDate'),
            end_date=query.validated_data.get('endDate'),
            franchise_id=query.validated_data.get('franchiseId') or None,
        )
        return Response(ReceivedItemSerializer(report, many=True).data)
