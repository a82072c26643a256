from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    DiscrepancySerializer,
    DiscrepancyCreateSerializer,
    DiscrepancyResolveSerializer,
)

from apps.discrepancies.services import (
    DiscrepancyService,
    # Exceptions
    DiscrepancyNotFoundError,
    OrderNotFoundError,
    InsufficientPermissionsError,
)


class DiscrepancyViewSet(viewsets.ViewSet):
    """
    Discrepancies reported against delivered orders.

    list: Discrepancies visible to the caller
    create: Report a discrepancy
    resolve: Close a discrepancy (admin only)
    """

    permission_classes = [IsAuthenticated]

    def get_service(self):
        return DiscrepancyService()

    @extend_schema(responses=DiscrepancySerializer(many=True))
    def list(self, request):
        discrepancies = self.get_service().list_discrepancies(claims=request.user)
        serializer = DiscrepancySerializer(discrepancies, many=True)
        return Response(serializer.data)

    @extend_schema(request=DiscrepancyCreateSerializer, responses={201: DiscrepancySerializer})
    def create(self, request):
        """Report a discrepancy on an order."""
        serializer = DiscrepancyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            discrepancy = self.get_service().report_discrepancy(
                claims=request.user,
                **serializer.validated_data
            )
        except OrderNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(DiscrepancySerializer(discrepancy).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=DiscrepancyResolveSerializer, responses=DiscrepancySerializer)
    @action(detail=True, methods=['put'])
    def resolve(self, request, pk=None):
        """Resolve a discrepancy (admin only)."""
        serializer = DiscrepancyResolveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            discrepancy = self.get_service().resolve_discrepancy(
                claims=request.user,
                discrepancy_id=pk,
                resolution_notes=serializer.validated_data['resolution_notes'],
            )
        except InsufficientPermissionsError as e:
            return Response({'error': str(e)}, status=status.HTTP_403_FORBIDDEN)
        except DiscrepancyNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        return Response(DiscrepancySerializer(discrepancy).data)
