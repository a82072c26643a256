from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import NotificationSerializer, NotificationQuerySerializer

from apps.notifications.services import (
    list_notifications,
    mark_as_read,
    mark_all_as_read,
    delete_notification,
    NotificationNotFoundError,
)


@extend_schema(parameters=[NotificationQuerySerializer])
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def notification_list(request):
    """
    Get the caller's newest notifications.

    Query params:
        limit: page size (default 20)
        unread: 'true' to list unread only
    """
    query = NotificationQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    inbox = list_notifications(
        claims=request.user,
        limit=query.validated_data['limit'],
        unread_only=query.validated_data['unread'],
    )
    return Response({
        'notifications': NotificationSerializer(inbox['notifications'], many=True).data,
        'unreadCount': inbox['unreadCount'],
        'total': inbox['total'],
    })


@extend_schema(request=None, responses=NotificationSerializer)
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def notification_mark_read(request, notification_id):
    """Mark one of the caller's notifications as read."""
    try:
        notification = mark_as_read(claims=request.user, notification_id=notification_id)
    except NotificationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(NotificationSerializer(notification).data)


@extend_schema(request=None)
@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def notification_mark_all_read(request):
    """Mark every unread notification of the caller as read."""
    updated = mark_all_as_read(claims=request.user)
    return Response({'message': 'All notifications marked as read', 'updated': updated})


@api_view(['DELETE'])
@permission_classes([IsAuthenticated])
def notification_delete(request, notification_id):
    try:
        delete_notification(claims=request.user, notification_id=notification_id)
    except NotificationNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    return Response(status=status.HTTP_204_NO_CONTENT)
