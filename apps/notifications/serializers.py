from rest_framework import serializers

from .models import Notification
from .services.inbox import DEFAULT_LIMIT


class NotificationSerializer(serializers.ModelSerializer):
    
    class Meta:
        model = Notification
        fields = [
            'id',
            'user_id',
            'type',
            'title',
            'message',
            'link',
            'reference_id',
            'is_read',
            'created_at',
        ]
        read_only_fields = fields


class NotificationQuerySerializer(serializers.Serializer):
    """Query parameters for the inbox listing."""
    
    limit = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=100,
        default=DEFAULT_LIMIT
    )
    unread = serializers.BooleanField(required=False, default=False)
