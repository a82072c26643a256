from django.contrib import admin
from apps.notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    
    list_display = ['title', 'type', 'user_id', 'is_read', 'created_at']
    list_filter = ['type', 'is_read', 'created_at']
    search_fields = ['title', 'message', 'user_id', 'reference_id']
    readonly_fields = ['created_at']
    ordering = ['-created_at']
    
    actions = ['mark_read']
    
    @admin.action(description='Mark selected notifications as read')
    def mark_read(self, request, queryset):
        count = queryset.update(is_read=True)
        self.message_user(request, f'Marked {count} notification(s) as read.')
