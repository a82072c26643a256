from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import User, Role


ROLE_COLOURS = {
    Role.ADMIN: '#2C1810',
    Role.KITCHEN: '#A47449',
    Role.KITCHEN_STAFF: '#C9A27E',
    Role.FRANCHISE: '#6B8E5E',
    Role.FRANCHISE_STAFF: '#9BB58E',
    Role.AUDITOR: '#5C7AB8',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for supply-network users.

    Kitchen users are linked to a vendor, franchise users to a franchise;
    the vendor link decides who is notified about new orders.
    """

    list_display = [
        'email',
        'display_name',
        'role_badge',
        'franchise',
        'vendor',
        'is_active_badge',
        'created_at',
    ]

    list_filter = ['role', 'is_active', 'is_staff', 'created_at']
    search_fields = ['email', 'display_name', 'employee_id']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'display_name', 'password')
        }),
        ('Affiliation', {
            'fields': ('role', 'franchise', 'vendor', 'employee_id'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'display_name', 'role', 'password1', 'password2'),
        }),
        ('Affiliation', {
            'fields': ('franchise', 'vendor', 'employee_id'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLOURS.get(obj.role, '#999'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Inactive</span>'
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    actions = ['activate_users', 'deactivate_users']

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('franchise', 'vendor')
