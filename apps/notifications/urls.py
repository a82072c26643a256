from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    # GET    /api/notifications/              - Caller's inbox
    # PUT    /api/notifications/read-all/     - Mark all read
    # PUT    /api/notifications/{id}/read/    - Mark one read
    # DELETE /api/notifications/{id}/         - Delete one
    path('', views.notification_list, name='notification-list'),
    path('read-all/', views.notification_mark_all_read, name='notification-read-all'),
    path('<uuid:notification_id>/read/', views.notification_mark_read, name='notification-read'),
    path('<uuid:notification_id>/', views.notification_delete, name='notification-delete'),
]
