from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'orders'

# Router for ViewSets
router = SimpleRouter()
router.register(r'', views.OrderViewSet, basename='order')

urlpatterns = [
    # Order ViewSet routes
    # GET    /api/orders/                  - List orders visible to caller
    # POST   /api/orders/                  - Place order (franchise)
    # GET    /api/orders/received-items/   - Received lines report
    # PUT    /api/orders/{id}/accept/      - Accept order (kitchen)
    # PUT    /api/orders/{id}/dispatch/    - Dispatch order (kitchen)
    # PUT    /api/orders/{id}/receive/     - Confirm receipt

    # Include router URLs
    path('', include(router.urls)),
]
