from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'discrepancies'

router = SimpleRouter()
router.register(r'', views.DiscrepancyViewSet, basename='discrepancy')

urlpatterns = [
    # GET    /api/discrepancies/                - List discrepancies
    # POST   /api/discrepancies/                - Report discrepancy
    # PUT    /api/discrepancies/{id}/resolve/   - Resolve (admin)
    path('', include(router.urls)),
]
