from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'notifications'

router = DefaultRouter()
router.register(r'', views.NotificationViewSet, basename='notification')

urlpatterns = [
    # Push token registry
    # POST   /api/notifications/tokens/   - Register token
    # DELETE /api/notifications/tokens/   - Unregister token
    path('tokens/', views.push_tokens, name='tokens'),

    # Feed routes
    # GET  /api/notifications/                      - List feed
    # POST /api/notifications/{id}/mark_read/       - Mark one read
    # POST /api/notifications/mark_all_read/        - Mark all read
    path('', include(router.urls)),
]
