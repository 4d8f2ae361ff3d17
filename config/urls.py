"""
URL configuration for the football fund API.

All API routes live under /api/. The payment gateway and push fan-out
endpoints stay at the top level so the existing clients keep their paths.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from apps.payments import views as payment_views
from apps.notifications import views as notification_views
from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # Payment gateway
    path('api/create-payment-link/', payment_views.create_payment_link_view, name='create-payment-link'),
    path('api/payos-webhook/', payment_views.payos_webhook, name='payos-webhook'),

    # Push fan-out
    path('api/send-match-notification/', notification_views.send_match_notification, name='send-match-notification'),
    path('api/notify/attendance-created/', notification_views.attendance_created, name='notify-attendance-created'),
    path('api/notify/attendance-deleted/', notification_views.attendance_deleted, name='notify-attendance-deleted'),
    path('api/notify/manual/', notification_views.manual_notification, name='notify-manual'),

    # API endpoints
    path('api/members/', include('apps.members.urls')),
    path('api/matches/', include('apps.matches.urls')),
    path('api/payments/', include('apps.payments.urls')),
    path('api/scoring/', include('apps.scoring.urls')),
    path('api/notifications/', include('apps.notifications.urls')),
]

# Static files (development only)
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
