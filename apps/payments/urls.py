from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'payments'

router = DefaultRouter()
router.register(r'shares', views.ShareViewSet, basename='share')

urlpatterns = [
    # Share routes (admin)
    # GET    /api/payments/shares/                  - List shares
    # GET    /api/payments/shares/{id}/             - Share detail
    # POST   /api/payments/shares/{id}/mark_paid/   - Mark paid manually
    # POST   /api/payments/shares/{id}/cancel/      - Cancel pending share

    # Public pay page
    path('outstanding/<uuid:member_id>/', views.member_outstanding, name='member-outstanding'),
    path('requests/<int:order_code>/qr/', views.payment_qr_code, name='payment-qr'),

    # Include router URLs
    path('', include(router.urls)),
]
