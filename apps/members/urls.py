from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'members'

router = DefaultRouter()
router.register(r'', views.MemberViewSet, basename='member')

urlpatterns = [
    # GET    /api/members/                        - List members (?q=search)
    # POST   /api/members/                        - Create member
    # GET    /api/members/{id}/                   - Member detail
    # PATCH  /api/members/{id}/                   - Update member
    # DELETE /api/members/{id}/                   - Delete member
    # POST   /api/members/{id}/toggle_exempt/     - Flip payment exemption
    # POST   /api/members/{id}/toggle_creditor/   - Flip creditor flag
    path('', include(router.urls)),
]
