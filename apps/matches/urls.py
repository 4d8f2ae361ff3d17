from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'matches'

router = DefaultRouter()
router.register(r'', views.MatchViewSet, basename='match')

urlpatterns = [
    # GET    /api/matches/                    - List matches (?status=)
    # GET    /api/matches/{id}/               - Match with teams and rosters
    # DELETE /api/matches/{id}/               - Soft-delete match
    # POST   /api/matches/open/               - Open match for attendance
    # POST   /api/matches/setup/              - Finalize teams, create shares
    # GET    /api/matches/last-config/        - Last team layout
    # GET    /api/matches/{id}/attendance/    - Attendance list
    # POST   /api/matches/{id}/attendance/    - Sign up
    # DELETE /api/matches/{id}/attendance/    - Remove sign-up (admin)
    # GET    /api/matches/{id}/shares/        - Payment shares
    # GET    /api/matches/{id}/summary/       - Payment summary
    path('', include(router.urls)),
]
