from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'scoring'

router = DefaultRouter()
router.register(r'action-configs', views.ActionConfigViewSet, basename='action-config')

urlpatterns = [
    # Action config routes
    # GET    /api/scoring/action-configs/         - List actions
    # POST   /api/scoring/action-configs/         - Create action (admin)
    # PATCH  /api/scoring/action-configs/{key}/   - Update action (admin)
    # DELETE /api/scoring/action-configs/{key}/   - Delete action (admin)

    # Per-match scoring
    path('matches/<uuid:match_id>/live-events/', views.live_events, name='live-events'),
    path('matches/<uuid:match_id>/live-events/<uuid:event_id>/', views.live_event_detail, name='live-event-detail'),
    path('matches/<uuid:match_id>/stats/', views.live_stats, name='live-stats'),
    path('matches/<uuid:match_id>/ratings/', views.match_ratings, name='match-ratings'),
    path('matches/<uuid:match_id>/admin-ratings/', views.admin_ratings, name='admin-ratings'),
    path('matches/<uuid:match_id>/scoreboard/', views.scoreboard, name='scoreboard'),

    # Configuration and leaderboards
    path('weights/', views.scoring_weights, name='weights'),
    path('leaders/', views.leaders, name='leaders'),

    # Include router URLs
    path('', include(router.urls)),
]
