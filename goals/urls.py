from django.urls import path
from .views import GoalViewSet

urlpatterns = [
    path('', GoalViewSet.as_view({'get': 'list', 'post': 'create'}), name='goal-list'),
    path('dashboard/', GoalViewSet.as_view({'get': 'dashboard'}), name='goal-dashboard'),
    path('<int:pk>/', GoalViewSet.as_view({'get': 'retrieve'}), name='goal-detail'),
    path('<int:pk>/progress/', GoalViewSet.as_view({'get': 'progress', 'post': 'progress'}),
         name='goal-progress'),
]
