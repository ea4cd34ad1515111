from django.urls import path
from .views import GenerateSuggestionsView

urlpatterns = [
    path('', GenerateSuggestionsView.as_view(), name='generate-suggestions'),
]
