from django.urls import path
from . import views

urlpatterns = [
    path('health', views.HealthView.as_view(), name='health'),
    path('test-email', views.TestEmailView.as_view(), name='test-email'),
]
