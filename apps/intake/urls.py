from django.urls import path
from . import views

urlpatterns = [
    path('contact', views.ContactSubmitView.as_view(), name='contact-submit'),
    path('quote', views.QuoteSubmitView.as_view(), name='quote-submit'),
]
