"""Orders API URL configuration."""

from django.urls import path

from . import views

app_name = "orders"

urlpatterns = [
    path("order/submit/", views.OrderSubmitView.as_view(), name="submit"),
    path("order/track/<str:order_id>/", views.OrderTrackView.as_view(), name="track"),
]
