"""Catalog API URL configuration."""

from django.urls import path

from . import views

app_name = "catalog"

urlpatterns = [
    path("services/", views.ServiceListView.as_view(), name="services"),
]
