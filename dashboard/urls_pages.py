from django.urls import path

from . import views_pages

app_name = "dashboard"

urlpatterns = [
    path("", views_pages.index, name="index"),
]
