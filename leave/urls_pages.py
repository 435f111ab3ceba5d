from django.urls import path

from . import views_pages

app_name = "leave"

urlpatterns = [
    path("", views_pages.leave_index, name="index"),
    path("create/", views_pages.leave_create, name="create"),
    path("<int:pk>/", views_pages.leave_detail, name="detail"),
    path("<int:pk>/approve/", views_pages.leave_approve, name="approve"),
    path("<int:pk>/reject/", views_pages.leave_reject, name="reject"),
    path("<int:pk>/cancel/", views_pages.leave_cancel, name="cancel"),
]
