from django.urls import path

from . import views_pages

app_name = "attendance"

urlpatterns = [
    path("", views_pages.attendance_index, name="index"),
    path("check-in/", views_pages.attendance_check_in, name="check_in"),
    path("check-out/<int:pk>/", views_pages.attendance_check_out, name="check_out"),
    path("mark/", views_pages.attendance_mark, name="mark"),
    path("reports/", views_pages.attendance_reports, name="reports"),
]
