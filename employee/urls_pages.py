from django.urls import path

from . import views_pages

app_name = "employee"

urlpatterns = [
    path("employees/", views_pages.employee_index, name="index"),
    path("employees/create/", views_pages.employee_create, name="create"),
    path("employees/<int:pk>/", views_pages.employee_detail, name="detail"),
    path("employees/<int:pk>/edit/", views_pages.employee_edit, name="edit"),
    path("employees/<int:pk>/delete/", views_pages.employee_delete, name="delete"),

    path("departments/", views_pages.department_index, name="department_index"),
    path("departments/create/", views_pages.department_create, name="department_create"),
    path("departments/<int:pk>/", views_pages.department_detail, name="department_detail"),
    path("departments/<int:pk>/edit/", views_pages.department_edit, name="department_edit"),
    path("departments/<int:pk>/delete/", views_pages.department_delete, name="department_delete"),

    path("roles/create/", views_pages.job_role_create, name="job_role_create"),
    path("roles/<int:pk>/delete/", views_pages.job_role_delete, name="job_role_delete"),
]
