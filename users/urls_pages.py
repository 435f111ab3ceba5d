from django.urls import path

from . import views_pages

app_name = "users"

urlpatterns = [
    path("login/", views_pages.login_page, name="login"),
    path("logout/", views_pages.logout_page, name="logout"),
    path("register/", views_pages.register_page, name="register"),
    path("profile/", views_pages.profile_page, name="profile"),
    path("access-denied/", views_pages.access_denied, name="access_denied"),
]
