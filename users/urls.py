from django.urls import path

from .views import LoginView, RefreshView, MeView, RegisterView

urlpatterns = [
    path("login/", LoginView.as_view(), name="api-login"),
    path("refresh/", RefreshView.as_view(), name="api-refresh"),
    path("me/", MeView.as_view(), name="api-me"),
    path("register/", RegisterView.as_view(), name="api-register"),
]
