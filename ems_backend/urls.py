from django.contrib import admin
from django.urls import path, include, re_path
from django.views.generic import RedirectView
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework import permissions

from employee.views import HealthCheckView

# Swagger schema setup
schema_view = get_schema_view(
    openapi.Info(
        title="EMS API",
        default_version='v1',
        description="Employee Management System API documentation",
        contact=openapi.Contact(email="support@ems.com"),
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    # Root lands on the dashboard (login redirect handles anonymous users)
    path('', RedirectView.as_view(pattern_name='dashboard:index', permanent=False)),

    # Admin panel
    path('admin/', admin.site.urls),

    # API modules
    path('api/auth/', include('users.urls')),
    path('api/', include('employee.urls')),
    path('api/leave-requests/', include('leave.urls')),
    path('api/attendance/', include('attendance.urls')),
    path('api/notifications/', include('notifications.urls')),
    path('api/dashboard/', include('dashboard.urls')),
    path('api/health/', HealthCheckView.as_view(), name='health'),

    # Pages
    path('account/', include('users.urls_pages')),
    path('dashboard/', include('dashboard.urls_pages')),
    path('leave-requests/', include('leave.urls_pages')),
    path('attendance/', include('attendance.urls_pages')),
    path('', include('employee.urls_pages')),

    # Swagger and Redoc routes
    re_path(r'^swagger(?P<format>\.json|\.yaml)$', schema_view.without_ui(cache_timeout=0), name='schema-json'),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
]
