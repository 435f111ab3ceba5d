# ===========================================================
# employee/urls.py
# ===========================================================

from rest_framework.routers import DefaultRouter

from .views import DepartmentViewSet, EmployeeViewSet, JobRoleViewSet

router = DefaultRouter()
router.register(r"employees", EmployeeViewSet, basename="employee")
router.register(r"departments", DepartmentViewSet, basename="department")
router.register(r"roles", JobRoleViewSet, basename="jobrole")

urlpatterns = router.urls
