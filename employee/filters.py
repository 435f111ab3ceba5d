import django_filters

from .models import Employee


class EmployeeFilter(django_filters.FilterSet):
    """?search=&department_id=&is_active= for the employee list."""

    search = django_filters.CharFilter(method="filter_search")
    department_id = django_filters.NumberFilter(field_name="department_id")
    is_active = django_filters.BooleanFilter(field_name="is_active")

    class Meta:
        model = Employee
        fields = ["search", "department_id", "is_active"]

    def filter_search(self, queryset, name, value):
        return queryset.search(value.strip())
