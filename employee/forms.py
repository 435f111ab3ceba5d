from django import forms

from ems_backend.exceptions import RuleViolation
from .models import Department, Employee, JobRole
from .services import ensure_unique_email


class EmployeeForm(forms.ModelForm):
    class Meta:
        model = Employee
        fields = [
            "first_name", "last_name", "email", "phone", "gender", "address",
            "hire_date", "termination_date", "department", "job_role", "salary", "is_active",
            "annual_leave_balance", "sick_leave_balance", "personal_leave_balance",
        ]
        widgets = {
            "hire_date": forms.DateInput(attrs={"type": "date"}),
            "termination_date": forms.DateInput(attrs={"type": "date"}),
        }

    def clean_email(self):
        email = self.cleaned_data["email"].lower()
        try:
            ensure_unique_email(email, self.instance if self.instance.pk else None)
        except RuleViolation as e:
            raise forms.ValidationError(e.message)
        return email


class DepartmentForm(forms.Form):
    name = forms.CharField(max_length=100)
    description = forms.CharField(widget=forms.Textarea(attrs={"rows": 3}), required=False)
    manager = forms.ModelChoiceField(queryset=Employee.objects.none(), required=False)
    role_names = forms.CharField(
        required=False,
        help_text="Comma-separated job titles to add to this department.",
    )

    def __init__(self, *args, department=None, can_assign_manager=False, **kwargs):
        super().__init__(*args, **kwargs)
        if department is not None and can_assign_manager:
            self.fields["manager"].queryset = department.employees.filter(is_active=True)
        else:
            del self.fields["manager"]

    def clean_role_names(self):
        raw = self.cleaned_data.get("role_names") or ""
        return [name.strip() for name in raw.split(",") if name.strip()]


class JobRoleForm(forms.ModelForm):
    class Meta:
        model = JobRole
        fields = ["title", "description", "department"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["department"].queryset = Department.objects.order_by("name")
