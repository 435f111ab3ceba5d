from django import forms

from employee.models import Department, Employee
from .models import AttendanceStatus


class CheckInForm(forms.Form):
    notes = forms.CharField(max_length=500, required=False, widget=forms.Textarea(attrs={"rows": 2}))


class AttendanceFilterForm(forms.Form):
    start_date = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date"}))
    end_date = forms.DateField(required=False, widget=forms.DateInput(attrs={"type": "date"}))
    employee_id = forms.ModelChoiceField(queryset=Employee.objects.filter(is_active=True), required=False)


class MarkAttendanceForm(forms.Form):
    employee = forms.ModelChoiceField(queryset=Employee.objects.filter(is_active=True))
    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    status = forms.ChoiceField(choices=[
        (AttendanceStatus.ABSENT, "Absent"),
        (AttendanceStatus.ON_LEAVE, "On Leave"),
        (AttendanceStatus.HOLIDAY, "Holiday"),
    ])
    notes = forms.CharField(max_length=500, required=False)


class ReportFilterForm(forms.Form):
    month = forms.CharField(required=False, widget=forms.TextInput(attrs={"type": "month"}))
    department_id = forms.ModelChoiceField(queryset=Department.objects.order_by("name"), required=False)
