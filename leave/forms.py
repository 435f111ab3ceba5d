from django import forms

from .models import LeaveStatus, LeaveType


class LeaveRequestForm(forms.Form):
    leave_type = forms.ChoiceField(choices=LeaveType.choices)
    start_date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    end_date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    reason = forms.CharField(max_length=500, widget=forms.Textarea(attrs={"rows": 4}))


class LeaveDecisionForm(forms.Form):
    comments = forms.CharField(max_length=500, required=False, widget=forms.Textarea(attrs={"rows": 2}))


class LeaveFilterForm(forms.Form):
    status = forms.ChoiceField(choices=[("", "All")] + LeaveStatus.choices, required=False)
