from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.db.models.functions.text
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Department",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Department",
                "verbose_name_plural": "Departments",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="JobRole",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=100)),
                ("description", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("department", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="job_roles", to="employee.department")),
            ],
            options={
                "verbose_name": "Job Role",
                "verbose_name_plural": "Job Roles",
                "ordering": ["title"],
            },
        ),
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=50)),
                ("last_name", models.CharField(max_length=50)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone", models.CharField(blank=True, default="", max_length=20)),
                ("gender", models.CharField(blank=True, choices=[("Male", "Male"), ("Female", "Female"), ("Other", "Other")], default="", max_length=10)),
                ("address", models.CharField(blank=True, default="", max_length=255)),
                ("hire_date", models.DateField(default=django.utils.timezone.localdate)),
                ("termination_date", models.DateField(blank=True, null=True)),
                ("salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=18, validators=[django.core.validators.MinValueValidator(Decimal("0.00"))])),
                ("is_active", models.BooleanField(default=True)),
                ("annual_leave_balance", models.IntegerField(default=20)),
                ("sick_leave_balance", models.IntegerField(default=10)),
                ("personal_leave_balance", models.IntegerField(default=5)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("department", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="employees", to="employee.department")),
                ("job_role", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="employees", to="employee.jobrole")),
                ("user", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="employee_profile", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "verbose_name": "Employee",
                "verbose_name_plural": "Employees",
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["last_name", "first_name"], name="employee_name_idx"),
                    models.Index(fields=["department", "is_active"], name="employee_dept_active_idx"),
                ],
            },
        ),
        migrations.AddField(
            model_name="department",
            name="manager",
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="managed_departments", to="employee.employee"),
        ),
        migrations.AddConstraint(
            model_name="department",
            constraint=models.UniqueConstraint(django.db.models.functions.text.Lower("name"), name="unique_department_name_ci"),
        ),
    ]
