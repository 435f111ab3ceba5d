import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("employee", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Attendance",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField(db_index=True)),
                ("check_in_time", models.DateTimeField(blank=True, null=True)),
                ("check_out_time", models.DateTimeField(blank=True, null=True)),
                ("hours_worked", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("status", models.CharField(choices=[("Present", "Present"), ("Late", "Late"), ("Absent", "Absent"), ("OnLeave", "On Leave"), ("Holiday", "Holiday")], default="Present", max_length=10)),
                ("notes", models.TextField(blank=True, default="", validators=[django.core.validators.MaxLengthValidator(500)])),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("employee", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attendances", to="employee.employee")),
            ],
            options={
                "verbose_name": "Attendance",
                "verbose_name_plural": "Attendance",
                "ordering": ["-date", "-check_in_time"],
                "constraints": [models.UniqueConstraint(fields=("employee", "date"), name="unique_attendance_per_day")],
            },
        ),
    ]
