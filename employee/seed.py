# ===========================================================
# employee/seed.py
# ===========================================================
"""
Demo data: departments, job roles, the three demo accounts and a few
sample employees. Every step is keyed on a natural key (name, title,
email) so running it again only fills in what is missing.
"""

from datetime import timedelta
from decimal import Decimal
import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from ems_backend.conf import ems_setting
from .models import Department, Employee, JobRole

logger = logging.getLogger("employee")

DEPARTMENTS = [
    ("Human Resources", "HR Department"),
    ("Engineering", "Software Development"),
    ("Sales", "Sales and Marketing"),
    ("Finance", "Finance and Accounting"),
    ("Operations", "Operations Management"),
]

JOB_ROLES = [
    ("Software Engineer", "Engineering"),
    ("Senior Software Engineer", "Engineering"),
    ("Engineering Manager", "Engineering"),
    ("HR Manager", "Human Resources"),
    ("HR Specialist", "Human Resources"),
    ("Sales Representative", "Sales"),
    ("Sales Manager", "Sales"),
    ("Accountant", "Finance"),
    ("Finance Manager", "Finance"),
]

ACCOUNTS = [
    # email, password, full name, role
    ("admin@ems.com", "Admin@123", "System Administrator", "Admin"),
    ("manager@ems.com", "Manager@123", "Department Manager", "Manager"),
    ("employee@ems.com", "Employee@123", "Regular Employee", "Employee"),
]

EMPLOYEES = [
    {
        "first_name": "Department", "last_name": "Manager", "email": "manager@ems.com",
        "phone": "5551234567", "gender": "Male", "hired_days_ago": 3 * 365,
        "department": "Engineering", "job_role": "Engineering Manager",
        "salary": "95000", "address": "789 Manager Blvd", "annual": 25, "sick": 15,
    },
    {
        "first_name": "Regular", "last_name": "Employee", "email": "employee@ems.com",
        "phone": "5559876543", "gender": "Female", "hired_days_ago": 182,
        "department": "Engineering", "job_role": "Software Engineer",
        "salary": "65000", "address": "321 Employee St", "annual": 20, "sick": 10,
    },
    {
        "first_name": "John", "last_name": "Doe", "email": "john.doe@ems.com",
        "phone": "1234567890", "gender": "Male", "hired_days_ago": 2 * 365,
        "department": "Engineering", "job_role": "Senior Software Engineer",
        "salary": "85000", "address": "123 Main St", "annual": 22, "sick": 12,
    },
    {
        "first_name": "Jane", "last_name": "Smith", "email": "jane.smith@ems.com",
        "phone": "0987654321", "gender": "Female", "hired_days_ago": 365,
        "department": "Human Resources", "job_role": "HR Manager",
        "salary": "90000", "address": "456 Oak Ave", "annual": 23, "sick": 13,
    },
]


@transaction.atomic
def seed_demo():
    """Create the demo data set. Returns a dict of created counts."""
    User = get_user_model()
    counts = {"departments": 0, "job_roles": 0, "users": 0, "employees": 0}

    departments = {}
    for name, description in DEPARTMENTS:
        department = Department.objects.filter(name__iexact=name).first()
        if department is None:
            department = Department.objects.create(name=name, description=description)
            counts["departments"] += 1
        departments[name] = department

    job_roles = {}
    for title, department_name in JOB_ROLES:
        job_role, created = JobRole.objects.get_or_create(
            title=title, defaults={"department": departments[department_name]}
        )
        counts["job_roles"] += int(created)
        job_roles[title] = job_role

    users = {}
    for email, password, full_name, role in ACCOUNTS:
        user = User.objects.filter(email__iexact=email).first()
        if user is None:
            extra = {"is_staff": True, "is_superuser": True} if role == "Admin" else {}
            user = User.objects.create_user(
                email=email, password=password, full_name=full_name, role=role, **extra
            )
            counts["users"] += 1
        users[email] = user

    today = timezone.localdate()
    for row in EMPLOYEES:
        if Employee.objects.filter(email__iexact=row["email"]).exists():
            continue
        Employee.objects.create(
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            gender=row["gender"],
            hire_date=today - timedelta(days=row["hired_days_ago"]),
            department=departments[row["department"]],
            job_role=job_roles[row["job_role"]],
            salary=Decimal(row["salary"]),
            address=row["address"],
            annual_leave_balance=row["annual"],
            sick_leave_balance=row["sick"],
            personal_leave_balance=ems_setting("DEFAULT_PERSONAL_LEAVE"),
            user=users.get(row["email"]),
        )
        counts["employees"] += 1

    # Link demo accounts to employee rows created earlier without a user.
    for email, user in users.items():
        if Employee.objects.filter(user=user).exists():
            continue
        Employee.objects.filter(email__iexact=email, user__isnull=True).update(user=user)

    logger.info(f"🌱 Demo seed complete: {counts}")
    return counts


def seed_after_migrate(sender, **kwargs):
    """post_migrate hook; only active when EMS['AUTO_SEED'] is on."""
    if ems_setting("AUTO_SEED"):
        seed_demo()
