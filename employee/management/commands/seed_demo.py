from django.core.management.base import BaseCommand

from employee.seed import seed_demo


class Command(BaseCommand):
    help = "Create demo departments, job roles, accounts and employees (idempotent)."

    def handle(self, *args, **options):
        counts = seed_demo()
        summary = ", ".join(f"{value} {key}" for key, value in counts.items())
        self.stdout.write(self.style.SUCCESS(f"Seed complete: {summary} created."))
        self.stdout.write("Demo logins: admin@ems.com / Admin@123, manager@ems.com / Manager@123, "
                          "employee@ems.com / Employee@123")
