from django.conf import settings
from django.core.management.base import BaseCommand

from hostel.models import User

PASSWORD = "123456"


class Command(BaseCommand):
    help = "Ensure the admin and two student test accounts exist with password=123456 (idempotent)."

    def handle(self, *args, **opts):
        test_set = [
            (settings.HOSTEL_ADMIN_EMAIL, "Hostel Admin", User.ROLE_ADMIN),
            ("student1@hostelinsight.com", "Student One", User.ROLE_STUDENT),
            ("student2@hostelinsight.com", "Student Two", User.ROLE_STUDENT),
        ]
        for email, name, role in test_set:
            u, created = User.objects.get_or_create(
                username=email,
                defaults={"email": email, "first_name": name, "role": role, "is_active": True},
            )
            u.set_password(PASSWORD)
            u.role = role
            u.is_active = True
            u.save(update_fields=["password", "role", "is_active"])
            self.stdout.write(self.style.SUCCESS(f"{'created' if created else 'ok'}: {email} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))
