from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from hostel.exceptions import HostelAlreadySeeded
from hostel.services.inventory import seed_hostel


class Command(BaseCommand):
    help = "Create the hostel floors and rooms (once)."

    def handle(self, *args, **opts):
        try:
            created = seed_hostel()
        except HostelAlreadySeeded as e:
            raise CommandError(str(e.detail))
        self.stdout.write(self.style.SUCCESS(
            f"Seeded {settings.HOSTEL_FLOOR_COUNT} floors and {created} rooms."
        ))
