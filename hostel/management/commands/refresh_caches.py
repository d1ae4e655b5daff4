from django.core.management.base import BaseCommand
from django.utils import timezone

from hostel.services.inventory import floors_changed, list_floors


class Command(BaseCommand):
    help = "Rebuild the cached floor layout and tell subscribed clients to refresh."

    def handle(self, *args, **options):
        now = timezone.now()
        floors_changed('refreshed')
        floors = list_floors()
        rooms = sum(len(f['rooms']) for f in floors)
        self.stdout.write(self.style.SUCCESS(f"Cached {len(floors)} floors / {rooms} rooms at {now}"))
