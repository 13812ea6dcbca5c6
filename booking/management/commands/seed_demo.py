"""
seed_demo.py
------------
Seeds (creates or updates) the demo shop: the barber profile, its service
menu and a few weeks of availability. Safe to run repeatedly; barber is
upserted by slug and services by (barber, name).

Usage:
    python manage.py seed_demo
    python manage.py seed_demo --slug luccifadez --username lucci --password secret
"""

from datetime import time
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.utils import timezone

from booking.models import Barber, Service
from dashboard.schedule import generate_weekly_availability


CATALOG = [
    {"name": "Signature Fade", "description": "Skin or low fade, lined up.", "duration_minutes": 45, "price": Decimal("40.00")},
    {"name": "Classic Cut",    "description": "Scissor or clipper cut.",     "duration_minutes": 45, "price": Decimal("35.00")},
    {"name": "Beard Sculpt",   "description": "Shape, line and hot towel.",  "duration_minutes": 30, "price": Decimal("20.00")},
]

# Mon-Sat 09:00-17:00
WEEKLY_HOURS = {day: [(time(9, 0), time(17, 0))] for day in range(6)}


class Command(BaseCommand):
    help = "Seed or update the demo barber, services and availability."

    def add_arguments(self, parser):
        parser.add_argument("--slug", default=settings.SINGLE_BARBER_SLUG, help="Barber slug to seed.")
        parser.add_argument("--shop-name", default=settings.SINGLE_SHOP_NAME, help="Shop display name.")
        parser.add_argument("--username", help="Create/attach a login for the barber dashboard.")
        parser.add_argument("--password", help="Password for --username (new users only).")
        parser.add_argument("--weeks", type=int, default=4, help="Weeks of availability to generate.")

    def handle(self, *args, **options):
        barber, barber_created = Barber.objects.get_or_create(
            slug=options["slug"],
            defaults={"shop_name": options["shop_name"], "city": "Demo City"},
        )

        if options.get("username"):
            User = get_user_model()
            user, user_created = User.objects.get_or_create(username=options["username"])
            if user_created:
                if options.get("password"):
                    user.set_password(options["password"])
                else:
                    user.set_unusable_password()
                user.save()
            if barber.user_id != user.pk:
                barber.user = user
                barber.save(update_fields=["user"])

        created = 0
        updated = 0
        for item in CATALOG:
            svc, is_created = Service.objects.get_or_create(
                barber=barber,
                name=item["name"],
                defaults={
                    "description": item["description"],
                    "duration_minutes": item["duration_minutes"],
                    "price": item["price"],
                    "active": True,
                },
            )
            if is_created:
                created += 1
                continue

            changed = False
            for field in ("description", "duration_minutes", "price"):
                if getattr(svc, field) != item[field]:
                    setattr(svc, field, item[field])
                    changed = True
            if not svc.active:
                svc.active = True
                changed = True
            if changed:
                svc.save()
                updated += 1

        windows = generate_weekly_availability(
            barber, WEEKLY_HOURS, start_day=timezone.localdate(), weeks=options["weeks"]
        )

        self.stdout.write(self.style.SUCCESS(
            f"Seed complete for '{barber.slug}' (barber {'created' if barber_created else 'existing'}). "
            f"Services created={created}, updated={updated}. Availability windows={windows}"
        ))
