from __future__ import annotations

from django.core.management.base import BaseCommand, CommandError

from catalog.products.repositories.django_repository import ProductDjangoRepository
from catalog.products.services import ProductService

DEMO_PRODUCTS = [
    ("Red Lamp", "19.90", "LAMP-RED"),
    ("Blue Lamp", "21.50", "LAMP-BLUE"),
    ("Green Chair", "89.00", "CHAIR-GREEN"),
    ("Oak Desk", "349.99", "DESK-OAK"),
    ("Steel Bookshelf", "129.00", "SHELF-STEEL"),
    ("Wool Rug", "74.25", "RUG-WOOL"),
    ("Ceramic Vase", "15.00", "VASE-CERAMIC"),
    ("Desk Organizer", "9.99", "ORGANIZER-DESK"),
]


class Command(BaseCommand):
    help = "Seed the catalog with a small set of demo products."

    def handle(self, *args, **options):
        repository = ProductDjangoRepository()
        service = ProductService(repository=repository)
        self.stdout.write("Seeding demo products...")

        created = skipped = 0
        for name, price, sku in DEMO_PRODUCTS:
            if repository.find_by_sku(sku):
                skipped += 1
                continue

            result = service.create_product({"name": name, "price": price, "sku": sku})
            if not result.success:
                raise CommandError(f"Could not seed {name!r}: {result.errors}")
            created += 1

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: created={created}, skipped={skipped}")
        )
