from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from modules.orders.dtos import PlaceOrderDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

CATALOGUE = [
    ("KB-MECH-01", "Mechanical Keyboard", Decimal("349.90"), 25),
    ("MS-WL-02", "Wireless Mouse", Decimal("89.90"), 60),
    ("MN-27-4K", "27in 4K Monitor", Decimal("1899.00"), 8),
    ("HS-USB-03", "USB Headset", Decimal("159.50"), 0),
]

DEMO_ORDERS = [
    ("KB-MECH-01", 2),
    ("MS-WL-02", 5),
    ("MN-27-4K", 1),
]


class Command(BaseCommand):
    help = "Seed the database with a demo catalogue and a few orders."

    def add_arguments(self, parser):
        parser.add_argument(
            "--no-orders",
            action="store_true",
            help="Only seed users and products.",
        )

    def handle(self, *args, **options):
        self.stdout.write("Seeding development data...")

        users_created = self._seed_users()
        products = self._seed_products()
        orders_created = 0 if options["no_orders"] else self._seed_orders(products)

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={users_created}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> int:
        User = get_user_model()
        if User.objects.filter(username="admin").exists():
            return 0
        User.objects.create_superuser("admin", "admin@example.com", "admin")
        return 1

    def _seed_products(self) -> dict[str, Product]:
        products = {}
        for sku, name, price, stock in CATALOGUE:
            product, _ = Product.objects.get_or_create(
                sku=sku,
                defaults={"name": name, "price": price, "stock_quantity": stock},
            )
            products[sku] = product
        return products

    def _seed_orders(self, products: dict[str, Product]) -> int:
        if Order.objects.exists():
            self.stdout.write("Orders already present, skipping demo orders.")
            return 0
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        created = 0
        for sku, quantity in DEMO_ORDERS:
            result = service.place_order(
                PlaceOrderDTO(product_id=products[sku].id, quantity=quantity)
            )
            if result.ok:
                created += 1
            else:
                self.stdout.write(
                    self.style.WARNING(f"Skipped order for {sku}: {result.detail}")
                )
        return created
