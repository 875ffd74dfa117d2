import django_filters

from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    product = django_filters.UUIDFilter(field_name="product_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="lte")
    min_total = django_filters.NumberFilter(
        field_name="total_price", lookup_expr="gte"
    )
    max_total = django_filters.NumberFilter(
        field_name="total_price", lookup_expr="lte"
    )

    class Meta:
        model = Order
        fields = [
            "product",
            "start_date",
            "end_date",
            "min_total",
            "max_total",
        ]
