import django.core.validators
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("vehicle_name", models.CharField(max_length=200)),
                (
                    "type",
                    models.CharField(
                        choices=[("car", "Car"), ("bike", "Bike"), ("van", "Van"), ("SUV", "SUV")],
                        max_length=10,
                    ),
                ),
                ("registration_number", models.CharField(max_length=100, unique=True)),
                (
                    "daily_rent_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.01"))],
                    ),
                ),
                (
                    "availability_status",
                    models.CharField(
                        choices=[("available", "Available"), ("booked", "Booked")],
                        default="available",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Vehicle",
                "verbose_name_plural": "Vehicles",
                "ordering": ["id"],
                "indexes": [models.Index(fields=["availability_status"], name="vehicle_availability_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(daily_rent_price__gt=0),
                        name="vehicle_daily_rent_price_positive",
                    )
                ],
            },
        ),
    ]
