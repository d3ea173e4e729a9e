import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="EventFeeSettings",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("event_id", models.UUIDField(unique=True)),
                ("use_custom_fees", models.BooleanField(default=False)),
                (
                    "pix_fee_percentage",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=5, null=True),
                ),
                (
                    "card_fee_percentage",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=5, null=True),
                ),
                (
                    "offline_fee",
                    models.DecimalField(blank=True, decimal_places=4, max_digits=5, null=True),
                ),
                ("absorb_fees", models.BooleanField(blank=True, null=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name_plural": "event fee settings",
            },
        ),
        migrations.CreateModel(
            name="Coupon",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("event_id", models.UUIDField()),
                ("code", models.CharField(max_length=64)),
                ("name", models.CharField(blank=True, max_length=255)),
                (
                    "discount_type",
                    models.CharField(
                        choices=[
                            ("percentage", "Percentage"),
                            ("fixed", "Fixed"),
                            ("custom", "Custom"),
                        ],
                        max_length=16,
                    ),
                ),
                ("discount_value", models.DecimalField(decimal_places=2, max_digits=10)),
                ("max_uses", models.PositiveIntegerField(blank=True, null=True)),
                ("current_uses", models.PositiveIntegerField(default=0)),
                ("valid_from", models.DateTimeField()),
                ("valid_until", models.DateTimeField()),
                ("is_active", models.BooleanField(default=True)),
                (
                    "min_purchase_amount",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True),
                ),
                ("applicable_ticket_types", models.JSONField(blank=True, default=list)),
                (
                    "promotion_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("standard", "Standard"),
                            ("buyXgetY", "Buy X Get Y"),
                            ("minQuantity", "Min Quantity"),
                            ("bundle", "Bundle"),
                            ("fixedBundle", "Fixed Bundle"),
                        ],
                        max_length=16,
                        null=True,
                    ),
                ),
                ("promotion_rules", models.JSONField(blank=True, null=True)),
                ("created_by", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event_id", "code"), name="unique_coupon_code_per_event"
                    ),
                ],
            },
        ),
    ]
