from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("pricing", "0001_initial"),
    ]

    operations = [
        migrations.AddConstraint(
            model_name="coupon",
            constraint=models.CheckConstraint(
                condition=models.Q(("max_uses__isnull", True))
                | models.Q(("current_uses__lte", models.F("max_uses"))),
                name="coupon_uses_within_cap",
                violation_error_message="Coupon uses cannot exceed max uses.",
            ),
        ),
        migrations.AddConstraint(
            model_name="coupon",
            constraint=models.CheckConstraint(
                condition=models.Q(("valid_from__lte", models.F("valid_until"))),
                name="coupon_window_ordered",
                violation_error_message="Coupon must not expire before it starts.",
            ),
        ),
    ]
