from django import forms
from django.contrib import admin

from pricing.models import Coupon, EventFeeSettings, Sale


class CouponAdminForm(forms.ModelForm):
    class Meta:
        model = Coupon
        exclude = ["current_uses"]

    def clean(self):
        cleaned_data = super().clean()
        # current_uses is read-only here, so the cap constraint is not checked for us.
        max_uses = cleaned_data.get("max_uses")
        if max_uses is not None and max_uses < self.instance.current_uses:
            self.add_error(
                "max_uses",
                f"Coupon has already been used {self.instance.current_uses} times.",
            )
        return cleaned_data


@admin.register(Coupon)
class CouponAdmin(admin.ModelAdmin):
    form = CouponAdminForm
    list_display = ["code", "event_id", "discount_type", "discount_value", "current_uses", "max_uses", "is_active"]
    list_filter = ["discount_type", "promotion_type", "is_active"]
    search_fields = ["code", "name"]
    readonly_fields = ["current_uses", "created_at"]


@admin.register(EventFeeSettings)
class EventFeeSettingsAdmin(admin.ModelAdmin):
    list_display = ["event_id", "use_custom_fees", "pix_fee_percentage", "card_fee_percentage", "offline_fee", "absorb_fees"]
    list_filter = ["use_custom_fees", "absorb_fees"]


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ["event_id", "promoter_code", "quantity", "total_amount", "status", "created_at"]
    list_filter = ["status"]
    search_fields = ["promoter_code"]
