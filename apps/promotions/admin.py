from django.contrib import admin
from .models import Promotion, CouponUsage


@admin.register(Promotion)
class PromotionAdmin(admin.ModelAdmin):
    list_display = ['name', 'type', 'discount_value', 'applicable_to', 'coupon_code',
                    'usage_count', 'usage_limit', 'start_date', 'end_date', 'is_active']
    list_filter = ['type', 'applicable_to', 'is_active', 'start_date', 'end_date']
    search_fields = ['name', 'coupon_code', 'seller_id']
    list_editable = ['is_active']
    readonly_fields = ['usage_count', 'created_at', 'updated_at']

    def has_delete_permission(self, request, obj=None):
        return False  # Deactivate instead, usage history references promotions


@admin.register(CouponUsage)
class CouponUsageAdmin(admin.ModelAdmin):
    list_display = ['coupon_code', 'user', 'order_id', 'promotion', 'discount_amount', 'created_at']
    list_filter = ['created_at']
    search_fields = ['coupon_code', 'order_id', 'user__username']
    readonly_fields = ['created_at']

    def has_add_permission(self, request):
        return False  # Usage rows are created by the redemption flow

    def has_change_permission(self, request, obj=None):
        return False  # Usage history is append-only
