from django.conf import settings
from django.db import models


class CouponUsage(models.Model):
    """Append-only redemption receipt, counted to enforce per-user limits"""

    coupon_code = models.CharField(max_length=50)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='coupon_usages')
    order_id = models.CharField(max_length=64, help_text="Order the coupon was redeemed on")
    promotion = models.ForeignKey('Promotion', on_delete=models.PROTECT, related_name='usages')
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'coupon_usage'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['coupon_code', 'user'], name='coupon_usage_code_user_idx'),
            models.Index(fields=['promotion'], name='coupon_usage_promotion_idx'),
        ]

    def __str__(self):
        return f"{self.coupon_code} used by {self.user_id} on {self.order_id}"
