from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from decimal import Decimal


class Promotion(models.Model):
    """Discount rule, either applied automatically or redeemed with a coupon code"""

    TYPE_PERCENTAGE = 'percentage'
    TYPE_FIXED = 'fixed'
    TYPE_BUY_X_GET_Y = 'buy_x_get_y'
    TYPE_FREE_SHIPPING = 'free_shipping'
    TYPE_BUNDLE = 'bundle'

    TYPE_CHOICES = [
        (TYPE_PERCENTAGE, 'Percentage Discount'),
        (TYPE_FIXED, 'Fixed Amount Discount'),
        (TYPE_BUY_X_GET_Y, 'Buy X Get Y'),
        (TYPE_FREE_SHIPPING, 'Free Shipping'),
        (TYPE_BUNDLE, 'Bundle Deal'),
    ]

    APPLICABLE_ALL = 'all'
    APPLICABLE_CATEGORY = 'category'
    APPLICABLE_PRODUCT = 'product'
    APPLICABLE_SELLER = 'seller'

    APPLICABLE_TO_CHOICES = [
        (APPLICABLE_ALL, 'All Items'),
        (APPLICABLE_CATEGORY, 'Categories'),
        (APPLICABLE_PRODUCT, 'Products'),
        (APPLICABLE_SELLER, 'Sellers'),
    ]

    STATUS_ACTIVE = 'active'
    STATUS_SCHEDULED = 'scheduled'
    STATUS_EXPIRED = 'expired'
    STATUS_CANCELLED = 'cancelled'

    seller_id = models.CharField(max_length=64, null=True, blank=True,
                                 help_text="Owning seller, empty for platform-wide promotions")
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')

    type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    discount_value = models.DecimalField(
        max_digits=10, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Percent points for percentage, currency units for fixed"
    )
    min_purchase_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(Decimal('0'))]
    )
    max_discount_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True,
        validators=[MinValueValidator(Decimal('0'))],
        help_text="Cap for percentage discounts"
    )

    applicable_to = models.CharField(max_length=20, choices=APPLICABLE_TO_CHOICES, default=APPLICABLE_ALL)
    applicable_ids = models.JSONField(default=list, blank=True,
                                      help_text="Category, product or seller identifiers")

    coupon_code = models.CharField(max_length=50, unique=True, null=True, blank=True)
    usage_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Total redemption cap")
    usage_count = models.PositiveIntegerField(default=0)
    user_limit = models.PositiveIntegerField(null=True, blank=True, help_text="Per-user redemption cap")

    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'promotions'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_active', 'start_date', 'end_date'], name='promotions_live_idx'),
            models.Index(fields=['applicable_to'], name='promotions_scope_idx'),
            models.Index(fields=['seller_id'], name='promotions_seller_idx'),
        ]

    def __str__(self):
        if self.coupon_code:
            return f"{self.name} ({self.coupon_code})"
        return self.name

    def save(self, *args, **kwargs):
        # Codes are matched case-insensitively, store the normalized form
        if self.coupon_code:
            self.coupon_code = self.coupon_code.strip().upper()
        else:
            self.coupon_code = None
        super().save(*args, **kwargs)

    def is_live(self, now=None):
        """Active flag set and now within [start_date, end_date]"""
        if not self.is_active:
            return False
        now = now or timezone.now()
        try:
            return self.start_date <= now <= self.end_date
        except TypeError:
            # Missing dates or naive/aware mismatch
            return False

    @property
    def status(self):
        if not self.is_active:
            return self.STATUS_CANCELLED
        now = timezone.now()
        try:
            if now < self.start_date:
                return self.STATUS_SCHEDULED
            if now > self.end_date:
                return self.STATUS_EXPIRED
        except TypeError:
            return self.STATUS_EXPIRED
        return self.STATUS_ACTIVE

    @property
    def usage_limit_reached(self):
        return self.usage_limit is not None and self.usage_count >= self.usage_limit
