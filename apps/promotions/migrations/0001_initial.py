from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Promotion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('seller_id', models.CharField(blank=True, help_text='Owning seller, empty for platform-wide promotions', max_length=64, null=True)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('type', models.CharField(choices=[('percentage', 'Percentage Discount'), ('fixed', 'Fixed Amount Discount'), ('buy_x_get_y', 'Buy X Get Y'), ('free_shipping', 'Free Shipping'), ('bundle', 'Bundle Deal')], max_length=20)),
                ('discount_value', models.DecimalField(decimal_places=2, default=Decimal('0'), help_text='Percent points for percentage, currency units for fixed', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('min_purchase_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('max_discount_amount', models.DecimalField(blank=True, decimal_places=2, help_text='Cap for percentage discounts', max_digits=10, null=True, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('applicable_to', models.CharField(choices=[('all', 'All Items'), ('category', 'Categories'), ('product', 'Products'), ('seller', 'Sellers')], default='all', max_length=20)),
                ('applicable_ids', models.JSONField(blank=True, default=list, help_text='Category, product or seller identifiers')),
                ('coupon_code', models.CharField(blank=True, max_length=50, null=True, unique=True)),
                ('usage_limit', models.PositiveIntegerField(blank=True, help_text='Total redemption cap', null=True)),
                ('usage_count', models.PositiveIntegerField(default=0)),
                ('user_limit', models.PositiveIntegerField(blank=True, help_text='Per-user redemption cap', null=True)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'promotions',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['is_active', 'start_date', 'end_date'], name='promotions_live_idx'),
                    models.Index(fields=['applicable_to'], name='promotions_scope_idx'),
                    models.Index(fields=['seller_id'], name='promotions_seller_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CouponUsage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('coupon_code', models.CharField(max_length=50)),
                ('order_id', models.CharField(help_text='Order the coupon was redeemed on', max_length=64)),
                ('discount_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('promotion', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='usages', to='promotions.promotion')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='coupon_usages', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'coupon_usage',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['coupon_code', 'user'], name='coupon_usage_code_user_idx'),
                    models.Index(fields=['promotion'], name='coupon_usage_promotion_idx'),
                ],
            },
        ),
    ]
