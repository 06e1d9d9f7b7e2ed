from django.urls import path
from . import views

app_name = 'promotions'

urlpatterns = [
    path('active', views.list_active_promotions, name='active'),
    path('validateCoupon', views.validate_coupon, name='validate-coupon'),
    path('bestOffer', views.best_offer, name='best-offer'),
    path('applyToOrder', views.apply_to_order, name='apply-to-order'),
]
