"""
Coupon validation, best-offer and redemption views.
"""
import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated

from apps.common.utils import success_response, error_response
from ..serializers import CartSerializer, CouponValidateSerializer, ApplyPromotionSerializer
from ..services import PromotionService, apply_promotion, distribute_discount

logger = logging.getLogger(__name__)


def _request_user_id(request):
    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        return user.pk
    return None


@api_view(['POST'])
@permission_classes([AllowAny])
def validate_coupon(request):
    """Validate a coupon code against a cart"""
    serializer = CouponValidateSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    validation = PromotionService.validate_coupon_code(
        data['coupon_code'],
        data['subtotal'],
        data['cart_items'],
        user_id=_request_user_id(request),
    )

    result = validation.to_dict()
    if not validation.valid:
        return success_response(result, message=validation.reason)

    application = apply_promotion(validation.promotion, data['subtotal'], data['cart_items'])
    result.update(application.to_dict())
    return success_response(result, message="Coupon is valid")


@api_view(['POST'])
@permission_classes([AllowAny])
def best_offer(request):
    """Best promotion for a cart, optionally restricted to one coupon code"""
    serializer = CartSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    result = PromotionService.find_best_promotion(
        data['subtotal'],
        data['cart_items'],
        coupon_code=data.get('coupon_code'),
        user_id=_request_user_id(request),
    )

    if result is None:
        return success_response(None, message="No promotion applies to this cart")
    return success_response(result.to_dict())


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def apply_to_order(request):
    """Record a coupon redemption for a placed order"""
    serializer = ApplyPromotionSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    data = serializer.validated_data

    recorded = PromotionService.apply_promotion_to_order(
        order_id=data['order_id'],
        promotion_id=data['promotion_id'],
        user_id=request.user.pk,
        coupon_code=data['coupon_code'] or None,
        discount_amount=data.get('discount_amount'),
    )
    if not recorded:
        logger.warning(f"Redemption of promotion {data['promotion_id']} on order {data['order_id']} was rejected")
        return error_response(
            "Promotion usage could not be recorded",
            status_code=status.HTTP_409_CONFLICT
        )

    result = {
        'order_id': data['order_id'],
        'promotion_id': data['promotion_id'],
        'usage_recorded': bool(data['coupon_code']),
    }
    if data.get('seller_totals') and data.get('discount_amount') is not None:
        split = distribute_discount(data['seller_totals'], data['discount_amount'])
        result['seller_totals'] = {seller: str(total) for seller, total in split.items()}

    return success_response(result, message="Promotion applied")
