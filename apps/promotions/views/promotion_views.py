"""
Promotion catalog views.
"""
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny

from apps.common.utils import paginated_response
from ..serializers import PromotionSerializer, ActivePromotionQuerySerializer
from ..services import PromotionService


@api_view(['GET'])
@permission_classes([AllowAny])
def list_active_promotions(request):
    """List live promotions (public endpoint)"""
    query = ActivePromotionQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    promotions = PromotionService.get_active_promotions(
        applicable_to=query.validated_data.get('applicable_to'),
        applicable_id=query.validated_data.get('applicable_id'),
    )
    return paginated_response(promotions, PromotionSerializer, request)
