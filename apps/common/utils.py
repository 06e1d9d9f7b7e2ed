"""
Common helpers for API responses and money handling
"""
from decimal import Decimal, ROUND_HALF_UP

from rest_framework.response import Response
from rest_framework import status
from rest_framework.pagination import PageNumberPagination

CENTS = Decimal('0.01')


def to_money(value) -> Decimal:
    """Coerce a number (int, float, str or Decimal) to a cent-precision Decimal"""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def success_response(data=None, message="Success", status_code=status.HTTP_200_OK):
    """
    Standard success envelope: {code, msg, data}
    """
    response_data = {
        "code": status_code,
        "msg": message,
        "data": data
    }
    return Response(response_data, status=status_code)


def error_response(message="Error", errors=None, status_code=status.HTTP_400_BAD_REQUEST):
    """
    Standard error envelope: {code, msg[, errors]}
    """
    response_data = {
        "code": status_code,
        "msg": message
    }
    if errors:
        response_data["errors"] = errors
    return Response(response_data, status=status_code)


def paginated_response(items, serializer_class, request, message="Success"):
    """
    Paginate a queryset or list and wrap the page in the success envelope
    """
    paginator = PageNumberPagination()
    page = paginator.paginate_queryset(items, request)

    serializer = serializer_class(page, many=True)
    return success_response({
        "list": serializer.data,
        "page": {
            "pageNum": paginator.page.number,
            "pageSize": paginator.get_page_size(request),
            "total": paginator.page.paginator.count,
            "totalPages": paginator.page.paginator.num_pages
        }
    }, message)
