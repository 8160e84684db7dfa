from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_http_methods

from core.services.members import list_members, serialize_member
from core.utils import api_login_required, json_error
from reports.services.stats import get_activity_calendar, get_dashboard_stats


@api_login_required
@require_http_methods(["GET"])
def dashboard_stats_api(request):
    return JsonResponse(get_dashboard_stats())


@api_login_required
@require_http_methods(["GET"])
def dashboard_users_api(request):
    return JsonResponse({'users': [serialize_member(u) for u in list_members()]})


@api_login_required
@require_http_methods(["GET"])
def activity_calendar_api(request):
    """成员月度产出热力图数据，默认当前用户与当前月份。"""
    today = timezone.localdate()
    try:
        user_id = int(request.GET.get('user_id') or request.user.id)
        year = int(request.GET.get('year') or today.year)
        month = int(request.GET.get('month') or today.month)
    except (TypeError, ValueError):
        return json_error('参数格式不正确 / Invalid parameters')
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        return json_error('参数格式不正确 / Invalid parameters')
    return JsonResponse(get_activity_calendar(user_id, year, month))
