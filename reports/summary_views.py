from django.http import JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_http_methods

from core.utils import admin_required, api_login_required, json_error, parse_json_body
from reports.services.summary import NoReportsError, generate_summary, get_summary, serialize_summary


def _target_date(value):
    if value is not None and not isinstance(value, str):
        return None
    value = (value or '').strip()
    if not value:
        return timezone.localdate()
    try:
        return parse_date(value)
    except ValueError:
        return None


@api_login_required
@require_http_methods(["GET"])
def summary_api(request):
    date = _target_date(request.GET.get('date'))
    if date is None:
        return json_error("日期格式不正确 / Invalid date")
    return JsonResponse({'summary': serialize_summary(get_summary(date))})


@admin_required
@require_http_methods(["POST"])
def summary_generate_api(request):
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    date = _target_date(data.get('date'))
    if date is None:
        return json_error("日期格式不正确 / Invalid date")
    try:
        summary = generate_summary(date, created_by=request.user)
    except NoReportsError as exc:
        return json_error(str(exc))
    return JsonResponse({'summary': serialize_summary(summary)})
