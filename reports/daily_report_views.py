from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_http_methods

from core.utils import _throttle, api_login_required, clean_str, json_error, parse_json_body
from reports.services import ai
from reports.services.daily import (
    ReportValidationError,
    filtered_reports,
    serialize_report,
    serialize_submission,
    submit_daily_report,
    toggle_like,
)
from work_logs.models import DailyReport


def _parse_date_param(value):
    """Return (date | None, error | None); empty input is not an error."""
    if value is not None and not isinstance(value, str):
        return None, "日期格式不正确 / Invalid date"
    value = (value or '').strip()
    if not value:
        return None, None
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if not parsed:
        return None, "日期格式不正确 / Invalid date"
    return parsed, None


def _int_param(value):
    value = (str(value) if value is not None else '').strip()
    return int(value) if value.isdigit() else None


@api_login_required
@require_http_methods(["GET", "POST"])
def reports_api(request):
    if request.method == 'POST':
        return _create_report(request)

    date, error = _parse_date_param(request.GET.get('date'))
    if error:
        return json_error(error)
    reports = filtered_reports(
        date=date,
        user_id=_int_param(request.GET.get('user_id')),
        group_id=_int_param(request.GET.get('group_id')),
        q=request.GET.get('q'),
        viewer=request.user,
    )
    return JsonResponse({
        'count': len(reports),
        'reports': [serialize_report(r, viewer=request.user) for r in reports],
    })


def _create_report(request):
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')

    date, error = _parse_date_param(data.get('date'))
    if error:
        return json_error(error)

    try:
        fields = {
            name: clean_str(data.get(name), name, ReportValidationError)
            for name in ('status', 'today_work', 'problems', 'tomorrow_plan')
        }
        tags = data.get('tags')
        if tags is None and fields['today_work']:
            # no tags from the client: let the AI suggest some
            tags = ai.analyze_single_report(
                fields['today_work'], fields['problems'], fields['tomorrow_plan']
            )['tags']
        result = submit_daily_report(request.user, date=date, tags=tags, **fields)
    except ReportValidationError as exc:
        return json_error(str(exc))
    return JsonResponse(serialize_submission(result), status=201)


@api_login_required
@require_http_methods(["GET"])
def report_detail_api(request, pk):
    report = get_object_or_404(DailyReport.objects.select_related('user'), pk=pk)
    return JsonResponse(serialize_report(report, viewer=request.user))


@api_login_required
@require_http_methods(["POST"])
def report_like_api(request, pk):
    report = get_object_or_404(DailyReport, pk=pk)
    liked, like_count = toggle_like(report, request.user)
    return JsonResponse({'id': report.id, 'liked': liked, 'like_count': like_count})


@api_login_required
@require_http_methods(["POST"])
def report_analyze_api(request):
    """AI 预检：提取标签并提示内容是否过于笼统。"""
    if _throttle(request, 'report_analyze_last', min_interval=1.0):
        return json_error('请求过于频繁 / Too many requests', status=429)
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    try:
        today_work, problems, tomorrow_plan = (
            clean_str(data.get(name), name) for name in ('today_work', 'problems', 'tomorrow_plan')
        )
    except ValueError as exc:
        return json_error(str(exc))
    if not today_work:
        return json_error("请至少填写一项今日工作内容 / At least one work item is required")
    result = ai.analyze_single_report(today_work, problems, tomorrow_plan)
    return JsonResponse(result)
