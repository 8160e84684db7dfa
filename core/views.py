import logging

from django.contrib.auth import authenticate, login, logout
from django.views.decorators.http import require_http_methods
from django.http import JsonResponse

from core.permissions import has_manage_permission
from core.services import members as member_service
from core.services import team_settings as settings_service
from core.utils import _throttle, admin_required, api_login_required, clean_str, json_error, parse_json_body

logger = logging.getLogger(__name__)


@require_http_methods(["POST"])
def register_api(request):
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    try:
        user = member_service.create_member(data.get('name'), data.get('email'), data.get('password'))
    except member_service.MemberError as exc:
        return json_error(str(exc))
    login(request, user)
    return JsonResponse({'user': member_service.serialize_member(user)}, status=201)


@require_http_methods(["POST"])
def login_api(request):
    if _throttle(request, 'login_api_last', min_interval=0.5):
        return json_error('请求过于频繁 / Too many requests', status=429)
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    try:
        email = clean_str(data.get('email'), 'email').lower()
        password = clean_str(data.get('password'), 'password')
    except ValueError as exc:
        return json_error(str(exc))
    user = authenticate(request, username=email, password=password)
    if user is None:
        logger.info(f"Failed login for {email}")
        return json_error('邮箱或密码错误 / Invalid email or password', status=401)
    login(request, user)
    return JsonResponse({'user': member_service.serialize_member(user)})


@require_http_methods(["POST"])
def logout_api(request):
    logout(request)
    return JsonResponse({'status': 'success'})


@api_login_required
@require_http_methods(["GET"])
def me_api(request):
    data = member_service.serialize_member(request.user)
    data['is_admin'] = has_manage_permission(request.user)
    return JsonResponse({'user': data})


@api_login_required
@require_http_methods(["GET", "POST"])
def team_settings_api(request):
    if request.method == 'GET':
        return JsonResponse(settings_service.get_team_settings())

    if not has_manage_permission(request.user):
        return json_error('需要管理员权限 / Admin access required', status=403)
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    try:
        result = settings_service.update_team_settings(data, changed_by=request.user.username)
    except settings_service.SettingsValidationError as exc:
        return json_error(str(exc))
    return JsonResponse(result)


@api_login_required
@require_http_methods(["GET", "POST"])
def groups_api(request):
    if request.method == 'GET':
        return JsonResponse({'groups': settings_service.list_groups()})

    if not has_manage_permission(request.user):
        return json_error('需要管理员权限 / Admin access required', status=403)
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    try:
        groups = settings_service.replace_groups(data.get('groups'), changed_by=request.user.username)
    except settings_service.SettingsValidationError as exc:
        return json_error(str(exc))
    return JsonResponse({'groups': groups})


@admin_required
@require_http_methods(["POST"])
def invite_member_api(request):
    try:
        data = parse_json_body(request)
    except ValueError:
        return json_error('Invalid JSON')
    try:
        user = member_service.invite_member(
            data.get('name'), data.get('email'), data.get('group_id'),
            invited_by=request.user.username,
        )
    except member_service.MemberError as exc:
        return json_error(str(exc))
    return JsonResponse({'user': member_service.serialize_member(user)}, status=201)
