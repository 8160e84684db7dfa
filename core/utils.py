import json
import time
from functools import wraps

from django.http import JsonResponse

from core.permissions import has_manage_permission


def _throttle(request, key: str, min_interval=0.8):
    """简单接口节流，基于 session/key。 / Simple API throttle based on session/key."""
    now = time.monotonic()
    last = request.session.get(key)
    if last and now - last < min_interval:
        return True
    request.session[key] = now
    return False


def clean_str(value, field, error_cls=ValueError):
    """None -> ''；非字符串抛出 error_cls，其余去除首尾空白。"""
    if value is None:
        return ''
    if not isinstance(value, str):
        raise error_cls(f"{field} 必须是字符串 / {field} must be a string")
    return value.strip()


def json_error(message, status=400):
    return JsonResponse({'error': message}, status=status)


def parse_json_body(request):
    """
    Parse a JSON object body; form-encoded posts fall back to request.POST.
    Raises ValueError on malformed JSON.
    """
    if request.content_type == 'application/json':
        if not request.body:
            return {}
        data = json.loads(request.body)
        if not isinstance(data, dict):
            raise ValueError("JSON body must be an object")
        return data
    return request.POST.dict()


def admin_required(view_func):
    """JSON 接口的管理员校验，未登录 401，非管理员 403。"""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return json_error('请先登录 / Login required', status=401)
        if not has_manage_permission(request.user):
            return json_error('需要管理员权限 / Admin access required', status=403)
        return view_func(request, *args, **kwargs)
    return _wrapped


def api_login_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return json_error('请先登录 / Login required', status=401)
        return view_func(request, *args, **kwargs)
    return _wrapped
