"""
JSON API 공통 헬퍼

- login_required_json: 비로그인 시 401 JSON
- parse_json_body: 요청 본문(JSON 또는 폼) → dict
- bind_form: 부분 수정(PUT)용 폼 바인딩
- form_errors_response / no_content_response
"""
import json
from functools import wraps

from django.forms.models import model_to_dict
from django.http import HttpResponse, JsonResponse


def login_required_json(view_func):
    """
    로그인 필요 (JSON API용)

    login_required는 로그인 페이지로 302 리다이렉트하므로
    API 뷰에서는 401 JSON 응답을 돌려줍니다.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({'message': 'Unauthorized'}, status=401)
        return view_func(request, *args, **kwargs)
    return wrapper


def parse_json_body(request):
    """
    요청 본문 → dict

    JSON 본문이 아니면 폼 데이터(request.POST)를 사용합니다.

    Raises:
        ValueError: JSON 형식 오류 또는 객체가 아닌 본문
    """
    if request.content_type == 'application/json':
        if not request.body:
            return {}
        data = json.loads(request.body)
        if not isinstance(data, dict):
            raise ValueError('JSON 객체가 필요합니다.')
        return data
    return request.POST.dict()


def form_errors_response(form):
    return JsonResponse({'errors': form.errors}, status=400)


def invalid_body_response(exc):
    return JsonResponse({'message': f'요청 본문을 읽을 수 없습니다: {exc}'}, status=400)


def no_content_response():
    return HttpResponse(status=204)


def bind_form(form_class, data, instance=None, **kwargs):
    """
    폼 바인딩 (수정 시 본문에 없는 필드는 기존 값 유지)

    PUT 요청도 일부 필드만 보낼 수 있도록 instance 값 위에 본문을 덮어씁니다.
    """
    if instance is not None:
        data = {**model_to_dict(instance, fields=form_class._meta.fields), **data}
    return form_class(data=data, instance=instance, **kwargs)
