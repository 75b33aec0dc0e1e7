"""
발행 회사 / 고객 API

- 본인 데이터만 조회/수정
- 삭제는 소프트 삭제 (과거 인보이스가 계속 참조)
"""
import logging

from django.db.models import Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods

from apps.core.api import (
    bind_form,
    form_errors_response,
    invalid_body_response,
    login_required_json,
    no_content_response,
    parse_json_body,
)

from .forms import ClientForm, CompanyProfileForm
from .models import Client, CompanyProfile

logger = logging.getLogger(__name__)


# =============================================================================
# CompanyProfile 뷰
# =============================================================================

def _save_company_profile(request, form):
    profile = form.save(commit=False)
    profile.user = request.user
    profile.save()
    # 기본 프로필은 사용자당 1개
    if profile.is_default:
        profile.make_default()
    return profile


@login_required_json
@require_http_methods(['GET', 'POST'])
def company_profile_list(request):
    """
    GET: 본인 회사 프로필 목록 (기본 프로필 먼저)
    POST: 생성 (첫 프로필은 자동으로 기본)
    """
    if request.method == 'GET':
        profiles = CompanyProfile.active.filter(user=request.user)
        return JsonResponse([profile.to_dict() for profile in profiles], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(CompanyProfileForm, data)
    if not form.is_valid():
        return form_errors_response(form)

    if not CompanyProfile.active.filter(user=request.user).exists():
        form.instance.is_default = True
    profile = _save_company_profile(request, form)

    logger.info(f"회사 프로필 생성: user={request.user.id}, profile={profile.pk}, name={profile.name}")
    return JsonResponse(profile.to_dict(), status=201)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def company_profile_detail(request, pk):
    profile = get_object_or_404(CompanyProfile.active, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(profile.to_dict())

    if request.method == 'DELETE':
        profile.soft_delete()
        logger.info(f"회사 프로필 삭제: user={request.user.id}, profile={profile.pk}")
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(CompanyProfileForm, data, instance=profile)
    if not form.is_valid():
        return form_errors_response(form)

    profile = _save_company_profile(request, form)
    return JsonResponse(profile.to_dict())


# =============================================================================
# Client 뷰
# =============================================================================

@login_required_json
@require_http_methods(['GET', 'POST'])
def client_list(request):
    """
    GET: 본인 고객 목록 (?search= 이름/이메일 검색)
    POST: 생성 (활성 고객명 중복 불가)
    """
    if request.method == 'GET':
        clients = Client.active.filter(user=request.user)
        search = request.GET.get('search')
        if search:
            clients = clients.filter(Q(name__icontains=search) | Q(email__icontains=search))
        return JsonResponse([client.to_dict() for client in clients], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(ClientForm, data, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    client = form.save(commit=False)
    client.user = request.user
    client.save()

    logger.info(f"고객 생성: user={request.user.id}, client={client.pk}, name={client.name}")
    return JsonResponse(client.to_dict(), status=201)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def client_detail(request, pk):
    client = get_object_or_404(Client.active, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(client.to_dict())

    if request.method == 'DELETE':
        client.soft_delete()
        logger.info(f"고객 삭제: user={request.user.id}, client={client.pk}")
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(ClientForm, data, instance=client, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    client = form.save()
    return JsonResponse(client.to_dict())
