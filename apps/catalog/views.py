"""
자재/서비스 및 약관 카탈로그 API

- 중앙 마스터 조회: 플랜에 중앙 마스터가 포함되고 사용량이 남아있어야 함
- 사용자 카탈로그 CRUD: 마스터를 참조해 만들면 사용량 +1
- 견적서 약관 CRUD
"""
import logging

from django.db import transaction
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_http_methods

from apps.accounts.models import QuotaExceeded
from apps.core.api import (
    bind_form,
    form_errors_response,
    invalid_body_response,
    login_required_json,
    no_content_response,
    parse_json_body,
)
from apps.invoices.models import Quotation

from .forms import CompanyItemForm, CompanyTermForm, QuotationTermForm
from .models import CompanyItem, CompanyTerm, MasterItem, MasterTerm
from .utils import check_master_access, record_master_usage

logger = logging.getLogger(__name__)


def _quota_response(request, exc):
    logger.warning(f"중앙 마스터 접근 거부: user={request.user.id}, reason={exc.messages[0]}")
    return JsonResponse({'message': exc.messages[0]}, status=403)


def _filter_category(queryset, request):
    category = request.GET.get('category')
    if category:
        queryset = queryset.filter(category=category)
    return queryset


# =============================================================================
# 중앙 마스터 (조회 전용)
# =============================================================================

@login_required_json
@require_GET
def master_item_list(request):
    """중앙 마스터 자재/서비스 목록 (?category=)"""
    try:
        check_master_access(request.user)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    items = _filter_category(MasterItem.objects.filter(is_active=True), request)
    return JsonResponse([item.to_dict() for item in items], safe=False)


@login_required_json
@require_GET
def master_item_detail(request, pk):
    try:
        check_master_access(request.user)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    item = get_object_or_404(MasterItem, pk=pk, is_active=True)
    return JsonResponse(item.to_dict())


@login_required_json
@require_GET
def master_term_list(request):
    """중앙 마스터 약관 목록 (?category=)"""
    try:
        check_master_access(request.user)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    terms = _filter_category(MasterTerm.objects.filter(is_active=True), request)
    return JsonResponse([term.to_dict() for term in terms], safe=False)


@login_required_json
@require_GET
def master_term_detail(request, pk):
    try:
        check_master_access(request.user)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    term = get_object_or_404(MasterTerm, pk=pk, is_active=True)
    return JsonResponse(term.to_dict())


# =============================================================================
# 사용자 카탈로그
# =============================================================================

def _save_company_item(request, form):
    with transaction.atomic():
        item = form.save(commit=False)
        item.user = request.user
        item.save()
        if form.master_item_changed():
            record_master_usage(request.user, master_item=item.master_item)
    return item


@login_required_json
@require_http_methods(['GET', 'POST'])
def company_item_list(request):
    """
    GET: 본인 자재/서비스 목록 (?category=)
    POST: 생성 (master_item 지정 시 중앙 마스터 쿼터 적용)
    """
    if request.method == 'GET':
        items = _filter_category(CompanyItem.active.filter(user=request.user), request)
        return JsonResponse([item.to_dict() for item in items], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(CompanyItemForm, data)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        item = _save_company_item(request, form)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    logger.info(f"자재/서비스 생성: user={request.user.id}, item={item.pk}")
    return JsonResponse(item.to_dict(), status=201)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def company_item_detail(request, pk):
    item = get_object_or_404(CompanyItem.active, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(item.to_dict())

    if request.method == 'DELETE':
        item.soft_delete()
        logger.info(f"자재/서비스 삭제: user={request.user.id}, item={item.pk}")
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(CompanyItemForm, data, instance=item)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        item = _save_company_item(request, form)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(item.to_dict())


def _save_company_term(request, form):
    with transaction.atomic():
        term = form.save(commit=False)
        term.user = request.user
        term.save()
        if form.master_term_changed():
            record_master_usage(request.user, master_term=term.master_term)
    return term


@login_required_json
@require_http_methods(['GET', 'POST'])
def company_term_list(request):
    """
    GET: 본인 약관 목록 (?category=)
    POST: 생성 (master_term 지정 시 중앙 마스터 쿼터 적용)
    """
    if request.method == 'GET':
        terms = _filter_category(CompanyTerm.active.filter(user=request.user), request)
        return JsonResponse([term.to_dict() for term in terms], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(CompanyTermForm, data)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        term = _save_company_term(request, form)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(term.to_dict(), status=201)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def company_term_detail(request, pk):
    term = get_object_or_404(CompanyTerm.active, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(term.to_dict())

    if request.method == 'DELETE':
        term.soft_delete()
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(CompanyTermForm, data, instance=term)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        term = _save_company_term(request, form)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(term.to_dict())


# =============================================================================
# 견적서 약관
# =============================================================================

def _save_quotation_term(request, form, quotation):
    with transaction.atomic():
        term = form.save(commit=False)
        term.quotation = quotation
        term.save()
        if form.master_term_changed():
            record_master_usage(request.user, master_term=term.master_term, quotation=quotation)
    return term


@login_required_json
@require_http_methods(['GET', 'POST'])
def quotation_term_list(request, quotation_pk):
    """
    GET: 견적서 약관 목록
    POST: 약관 추가 (company_term / master_term 내용 복사)
    """
    quotation = get_object_or_404(Quotation.active, pk=quotation_pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse([term.to_dict() for term in quotation.quotation_terms.all()], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(QuotationTermForm, data, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        term = _save_quotation_term(request, form, quotation)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(term.to_dict(), status=201)


@login_required_json
@require_http_methods(['PUT', 'DELETE'])
def quotation_term_detail(request, quotation_pk, pk):
    quotation = get_object_or_404(Quotation.active, pk=quotation_pk, user=request.user)
    term = get_object_or_404(quotation.quotation_terms, pk=pk)

    if request.method == 'DELETE':
        term.delete()
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(QuotationTermForm, data, instance=term, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        term = _save_quotation_term(request, form, quotation)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(term.to_dict())
