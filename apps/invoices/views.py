"""
인보이스 / 견적서 API

- 문서 CRUD (생성 시 플랜 쿼터 적용, 삭제는 소프트 삭제)
- 품목 CRUD (저장/삭제 시 문서 금액 자동 재계산)
- 합계 요약 (세금 엔진 결과 + 통화 포맷)
- 견적서 → 인보이스 전환
- 템플릿 목록 (무료 플랜은 프리미엄 제외)
"""
import logging

from django.conf import settings
from django.db import transaction
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_date
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.accounts.models import Profile, QuotaExceeded
from apps.catalog.utils import record_master_usage
from apps.core.api import (
    bind_form,
    form_errors_response,
    invalid_body_response,
    login_required_json,
    no_content_response,
    parse_json_body,
)

from .forms import InvoiceForm, InvoiceItemForm, QuotationForm, QuotationItemForm
from .models import Invoice, InvoiceTemplate, Quotation
from .utils import build_totals_summary, convert_quotation_to_invoice, create_invoice, create_quotation

logger = logging.getLogger(__name__)


def _quota_response(request, exc):
    logger.warning(f"쿼터 초과: user={request.user.id}, reason={exc.messages[0]}")
    return JsonResponse({'message': exc.messages[0]}, status=403)


def _document_detail_dict(document):
    data = document.to_dict()
    data['items'] = [item.to_dict() for item in document.items.all()]
    return data


# =============================================================================
# 문서 공통 처리
# =============================================================================

def _document_list(request, model, form_class, create_func):
    """GET: 본인 문서 목록 (?status=), POST: 쿼터 확인 후 생성"""
    if request.method == 'GET':
        documents = model.active.filter(user=request.user).select_related('client')
        status = request.GET.get('status')
        if status:
            documents = documents.filter(status=status)
        return JsonResponse([document.to_dict() for document in documents], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(form_class, data, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        document = create_func(request.user, **form.cleaned_data)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(document.to_dict(), status=201)


def _document_detail(request, model, form_class, pk):
    """GET: 문서 + 품목, PUT: 수정 (금액 재계산), DELETE: 소프트 삭제"""
    document = get_object_or_404(model.active, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse(_document_detail_dict(document))

    if request.method == 'DELETE':
        document.soft_delete()
        logger.info(f"{model.__name__} 삭제: user={request.user.id}, number={document.number}")
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(form_class, data, instance=document, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    document = form.save()
    document.refresh_from_db()
    return JsonResponse(_document_detail_dict(document))


def _save_item(request, form, document, link_field):
    with transaction.atomic():
        item = form.save(commit=False)
        setattr(item, link_field, document)
        item.save()
        # 견적서 품목만 중앙 마스터를 참조할 수 있음
        if getattr(form, 'master_item_changed', None) and form.master_item_changed():
            record_master_usage(request.user, master_item=item.master_item, quotation=document)
    return item


def _item_list(request, model, form_class, link_field, pk):
    """GET: 품목 목록, POST: 품목 추가"""
    document = get_object_or_404(model.active, pk=pk, user=request.user)

    if request.method == 'GET':
        return JsonResponse([item.to_dict() for item in document.items.all()], safe=False)

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(form_class, data, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        item = _save_item(request, form, document, link_field)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(item.to_dict(), status=201)


def _item_detail(request, model, form_class, link_field, pk, item_pk):
    """GET: 품목, PUT: 수정, DELETE: 삭제"""
    document = get_object_or_404(model.active, pk=pk, user=request.user)
    item = get_object_or_404(document.items, pk=item_pk)

    if request.method == 'GET':
        return JsonResponse(item.to_dict())

    if request.method == 'DELETE':
        item.delete()
        return no_content_response()

    try:
        data = parse_json_body(request)
    except ValueError as exc:
        return invalid_body_response(exc)

    form = bind_form(form_class, data, instance=item, user=request.user)
    if not form.is_valid():
        return form_errors_response(form)

    try:
        item = _save_item(request, form, document, link_field)
    except QuotaExceeded as exc:
        return _quota_response(request, exc)

    return JsonResponse(item.to_dict())


# =============================================================================
# 인보이스
# =============================================================================

@login_required_json
@require_http_methods(['GET', 'POST'])
def invoice_list(request):
    return _document_list(request, Invoice, InvoiceForm, create_invoice)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def invoice_detail(request, pk):
    return _document_detail(request, Invoice, InvoiceForm, pk)


@login_required_json
@require_http_methods(['GET', 'POST'])
def invoice_item_list(request, pk):
    return _item_list(request, Invoice, InvoiceItemForm, 'invoice', pk)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def invoice_item_detail(request, pk, item_pk):
    return _item_detail(request, Invoice, InvoiceItemForm, 'invoice', pk, item_pk)


# =============================================================================
# 견적서
# =============================================================================

@login_required_json
@require_http_methods(['GET', 'POST'])
def quotation_list(request):
    return _document_list(request, Quotation, QuotationForm, create_quotation)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def quotation_detail(request, pk):
    return _document_detail(request, Quotation, QuotationForm, pk)


@login_required_json
@require_http_methods(['GET', 'POST'])
def quotation_item_list(request, pk):
    return _item_list(request, Quotation, QuotationItemForm, 'quotation', pk)


@login_required_json
@require_http_methods(['GET', 'PUT', 'DELETE'])
def quotation_item_detail(request, pk, item_pk):
    return _item_detail(request, Quotation, QuotationItemForm, 'quotation', pk, item_pk)


# =============================================================================
# 합계 요약 / 전환 / 템플릿
# =============================================================================

def _summary_response(request, document):
    locale = request.GET.get('locale') or settings.INVOICING_DEFAULT_LOCALE
    return JsonResponse(build_totals_summary(document, locale=locale))


@login_required_json
@require_GET
def invoice_summary(request, pk):
    """인보이스 합계 요약 (본인 문서만)"""
    invoice = get_object_or_404(Invoice.active, pk=pk, user=request.user)
    return _summary_response(request, invoice)


@login_required_json
@require_GET
def quotation_summary(request, pk):
    """견적서 합계 요약 (본인 문서만)"""
    quotation = get_object_or_404(Quotation.active, pk=pk, user=request.user)
    return _summary_response(request, quotation)


@login_required_json
@require_POST
def quotation_convert(request, pk):
    """
    견적서 → 인보이스 전환

    POST:
        invoice_number: 인보이스 번호 (선택, 기본 INV-<timestamp>)
        due_date: 지급 기한 YYYY-MM-DD (선택, 기본 +30일)
    """
    quotation = get_object_or_404(Quotation.active, pk=pk, user=request.user)

    due_date = None
    raw_due_date = request.POST.get('due_date')
    if raw_due_date:
        try:
            due_date = parse_date(raw_due_date)
        except ValueError:
            due_date = None
        if due_date is None:
            return JsonResponse({'message': '지급 기한 형식이 올바르지 않습니다 (YYYY-MM-DD).'}, status=400)

    try:
        invoice = convert_quotation_to_invoice(
            quotation,
            invoice_number=request.POST.get('invoice_number') or None,
            due_date=due_date,
        )
    except QuotaExceeded as exc:
        logger.warning(f"견적서 전환 거부: user={request.user.id}, quotation={pk}, reason={exc.messages[0]}")
        return JsonResponse({'message': exc.messages[0]}, status=403)

    return JsonResponse(invoice.to_dict(), status=201)


@login_required_json
@require_GET
def invoice_template_list(request):
    """
    사용 가능한 템플릿 목록

    ?type=invoice|quote 로 문서 종류 필터 (공용 템플릿 포함)
    """
    profile, _ = Profile.objects.get_or_create(user=request.user)
    templates = InvoiceTemplate.objects.available_to(profile)

    doc_type = request.GET.get('type')
    if doc_type:
        templates = templates.for_type(doc_type)

    return JsonResponse([template.to_dict() for template in templates], safe=False)
