"""
인보이스/견적서 금액 계산 및 생성 헬퍼

- calculate_line_amount(): 품목 금액 = 수량 x 단가 x (1 - 할인율/100)
- recalculate_totals(): 품목 합계 → 세금 엔진 → 문서 금액 저장
- build_totals_summary(): 합계 영역 표시용 데이터
- create_invoice() / create_quotation(): 쿼터 확인 후 생성
- convert_quotation_to_invoice(): 견적서 → 인보이스 전환
"""
import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.accounts.models import Profile
from apps.tax.models import TaxRate
from apps.tax.utils import (
    HUNDRED,
    ZERO,
    TaxContext,
    calculate_tax,
    format_tax_amount_or_plain,
    get_tax_name,
    to_decimal,
)

from .models import Invoice, InvoiceItem, Quotation

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def quantize_money(value):
    """저장용 금액 (소수점 2자리, 반올림)"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_line_amount(quantity, unit_price, discount=ZERO):
    """
    품목 금액 계산

    Args:
        quantity: 수량
        unit_price: 단가
        discount: 품목 할인율 (%)
    """
    gross = to_decimal(quantity) * to_decimal(unit_price)
    return quantize_money(gross * (HUNDRED - to_decimal(discount)) / HUNDRED)


def get_items_subtotal(document):
    """품목 금액 합계"""
    total = document.items.aggregate(total=Sum('amount'))['total']
    return total or ZERO


def build_tax_context(document):
    """
    문서 정보로 TaxContext 구성

    - 면세 문서: is_exempt
    - 직접 지정 세율이 있으면 custom_rate
    - 없으면 국가 기본 세율 레코드 (없으면 내장 기본 세율)
    """
    tax_rate = None
    if document.tax_rate is None and not document.is_tax_exempt:
        tax_rate = TaxRate.objects.default_for(document.country)

    return TaxContext(
        country_code=document.country,
        tax_rate=tax_rate,
        is_exempt=document.is_tax_exempt,
        custom_rate=document.tax_rate,
    )


def calculate_document_tax(document, context=None):
    if context is None:
        context = build_tax_context(document)
    return calculate_tax(get_items_subtotal(document), document.discount, context)


def recalculate_totals(document, save=True):
    """
    문서 금액 재계산

    subtotal = 품목 합계, tax/total = 세금 엔진 결과 (저장 시에만 반올림)
    """
    subtotal = get_items_subtotal(document)
    result = calculate_tax(subtotal, document.discount, build_tax_context(document))

    document.subtotal = quantize_money(subtotal)
    document.applied_tax_rate = quantize_money(result.effective_rate)
    document.tax = quantize_money(result.tax_amount)
    document.total = quantize_money(result.total_amount)

    if save:
        document.save(update_fields=['subtotal', 'applied_tax_rate', 'tax', 'total', 'updated_at'])

    logger.debug(
        f"금액 재계산: {document.__class__.__name__}={document.pk}, "
        f"subtotal={document.subtotal}, tax={document.tax}, total={document.total}"
    )
    return result


def get_tax_label(document, context=None):
    """표시용 세금 명칭 (세율 레코드 이름 우선)"""
    if context is None:
        context = build_tax_context(document)
    if context.tax_rate is not None:
        return context.tax_rate.name
    return get_tax_name(document.country)


def build_totals_summary(document, locale=None):
    """
    합계 영역 표시 데이터

    Returns:
        {'subtotal', 'discount', 'taxable_amount', 'tax_name', 'tax_label',
         'tax_rate', 'tax', 'total', 'currency', 'formatted', 'bank_details'}
    """
    locale = locale or settings.INVOICING_DEFAULT_LOCALE
    currency = document.currency

    context = build_tax_context(document)
    result = calculate_document_tax(document, context)
    subtotal = get_items_subtotal(document)
    discount = to_decimal(document.discount)
    tax_name = get_tax_label(document, context)

    def fmt(amount):
        return format_tax_amount_or_plain(amount, currency, locale)

    return {
        'number': document.number,
        'country': document.country,
        'currency': currency,
        'subtotal': subtotal,
        'discount': discount,
        'taxable_amount': result.taxable_amount,
        'tax_name': tax_name,
        # 예: "VAT (20%)"
        'tax_label': f"{tax_name} ({result.effective_rate.normalize():f}%)",
        'tax_rate': result.effective_rate,
        'tax': result.tax_amount,
        'total': result.total_amount,
        'formatted': {
            'subtotal': fmt(subtotal),
            'discount': f"-{fmt(discount)}" if discount > 0 else fmt(ZERO),
            'tax': fmt(result.tax_amount),
            'total': fmt(result.total_amount),
        },
        'bank_details': document.company_profile.get_bank_details(),
    }


# =============================================================================
# 생성 (쿼터 확인)
# =============================================================================

def _locked_profile(user):
    profile, _ = Profile.objects.select_for_update().get_or_create(user=user)
    return profile


@transaction.atomic
def create_invoice(user, **fields):
    """
    인보이스 생성 (쿼터 확인 → 생성 → 사용량 증가)

    Raises:
        QuotaExceeded: 쿼터 초과 또는 번들 만료
    """
    profile = _locked_profile(user)
    profile.check_invoice_quota()

    invoice = Invoice.objects.create(user=user, **fields)
    profile.use_invoice_quota()

    logger.info(
        f"인보이스 생성: user={user.id}, invoice={invoice.invoice_number}, "
        f"used={profile.invoices_used}/{profile.invoice_quota}"
    )
    return invoice


@transaction.atomic
def create_quotation(user, **fields):
    """견적서 생성 (쿼터 확인 → 생성 → 사용량 증가)"""
    profile = _locked_profile(user)
    profile.check_quote_quota()

    quotation = Quotation.objects.create(user=user, **fields)
    profile.use_quote_quota()

    logger.info(
        f"견적서 생성: user={user.id}, quotation={quotation.quote_number}, "
        f"used={profile.quotes_used}/{profile.quote_quota}"
    )
    return quotation


def generate_invoice_number(now=None):
    """기본 인보이스 번호: INV-<밀리초 타임스탬프>"""
    now = now or timezone.now()
    return f"INV-{int(now.timestamp() * 1000)}"


@transaction.atomic
def convert_quotation_to_invoice(quotation, invoice_number=None, due_date=None):
    """
    견적서를 인보이스로 전환

    - 헤더(회사, 고객, 국가, 통화, 할인, 세율 등)와 품목 복사
    - 인보이스 쿼터 적용
    - 견적서 상태는 accepted로 변경
    """
    today = timezone.localdate()
    if due_date is None:
        due_date = today + timedelta(days=settings.INVOICING_DEFAULT_DUE_DAYS)

    invoice = create_invoice(
        quotation.user,
        company_profile=quotation.company_profile,
        client=quotation.client,
        quotation=quotation,
        invoice_number=invoice_number or generate_invoice_number(),
        invoice_date=today,
        due_date=due_date,
        country=quotation.country,
        currency=quotation.currency,
        template_id=quotation.template_id,
        discount=quotation.discount,
        tax_rate=quotation.tax_rate,
        is_tax_exempt=quotation.is_tax_exempt,
        notes=quotation.notes,
        terms=quotation.terms,
        status='draft',
    )

    for item in quotation.items.all():
        InvoiceItem.objects.create(
            invoice=invoice,
            quotation_item=item,
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            discount=item.discount,
            sort_order=item.sort_order,
        )

    recalculate_totals(invoice)

    quotation.status = 'accepted'
    quotation.save(update_fields=['status', 'updated_at'])

    logger.info(f"견적서 전환: quotation={quotation.quote_number} → invoice={invoice.invoice_number}")
    return invoice
