"""
세율 조회 / 세금 계산 API
"""
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from .forms import TaxCalculationForm
from .models import TaxRate
from .utils import (
    TaxContext,
    calculate_tax,
    format_tax_amount_or_plain,
    get_tax_name,
    is_vat_country,
)

logger = logging.getLogger(__name__)


@require_GET
def tax_rate_list(request):
    """전체 세율 목록"""
    rates = [rate.to_dict() for rate in TaxRate.objects.all()]
    return JsonResponse(rates, safe=False)


@require_GET
def tax_rates_by_country(request, country_code):
    """국가별 세율 목록 (미등록 국가는 빈 리스트)"""
    rates = [rate.to_dict() for rate in TaxRate.objects.for_country(country_code)]
    return JsonResponse(rates, safe=False)


@require_GET
def calculate(request):
    """
    세금 계산

    우선순위: is_exempt > custom_rate > 국가 기본 세율 레코드 > 내장 기본 세율
    """
    form = TaxCalculationForm(request.GET)
    if not form.is_valid():
        return JsonResponse({'errors': form.errors}, status=400)

    data = form.cleaned_data
    country_code = data['country']

    context = TaxContext(
        country_code=country_code,
        tax_rate=TaxRate.objects.default_for(country_code),
        is_exempt=data['is_exempt'],
        custom_rate=data['custom_rate'],
    )
    result = calculate_tax(data['subtotal'], data['discount'], context)

    currency = data['currency']
    locale = data['locale']

    logger.debug(
        f"세금 계산: country={country_code}, subtotal={data['subtotal']}, "
        f"rate={result.effective_rate}"
    )

    return JsonResponse({
        **result.as_dict(),
        'country_code': country_code,
        'tax_name': get_tax_name(country_code),
        'is_vat_country': is_vat_country(country_code),
        'formatted': {
            'taxable_amount': format_tax_amount_or_plain(result.taxable_amount, currency, locale),
            'tax_amount': format_tax_amount_or_plain(result.tax_amount, currency, locale),
            'total_amount': format_tax_amount_or_plain(result.total_amount, currency, locale),
        },
    })
