"""
국가별 세금 계산 유틸리티

- calculate_tax(): 소계 → 과세금액 → 세액 → 합계
- is_vat_country() / get_tax_name(): 국가별 세금 명칭 분류
- format_tax_amount(): 통화/로케일 포맷팅 (Babel)

세율은 퍼센트 숫자로 저장합니다 (20 = 20%).
엔진 내부에서는 반올림하지 않습니다. 반올림은 저장/표시 단계에서 처리합니다.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Callable, Dict, Optional, Tuple

from babel.core import Locale, UnknownLocaleError
from babel.numbers import UnknownCurrencyError, format_currency, validate_currency

logger = logging.getLogger(__name__)

ZERO = Decimal('0')
HUNDRED = Decimal('100')


# 국가별 기본 세율 (VAT/GST/Sales Tax, 퍼센트)
DEFAULT_TAX_RATES = MappingProxyType({
    # EU
    'AT': Decimal('20'),
    'BE': Decimal('21'),
    'BG': Decimal('20'),
    'HR': Decimal('25'),
    'CY': Decimal('19'),
    'CZ': Decimal('21'),
    'DK': Decimal('25'),
    'EE': Decimal('20'),
    'FI': Decimal('24'),
    'FR': Decimal('20'),
    'DE': Decimal('19'),
    'GR': Decimal('24'),
    'HU': Decimal('27'),
    'IE': Decimal('23'),
    'IT': Decimal('22'),
    'LV': Decimal('21'),
    'LT': Decimal('21'),
    'LU': Decimal('17'),
    'MT': Decimal('18'),
    'NL': Decimal('21'),
    'PL': Decimal('23'),
    'PT': Decimal('23'),
    'RO': Decimal('19'),
    'SK': Decimal('20'),
    'SI': Decimal('22'),
    'ES': Decimal('21'),
    'SE': Decimal('25'),

    # EU 외 유럽
    'GB': Decimal('20'),
    'CH': Decimal('7.7'),
    'NO': Decimal('25'),

    # 북미
    'US': Decimal('0'),  # 연방 판매세 없음
    'CA': Decimal('5'),  # GST만 (주별 세금 별도)
    'MX': Decimal('16'),

    # 아시아-태평양
    'AU': Decimal('10'),
    'NZ': Decimal('15'),
    'JP': Decimal('10'),
    'SG': Decimal('8'),
    'IN': Decimal('18'),
    'CN': Decimal('13'),

    # 기타
    'BR': Decimal('17'),
    'RU': Decimal('20'),
    'ZA': Decimal('15'),
})

# VAT 표기 국가 (EU + 영국, 스위스, 노르웨이)
VAT_COUNTRIES = frozenset([
    'AT', 'BE', 'BG', 'HR', 'CY', 'CZ', 'DK', 'EE', 'FI', 'FR',
    'DE', 'GR', 'HU', 'IE', 'IT', 'LV', 'LT', 'LU', 'MT', 'NL',
    'PL', 'PT', 'RO', 'SK', 'SI', 'ES', 'SE', 'GB', 'CH', 'NO',
])

# VAT 국가 외 세금 명칭
TAX_NAMES = MappingProxyType({
    'US': 'Sales Tax',
    'CA': 'GST/HST',
    'AU': 'GST',
    'NZ': 'GST',
    'SG': 'GST',
    'JP': 'Consumption Tax',
    'IN': 'GST',
    'CN': 'VAT',
    'BR': 'ICMS',
    'MX': 'IVA',
    'ZA': 'VAT',
})


class FormattingError(ValueError):
    """통화 코드 또는 로케일을 포맷팅할 수 없을 때"""


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """
    값을 Decimal로 변환 (문자열 경유)

    float 7.7 → Decimal('7.7') 처럼 부동소수점 오차 없이 변환합니다.
    None, 빈 문자열, 변환 불가 값은 default 반환.
    """
    if value is None or str(value).strip() == '':
        return default

    if isinstance(value, Decimal):
        return value

    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return default


@dataclass(frozen=True)
class TaxContext:
    """
    세금 계산 컨텍스트 (계산마다 새로 생성하는 불변 값)

    Fields:
        country_code: ISO-3166 alpha-2 국가 코드
        tax_rate: .rate 속성을 가진 세율 레코드 (TaxRate 모델 등)
        is_exempt: 면세 여부
        custom_rate: 직접 지정한 세율 (0 포함)
    """
    country_code: str
    tax_rate: Optional[Any] = None
    is_exempt: bool = False
    custom_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class TaxCalculation:
    """세금 계산 결과"""
    taxable_amount: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    effective_rate: Decimal = field(default=ZERO)

    def as_dict(self) -> Dict[str, Decimal]:
        return {
            'taxable_amount': self.taxable_amount,
            'tax_amount': self.tax_amount,
            'total_amount': self.total_amount,
            'effective_rate': self.effective_rate,
        }


# =============================================================================
# 세율 결정 규칙 (앞에서부터 평가, 처음으로 값을 돌려준 규칙이 적용됨)
# =============================================================================

def _exempt_rate(context: TaxContext) -> Optional[Decimal]:
    if context.is_exempt:
        return ZERO
    return None


def _custom_rate(context: TaxContext) -> Optional[Decimal]:
    if context.custom_rate is not None:
        return to_decimal(context.custom_rate)
    return None


def _record_rate(context: TaxContext) -> Optional[Decimal]:
    if context.tax_rate is not None:
        return to_decimal(getattr(context.tax_rate, 'rate', None))
    return None


def _country_default_rate(context: TaxContext) -> Optional[Decimal]:
    return get_default_rate(context.country_code)


RATE_RULES: Tuple[Callable[[TaxContext], Optional[Decimal]], ...] = (
    _exempt_rate,
    _custom_rate,
    _record_rate,
    _country_default_rate,
)


def resolve_effective_rate(context: TaxContext) -> Decimal:
    """
    적용 세율 결정

    우선순위: 면세 > 직접 지정 세율 > 세율 레코드 > 국가 기본 세율
    """
    for rule in RATE_RULES:
        rate = rule(context)
        if rate is not None:
            return rate
    return ZERO


def calculate_tax(subtotal, discount=ZERO, context: TaxContext = None) -> TaxCalculation:
    """
    소계와 할인액, 세금 컨텍스트로 세액 계산

    Args:
        subtotal: 품목 합계 (음수도 검증하지 않음)
        discount: 할인액 (기본 0)
        context: TaxContext

    Returns:
        TaxCalculation (항상 성공, 반올림 없음)
    """
    if context is None:
        context = TaxContext(country_code='')

    effective_rate = resolve_effective_rate(context)

    # 과세금액은 0 미만으로 내려가지 않음
    taxable_amount = max(ZERO, to_decimal(subtotal) - to_decimal(discount))
    tax_amount = taxable_amount * effective_rate / HUNDRED
    total_amount = taxable_amount + tax_amount

    return TaxCalculation(
        taxable_amount=taxable_amount,
        tax_amount=tax_amount,
        total_amount=total_amount,
        effective_rate=effective_rate,
    )


# =============================================================================
# 국가 분류
# =============================================================================

def get_default_rate(country_code: str) -> Decimal:
    """국가 기본 세율 (미등록 국가는 0)"""
    return DEFAULT_TAX_RATES.get(country_code, ZERO)


def is_vat_country(country_code: str) -> bool:
    """VAT 표기 국가 여부"""
    return country_code in VAT_COUNTRIES


def get_tax_name(country_code: str) -> str:
    """국가별 세금 명칭 (미등록 국가는 'Tax')"""
    if is_vat_country(country_code):
        return 'VAT'
    return TAX_NAMES.get(country_code, 'Tax')


# =============================================================================
# 포맷팅
# =============================================================================

def format_tax_amount(amount, currency_code: str = 'USD', locale: str = 'en-US') -> str:
    """
    금액을 로케일에 맞는 통화 문자열로 변환 (소수점 2자리 고정)

    Raises:
        FormattingError: 알 수 없는 통화 코드 또는 로케일
    """
    try:
        validate_currency(currency_code)
        parsed_locale = Locale.parse(str(locale).replace('-', '_'))
    except (UnknownCurrencyError, UnknownLocaleError, ValueError, TypeError) as exc:
        raise FormattingError(
            f"포맷팅 불가: currency={currency_code!r}, locale={locale!r} ({exc})"
        ) from exc

    # currency_digits=False: 통화 기본 자릿수(JPY 0자리 등) 대신 로케일 패턴의 2자리 사용
    return format_currency(
        to_decimal(amount),
        currency_code,
        locale=parsed_locale,
        currency_digits=False,
    )


def format_tax_amount_or_plain(amount, currency_code: str = 'USD', locale: str = 'en-US') -> str:
    """포맷팅 실패 시 숫자 문자열(소수점 2자리)로 대체"""
    try:
        return format_tax_amount(amount, currency_code, locale)
    except FormattingError as exc:
        logger.warning(f"통화 포맷팅 실패, 숫자로 대체: {exc}")
        return f"{to_decimal(amount):.2f}"
