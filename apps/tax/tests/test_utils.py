"""
Tax Utils 테스트 (Pytest)

핵심 비즈니스 로직:
- calculate_tax() 세율 우선순위 및 과세금액 계산
- is_vat_country() / get_tax_name() 국가 분류
- format_tax_amount() 통화 포맷팅
"""
import pytest
from decimal import Decimal
from types import SimpleNamespace

from apps.tax.utils import (
    DEFAULT_TAX_RATES,
    VAT_COUNTRIES,
    FormattingError,
    TaxContext,
    calculate_tax,
    format_tax_amount,
    format_tax_amount_or_plain,
    get_default_rate,
    get_tax_name,
    is_vat_country,
    resolve_effective_rate,
    to_decimal,
)


class TestCalculateTax:
    """세액 계산 함수 테스트"""

    @pytest.mark.parametrize("subtotal,discount,context,expected", [
        # 영국 기본 20%
        (100, 0, TaxContext(country_code='GB'),
         (Decimal('100'), Decimal('20'), Decimal('120'), Decimal('20'))),
        # 스위스 7.7% + 할인
        (200, 50, TaxContext(country_code='CH'),
         (Decimal('150'), Decimal('11.55'), Decimal('161.55'), Decimal('7.7'))),
        # 미국 + 직접 지정 세율
        (100, 0, TaxContext(country_code='US', custom_rate=Decimal('8.25')),
         (Decimal('100'), Decimal('8.25'), Decimal('108.25'), Decimal('8.25'))),
        # 면세
        (100, 0, TaxContext(country_code='GB', is_exempt=True),
         (Decimal('100'), Decimal('0'), Decimal('100'), Decimal('0'))),
    ])
    def test_concrete_cases(self, subtotal, discount, context, expected):
        """대표 계산 예시"""
        result = calculate_tax(subtotal, discount, context)

        assert (
            result.taxable_amount,
            result.tax_amount,
            result.total_amount,
            result.effective_rate,
        ) == expected

    def test_discount_defaults_to_zero(self):
        result = calculate_tax(Decimal('100'), context=TaxContext(country_code='DE'))

        assert result.taxable_amount == Decimal('100')
        assert result.tax_amount == Decimal('19')

    def test_discount_greater_than_subtotal(self):
        """할인액이 소계보다 크면 과세금액 0 (음수 불가)"""
        result = calculate_tax(Decimal('50'), Decimal('80'), TaxContext(country_code='GB'))

        assert result.taxable_amount == Decimal('0')
        assert result.tax_amount == Decimal('0')
        assert result.total_amount == Decimal('0')
        assert result.effective_rate == Decimal('20')

    def test_unknown_country_is_zero_rate(self):
        """미등록 국가는 세율 0"""
        result = calculate_tax(Decimal('100'), Decimal('0'), TaxContext(country_code='XX'))

        assert result.effective_rate == Decimal('0')
        assert result.total_amount == Decimal('100')

    def test_missing_context_is_zero_rate(self):
        result = calculate_tax(Decimal('100'))

        assert result.effective_rate == Decimal('0')
        assert result.total_amount == Decimal('100')

    def test_float_inputs_keep_decimal_precision(self):
        """float 입력도 문자열 경유로 정확하게 변환"""
        result = calculate_tax(0.1 + 0.2, 0, TaxContext(country_code='XX', custom_rate=7.7))

        assert result.taxable_amount == Decimal('0.30000000000000004')
        assert result.effective_rate == Decimal('7.7')

    def test_no_rounding_inside_engine(self):
        """엔진은 반올림하지 않음 (표시/저장 단계에서 처리)"""
        result = calculate_tax(Decimal('33.33'), Decimal('0'), TaxContext(country_code='CH'))

        assert result.tax_amount == Decimal('2.56641')

    def test_as_dict(self):
        result = calculate_tax(Decimal('100'), Decimal('0'), TaxContext(country_code='GB'))

        assert result.as_dict() == {
            'taxable_amount': Decimal('100'),
            'tax_amount': Decimal('20'),
            'total_amount': Decimal('120'),
            'effective_rate': Decimal('20'),
        }

    @pytest.mark.parametrize("subtotal,discount", [
        (Decimal('0'), Decimal('0')),
        (Decimal('99.99'), Decimal('0.99')),
        (Decimal('1000000'), Decimal('250000')),
        (Decimal('10'), Decimal('10')),
        (Decimal('10'), Decimal('10.01')),
    ])
    @pytest.mark.parametrize("country_code", ['GB', 'CH', 'US', 'JP', 'XX'])
    def test_totals_are_consistent(self, subtotal, discount, country_code):
        """과세금액 ≥ 0, 합계 = 과세금액 + 세액, 세액 = 과세금액 x 세율 / 100"""
        result = calculate_tax(subtotal, discount, TaxContext(country_code=country_code))

        assert result.taxable_amount >= 0
        assert result.taxable_amount == max(Decimal('0'), subtotal - discount)
        assert result.total_amount == result.taxable_amount + result.tax_amount
        assert result.tax_amount == result.taxable_amount * result.effective_rate / Decimal('100')

    @pytest.mark.parametrize("subtotal,discount", [
        (Decimal('0'), Decimal('0')),
        (Decimal('99.99'), Decimal('0.99')),
        (Decimal('1000000'), Decimal('250000')),
        (Decimal('10'), Decimal('10.01')),
    ])
    @pytest.mark.parametrize("custom_rate", [
        Decimal('0'), Decimal('7.7'), Decimal('8.25'), Decimal('12.5'), Decimal('100'),
    ])
    @pytest.mark.parametrize("country_code", ['GB', 'US', 'XX'])
    def test_totals_with_custom_rate(self, subtotal, discount, custom_rate, country_code):
        """직접 지정 세율: 합계 = max(0, 소계 - 할인) x (1 + 세율 / 100)"""
        result = calculate_tax(
            subtotal, discount, TaxContext(country_code=country_code, custom_rate=custom_rate)
        )

        taxable = max(Decimal('0'), subtotal - discount)
        assert result.effective_rate == custom_rate
        assert result.taxable_amount == taxable
        assert result.total_amount == taxable * (1 + custom_rate / Decimal('100'))
        assert result.total_amount == result.taxable_amount + result.tax_amount


class TestResolveEffectiveRate:
    """세율 우선순위: 면세 > 직접 지정 > 세율 레코드 > 국가 기본"""

    record = SimpleNamespace(rate=Decimal('5.00'))

    def test_exempt_wins_over_everything(self):
        context = TaxContext(
            country_code='GB', tax_rate=self.record, is_exempt=True, custom_rate=Decimal('12')
        )
        assert resolve_effective_rate(context) == Decimal('0')

    def test_custom_rate_wins_over_record(self):
        context = TaxContext(country_code='GB', tax_rate=self.record, custom_rate=Decimal('12'))
        assert resolve_effective_rate(context) == Decimal('12')

    def test_zero_custom_rate_is_respected(self):
        """직접 지정 세율 0도 유효한 값"""
        context = TaxContext(country_code='GB', tax_rate=self.record, custom_rate=Decimal('0'))
        assert resolve_effective_rate(context) == Decimal('0')

    def test_record_wins_over_country_default(self):
        context = TaxContext(country_code='GB', tax_rate=self.record)
        assert resolve_effective_rate(context) == Decimal('5.00')

    def test_record_rate_as_string(self):
        """DB 드라이버가 문자열로 돌려주는 세율도 처리"""
        context = TaxContext(country_code='GB', tax_rate=SimpleNamespace(rate='17.5'))
        assert resolve_effective_rate(context) == Decimal('17.5')

    def test_country_default(self):
        assert resolve_effective_rate(TaxContext(country_code='IN')) == Decimal('18')

    def test_context_is_immutable(self):
        context = TaxContext(country_code='GB')
        with pytest.raises(AttributeError):
            context.country_code = 'DE'


class TestCountryTables:
    """국가 분류 테이블 테스트"""

    def test_vat_country_count(self):
        assert len(VAT_COUNTRIES) == 30

    @pytest.mark.parametrize("country_code", ['AT', 'DE', 'FR', 'SE', 'GB', 'CH', 'NO'])
    def test_vat_countries(self, country_code):
        assert is_vat_country(country_code) is True
        assert get_tax_name(country_code) == 'VAT'

    @pytest.mark.parametrize("country_code,expected", [
        ('US', 'Sales Tax'),
        ('CA', 'GST/HST'),
        ('AU', 'GST'),
        ('NZ', 'GST'),
        ('SG', 'GST'),
        ('JP', 'Consumption Tax'),
        ('IN', 'GST'),
        ('CN', 'VAT'),
        ('ZA', 'VAT'),
        ('BR', 'ICMS'),
        ('MX', 'IVA'),
        ('KR', 'Tax'),
        ('', 'Tax'),
    ])
    def test_tax_names(self, country_code, expected):
        assert get_tax_name(country_code) == expected

    def test_non_eu_vat_names_are_not_vat_countries(self):
        """CN/ZA는 명칭은 VAT지만 VAT 국가 목록에는 없음"""
        assert is_vat_country('CN') is False
        assert is_vat_country('ZA') is False

    def test_every_vat_country_has_default_rate(self):
        assert VAT_COUNTRIES <= set(DEFAULT_TAX_RATES)

    @pytest.mark.parametrize("country_code,expected", [
        ('GB', Decimal('20')),
        ('CH', Decimal('7.7')),
        ('HU', Decimal('27')),
        ('US', Decimal('0')),
        ('CA', Decimal('5')),
        ('XX', Decimal('0')),
    ])
    def test_default_rates(self, country_code, expected):
        assert get_default_rate(country_code) == expected

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_TAX_RATES['GB'] = Decimal('0')


class TestToDecimal:

    @pytest.mark.parametrize("value,expected", [
        (7.7, Decimal('7.7')),
        ('20', Decimal('20')),
        (' 1.50 ', Decimal('1.50')),
        (3, Decimal('3')),
        (Decimal('2.5'), Decimal('2.5')),
        (None, Decimal('0')),
        ('', Decimal('0')),
        ('abc', Decimal('0')),
    ])
    def test_conversion(self, value, expected):
        assert to_decimal(value) == expected

    def test_custom_default(self):
        assert to_decimal(None, default=Decimal('1')) == Decimal('1')


class TestFormatTaxAmount:
    """통화 포맷팅 테스트"""

    def test_en_us_usd(self):
        assert format_tax_amount(Decimal('1234.5'), 'USD', 'en-US') == '$1,234.50'

    def test_defaults_are_usd_en_us(self):
        assert format_tax_amount(Decimal('20')) == '$20.00'

    def test_always_two_fraction_digits(self):
        """통화 기본 자릿수와 관계없이 소수점 2자리"""
        assert format_tax_amount(Decimal('1000'), 'JPY', 'en-US').endswith('1,000.00')
        assert format_tax_amount(Decimal('11.555'), 'USD', 'en-US') == '$11.56'

    def test_locale_separators(self):
        result = format_tax_amount(Decimal('1234.5'), 'EUR', 'de-DE')

        assert '1.234,50' in result
        assert '€' in result

    def test_underscore_locale_accepted(self):
        assert format_tax_amount(Decimal('5'), 'GBP', 'en_GB') == '£5.00'

    @pytest.mark.parametrize("currency_code,locale", [
        ('NOTACURRENCY', 'en-US'),
        ('USD', 'xx-YY'),
        ('USD', 'not a locale'),
        ('USD', None),
    ])
    def test_invalid_input_raises(self, currency_code, locale):
        with pytest.raises(FormattingError):
            format_tax_amount(Decimal('1'), currency_code, locale)

    def test_formatting_error_is_value_error(self):
        with pytest.raises(ValueError):
            format_tax_amount(Decimal('1'), 'NOTACURRENCY', 'en-US')

    def test_plain_fallback(self, caplog):
        """포맷팅 실패 시 숫자 문자열로 대체 + 경고 로그"""
        with caplog.at_level('WARNING', logger='apps.tax.utils'):
            result = format_tax_amount_or_plain(Decimal('12.5'), 'NOTACURRENCY', 'en-US')

        assert result == '12.50'
        assert '통화 포맷팅 실패' in caplog.text

    def test_plain_fallback_passes_through_success(self):
        assert format_tax_amount_or_plain(Decimal('12.5'), 'USD', 'en-US') == '$12.50'
