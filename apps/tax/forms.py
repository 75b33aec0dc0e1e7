"""
세금 계산 API 입력 폼
"""
from decimal import Decimal

from django import forms
from django.conf import settings


class StrictBooleanField(forms.Field):
    """
    쿼리 문자열용 불리언 필드

    forms.BooleanField는 'false' 이외의 문자열('0', 'no', 'off' 포함)을
    모두 True로 처리하므로 허용 값을 명시적으로 구분합니다.
    """

    TRUE_VALUES = {'true', '1', 'yes', 'on'}
    FALSE_VALUES = {'false', '0', 'no', 'off'}

    def __init__(self, **kwargs):
        kwargs.setdefault('required', False)
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in (None, ''):
            return False
        if isinstance(value, bool):
            return value
        normalized = str(value).strip().lower()
        if normalized in self.TRUE_VALUES:
            return True
        if normalized in self.FALSE_VALUES:
            return False
        raise forms.ValidationError('true 또는 false 값만 허용됩니다.', code='invalid')


class TaxCalculationForm(forms.Form):
    """GET 파라미터 검증용 폼"""

    subtotal = forms.DecimalField(max_digits=15, decimal_places=2)
    discount = forms.DecimalField(
        max_digits=15,
        decimal_places=2,
        required=False,
        initial=Decimal('0'),
    )
    country = forms.CharField(max_length=2, min_length=2)
    custom_rate = forms.DecimalField(max_digits=5, decimal_places=2, required=False)
    is_exempt = StrictBooleanField()
    currency = forms.CharField(max_length=3, required=False)
    locale = forms.CharField(max_length=20, required=False)

    def clean_country(self):
        """국가 코드는 대문자로 통일"""
        return self.cleaned_data['country'].upper()

    def clean_discount(self):
        discount = self.cleaned_data.get('discount')
        if discount is None:
            return Decimal('0')
        if discount < 0:
            raise forms.ValidationError('할인액은 0 이상이어야 합니다.')
        return discount

    def clean_custom_rate(self):
        rate = self.cleaned_data.get('custom_rate')
        if rate is not None and rate < 0:
            raise forms.ValidationError('세율은 0 이상이어야 합니다.')
        return rate

    def clean_currency(self):
        currency = self.cleaned_data.get('currency')
        return (currency or settings.INVOICING_DEFAULT_CURRENCY).upper()

    def clean_locale(self):
        return self.cleaned_data.get('locale') or settings.INVOICING_DEFAULT_LOCALE
