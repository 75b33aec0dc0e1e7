"""발행 회사 / 고객 입력 폼"""

from django import forms
from django.core.exceptions import ValidationError

from .models import Client, CompanyProfile

ADDRESS_FIELDS = ['address', 'city', 'state', 'postal_code', 'country']


class AddressFormMixin:

    def clean_country(self):
        country = (self.cleaned_data.get('country') or '').upper()
        if country and len(country) != 2:
            raise ValidationError('국가 코드는 2자리여야 합니다 (예: GB).')
        return country


class CompanyProfileForm(AddressFormMixin, forms.ModelForm):
    """발행 회사 생성/수정 폼"""

    class Meta:
        model = CompanyProfile
        fields = [
            'name', 'tax_id', 'email', 'phone', 'website', 'logo_url',
            *ADDRESS_FIELDS,
            'bank_name', 'bank_account_name', 'bank_account_number',
            'bank_routing_number', 'bank_swift_bic', 'bank_iban',
            'is_default',
        ]

    def clean_bank_iban(self):
        """IBAN은 공백 제거 후 대문자로 저장"""
        iban = self.cleaned_data.get('bank_iban') or ''
        return iban.replace(' ', '').upper()


class ClientForm(AddressFormMixin, forms.ModelForm):
    """고객 생성/수정 폼"""

    class Meta:
        model = Client
        fields = ['name', 'tax_id', 'email', 'phone', *ADDRESS_FIELDS, 'notes']

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user', None)
        super().__init__(*args, **kwargs)

    def clean_name(self):
        """고객명 중복 검증 (동일 사용자의 활성 고객 내)"""
        name = self.cleaned_data.get('name')

        if self.user and name:
            queryset = Client.active.filter(user=self.user, name=name)

            # 수정 시 자기 자신 제외
            if self.instance and self.instance.pk:
                queryset = queryset.exclude(pk=self.instance.pk)

            if queryset.exists():
                raise ValidationError('이미 등록된 고객명입니다.')

        return name
