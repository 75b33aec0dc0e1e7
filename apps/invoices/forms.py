"""
인보이스 / 견적서 / 품목 입력 폼

회사 프로필, 고객, 견적서, 카탈로그 품목은 요청 사용자 본인 것만 선택할 수 있습니다.
"""
from django import forms
from django.conf import settings
from django.utils import timezone

from apps.businesses.models import Client, CompanyProfile
from apps.catalog.models import CompanyItem, MasterItem

from .models import Invoice, InvoiceItem, InvoiceTemplate, Quotation, QuotationItem
from .utils import generate_invoice_number

DOCUMENT_FIELDS = [
    'company_profile', 'client', 'country', 'currency', 'template',
    'discount', 'tax_rate', 'is_tax_exempt', 'notes', 'terms',
]


class BillingDocumentForm(forms.ModelForm):
    """인보이스/견적서 공통 검증"""

    template_type = InvoiceTemplate.TYPE_BOTH

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = user
        profile = getattr(user, 'profile', None)

        self.fields['company_profile'].queryset = CompanyProfile.active.filter(user=user)
        self.fields['company_profile'].error_messages['invalid_choice'] = 'Invalid company profile'
        self.fields['client'].queryset = Client.active.filter(user=user)
        self.fields['client'].error_messages['invalid_choice'] = 'Invalid client'
        self.fields['template'].queryset = (
            InvoiceTemplate.objects.for_type(self.template_type).available_to(profile)
        )
        self.fields['template'].error_messages['invalid_choice'] = '사용할 수 없는 템플릿입니다.'
        self.fields['currency'].required = False
        self.fields['discount'].required = False

    def clean_country(self):
        country = self.cleaned_data['country'].upper()
        if len(country) != 2:
            raise forms.ValidationError('국가 코드는 2자리여야 합니다 (예: GB).')
        return country

    def clean_currency(self):
        currency = self.cleaned_data.get('currency')
        return (currency or settings.INVOICING_DEFAULT_CURRENCY).upper()

    def clean_discount(self):
        discount = self.cleaned_data.get('discount')
        return discount if discount is not None else 0


class InvoiceForm(BillingDocumentForm):
    """
    인보이스 생성/수정

    invoice_number 생략 시 INV-<timestamp>, invoice_date 생략 시 오늘
    """

    template_type = InvoiceTemplate.TYPE_INVOICE

    class Meta:
        model = Invoice
        fields = DOCUMENT_FIELDS + ['quotation', 'invoice_number', 'invoice_date', 'due_date', 'status']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['quotation'].queryset = Quotation.active.filter(user=self.user)
        self.fields['invoice_number'].required = False
        self.fields['invoice_date'].required = False
        self.fields['status'].required = False

    def clean_invoice_number(self):
        return self.cleaned_data.get('invoice_number') or generate_invoice_number()

    def clean_invoice_date(self):
        return self.cleaned_data.get('invoice_date') or timezone.localdate()

    def clean_status(self):
        return self.cleaned_data.get('status') or 'draft'

    def clean(self):
        cleaned_data = super().clean()
        invoice_date = cleaned_data.get('invoice_date')
        due_date = cleaned_data.get('due_date')
        if invoice_date and due_date and due_date < invoice_date:
            self.add_error('due_date', '지급 기한은 발행일 이후여야 합니다.')
        return cleaned_data


class QuotationForm(BillingDocumentForm):
    """견적서 생성/수정"""

    template_type = InvoiceTemplate.TYPE_QUOTE

    class Meta:
        model = Quotation
        fields = DOCUMENT_FIELDS + ['quote_number', 'quote_date', 'valid_until', 'status']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['quote_date'].required = False
        self.fields['status'].required = False

    def clean_quote_date(self):
        return self.cleaned_data.get('quote_date') or timezone.localdate()

    def clean_status(self):
        return self.cleaned_data.get('status') or 'draft'

    def clean(self):
        cleaned_data = super().clean()
        quote_date = cleaned_data.get('quote_date')
        valid_until = cleaned_data.get('valid_until')
        if quote_date and valid_until and valid_until < quote_date:
            self.add_error('valid_until', '유효 기간은 견적일 이후여야 합니다.')
        return cleaned_data


LINE_ITEM_FIELDS = ['description', 'quantity', 'unit_price', 'discount', 'sort_order']


class LineItemForm(forms.ModelForm):

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = user
        for field_name in ('quantity', 'discount', 'sort_order'):
            self.fields[field_name].required = False

    def clean_quantity(self):
        quantity = self.cleaned_data.get('quantity')
        if quantity is None:
            return 1
        if quantity <= 0:
            raise forms.ValidationError('수량은 0보다 커야 합니다.')
        return quantity

    def clean_discount(self):
        return self.cleaned_data.get('discount') or 0

    def clean_sort_order(self):
        return self.cleaned_data.get('sort_order') or 0


class InvoiceItemForm(LineItemForm):

    class Meta:
        model = InvoiceItem
        fields = LINE_ITEM_FIELDS


class QuotationItemForm(LineItemForm):
    """
    견적서 품목

    master_item / company_item 지정 시 비어있는 설명·단가를 카탈로그 값으로 채움
    """

    class Meta:
        model = QuotationItem
        fields = LINE_ITEM_FIELDS + ['master_item', 'company_item']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['master_item'].queryset = MasterItem.objects.filter(is_active=True)
        self.fields['company_item'].queryset = CompanyItem.active.filter(user=self.user)
        self.fields['description'].required = False
        self.fields['unit_price'].required = False

    def clean(self):
        cleaned_data = super().clean()
        company_item = cleaned_data.get('company_item')
        master_item = cleaned_data.get('master_item')

        sources = [
            (company_item, 'price'),
            (master_item, 'default_price'),
        ]
        for source, price_attr in sources:
            if source is None:
                continue
            if not cleaned_data.get('description'):
                cleaned_data['description'] = source.description or source.name
            if cleaned_data.get('unit_price') is None:
                cleaned_data['unit_price'] = getattr(source, price_attr)

        if not cleaned_data.get('description'):
            self.add_error('description', '필수 항목입니다.')
        if cleaned_data.get('unit_price') is None:
            self.add_error('unit_price', '필수 항목입니다.')
        return cleaned_data

    def master_item_changed(self):
        master_item = self.cleaned_data.get('master_item')
        return master_item is not None and master_item.pk != self.initial.get('master_item')
