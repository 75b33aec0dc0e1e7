"""
카탈로그 입력 폼

마스터(또는 사용자 약관)를 지정하면 비어있는 항목은 원본 값으로 채웁니다.
"""
from django import forms

from .models import CompanyItem, CompanyTerm, MasterItem, MasterTerm, QuotationTerm


def fill_blank_from(cleaned_data, source, mapping):
    """cleaned_data의 빈 값을 source 속성으로 채움 (mapping: 폼 필드 → source 속성)"""
    for field_name, attr in mapping.items():
        if cleaned_data.get(field_name) in (None, ''):
            cleaned_data[field_name] = getattr(source, attr)


def require_fields(form, field_names):
    for field_name in field_names:
        if form.cleaned_data.get(field_name) in (None, ''):
            form.add_error(field_name, '필수 항목입니다.')


class CompanyItemForm(forms.ModelForm):
    """사용자 자재/서비스"""

    REQUIRED = ['name', 'category', 'unit_of_measure', 'price']

    class Meta:
        model = CompanyItem
        fields = ['master_item', 'code', 'name', 'description', 'category', 'unit_of_measure', 'price', 'cost']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['master_item'].queryset = MasterItem.objects.filter(is_active=True)
        # 마스터 지정 시 생략 가능
        for field_name in self.REQUIRED:
            self.fields[field_name].required = False

    def clean(self):
        cleaned_data = super().clean()
        master_item = cleaned_data.get('master_item')
        if master_item is not None:
            fill_blank_from(cleaned_data, master_item, {
                'code': 'code',
                'name': 'name',
                'description': 'description',
                'category': 'category',
                'unit_of_measure': 'unit_of_measure',
                'price': 'default_price',
            })
        require_fields(self, self.REQUIRED)
        return cleaned_data

    def master_item_changed(self):
        """새로 마스터를 참조하는지 (사용량 집계 대상)"""
        master_item = self.cleaned_data.get('master_item')
        return master_item is not None and master_item.pk != self.initial.get('master_item')


class CompanyTermForm(forms.ModelForm):
    """사용자 약관"""

    REQUIRED = ['category', 'title', 'content']

    class Meta:
        model = CompanyTerm
        fields = ['master_term', 'category', 'title', 'content', 'is_default']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['master_term'].queryset = MasterTerm.objects.filter(is_active=True)
        for field_name in self.REQUIRED:
            self.fields[field_name].required = False

    def clean(self):
        cleaned_data = super().clean()
        master_term = cleaned_data.get('master_term')
        if master_term is not None:
            fill_blank_from(cleaned_data, master_term, {
                'category': 'category',
                'title': 'title',
                'content': 'content',
            })
        require_fields(self, self.REQUIRED)
        return cleaned_data

    def master_term_changed(self):
        master_term = self.cleaned_data.get('master_term')
        return master_term is not None and master_term.pk != self.initial.get('master_term')


class QuotationTermForm(forms.ModelForm):
    """견적서 약관 (사용자 약관 → 마스터 약관 순으로 내용 복사)"""

    REQUIRED = ['category', 'title', 'content']

    class Meta:
        model = QuotationTerm
        fields = ['company_term', 'master_term', 'category', 'title', 'content', 'sort_order']

    def __init__(self, *args, user=None, **kwargs):
        super().__init__(*args, **kwargs)
        # 본인 약관만 선택 가능
        self.fields['company_term'].queryset = CompanyTerm.active.filter(user=user)
        self.fields['master_term'].queryset = MasterTerm.objects.filter(is_active=True)
        self.fields['sort_order'].required = False
        for field_name in self.REQUIRED:
            self.fields[field_name].required = False

    def clean_sort_order(self):
        return self.cleaned_data.get('sort_order') or 0

    def clean(self):
        cleaned_data = super().clean()
        for source_field in ('company_term', 'master_term'):
            source = cleaned_data.get(source_field)
            if source is not None:
                fill_blank_from(cleaned_data, source, {
                    'category': 'category',
                    'title': 'title',
                    'content': 'content',
                })
        require_fields(self, self.REQUIRED)
        return cleaned_data

    def master_term_changed(self):
        master_term = self.cleaned_data.get('master_term')
        return master_term is not None and master_term.pk != self.initial.get('master_term')
