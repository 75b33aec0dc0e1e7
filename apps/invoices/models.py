"""
인보이스 / 견적서 및 품목

금액 필드(subtotal, tax, total)는 품목이 저장/삭제되거나 할인·세율·면세·국가가
바뀌어 저장될 때 utils.recalculate_totals()가 세금 엔진으로 다시 계산하여 저장합니다
(signals.py).
"""
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.businesses.models import Client, CompanyProfile
from apps.core.models import SoftDeleteModel

PERCENT_VALIDATORS = [
    MinValueValidator(Decimal('0.00')),
    MaxValueValidator(Decimal('100.00')),
]


class InvoiceTemplateQuerySet(models.QuerySet):
    def for_type(self, doc_type):
        """문서 종류(invoice/quote)에 쓸 수 있는 템플릿"""
        return self.filter(type__in=[doc_type, InvoiceTemplate.TYPE_BOTH])

    def available_to(self, profile):
        """무료 플랜은 프리미엄 템플릿 제외"""
        if profile is not None and profile.has_premium_templates:
            return self
        return self.filter(is_premium=False)


class InvoiceTemplate(models.Model):
    """문서 템플릿 (id는 'classic' 같은 슬러그)"""

    TYPE_INVOICE = 'invoice'
    TYPE_QUOTE = 'quote'
    TYPE_BOTH = 'both'
    TYPE_CHOICES = [
        (TYPE_INVOICE, '인보이스'),
        (TYPE_QUOTE, '견적서'),
        (TYPE_BOTH, '공용'),
    ]

    id = models.SlugField(max_length=30, primary_key=True)
    name = models.CharField(max_length=100)
    preview_url = models.URLField(blank=True)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default=TYPE_BOTH)
    is_default = models.BooleanField(default=False)
    is_premium = models.BooleanField(default=False)

    objects = InvoiceTemplateQuerySet.as_manager()

    class Meta:
        db_table = 'invoice_templates'
        ordering = ['-is_default', 'is_premium', 'name']

    def __str__(self):
        return self.name

    def to_dict(self):
        return {
            'id': self.pk,
            'name': self.name,
            'preview_url': self.preview_url,
            'type': self.type,
            'is_default': self.is_default,
            'is_premium': self.is_premium,
        }


class BillingDocument(SoftDeleteModel):
    """인보이스/견적서 공통 필드"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='%(class)ss', db_index=True)
    company_profile = models.ForeignKey(CompanyProfile, on_delete=models.PROTECT, related_name='%(class)ss')
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='%(class)ss')

    country = models.CharField(max_length=2, help_text='세율 결정 기준 국가 (ISO-3166 alpha-2)')
    currency = models.CharField(max_length=3, default='USD')
    # 비어있으면 기본 템플릿
    template = models.ForeignKey(
        InvoiceTemplate,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='%(class)ss'
    )

    subtotal = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    discount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    # 사용자가 직접 지정한 세율 (비어있으면 국가 기본 세율)
    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        null=True,
        blank=True,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    is_tax_exempt = models.BooleanField(default=False)
    # 마지막 계산에 실제로 적용된 세율
    applied_tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'))
    tax = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))

    notes = models.TextField(blank=True)
    terms = models.TextField(blank=True)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        self.country = (self.country or '').upper()
        self.currency = (self.currency or '').upper()
        super().save(*args, **kwargs)

    def is_owner(self, user):
        return self.user_id == getattr(user, 'pk', None)

    def to_dict(self):
        return {
            'id': self.pk,
            'number': self.number,
            'status': self.status,
            'company_profile_id': self.company_profile_id,
            'client_id': self.client_id,
            'country': self.country,
            'currency': self.currency,
            'template_id': self.template_id,
            'subtotal': self.subtotal,
            'discount': self.discount,
            'tax_rate': self.tax_rate,
            'is_tax_exempt': self.is_tax_exempt,
            'applied_tax_rate': self.applied_tax_rate,
            'tax': self.tax,
            'total': self.total,
            'notes': self.notes,
            'terms': self.terms,
        }


class Quotation(BillingDocument):
    """견적서"""

    STATUS_CHOICES = [
        ('draft', '작성중'),
        ('sent', '발송'),
        ('accepted', '수락'),
        ('declined', '거절'),
        ('expired', '만료'),
    ]

    quote_number = models.CharField(max_length=50)
    quote_date = models.DateField()
    valid_until = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft', db_index=True)

    class Meta:
        db_table = 'quotations'
        ordering = ['-quote_date', '-id']
        indexes = [
            models.Index(fields=['user', 'is_active', 'status'], name='quotation_user_status_idx'),
        ]

    def __str__(self):
        return self.quote_number

    @property
    def number(self):
        return self.quote_number

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'quote_number': self.quote_number,
            'quote_date': self.quote_date,
            'valid_until': self.valid_until,
        })
        return data


class Invoice(BillingDocument):
    """인보이스"""

    STATUS_CHOICES = [
        ('draft', '작성중'),
        ('sent', '발송'),
        ('paid', '결제완료'),
        ('overdue', '연체'),
        ('cancelled', '취소'),
    ]

    quotation = models.ForeignKey(
        Quotation,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invoices'
    )
    invoice_number = models.CharField(max_length=50)
    invoice_date = models.DateField()
    due_date = models.DateField(null=True, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='draft', db_index=True)

    class Meta:
        db_table = 'invoices'
        ordering = ['-invoice_date', '-id']
        indexes = [
            models.Index(fields=['user', 'is_active', 'status'], name='invoice_user_status_idx'),
        ]

    def __str__(self):
        return self.invoice_number

    @property
    def number(self):
        return self.invoice_number

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'invoice_number': self.invoice_number,
            'invoice_date': self.invoice_date,
            'due_date': self.due_date,
            'quotation_id': self.quotation_id,
        })
        return data


class LineItem(models.Model):
    """품목 공통 필드 (discount는 품목 할인율 %)"""

    description = models.CharField(max_length=500)
    quantity = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('1.00'))
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    discount = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=PERCENT_VALIDATORS
    )
    amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'), editable=False)
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        from .utils import calculate_line_amount

        self.amount = calculate_line_amount(self.quantity, self.unit_price, self.discount)
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.description} x {self.quantity}"

    def to_dict(self):
        return {
            'id': self.pk,
            'description': self.description,
            'quantity': self.quantity,
            'unit_price': self.unit_price,
            'discount': self.discount,
            'amount': self.amount,
            'sort_order': self.sort_order,
        }


class QuotationItem(LineItem):
    quotation = models.ForeignKey(Quotation, on_delete=models.CASCADE, related_name='items')
    # 카탈로그에서 가져온 품목
    master_item = models.ForeignKey(
        'catalog.MasterItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='quotation_items'
    )
    company_item = models.ForeignKey(
        'catalog.CompanyItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='quotation_items'
    )

    class Meta:
        db_table = 'quotation_items'
        ordering = ['sort_order', 'id']

    @property
    def document(self):
        return self.quotation

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'quotation_id': self.quotation_id,
            'master_item_id': self.master_item_id,
            'company_item_id': self.company_item_id,
        })
        return data


class InvoiceItem(LineItem):
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name='items')
    quotation_item = models.ForeignKey(
        QuotationItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='invoice_items'
    )

    class Meta:
        db_table = 'invoice_items'
        ordering = ['sort_order', 'id']

    @property
    def document(self):
        return self.invoice

    def to_dict(self):
        data = super().to_dict()
        data.update({
            'invoice_id': self.invoice_id,
            'quotation_item_id': self.quotation_item_id,
        })
        return data
