"""
자재/서비스 및 약관 카탈로그

- MasterItem / MasterTerm: 중앙 마스터 (관리자 등록, 플랜에 따라 사용 가능)
- CompanyItem / CompanyTerm: 사용자별 카탈로그 (마스터에서 복사 가능)
- QuotationTerm: 견적서에 첨부된 약관
- MaterialUsage: 중앙 마스터 사용 기록 (Profile.material_records_used와 함께 증가)
"""
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import SoftDeleteModel, TimeStampedModel
from apps.invoices.models import Quotation

PRICE_VALIDATORS = [MinValueValidator(Decimal('0.00'))]


class MasterItem(TimeStampedModel):
    """중앙 마스터 자재/서비스"""

    code = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, db_index=True)
    unit_of_measure = models.CharField(max_length=30, help_text='예: ea, hour, m2')
    default_price = models.DecimalField(max_digits=10, decimal_places=2, validators=PRICE_VALIDATORS)
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'master_items'
        ordering = ['category', 'name']

    def __str__(self):
        return f"[{self.code}] {self.name}"

    def to_dict(self):
        return {
            'id': self.pk,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'unit_of_measure': self.unit_of_measure,
            'default_price': self.default_price,
        }


class CompanyItem(SoftDeleteModel):
    """사용자 자재/서비스 카탈로그"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='company_items', db_index=True)
    master_item = models.ForeignKey(
        MasterItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='company_items'
    )
    code = models.CharField(max_length=50, blank=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, db_index=True)
    unit_of_measure = models.CharField(max_length=30)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=PRICE_VALIDATORS)
    cost = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        validators=PRICE_VALIDATORS,
        help_text='원가 (선택)'
    )

    class Meta:
        db_table = 'company_items'
        ordering = ['category', 'name']
        indexes = [
            models.Index(fields=['user', 'is_active', 'category'], name='company_item_user_cat_idx'),
        ]

    def __str__(self):
        return self.name

    def to_dict(self):
        return {
            'id': self.pk,
            'master_item_id': self.master_item_id,
            'code': self.code,
            'name': self.name,
            'description': self.description,
            'category': self.category,
            'unit_of_measure': self.unit_of_measure,
            'price': self.price,
            'cost': self.cost,
        }


class MasterTerm(TimeStampedModel):
    """중앙 마스터 약관"""

    category = models.CharField(max_length=100, db_index=True, help_text='예: payment, warranty')
    title = models.CharField(max_length=200)
    content = models.TextField()
    is_active = models.BooleanField(default=True, db_index=True)

    class Meta:
        db_table = 'master_terms'
        ordering = ['category', 'title']

    def __str__(self):
        return self.title

    def to_dict(self):
        return {
            'id': self.pk,
            'category': self.category,
            'title': self.title,
            'content': self.content,
        }


class CompanyTerm(SoftDeleteModel):
    """사용자 약관 카탈로그"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='company_terms', db_index=True)
    master_term = models.ForeignKey(
        MasterTerm,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='company_terms'
    )
    category = models.CharField(max_length=100, db_index=True)
    title = models.CharField(max_length=200)
    content = models.TextField()
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = 'company_terms'
        ordering = ['category', 'title']

    def __str__(self):
        return self.title

    def to_dict(self):
        return {
            'id': self.pk,
            'master_term_id': self.master_term_id,
            'category': self.category,
            'title': self.title,
            'content': self.content,
            'is_default': self.is_default,
        }


class QuotationTerm(models.Model):
    """견적서 약관 (카탈로그 내용을 복사해 보관)"""

    quotation = models.ForeignKey(Quotation, on_delete=models.CASCADE, related_name='quotation_terms')
    company_term = models.ForeignKey(
        CompanyTerm,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='quotation_terms'
    )
    master_term = models.ForeignKey(
        MasterTerm,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='quotation_terms'
    )
    category = models.CharField(max_length=100)
    title = models.CharField(max_length=200)
    content = models.TextField()
    sort_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'quotation_terms'
        ordering = ['sort_order', 'category', 'id']

    def __str__(self):
        return self.title

    def to_dict(self):
        return {
            'id': self.pk,
            'quotation_id': self.quotation_id,
            'company_term_id': self.company_term_id,
            'master_term_id': self.master_term_id,
            'category': self.category,
            'title': self.title,
            'content': self.content,
            'sort_order': self.sort_order,
        }


class MaterialUsage(models.Model):
    """중앙 마스터 사용 기록"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='material_usages')
    master_item = models.ForeignKey(
        MasterItem,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='usages'
    )
    master_term = models.ForeignKey(
        MasterTerm,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='usages'
    )
    quotation = models.ForeignKey(
        Quotation,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='material_usages'
    )
    used_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'material_usage'
        ordering = ['-used_at']

    def __str__(self):
        source = self.master_item or self.master_term
        return f"{self.user_id} - {source}"
