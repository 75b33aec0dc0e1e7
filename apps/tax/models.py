"""
세율 레코드

국가별로 여러 세율(표준/경감 등)을 등록할 수 있으며,
is_default=True 인 레코드가 인보이스 기본 세율로 사용됩니다.
국가 코드 중복은 막지 않습니다.
"""
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimeStampedModel


class TaxRateQuerySet(models.QuerySet):
    def for_country(self, country_code):
        return self.filter(country_code=(country_code or '').upper())

    def default_for(self, country_code):
        """국가 기본 세율 레코드 (없으면 None)"""
        return self.for_country(country_code).filter(is_default=True).order_by('id').first()


class TaxRate(TimeStampedModel):
    """국가별 세율"""

    country = models.CharField(max_length=100)
    country_code = models.CharField(max_length=2, db_index=True)
    name = models.CharField(max_length=50, help_text='예: VAT, GST, Sales Tax')
    rate = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))],
        help_text='퍼센트 (20.00 = 20%)'
    )
    is_default = models.BooleanField(default=False, db_index=True)

    objects = TaxRateQuerySet.as_manager()

    class Meta:
        db_table = 'tax_rates'
        ordering = ['country_code', '-is_default', 'name']
        indexes = [
            models.Index(fields=['country_code', 'is_default'], name='tax_rate_cc_default_idx'),
        ]

    def __str__(self):
        return f"{self.country_code} {self.name} ({self.rate}%)"

    def save(self, *args, **kwargs):
        self.country_code = (self.country_code or '').upper()
        super().save(*args, **kwargs)

    def to_dict(self):
        return {
            'id': self.pk,
            'country': self.country,
            'country_code': self.country_code,
            'name': self.name,
            'rate': str(self.rate),
            'is_default': self.is_default,
        }
